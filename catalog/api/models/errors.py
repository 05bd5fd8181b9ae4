"""
Pydantic schemas for error responses.
"""

from pydantic import BaseModel


class ValidationFailureResponse(BaseModel):
    field: str
    message: str


class ValidationFailureList(BaseModel):
    """Body returned with HTTP 400 when input is rejected."""

    errors: list[ValidationFailureResponse]
