"""
Rule-based validators for movies and listing options.

A validator is an ordered set of rules. Each rule names the field it checks,
a predicate over the whole object and the message reported when the predicate
fails. Every rule is evaluated, so callers see all problems at once.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generic, List, Sequence, TypeVar

from catalog.domain import GetAllMoviesOptions, MAX_PAGE_SIZE, Movie, SortField
from catalog.errors import ValidationError, ValidationFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

# First commercially screened film.
EARLIEST_YEAR_OF_RELEASE = 1888

SORTABLE_FIELDS = frozenset(field.value for field in SortField)

# Largest OFFSET a 64-bit signed SQL integer can hold.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class Rule(Generic[T]):
    field: str
    predicate: Callable[[T], bool]
    message: str


class Validator(Generic[T]):
    """Evaluates a fixed sequence of rules against an object."""

    def __init__(self, rules: Sequence[Rule[T]]):
        self.rules = list(rules)

    def validate(self, obj: T) -> List[ValidationFailure]:
        """
        Run every rule.

        Args:
            obj: Object to check

        Returns:
            Failures in rule order, empty if the object is valid
        """
        return [
            ValidationFailure(rule.field, rule.message)
            for rule in self.rules
            if not rule.predicate(obj)
        ]

    def validate_and_raise(self, obj: T) -> None:
        """
        Run every rule and raise if any failed.

        Raises:
            ValidationError: With all failures collected
        """
        failures = self.validate(obj)
        if failures:
            logger.debug("Rejected %s: %s", type(obj).__name__, failures)
            raise ValidationError(failures)


def _current_year() -> int:
    return datetime.now(timezone.utc).year


def _year_not_in_future(year: Any) -> bool:
    return year is None or year <= _current_year()


def default_movie_rules() -> List[Rule[Movie]]:
    """Acceptance rules applied to movies on create and update."""
    return [
        Rule("id", lambda m: m.id is not None and m.id.int != 0, "Id must not be empty."),
        Rule("title", lambda m: bool(m.title and m.title.strip()), "Title must not be empty."),
        Rule(
            "year_of_release",
            lambda m: _year_not_in_future(m.year_of_release),
            "Year of release cannot be in the future.",
        ),
        Rule(
            "year_of_release",
            lambda m: m.year_of_release >= EARLIEST_YEAR_OF_RELEASE,
            f"Year of release cannot be before {EARLIEST_YEAR_OF_RELEASE}.",
        ),
        Rule("genres", lambda m: len(m.genres) > 0, "At least one genre is required."),
        Rule(
            "genres",
            lambda m: all(g and g.strip() for g in m.genres),
            "Genre names must not be empty.",
        ),
        Rule(
            "genres",
            lambda m: all("," not in g for g in m.genres),
            "Genre names must not contain commas.",
        ),
    ]


def default_options_rules() -> List[Rule[GetAllMoviesOptions]]:
    """Rules guarding listing options before they reach the query builder."""
    return [
        Rule(
            "year_of_release",
            lambda o: _year_not_in_future(o.year_of_release),
            "Year of release cannot be in the future.",
        ),
        Rule(
            "sort_field",
            lambda o: o.sort_field is None or o.sort_field.lower() in SORTABLE_FIELDS,
            "You can only sort by 'title' or 'yearofrelease'.",
        ),
        Rule("page", lambda o: o.page >= 1, "Page must be 1 or greater."),
        Rule(
            "page",
            lambda o: (o.page - 1) * o.page_size <= MAX_OFFSET,
            "Page is too large.",
        ),
        Rule(
            "page_size",
            lambda o: 1 <= o.page_size <= MAX_PAGE_SIZE,
            f"You can get between 1 and {MAX_PAGE_SIZE} movies per page.",
        ),
    ]


def movie_validator() -> Validator[Movie]:
    return Validator(default_movie_rules())


def options_validator() -> Validator[GetAllMoviesOptions]:
    return Validator(default_options_rules())
