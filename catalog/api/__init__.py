"""
HTTP surface for the movie catalog.
"""
