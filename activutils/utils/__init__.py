"""Utility functions package"""

from .unit_converter import (
    convert_newton,
    convert_newton_to_string,
    convert_inches,
    convert_lbs,
    convert_grams,
    convert_to_grams,
    convert_millimeters,
    convert_to_millimeters,
    convert_date,
    date_to_db_string,
    convert_seconds_to_minutes,
)
from .date_helpers import (
    parse_date,
    format_date,
    as_date,
)

__all__ = [
    "convert_newton",
    "convert_newton_to_string",
    "convert_inches",
    "convert_lbs",
    "convert_grams",
    "convert_to_grams",
    "convert_millimeters",
    "convert_to_millimeters",
    "convert_date",
    "date_to_db_string",
    "convert_seconds_to_minutes",
    "parse_date",
    "format_date",
    "as_date",
]
