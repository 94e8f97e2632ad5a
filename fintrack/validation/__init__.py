"""Draft validation package."""

from fintrack.validation.validator import (
    DraftValidator,
    ValidationError,
    ValidationIssue,
    parse_date,
    parse_decimal,
)

__all__ = [
    "DraftValidator",
    "ValidationError",
    "ValidationIssue",
    "parse_date",
    "parse_decimal",
]
