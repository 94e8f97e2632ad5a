"""
Draft Validation

DESIGN DECISION: Drafts arrive from forms with raw, often string-typed
fields. Each field is parsed exactly once, here, before any entity is
constructed:
- Numbers: numeric strings or numbers; blanks, text, NaN and Infinity are
  rejected rather than coerced
- Dates: date objects or ISO YYYY-MM-DD strings
- Enumerations: exact stored values

The form layer may validate too, but the store never relies on it.

IMPORTANT: Validation NEVER silently fixes issues. Every problem found in a
draft is collected and raised together in one ValidationError.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from fintrack.models.records import (
    GoalDraft,
    InvestmentDraft,
    InvestmentType,
    TransactionDraft,
    TransactionKind,
    categories_for,
)


MAX_TEXT_LENGTH = 200

DraftT = TypeVar("DraftT", bound=BaseModel)


class ValidationIssue(BaseModel):
    """A single problem found in a draft."""

    field: str = Field(
        ...,
        description="Draft field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="e.g. 'missing', 'not_a_number', 'negative', 'not_positive'"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationError(Exception):
    """A draft was rejected. Carries every issue found."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(f"{i.field}: {i.message}" for i in self.issues))

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]

    def to_dicts(self) -> list[dict]:
        return [issue.model_dump() for issue in self.issues]


def _issue(field: str, issue_type: str, message: str) -> ValidationIssue:
    return ValidationIssue(field=field, issue_type=issue_type, message=message)


def _is_blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def parse_decimal(raw: Any, field: str) -> Decimal:
    """
    Parse a raw numeric field.

    Accepts int, float, Decimal or a numeric string. A string with a single
    comma and no dot is read with the comma as decimal separator ("55,90").
    Floats go through str() so 55.9 becomes Decimal("55.9"), not its
    binary expansion.

    Raises:
        ValidationError: If the value is blank, not a number, or not finite
    """
    if _is_blank(raw):
        raise ValidationError([_issue(field, "missing", "A value is required")])

    if isinstance(raw, bool):
        value = None
    elif isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(str(raw))
    elif isinstance(raw, str):
        text = raw.strip()
        if text.count(",") == 1 and "." not in text:
            text = text.replace(",", ".")
        try:
            value = Decimal(text)
        except InvalidOperation:
            value = None
    else:
        value = None

    if value is None or not value.is_finite():
        raise ValidationError([
            _issue(field, "not_a_number", f"'{raw}' is not a valid number")
        ])
    return value


def parse_date(raw: Any, field: str) -> dt.date:
    """
    Parse a raw date field (date, datetime or ISO string).

    Raises:
        ValidationError: If the value is blank or not a calendar date
    """
    if _is_blank(raw):
        raise ValidationError([_issue(field, "missing", "A date is required")])
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    if isinstance(raw, str):
        try:
            return dt.date.fromisoformat(raw.strip())
        except ValueError:
            pass
    raise ValidationError([
        _issue(field, "invalid_date", f"'{raw}' is not a date (expected YYYY-MM-DD)")
    ])


class DraftValidator:
    """
    Turns raw drafts into clean entity fields.

    Each validate_* method returns a dict of parsed fields ready for the
    entity constructor (everything except the identifier), or raises
    ValidationError listing every issue in the draft.
    """

    def __init__(self, max_text_length: int = MAX_TEXT_LENGTH):
        self._max_text_length = max_text_length

    @staticmethod
    def coerce_draft(
        draft: Union[DraftT, Mapping[str, Any]],
        draft_type: Type[DraftT],
    ) -> DraftT:
        """Accept either a draft model or a plain mapping of form values."""
        if isinstance(draft, draft_type):
            return draft
        try:
            return draft_type.model_validate(draft)
        except PydanticValidationError as e:
            raise ValidationError([
                _issue(
                    ".".join(str(part) for part in err["loc"]) or "draft",
                    "invalid_type",
                    err["msg"],
                )
                for err in e.errors()
            ])

    # ------------------------------------------------------------------
    # Field helpers: each appends to issues and returns None on failure
    # ------------------------------------------------------------------

    def _text(self, raw: Optional[str], field: str, issues: list) -> Optional[str]:
        if _is_blank(raw):
            issues.append(_issue(field, "missing", "A value is required"))
            return None
        text = raw.strip()
        if len(text) > self._max_text_length:
            issues.append(_issue(
                field,
                "too_long",
                f"Must be at most {self._max_text_length} characters",
            ))
            return None
        return text

    @staticmethod
    def _number(
        raw: Any,
        field: str,
        issues: list,
        positive: bool = False,
    ) -> Optional[Decimal]:
        try:
            value = parse_decimal(raw, field)
        except ValidationError as e:
            issues.extend(e.issues)
            return None
        if positive and value <= 0:
            issues.append(_issue(field, "not_positive", "Must be greater than zero"))
            return None
        if value < 0:
            issues.append(_issue(field, "negative", "Cannot be negative"))
            return None
        return value

    @staticmethod
    def _date(raw: Any, field: str, issues: list) -> Optional[dt.date]:
        try:
            return parse_date(raw, field)
        except ValidationError as e:
            issues.extend(e.issues)
            return None

    # ------------------------------------------------------------------
    # Drafts
    # ------------------------------------------------------------------

    def validate_transaction(
        self,
        draft: Union[TransactionDraft, Mapping[str, Any]],
    ) -> dict[str, Any]:
        draft = self.coerce_draft(draft, TransactionDraft)
        issues: list[ValidationIssue] = []

        kind = None
        if _is_blank(draft.kind):
            issues.append(_issue("kind", "missing", "Choose income or expense"))
        else:
            try:
                kind = TransactionKind(draft.kind.strip())
            except ValueError:
                issues.append(_issue(
                    "kind", "invalid_choice", f"'{draft.kind}' is not income or expense"
                ))

        description = self._text(draft.description, "description", issues)

        category = None
        if _is_blank(draft.category):
            issues.append(_issue("category", "missing", "Choose a category"))
        elif kind is not None:
            category = draft.category.strip()
            if category not in categories_for(kind):
                issues.append(_issue(
                    "category",
                    "invalid_choice",
                    f"'{category}' is not a valid {kind.value} category",
                ))
                category = None

        amount = self._number(draft.amount, "amount", issues)
        date = self._date(draft.date, "date", issues)

        if issues:
            raise ValidationError(issues)

        return {
            "kind": kind,
            "description": description,
            "category": category,
            "amount": amount,
            "date": date,
        }

    def validate_investment(
        self,
        draft: Union[InvestmentDraft, Mapping[str, Any]],
    ) -> dict[str, Any]:
        """
        Amount must be strictly positive: it is the denominator of the
        return rate.
        """
        draft = self.coerce_draft(draft, InvestmentDraft)
        issues: list[ValidationIssue] = []

        name = self._text(draft.name, "name", issues)

        investment_type = None
        if _is_blank(draft.type):
            issues.append(_issue("type", "missing", "Choose an investment type"))
        else:
            try:
                investment_type = InvestmentType(draft.type.strip())
            except ValueError:
                issues.append(_issue(
                    "type", "invalid_choice", f"'{draft.type}' is not a supported investment type"
                ))

        amount = self._number(draft.amount, "amount", issues, positive=True)
        current_value = self._number(draft.current_value, "current_value", issues)

        if issues:
            raise ValidationError(issues)

        return {
            "name": name,
            "type": investment_type,
            "amount": amount,
            "current_value": current_value,
        }

    def validate_goal(
        self,
        draft: Union[GoalDraft, Mapping[str, Any]],
    ) -> dict[str, Any]:
        """A blank current amount is read as zero."""
        draft = self.coerce_draft(draft, GoalDraft)
        issues: list[ValidationIssue] = []

        name = self._text(draft.name, "name", issues)
        target = self._number(draft.target, "target", issues, positive=True)

        if _is_blank(draft.current):
            current = Decimal("0")
        else:
            current = self._number(draft.current, "current", issues)

        deadline = self._date(draft.deadline, "deadline", issues)

        if issues:
            raise ValidationError(issues)

        return {
            "name": name,
            "target_amount": target,
            "current_amount": current,
            "deadline": deadline,
        }
