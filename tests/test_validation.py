"""
Tests for draft parsing and validation

Drafts carry raw form values. These tests pin down what is accepted,
what is rejected, and that every issue in a draft is reported together.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from fintrack.models import GoalDraft, InvestmentDraft, TransactionDraft, TransactionKind
from fintrack.validation import (
    DraftValidator,
    ValidationError,
    parse_date,
    parse_decimal,
)


@pytest.fixture
def validator():
    return DraftValidator()


class TestParseDecimal:
    """Tests for raw number parsing."""

    @pytest.mark.parametrize("raw, expected", [
        ("8500", Decimal("8500")),
        ("  55.90 ", Decimal("55.90")),
        ("55,90", Decimal("55.90")),
        (55.9, Decimal("55.9")),
        (10, Decimal("10")),
        (Decimal("0.01"), Decimal("0.01")),
    ])
    def test_accepts_numbers(self, raw, expected):
        """Numeric strings and numbers parse to exact decimals."""
        assert parse_decimal(raw, "amount") == expected

    def test_float_keeps_short_form(self):
        """Floats do not leak their binary expansion."""
        assert str(parse_decimal(0.1, "amount")) == "0.1"

    @pytest.mark.parametrize("raw", ["abc", "12abc", "NaN", "Infinity", "1.234,56", True, [1]])
    def test_rejects_non_numbers(self, raw):
        """Text, non-finite values and booleans are not numbers."""
        with pytest.raises(ValidationError) as exc_info:
            parse_decimal(raw, "amount")
        assert exc_info.value.issues[0].issue_type == "not_a_number"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_rejects_blank(self, raw):
        """Blank values are reported as missing."""
        with pytest.raises(ValidationError) as exc_info:
            parse_decimal(raw, "amount")
        assert exc_info.value.issues[0].issue_type == "missing"


class TestParseDate:
    """Tests for raw date parsing."""

    def test_iso_string(self):
        """ISO strings parse to dates."""
        assert parse_date("2026-01-05", "date") == date(2026, 1, 5)

    def test_date_and_datetime(self):
        """date objects pass through, datetimes are truncated."""
        assert parse_date(date(2026, 1, 5), "date") == date(2026, 1, 5)
        assert parse_date(datetime(2026, 1, 5, 13, 30), "date") == date(2026, 1, 5)

    def test_rejects_local_format(self):
        """Only ISO dates are accepted."""
        with pytest.raises(ValidationError, match="not a date"):
            parse_date("05/01/2026", "date")


class TestTransactionValidation:
    """Tests for transaction drafts."""

    def test_valid_draft(self, validator):
        """A complete draft yields parsed fields."""
        fields = validator.validate_transaction(TransactionDraft(
            kind="expense",
            description=" Supermercado ",
            category="Alimentação",
            amount="890.50",
            date="2026-01-08",
        ))
        assert fields == {
            "kind": TransactionKind.EXPENSE,
            "description": "Supermercado",
            "category": "Alimentação",
            "amount": Decimal("890.50"),
            "date": date(2026, 1, 8),
        }

    def test_mapping_with_stored_names(self, validator):
        """Plain mappings using the stored 'type' key are accepted."""
        fields = validator.validate_transaction({
            "type": "income",
            "description": "Salário",
            "category": "Salário",
            "amount": 8500,
            "date": "2026-01-05",
        })
        assert fields["kind"] is TransactionKind.INCOME

    def test_zero_amount_allowed(self, validator):
        """Transaction amounts may be zero."""
        fields = validator.validate_transaction({
            "kind": "expense",
            "description": "Brinde",
            "category": "Outros",
            "amount": "0",
            "date": "2026-01-01",
        })
        assert fields["amount"] == Decimal("0")

    def test_category_must_match_kind(self, validator):
        """Expense categories are not valid for income."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_transaction({
                "kind": "income",
                "description": "Aluguel pago",
                "category": "Moradia",
                "amount": "100",
                "date": "2026-01-01",
            })
        assert exc_info.value.fields == ["category"]

    def test_all_issues_reported(self, validator):
        """Every broken field appears in one error."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_transaction({
                "kind": "transfer",
                "description": "",
                "category": "Lazer",
                "amount": "-5",
                "date": "",
            })
        assert set(exc_info.value.fields) == {"kind", "description", "amount", "date"}

    @pytest.mark.parametrize("amount", [True, False])
    def test_boolean_amount_rejected(self, validator, amount):
        """Booleans are not read as 1 or 0."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_transaction({
                "kind": "expense",
                "description": "Brinde",
                "category": "Outros",
                "amount": amount,
                "date": "2026-01-01",
            })
        assert exc_info.value.fields == ["amount"]
        assert "boolean" in str(exc_info.value)

    def test_wrong_raw_type(self, validator):
        """Values of an unexpected type are rejected, not coerced."""
        with pytest.raises(ValidationError):
            validator.validate_transaction({"kind": "expense", "amount": {"value": 1}})


class TestInvestmentValidation:
    """Tests for investment drafts."""

    def test_valid_draft(self, validator):
        """Stored 'currentValue' key maps to current_value."""
        fields = validator.validate_investment(InvestmentDraft.model_validate({
            "name": "PETR4",
            "type": "Ações",
            "amount": "3250",
            "currentValue": "3875",
        }))
        assert fields["amount"] == Decimal("3250")
        assert fields["current_value"] == Decimal("3875")

    @pytest.mark.parametrize("amount", ["0", "-100", 0])
    def test_amount_must_be_positive(self, validator, amount):
        """Zero or negative amounts are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_investment({
                "name": "Zero",
                "type": "ETF",
                "amount": amount,
                "current_value": "500",
            })
        assert exc_info.value.fields == ["amount"]

    def test_current_value_may_be_zero(self, validator):
        """A holding can lose all its value."""
        fields = validator.validate_investment({
            "name": "Startup",
            "type": "Ações",
            "amount": "1000",
            "current_value": "0",
        })
        assert fields["current_value"] == Decimal("0")

    def test_non_numeric_values(self, validator):
        """Both numeric fields are checked."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_investment({
                "name": "X",
                "type": "ETF",
                "amount": "ten",
                "current_value": "eleven",
            })
        assert set(exc_info.value.fields) == {"amount", "current_value"}

    def test_unknown_type(self, validator):
        """Investment type must be supported."""
        with pytest.raises(ValidationError, match="not a supported investment type"):
            validator.validate_investment({
                "name": "Ouro",
                "type": "Commodities",
                "amount": "1",
                "current_value": "1",
            })


class TestGoalValidation:
    """Tests for goal drafts."""

    @pytest.mark.parametrize("current", [None, "", "  "])
    def test_blank_current_is_zero(self, validator, current):
        """Missing current amount defaults to zero."""
        fields = validator.validate_goal(GoalDraft(
            name="Viagem",
            target="25000",
            current=current,
            deadline="2026-12-31",
        ))
        assert fields["current_amount"] == Decimal("0")
        assert fields["target_amount"] == Decimal("25000")

    def test_current_above_target_allowed(self, validator):
        """Overshooting the target is not a validation issue."""
        fields = validator.validate_goal({
            "name": "Reserva",
            "target": "30000",
            "current": "35000",
            "deadline": "2026-06-30",
        })
        assert fields["current_amount"] == Decimal("35000")

    @pytest.mark.parametrize("target", ["0", "-1", "abc", ""])
    def test_invalid_target(self, validator, target):
        """Target must be a positive number."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_goal({
                "name": "Meta",
                "target": target,
                "deadline": "2026-06-30",
            })
        assert exc_info.value.fields == ["target"]

    def test_boolean_current_rejected(self, validator):
        """False is not a blank current amount."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_goal(GoalDraft.model_validate({
                "name": "Meta",
                "target": "100",
                "current": False,
                "deadline": "2026-06-30",
            }))
        assert exc_info.value.fields == ["current"]

    def test_negative_current(self, validator):
        """Current amount cannot be negative."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_goal({
                "name": "Meta",
                "target": "100",
                "current": "-1",
                "deadline": "2026-06-30",
            })
        assert exc_info.value.issues[0].issue_type == "negative"


class TestValidationError:
    """Tests for the error type itself."""

    def test_message_lists_issues(self, validator):
        """str() names each field."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_goal({})
        message = str(exc_info.value)
        assert "name" in message
        assert "target" in message
        assert "deadline" in message

    def test_to_dicts(self, validator):
        """Issues convert to plain dicts for logging."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_goal({"name": "X", "target": "1"})
        assert exc_info.value.to_dicts() == [{
            "field": "deadline",
            "issue_type": "missing",
            "message": "A date is required",
        }]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
