"""
Core Record Models for Fintrack

These models define the strict schemas for the three entity collections:
transactions, investments and goals. They are designed to:
1. Enforce the entity invariants at construction time
2. Be serializable with the field names already used in stored blobs
3. Never change after creation (frozen)

DESIGN DECISION: Enumerated values are kept verbatim in the original locale
(e.g. "Moradia", "Renda Fixa"). Stored blobs and the baseline dataset use
these strings, so renaming them would orphan existing data.

Drafts are the raw, untrusted counterpart of each entity. They carry
whatever the form produced (strings, numbers, blanks) and are turned into
entities only by the validator.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    model_validator,
)


def _reject_bool(value):
    # bool is an int subclass; keep True from becoming the amount 1
    if isinstance(value, bool):
        raise ValueError("a boolean is not a number")
    return value


RawNumber = Annotated[
    Union[str, int, float, Decimal, None],
    BeforeValidator(_reject_bool),
]
RawDate = Union[str, dt.date, None]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class IncomeCategory(str, Enum):
    """Categories available to income transactions."""
    SALARY = "Salário"
    FREELANCE = "Freelance"
    INVESTMENTS = "Investimentos"
    RENT = "Aluguel"
    BONUS = "Bônus"
    OTHER = "Outros"


class ExpenseCategory(str, Enum):
    """
    Categories available to expense transactions.

    Declaration order is the order used by category breakdowns.
    """
    HOUSING = "Moradia"
    FOOD = "Alimentação"
    TRANSPORT = "Transporte"
    HEALTH = "Saúde"
    EDUCATION = "Educação"
    LEISURE = "Lazer"
    CLOTHING = "Vestuário"
    OTHER = "Outros"


class InvestmentType(str, Enum):
    """Supported investment types."""
    FIXED_INCOME = "Renda Fixa"
    STOCKS = "Ações"
    REAL_ESTATE_FUNDS = "FIIs"
    TREASURY = "Tesouro"
    CRYPTO = "Cripto"
    ETF = "ETF"


INCOME_CATEGORIES: tuple[str, ...] = tuple(c.value for c in IncomeCategory)
EXPENSE_CATEGORIES: tuple[str, ...] = tuple(c.value for c in ExpenseCategory)


def categories_for(kind: TransactionKind) -> tuple[str, ...]:
    """Return the ordered category names allowed for a transaction kind."""
    if TransactionKind(kind) is TransactionKind.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


# =============================================================================
# ENTITIES
# =============================================================================

_ENTITY_CONFIG = ConfigDict(
    frozen=True,
    str_strip_whitespace=True,
    populate_by_name=True,
)


class Transaction(BaseModel):
    """
    A single income or expense entry.

    The category must belong to the category set of the transaction kind.
    Income and expense categories are separate enumerations even where
    they share a label ("Outros").
    """
    model_config = _ENTITY_CONFIG

    id: int = Field(
        ...,
        description="Unique identifier within the session"
    )
    kind: TransactionKind = Field(
        ...,
        alias="type",
        description="income or expense"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=200,
    )
    category: str = Field(
        ...,
        description="Category name from the kind's category set"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Transaction amount"
    )
    date: dt.date

    @model_validator(mode='after')
    def validate_category(self) -> 'Transaction':
        """Category must match the transaction kind."""
        if self.category not in categories_for(self.kind):
            raise ValueError(
                f"Category '{self.category}' is not a valid {self.kind.value} category"
            )
        return self


class Investment(BaseModel):
    """
    An investment holding.

    CRITICAL: return_rate is computed once when the investment is created
    and stored as-is. It is never re-derived from amount/current_value.
    """
    model_config = _ENTITY_CONFIG

    id: int
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
    )
    type: InvestmentType
    amount: Decimal = Field(
        ...,
        gt=0,
        description="Amount invested"
    )
    current_value: Decimal = Field(
        ...,
        ge=0,
        alias="currentValue",
        description="Current market value"
    )
    return_rate: Decimal = Field(
        ...,
        alias="return",
        description="Return percentage frozen at creation"
    )


class Goal(BaseModel):
    """
    A savings goal.

    current_amount is deliberately not bounded by target_amount:
    overshooting a goal is representable.
    """
    model_config = _ENTITY_CONFIG

    id: int
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
    )
    target_amount: Decimal = Field(
        ...,
        gt=0,
        alias="target",
    )
    current_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        alias="current",
    )
    deadline: dt.date


# =============================================================================
# DRAFTS - raw input from the presentation layer
# =============================================================================

_DRAFT_CONFIG = ConfigDict(populate_by_name=True)


class TransactionDraft(BaseModel):
    """Unvalidated transaction input."""
    model_config = _DRAFT_CONFIG

    kind: Optional[str] = Field(default=None, alias="type")
    description: Optional[str] = None
    category: Optional[str] = None
    amount: RawNumber = None
    date: RawDate = None


class InvestmentDraft(BaseModel):
    """Unvalidated investment input."""
    model_config = _DRAFT_CONFIG

    name: Optional[str] = None
    type: Optional[str] = None
    amount: RawNumber = None
    current_value: RawNumber = Field(default=None, alias="currentValue")


class GoalDraft(BaseModel):
    """Unvalidated goal input. A blank current amount means zero."""
    model_config = _DRAFT_CONFIG

    name: Optional[str] = None
    target: RawNumber = None
    current: RawNumber = None
    deadline: RawDate = None


# =============================================================================
# SNAPSHOT
# =============================================================================

class RecordSnapshot(BaseModel):
    """
    Read-only view of all three collections at one point in time.

    Valid for a single render pass; take a new snapshot after any change.
    """
    model_config = ConfigDict(frozen=True)

    transactions: tuple[Transaction, ...] = ()
    investments: tuple[Investment, ...] = ()
    goals: tuple[Goal, ...] = ()
