"""
Data Models Package

This package contains all Pydantic models used in Fintrack.
Entities, drafts and log events all conform to these schemas.
"""

from fintrack.models.records import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    ExpenseCategory,
    Goal,
    GoalDraft,
    IncomeCategory,
    Investment,
    InvestmentDraft,
    InvestmentType,
    RecordSnapshot,
    Transaction,
    TransactionDraft,
    TransactionKind,
    categories_for,
)
from fintrack.models.activity import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Record models
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "ExpenseCategory",
    "Goal",
    "GoalDraft",
    "IncomeCategory",
    "Investment",
    "InvestmentDraft",
    "InvestmentType",
    "RecordSnapshot",
    "Transaction",
    "TransactionDraft",
    "TransactionKind",
    "categories_for",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
