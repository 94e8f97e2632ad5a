"""
Aggregation Engine

DESIGN DECISION: Every derived figure is a pure function of the current
collections. Nothing is cached and nothing is stored; the collections are
session-sized, so recomputing on every read is cheap and can never go stale.

All arithmetic is Decimal. Any ratio whose denominator is zero evaluates
to Decimal("0"), never NaN or Infinity.

Percentages are returned at full precision. Use round_percentage() to get
the one-decimal figure shown to users, and progress_bar_width() only when
sizing a progress bar; the clamp never applies to reported figures.
"""

import datetime as dt
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, model_validator

from fintrack.analytics.formatting import quantize_half_up
from fintrack.models.records import (
    EXPENSE_CATEGORIES,
    Goal,
    Investment,
    RecordSnapshot,
    Transaction,
    TransactionKind,
)


ZERO = Decimal("0")
HUNDRED = Decimal("100")

MONTH_LABELS = (
    "Jan", "Fev", "Mar", "Abr", "Mai", "Jun",
    "Jul", "Ago", "Set", "Out", "Nov", "Dez",
)


# =============================================================================
# RESULT MODELS
# =============================================================================

class CategoryBreakdown(BaseModel):
    """Index-aligned category labels and totals."""
    model_config = ConfigDict(frozen=True)

    labels: tuple[str, ...] = ()
    values: tuple[Decimal, ...] = ()

    @model_validator(mode='after')
    def validate_alignment(self) -> 'CategoryBreakdown':
        if len(self.labels) != len(self.values):
            raise ValueError("labels and values must have the same length")
        return self

    def items(self) -> list[tuple[str, Decimal]]:
        return list(zip(self.labels, self.values))


class MonthlyTotal(BaseModel):
    """Income and expense of one calendar month."""
    model_config = ConfigDict(frozen=True)

    month: str  # YYYY-MM
    label: str
    income: Decimal = ZERO
    expense: Decimal = ZERO


class GoalStatus(BaseModel):
    """Everything a goal card shows."""
    model_config = ConfigDict(frozen=True)

    goal: Goal
    progress: Decimal
    bar_width: Decimal
    remaining: Decimal
    tone: str


class DashboardSummary(BaseModel):
    """The figures a dashboard render needs, computed in one pass."""
    model_config = ConfigDict(frozen=True)

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    balance_tone: str
    total_investments: Decimal
    investment_return: Decimal
    savings_rate: Decimal
    total_goals_saved: Decimal
    expense_breakdown: CategoryBreakdown
    recent_transactions: tuple[Transaction, ...]
    goals: tuple[GoalStatus, ...]


# =============================================================================
# TOTALS
# =============================================================================

def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of income amounts."""
    return _sum(t.amount for t in transactions if t.kind is TransactionKind.INCOME)


def total_expense(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of expense amounts."""
    return _sum(t.amount for t in transactions if t.kind is TransactionKind.EXPENSE)


def balance(transactions: Sequence[Transaction]) -> Decimal:
    """Total income minus total expense. Zero for no transactions."""
    return total_income(transactions) - total_expense(transactions)


def balance_tone(value: Decimal) -> str:
    return "success" if value >= 0 else "danger"


def total_investment_value(investments: Iterable[Investment]) -> Decimal:
    """Sum of current values."""
    return _sum(i.current_value for i in investments)


def investment_total_return(investments: Iterable[Investment]) -> Decimal:
    """Sum of (current value - amount invested) across holdings."""
    return _sum(i.current_value - i.amount for i in investments)


def total_goals_saved(goals: Iterable[Goal]) -> Decimal:
    return _sum(g.current_amount for g in goals)


# =============================================================================
# RATIOS
# =============================================================================

def round_percentage(value: Decimal, places: int = 1) -> Decimal:
    """Round half-up to a fixed number of decimal places."""
    return quantize_half_up(value, places)


def savings_rate(income: Decimal, expense: Decimal) -> Decimal:
    """
    Share of income not spent, as a percentage.

    Exactly zero when there is no income, whatever the expense.
    """
    if income <= 0:
        return ZERO
    return (1 - expense / income) * HUNDRED


def return_rate(amount: Decimal, current_value: Decimal, places: int = 1) -> Decimal:
    """
    (current_value - amount) / amount * 100, rounded half-up.

    Zero when nothing was invested.
    """
    if amount <= 0:
        return round_percentage(ZERO, places)
    return round_percentage((current_value - amount) / amount * HUNDRED, places)


def goal_progress(goal: Goal) -> Decimal:
    """Current over target as a percentage. Not clamped: may exceed 100."""
    if goal.target_amount <= 0:
        return ZERO
    return goal.current_amount / goal.target_amount * HUNDRED


def progress_bar_width(progress: Decimal) -> Decimal:
    """Clamp a progress percentage to [0, 100] for drawing a bar."""
    return max(ZERO, min(progress, HUNDRED))


def goal_remaining(goal: Goal) -> Decimal:
    """Amount still missing. Negative once the goal is overshot."""
    return goal.target_amount - goal.current_amount


# =============================================================================
# TONES
# =============================================================================

def goal_tone(progress: Decimal) -> str:
    if progress >= 100:
        return "success"
    if progress >= 70:
        return "warning"
    return "info"


def savings_rate_tone(rate: Decimal) -> str:
    if rate >= 20:
        return "success"
    if rate >= 10:
        return "warning"
    return "danger"


def return_tone(value: Decimal) -> str:
    return "positive" if value >= 0 else "negative"


# =============================================================================
# BREAKDOWNS AND SELECTIONS
# =============================================================================

def expense_by_category(
    transactions: Iterable[Transaction],
    categories: Sequence[str] = EXPENSE_CATEGORIES,
) -> CategoryBreakdown:
    """
    Expense totals per category, in the given category order.

    Categories with no spend are left out of both labels and values.
    """
    totals = {category: ZERO for category in categories}
    for t in transactions:
        if t.kind is TransactionKind.EXPENSE and t.category in totals:
            totals[t.category] += t.amount

    kept = [(category, total) for category, total in totals.items() if total > 0]
    return CategoryBreakdown(
        labels=tuple(category for category, _ in kept),
        values=tuple(total for _, total in kept),
    )


def recent_transactions(
    transactions: Sequence[Transaction],
    limit: int = 5,
) -> tuple[Transaction, ...]:
    """The first `limit` transactions; the sequence is kept newest first."""
    return tuple(transactions[:max(0, limit)])


def filter_transactions(
    transactions: Iterable[Transaction],
    kind: Optional[TransactionKind] = None,
) -> tuple[Transaction, ...]:
    """All transactions, or only those of one kind."""
    if kind is None:
        return tuple(transactions)
    kind = TransactionKind(kind)
    return tuple(t for t in transactions if t.kind is kind)


def _month_start(day: dt.date, months_back: int) -> dt.date:
    index = day.year * 12 + (day.month - 1) - months_back
    return dt.date(index // 12, index % 12 + 1, 1)


def monthly_totals(
    transactions: Iterable[Transaction],
    months: int = 6,
    today: Optional[dt.date] = None,
) -> tuple[MonthlyTotal, ...]:
    """
    Income and expense per calendar month for the last `months` months,
    oldest first, ending with the month containing `today`.
    """
    today = today or dt.date.today()
    starts = [_month_start(today, back) for back in range(months - 1, -1, -1)]
    income = {start: ZERO for start in starts}
    expense = {start: ZERO for start in starts}

    for t in transactions:
        start = t.date.replace(day=1)
        if start not in income:
            continue
        if t.kind is TransactionKind.INCOME:
            income[start] += t.amount
        else:
            expense[start] += t.amount

    return tuple(
        MonthlyTotal(
            month=f"{start.year:04d}-{start.month:02d}",
            label=MONTH_LABELS[start.month - 1],
            income=income[start],
            expense=expense[start],
        )
        for start in starts
    )


# =============================================================================
# DASHBOARD
# =============================================================================

def goal_status(goal: Goal) -> GoalStatus:
    progress = goal_progress(goal)
    return GoalStatus(
        goal=goal,
        progress=progress,
        bar_width=progress_bar_width(progress),
        remaining=goal_remaining(goal),
        tone=goal_tone(progress),
    )


def build_dashboard(
    snapshot: RecordSnapshot,
    recent_limit: int = 5,
    goals_limit: Optional[int] = 2,
) -> DashboardSummary:
    """
    Compute every dashboard figure from one snapshot.

    Args:
        snapshot: Collections to summarise
        recent_limit: How many recent transactions to include
        goals_limit: How many goals to include (None for all)
    """
    income = total_income(snapshot.transactions)
    expense = total_expense(snapshot.transactions)
    net = income - expense
    goals = snapshot.goals if goals_limit is None else snapshot.goals[:goals_limit]

    return DashboardSummary(
        total_income=income,
        total_expense=expense,
        balance=net,
        balance_tone=balance_tone(net),
        total_investments=total_investment_value(snapshot.investments),
        investment_return=investment_total_return(snapshot.investments),
        savings_rate=savings_rate(income, expense),
        total_goals_saved=total_goals_saved(snapshot.goals),
        expense_breakdown=expense_by_category(snapshot.transactions),
        recent_transactions=recent_transactions(snapshot.transactions, recent_limit),
        goals=tuple(goal_status(g) for g in goals),
    )
