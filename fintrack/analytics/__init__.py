"""
Analytics Package

Pure derivations over the record collections (totals, ratios, breakdowns)
and the formatting used to display them.
"""

from fintrack.analytics.aggregation import (
    CategoryBreakdown,
    DashboardSummary,
    GoalStatus,
    MonthlyTotal,
    balance,
    balance_tone,
    build_dashboard,
    expense_by_category,
    filter_transactions,
    goal_progress,
    goal_remaining,
    goal_status,
    goal_tone,
    investment_total_return,
    monthly_totals,
    progress_bar_width,
    recent_transactions,
    return_rate,
    return_tone,
    round_percentage,
    savings_rate,
    savings_rate_tone,
    total_expense,
    total_goals_saved,
    total_income,
    total_investment_value,
)
from fintrack.analytics.formatting import (
    format_currency,
    format_date,
    format_percentage,
    quantize_half_up,
)

__all__ = [
    # Result models
    "CategoryBreakdown",
    "DashboardSummary",
    "GoalStatus",
    "MonthlyTotal",
    # Derivations
    "balance",
    "balance_tone",
    "build_dashboard",
    "expense_by_category",
    "filter_transactions",
    "goal_progress",
    "goal_remaining",
    "goal_status",
    "goal_tone",
    "investment_total_return",
    "monthly_totals",
    "progress_bar_width",
    "recent_transactions",
    "return_rate",
    "return_tone",
    "round_percentage",
    "savings_rate",
    "savings_rate_tone",
    "total_expense",
    "total_goals_saved",
    "total_income",
    "total_investment_value",
    # Formatting
    "format_currency",
    "format_date",
    "format_percentage",
    "quantize_half_up",
]
