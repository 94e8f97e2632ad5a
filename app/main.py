"""
Streamlit Frontend for Fintrack

Dashboards, lists and forms over the record store.

DESIGN PRINCIPLES:
1. Every figure on screen comes from the analytics functions
2. Forms send raw drafts; the store does the validation
3. Rejected drafts show every issue at once
4. Nothing here writes to storage directly
"""

from datetime import date

import streamlit as st

from fintrack.analytics import (
    build_dashboard,
    expense_by_category,
    filter_transactions,
    format_currency,
    format_date,
    format_percentage,
    goal_status,
    investment_total_return,
    monthly_totals,
    return_tone,
    round_percentage,
    savings_rate,
    savings_rate_tone,
    total_expense,
    total_income,
    total_investment_value,
)
from fintrack.config import get_settings
from fintrack.models import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    InvestmentType,
    TransactionKind,
)
from fintrack.persistence import PersistenceAdapter
from fintrack.services.storage import create_blob_store
from fintrack.store import RecordStore
from fintrack.validation import ValidationError


# Page configuration
st.set_page_config(
    page_title="Fintrack",
    page_icon="💰",
    layout="centered",
    initial_sidebar_state="expanded",
)

TONE_COLORS = {
    "success": "#10b981",
    "warning": "#f59e0b",
    "danger": "#ef4444",
    "info": "#3b82f6",
    "positive": "#10b981",
    "negative": "#ef4444",
}


def colored(text: str, tone: str) -> str:
    return f"<span style='color:{TONE_COLORS[tone]};font-weight:600'>{text}</span>"


def get_store() -> RecordStore:
    """Get or open this session's record store."""
    if "store" not in st.session_state:
        adapter = PersistenceAdapter(create_blob_store())
        st.session_state.store = RecordStore.open(adapter)
    return st.session_state.store


def show_validation_error(error: ValidationError) -> None:
    st.error("Please fix the following:")
    for issue in error.issues:
        st.markdown(f"- **{issue.field}**: {issue.message}")


def warn_if_unsaved(store: RecordStore) -> None:
    if store.unsaved_collections:
        names = ", ".join(sorted(k.value for k in store.unsaved_collections))
        st.warning(f"Saved in this session only, storage write failed for: {names}")


def render_dashboard(store: RecordStore) -> None:
    settings = get_settings().app
    summary = build_dashboard(
        store.snapshot(),
        recent_limit=settings.recent_transactions_limit,
        goals_limit=settings.dashboard_goals_limit,
    )
    symbol = settings.currency_symbol

    st.markdown("Saldo Total")
    st.markdown(
        f"## {colored(format_currency(summary.balance, symbol), summary.balance_tone)}",
        unsafe_allow_html=True,
    )

    col1, col2 = st.columns(2)
    col1.metric("Receitas", format_currency(summary.total_income, symbol))
    col2.metric("Despesas", format_currency(summary.total_expense, symbol))
    col3, col4 = st.columns(2)
    col3.metric("Investimentos", format_currency(summary.total_investments, symbol))
    col4.metric("Economia", format_percentage(summary.savings_rate, places=0))

    st.subheader("Despesas por Categoria")
    breakdown = summary.expense_breakdown
    if breakdown.labels:
        st.bar_chart(
            {
                "Categoria": list(breakdown.labels),
                "Valor": [float(v) for v in breakdown.values],
            },
            x="Categoria",
            y="Valor",
            horizontal=True,
        )
    else:
        st.info("No expenses yet.")

    st.subheader("Progresso das Metas")
    for status in summary.goals:
        render_goal(status, symbol, compact=True)

    st.subheader("Transações Recentes")
    for transaction in summary.recent_transactions:
        render_transaction(transaction, symbol)


def render_transaction(transaction, symbol: str) -> None:
    is_income = transaction.kind is TransactionKind.INCOME
    amount = format_currency(transaction.amount, symbol)
    col1, col2 = st.columns([3, 1])
    col1.markdown(
        f"**{transaction.description}**  \n"
        f"{transaction.category} · {format_date(transaction.date)}"
    )
    col2.markdown(
        colored(("+" if is_income else "-") + amount, "success" if is_income else "danger"),
        unsafe_allow_html=True,
    )


def render_goal(status, symbol: str, compact: bool = False) -> None:
    goal = status.goal
    progress = round_percentage(status.progress, 0)
    st.markdown(
        f"**{goal.name}** · {format_date(goal.deadline)} · "
        + colored(f"{progress}%", status.tone),
        unsafe_allow_html=True,
    )
    st.progress(int(status.bar_width))
    st.caption(
        f"{format_currency(goal.current_amount, symbol)} "
        f"de {format_currency(goal.target_amount, symbol)}"
    )
    if not compact:
        st.caption(f"Faltam {format_currency(status.remaining, symbol)}")


def render_transactions(store: RecordStore) -> None:
    symbol = get_settings().app.currency_symbol
    st.header("Transações")

    choice = st.radio(
        "Show",
        ["Todas", "Receitas", "Despesas"],
        horizontal=True,
        label_visibility="collapsed",
    )
    kind = {
        "Todas": None,
        "Receitas": TransactionKind.INCOME,
        "Despesas": TransactionKind.EXPENSE,
    }[choice]

    with st.expander("➕ Nova Transação"):
        kind_label = st.radio("Tipo", ["Despesa", "Receita"], horizontal=True)
        draft_kind = TransactionKind.EXPENSE if kind_label == "Despesa" else TransactionKind.INCOME
        categories = EXPENSE_CATEGORIES if draft_kind is TransactionKind.EXPENSE else INCOME_CATEGORIES
        with st.form("transaction_form", clear_on_submit=True):
            description = st.text_input("Descrição")
            category = st.selectbox("Categoria", categories)
            amount = st.text_input("Valor", placeholder="0,00")
            when = st.date_input("Data", value=date.today())
            if st.form_submit_button("Adicionar"):
                try:
                    store.add_transaction({
                        "kind": draft_kind.value,
                        "description": description,
                        "category": category,
                        "amount": amount,
                        "date": when,
                    })
                    st.success("Transação adicionada")
                except ValidationError as e:
                    show_validation_error(e)

    for transaction in filter_transactions(store.transactions, kind):
        render_transaction(transaction, symbol)


def render_investments(store: RecordStore) -> None:
    symbol = get_settings().app.currency_symbol
    st.header("Investimentos")

    investments = store.investments
    total_return = investment_total_return(investments)
    col1, col2 = st.columns(2)
    col1.metric("Total Investido", format_currency(total_investment_value(investments), symbol))
    col2.markdown("Rentabilidade")
    col2.markdown(
        colored(format_currency(total_return, symbol, signed=True), return_tone(total_return)),
        unsafe_allow_html=True,
    )

    with st.expander("➕ Novo Investimento"):
        with st.form("investment_form", clear_on_submit=True):
            name = st.text_input("Nome")
            investment_type = st.selectbox("Tipo", [t.value for t in InvestmentType])
            amount = st.text_input("Valor investido")
            current_value = st.text_input("Valor atual")
            if st.form_submit_button("Adicionar"):
                try:
                    store.add_investment({
                        "name": name,
                        "type": investment_type,
                        "amount": amount,
                        "current_value": current_value,
                    })
                    st.success("Investimento adicionado")
                except ValidationError as e:
                    show_validation_error(e)

    for investment in investments:
        col1, col2 = st.columns([3, 1])
        col1.markdown(
            f"**{investment.name}** · {investment.type.value}  \n"
            f"{format_currency(investment.current_value, symbol)}"
        )
        col2.markdown(
            colored(
                format_percentage(investment.return_rate, signed=True),
                return_tone(investment.return_rate),
            ),
            unsafe_allow_html=True,
        )


def render_goals(store: RecordStore) -> None:
    symbol = get_settings().app.currency_symbol
    st.header("Metas Financeiras")

    with st.expander("➕ Nova Meta"):
        with st.form("goal_form", clear_on_submit=True):
            name = st.text_input("Nome")
            target = st.text_input("Valor alvo")
            current = st.text_input("Valor atual", placeholder="0")
            deadline = st.date_input("Prazo", value=None)
            if st.form_submit_button("Adicionar"):
                try:
                    store.add_goal({
                        "name": name,
                        "target": target,
                        "current": current,
                        "deadline": deadline,
                    })
                    st.success("Meta adicionada")
                except ValidationError as e:
                    show_validation_error(e)

    for goal in store.goals:
        render_goal(goal_status(goal), symbol)


def render_reports(store: RecordStore) -> None:
    settings = get_settings().app
    symbol = settings.currency_symbol
    st.header("Relatórios")

    transactions = store.transactions
    income = total_income(transactions)
    expense = total_expense(transactions)
    rate = savings_rate(income, expense)

    st.subheader("Receitas vs Despesas")
    months = monthly_totals(transactions, months=settings.report_months)
    st.bar_chart(
        {
            "Mês": [m.month for m in months],
            "Receitas": [float(m.income) for m in months],
            "Despesas": [float(m.expense) for m in months],
        },
        x="Mês",
        y=["Receitas", "Despesas"],
        stack=False,
    )

    st.subheader("Distribuição de Despesas")
    breakdown = expense_by_category(transactions)
    if breakdown.labels:
        st.bar_chart(
            {
                "Categoria": list(breakdown.labels),
                "Valor": [float(v) for v in breakdown.values],
            },
            x="Categoria",
            y="Valor",
        )

    st.subheader("Indicadores Financeiros")
    st.markdown(
        "Taxa de Poupança: " + colored(format_percentage(rate), savings_rate_tone(rate)),
        unsafe_allow_html=True,
    )
    st.markdown("Receita Total: " + colored(format_currency(income, symbol), "success"),
                unsafe_allow_html=True)
    st.markdown("Despesa Total: " + colored(format_currency(expense, symbol), "danger"),
                unsafe_allow_html=True)
    st.markdown(f"Economia: **{format_currency(income - expense, symbol)}**")


def main():
    """Main application entry point."""
    store = get_store()

    st.sidebar.title("💰 Fintrack")
    st.sidebar.markdown("---")
    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "💸 Transações", "📈 Investimentos", "🎯 Metas", "📑 Relatórios"],
        index=0,
    )

    if page == "📊 Dashboard":
        render_dashboard(store)
    elif page == "💸 Transações":
        render_transactions(store)
    elif page == "📈 Investimentos":
        render_investments(store)
    elif page == "🎯 Metas":
        render_goals(store)
    else:
        render_reports(store)

    warn_if_unsaved(store)


if __name__ == "__main__":
    main()
