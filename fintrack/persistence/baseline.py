"""
Baseline Dataset

Seed records used when durable storage holds nothing usable for a
collection. The records are written in the stored-blob format (original
field names, JSON-style values) so the seed round-trips exactly like data
saved by earlier sessions.
"""

from fintrack.models.records import Goal, Investment, Transaction


_TRANSACTIONS = [
    {"id": 1, "type": "income", "description": "Salário", "category": "Salário", "amount": "8500", "date": "2026-01-05"},
    {"id": 2, "type": "income", "description": "Freelance", "category": "Freelance", "amount": "2500", "date": "2026-01-10"},
    {"id": 3, "type": "expense", "description": "Aluguel", "category": "Moradia", "amount": "2500", "date": "2026-01-05"},
    {"id": 4, "type": "expense", "description": "Supermercado", "category": "Alimentação", "amount": "890", "date": "2026-01-08"},
    {"id": 5, "type": "expense", "description": "Combustível", "category": "Transporte", "amount": "350", "date": "2026-01-10"},
    {"id": 6, "type": "expense", "description": "Netflix", "category": "Lazer", "amount": "55.9", "date": "2026-01-12"},
    {"id": 7, "type": "expense", "description": "Farmácia", "category": "Saúde", "amount": "180", "date": "2026-01-15"},
]

_INVESTMENTS = [
    {"id": 1, "name": "CDB 120% CDI", "type": "Renda Fixa", "amount": "10000", "currentValue": "10450", "return": "4.5"},
    {"id": 2, "name": "PETR4", "type": "Ações", "amount": "3250", "currentValue": "3875", "return": "19.2"},
    {"id": 3, "name": "HGLG11", "type": "FIIs", "amount": "8250", "currentValue": "8615", "return": "4.4"},
    {"id": 4, "name": "Tesouro IPCA+ 2029", "type": "Tesouro", "amount": "3500", "currentValue": "3680", "return": "5.1"},
    {"id": 5, "name": "Bitcoin", "type": "Cripto", "amount": "9000", "currentValue": "10500", "return": "16.7"},
]

_GOALS = [
    {"id": 1, "name": "Reserva de Emergência", "target": "30000", "current": "15000", "deadline": "2026-06-30"},
    {"id": 2, "name": "Viagem Europa", "target": "25000", "current": "8500", "deadline": "2026-12-31"},
    {"id": 3, "name": "Entrada Apartamento", "target": "100000", "current": "25000", "deadline": "2028-12-31"},
]


def baseline_transactions() -> tuple[Transaction, ...]:
    """Seed transactions in their stored order."""
    return tuple(Transaction.model_validate(t) for t in _TRANSACTIONS)


def baseline_investments() -> tuple[Investment, ...]:
    return tuple(Investment.model_validate(i) for i in _INVESTMENTS)


def baseline_goals() -> tuple[Goal, ...]:
    return tuple(Goal.model_validate(g) for g in _GOALS)
