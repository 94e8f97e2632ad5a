"""
Fintrack - Source Package

A personal finance tracker: income/expense transactions, investment
holdings and savings goals, kept in a local key-value store and
summarised for dashboards and reports.

DESIGN PRINCIPLES:
1. Drafts are untrusted until parsed and validated
2. The in-memory record store is the only source of truth
3. Storage is a write-behind mirror, read back only at startup
4. Derived figures are recomputed on every read, never stored
5. Storage backend is swappable
"""

__version__ = "1.0.0"
__author__ = "Fintrack Team"
