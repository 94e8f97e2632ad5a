"""Persistence package: collection codec, baseline data and the storage mirror."""

from fintrack.persistence.adapter import PersistenceAdapter
from fintrack.persistence.baseline import (
    baseline_goals,
    baseline_investments,
    baseline_transactions,
)
from fintrack.persistence.codec import (
    CollectionKey,
    deserialize_collection,
    serialize_collection,
)

__all__ = [
    "CollectionKey",
    "PersistenceAdapter",
    "baseline_goals",
    "baseline_investments",
    "baseline_transactions",
    "deserialize_collection",
    "serialize_collection",
]
