"""
Collection Codec

Encodes an entity collection as one JSON blob and back.

Format: a JSON array of objects using the stored field names
(type, currentValue, return, target, current). Decimal amounts are written
as strings so no precision is lost; dates are ISO 8601 strings. Blobs from
older sessions that hold amounts as JSON numbers decode just as well.
"""

import json
from enum import Enum
from typing import Sequence, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fintrack.models.records import Goal, Investment, Transaction
from fintrack.services.storage.interface import CorruptBlobError


Record = Union[Transaction, Investment, Goal]


class CollectionKey(str, Enum):
    """Durable storage key of each collection."""
    TRANSACTIONS = "transactions"
    INVESTMENTS = "investments"
    GOALS = "goals"


_ADAPTERS: dict[CollectionKey, TypeAdapter] = {
    CollectionKey.TRANSACTIONS: TypeAdapter(list[Transaction]),
    CollectionKey.INVESTMENTS: TypeAdapter(list[Investment]),
    CollectionKey.GOALS: TypeAdapter(list[Goal]),
}


def serialize_collection(records: Sequence[BaseModel]) -> str:
    """Encode records as a JSON array blob."""
    return json.dumps(
        [record.model_dump(mode="json", by_alias=True) for record in records],
        ensure_ascii=False,
    )


def deserialize_collection(key: CollectionKey, blob: str) -> tuple[Record, ...]:
    """
    Decode a blob into the entity type stored under key.

    Raises:
        CorruptBlobError: If the blob is not valid JSON or any record
            fails the entity schema
    """
    adapter = _ADAPTERS[CollectionKey(key)]
    try:
        return tuple(adapter.validate_json(blob))
    except PydanticValidationError as e:
        raise CorruptBlobError(
            f"Blob for '{CollectionKey(key).value}' failed to decode: "
            f"{e.error_count()} errors"
        ) from e
