"""
Record Store

The single source of truth for a session's transactions, investments and
goals.

Lifecycle:
1. Open → hydrate every collection from the persistence adapter
   (each one independently falls back to the baseline dataset)
2. Add → parse and validate the draft, build the entity, insert it,
   mirror the changed collection to storage
3. Close → final flush of all collections; the store refuses changes after

CRITICAL: A creation call either inserts one complete entity or raises
ValidationError and changes nothing. No identifier is consumed and nothing
is written for a rejected draft.

Transactions are kept newest first (new ones go to the front); investments
and goals keep insertion order (new ones go to the back).
"""

import time
from collections import deque
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from fintrack.activity import ActivityLogger
from fintrack.analytics.aggregation import return_rate
from fintrack.models.records import (
    Goal,
    GoalDraft,
    Investment,
    InvestmentDraft,
    RecordSnapshot,
    Transaction,
    TransactionDraft,
)
from fintrack.persistence import CollectionKey, PersistenceAdapter
from fintrack.validation import DraftValidator, ValidationError, ValidationIssue


EntityT = TypeVar("EntityT", bound=BaseModel)


class RecordStoreClosedError(RuntimeError):
    """The store was closed and no longer accepts changes."""
    pass


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class IdentifierSequence:
    """
    Time-derived, strictly increasing identifiers.

    Each identifier is the current epoch in milliseconds, bumped past the
    last one handed out when two requests land in the same millisecond or
    the clock goes backwards.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None, last: int = 0):
        self._clock = clock or _epoch_millis
        self._last = last

    @property
    def last(self) -> int:
        return self._last

    def peek(self) -> int:
        """The identifier the next call to next_id() would return."""
        return max(int(self._clock()), self._last + 1)

    def advance_past(self, value: int) -> None:
        """Make sure no future identifier is <= value."""
        self._last = max(self._last, value)

    def next_id(self) -> int:
        value = self.peek()
        self.advance_past(value)
        return value


class RecordStore:
    """
    In-memory collections with append-only creation operations.

    Args:
        adapter: Persistence adapter that mirrors every change
        transactions, investments, goals: Initial collections
        validator: Draft validator. A default one is created if None.
        id_sequence: Identifier source. Seeded past every initial id.
        activity_logger: Structured logger. A default one is created if None.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        transactions: Iterable[Transaction] = (),
        investments: Iterable[Investment] = (),
        goals: Iterable[Goal] = (),
        validator: Optional[DraftValidator] = None,
        id_sequence: Optional[IdentifierSequence] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._adapter = adapter
        self._transactions: deque[Transaction] = deque(transactions)
        self._investments: list[Investment] = list(investments)
        self._goals: list[Goal] = list(goals)
        self._validator = validator or DraftValidator()
        self._ids = id_sequence or IdentifierSequence()
        self._logger = activity_logger or ActivityLogger()
        self._unsaved: set[CollectionKey] = set()
        self._closed = False

        for record in (*self._transactions, *self._investments, *self._goals):
            self._ids.advance_past(record.id)

    @classmethod
    def open(cls, adapter: PersistenceAdapter, **kwargs: Any) -> "RecordStore":
        """Create a store hydrated from durable storage (or the baseline)."""
        collections = adapter.load_all()
        store = cls(
            adapter,
            transactions=collections[CollectionKey.TRANSACTIONS],
            investments=collections[CollectionKey.INVESTMENTS],
            goals=collections[CollectionKey.GOALS],
            **kwargs,
        )
        store._logger.log_store_opened(store.counts())
        return store

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Newest first."""
        return tuple(self._transactions)

    @property
    def investments(self) -> tuple[Investment, ...]:
        return tuple(self._investments)

    @property
    def goals(self) -> tuple[Goal, ...]:
        return tuple(self._goals)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def unsaved_collections(self) -> frozenset[CollectionKey]:
        """Collections whose latest change has not reached storage."""
        return frozenset(self._unsaved)

    def snapshot(self) -> RecordSnapshot:
        return RecordSnapshot(
            transactions=self.transactions,
            investments=self.investments,
            goals=self.goals,
        )

    def counts(self) -> dict[str, int]:
        return {
            CollectionKey.TRANSACTIONS.value: len(self._transactions),
            CollectionKey.INVESTMENTS.value: len(self._investments),
            CollectionKey.GOALS.value: len(self._goals),
        }

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def add_transaction(
        self,
        draft: Union[TransactionDraft, Mapping[str, Any]],
    ) -> Transaction:
        """
        Validate a transaction draft and put the new entity at the front.

        Raises:
            ValidationError: If any field is missing or invalid
            RecordStoreClosedError: If the store was closed
        """
        self._ensure_open()
        fields = self._validate("transaction", self._validator.validate_transaction, draft)
        transaction = self._construct(Transaction, "transaction", fields)

        self._transactions.appendleft(transaction)
        self._persist(CollectionKey.TRANSACTIONS)
        self._logger.log_record_added("transaction", transaction.id, str(transaction.amount))
        return transaction

    def add_investment(
        self,
        draft: Union[InvestmentDraft, Mapping[str, Any]],
    ) -> Investment:
        """
        Validate an investment draft, freeze its return rate and append it.

        The return rate is (current value - amount) / amount * 100 rounded
        to one decimal place. An amount <= 0 is rejected.

        Raises:
            ValidationError: If any field is missing or invalid
            RecordStoreClosedError: If the store was closed
        """
        self._ensure_open()
        fields = self._validate("investment", self._validator.validate_investment, draft)
        fields["return_rate"] = self._return_rate(fields["amount"], fields["current_value"])
        investment = self._construct(Investment, "investment", fields)

        self._investments.append(investment)
        self._persist(CollectionKey.INVESTMENTS)
        self._logger.log_record_added("investment", investment.id, str(investment.amount))
        return investment

    def add_goal(
        self,
        draft: Union[GoalDraft, Mapping[str, Any]],
    ) -> Goal:
        """
        Validate a goal draft and append it. A blank current amount is zero.

        Raises:
            ValidationError: If any field is missing or invalid
            RecordStoreClosedError: If the store was closed
        """
        self._ensure_open()
        fields = self._validate("goal", self._validator.validate_goal, draft)
        goal = self._construct(Goal, "goal", fields)

        self._goals.append(goal)
        self._persist(CollectionKey.GOALS)
        self._logger.log_record_added("goal", goal.id, str(goal.target_amount))
        return goal

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _collection(self, key: CollectionKey) -> tuple[BaseModel, ...]:
        if key is CollectionKey.TRANSACTIONS:
            return self.transactions
        if key is CollectionKey.INVESTMENTS:
            return self.investments
        return self.goals

    def _persist(self, key: CollectionKey) -> bool:
        saved = self._adapter.save(key, self._collection(key))
        if saved:
            self._unsaved.discard(key)
        else:
            self._unsaved.add(key)
        return saved

    def flush(self) -> dict[str, bool]:
        """Write every collection to storage. Returns {key: saved}."""
        return {key.value: self._persist(key) for key in CollectionKey}

    def close(self) -> dict[str, bool]:
        """
        Final flush, then refuse further changes.

        Closing twice is a no-op that returns an empty dict.
        """
        if self._closed:
            return {}
        flushed = self.flush()
        self._closed = True
        self._logger.log_store_closed(flushed)
        return flushed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise RecordStoreClosedError("Record store is closed")

    def _validate(
        self,
        entity_type: str,
        validate: Callable[[Any], dict[str, Any]],
        draft: Any,
    ) -> dict[str, Any]:
        try:
            return validate(draft)
        except ValidationError as e:
            self._logger.log_draft_rejected(entity_type, e.to_dicts())
            raise

    def _return_rate(self, amount: Decimal, current_value: Decimal) -> Decimal:
        """Return rate of a draft, rejected when it overflows decimal arithmetic."""
        try:
            return return_rate(amount, current_value)
        except ArithmeticError as e:
            issue = ValidationIssue(
                field="current_value",
                issue_type="out_of_range",
                message="Return rate is too large to compute",
            )
            self._logger.log_draft_rejected("investment", [issue.model_dump()])
            raise ValidationError([issue]) from e

    def _construct(
        self,
        model: Type[EntityT],
        entity_type: str,
        fields: dict[str, Any],
    ) -> EntityT:
        """Build the entity with the next identifier, consuming it only on success."""
        try:
            entity = model(id=self._ids.peek(), **fields)
        except PydanticValidationError as e:
            issues = [
                ValidationIssue(
                    field=".".join(str(part) for part in err["loc"]) or entity_type,
                    issue_type=err["type"],
                    message=err["msg"],
                )
                for err in e.errors()
            ]
            self._logger.log_draft_rejected(entity_type, [i.model_dump() for i in issues])
            raise ValidationError(issues) from e
        self._ids.advance_past(entity.id)
        return entity
