"""In-memory change ledger.

Maps each tracked element to the ordered list of raw operations recorded for
it and derives the element's net action by replaying that list through the
state machine whenever asked.  Appends are normalized: an operation equal to
the element's last recorded operation is dropped, so no list ever holds two
consecutive identical operations.

Concurrency: the ledger holds plain mutable dicts and lists with no locking.
It is single-writer; callers sharing one across threads must serialize every
call (reads included) themselves.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, Protocol, TypeVar

from changetrack.errors import InvalidArgumentError, InvalidStateError
from changetrack.ledger.state_machine import replay, resolve_action
from changetrack.models.changes import Action, ChangeSet, Operation, Snapshot
from changetrack.models.config import LedgerConfig
from changetrack.observability.logging import get_logger

_log = get_logger("ledger.change_ledger")

T = TypeVar("T")
S = TypeVar("S")


class Restorable(Protocol[S]):
    """Anything that can hand out a checkpoint and later roll back to it."""

    def capture_snapshot(self) -> S: ...

    def restore_snapshot(self, snapshot: S) -> None: ...


def _require_element(element: object) -> None:
    if element is None:
        raise InvalidArgumentError("element must not be None")


class ChangeLedger(Generic[T]):
    """Tracks pending additions and deletions and consolidates them per element.

    Net actions per element:

    * ``record_added(x)``                          -> ``Action.ADD``
    * ``record_deleted(x)``                        -> ``Action.DELETE``
    * ``record_deleted(x); record_added(x)``       -> ``Action.UPDATE``
    * ``record_added(x); record_deleted(x)``       -> ``None`` (still tracked)

    Typical use is to record changes as they are decided, read
    :meth:`changes` to drive a batched write against the real set, and call
    :meth:`reset_tracking` once that write succeeds.
    """

    def __init__(self, config: LedgerConfig | None = None) -> None:
        self._config = config or LedgerConfig()
        self._changes: dict[T, list[Operation]] = {}

    def __len__(self) -> int:
        return len(self._changes)

    def __contains__(self, element: object) -> bool:
        return element in self._changes

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def record_added(self, element: T) -> None:
        """Record that *element* was added.

        Raises:
            InvalidArgumentError: if *element* is None.
            InvalidStateError: if the element's net action is already UPDATE.
        """
        _require_element(element)
        if self.is_updated(element):
            _log.warning("add_rejected_updated_element", element=repr(element))
            raise InvalidStateError(
                element,
                Action.UPDATE,
                f"cannot record an addition of {element!r}: it is already updated",
            )
        self._append(element, Operation.INSERT)

    def record_deleted(self, element: T) -> None:
        """Record that *element* was deleted.

        Raises:
            InvalidArgumentError: if *element* is None.
        """
        _require_element(element)
        self._append(element, Operation.DELETE)

    def _append(self, element: T, operation: Operation) -> None:
        operations = self._changes.setdefault(element, [])
        if not operations or operations[-1] != operation:
            operations.append(operation)

    def reset_tracking(self) -> None:
        """Forget every recorded operation, typically after a successful flush."""
        count = len(self._changes)
        self._changes.clear()
        _log.debug("tracking_reset", cleared=count)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def determine_action(self, element: T) -> Action | None:
        """Return the net action recorded for *element*, or None if there is none."""
        _require_element(element)
        operations = self._changes.get(element)
        if not operations:
            return None
        return resolve_action(operations)

    def operations(self, element: T) -> tuple[Operation, ...]:
        """Return the normalized operation history of *element*."""
        _require_element(element)
        return tuple(self._changes.get(element, ()))

    def tracked_elements(self) -> set[T]:
        """Return every element with an entry, whatever its net action."""
        return set(self._changes)

    def added(self) -> set[T]:
        return self._elements_by_action(Action.ADD)

    def deleted(self) -> set[T]:
        return self._elements_by_action(Action.DELETE)

    def updated(self) -> set[T]:
        return self._elements_by_action(Action.UPDATE)

    def is_added(self, element: T) -> bool:
        return self.determine_action(element) is Action.ADD

    def is_deleted(self, element: T) -> bool:
        return self.determine_action(element) is Action.DELETE

    def is_updated(self, element: T) -> bool:
        return self.determine_action(element) is Action.UPDATE

    def changes(self) -> ChangeSet[T]:
        """Partition the tracked elements by net action in a single pass."""
        partitions: dict[Action, set[T]] = {action: set() for action in Action}
        for element, operations in self._changes.items():
            action = resolve_action(operations)
            if action is not None:
                partitions[action].add(element)
        return ChangeSet(
            added=frozenset(partitions[Action.ADD]),
            deleted=frozenset(partitions[Action.DELETE]),
            updated=frozenset(partitions[Action.UPDATE]),
        )

    def _elements_by_action(self, action: Action) -> set[T]:
        return {element for element, operations in self._changes.items() if resolve_action(operations) is action}

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def capture_snapshot(self) -> Snapshot[T]:
        """Return an immutable copy of the current element -> operations mapping."""
        snapshot = Snapshot.from_entries(self._changes)
        _log.debug("snapshot_captured", elements=len(snapshot))
        return snapshot

    def restore_snapshot(self, snapshot: Snapshot[T]) -> None:
        """Replace the whole mapping with the contents of *snapshot*.

        Every change recorded since the snapshot was captured is discarded.
        With ``verify_snapshots`` enabled each sequence is replayed first, and
        a corrupt snapshot raises InvalidTransitionError before anything is
        replaced.

        Raises:
            InvalidArgumentError: if *snapshot* is None or not a Snapshot.
        """
        if snapshot is None:
            raise InvalidArgumentError("snapshot must not be None")
        if not isinstance(snapshot, Snapshot):
            raise InvalidArgumentError(f"expected a Snapshot, got {type(snapshot).__name__}")

        if self._config.verify_snapshots:
            for operations in snapshot.entries.values():
                replay(operations)

        self._changes = {element: list(operations) for element, operations in snapshot.entries.items()}
        _log.debug("snapshot_restored", elements=len(self._changes))

    @contextmanager
    def checkpoint(self) -> Iterator[Snapshot[T]]:
        """Roll back every change made inside the block if it raises.

        Yields the snapshot taken on entry.  The exception is re-raised after
        the ledger has been restored.
        """
        snapshot = self.capture_snapshot()
        try:
            yield snapshot
        except BaseException:
            self.restore_snapshot(snapshot)
            _log.debug("checkpoint_rolled_back", elements=len(snapshot))
            raise
