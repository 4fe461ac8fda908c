"""Operation, action and snapshot data structures."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Generic, TypeVar

T = TypeVar("T")


class Operation(StrEnum):
    """A single raw mutation recorded against an element."""

    INSERT = "insert"
    DELETE = "delete"


class Action(StrEnum):
    """Consolidated net effect of every operation recorded for one element.

    An element with no net effect has no ``Action`` at all; the ledger
    reports ``None`` for it.
    """

    ADD = "add"
    DELETE = "delete"
    UPDATE = "update"


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    """Immutable checkpoint of a ledger's element -> operations mapping.

    Built with :meth:`from_entries`, which copies every operation sequence
    into a tuple so later ledger mutations cannot leak into the snapshot.
    Callers should treat the contents as opaque and only hand the snapshot
    back to ``ChangeLedger.restore_snapshot``.
    """

    entries: Mapping[T, tuple[Operation, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_entries(cls, entries: Mapping[T, list[Operation]] | Mapping[T, tuple[Operation, ...]]) -> Snapshot[T]:
        """Deep-copy *entries* into a new read-only snapshot."""
        copied = {element: tuple(ops) for element, ops in entries.items()}
        return cls(entries=MappingProxyType(copied))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self.entries)

    def __contains__(self, element: object) -> bool:
        return element in self.entries


@dataclass(frozen=True)
class ChangeSet(Generic[T]):
    """The three net-action partitions of a ledger, read together for a flush."""

    added: frozenset[T] = frozenset()
    deleted: frozenset[T] = frozenset()
    updated: frozenset[T] = frozenset()

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to apply to the underlying set."""
        return not (self.added or self.deleted or self.updated)
