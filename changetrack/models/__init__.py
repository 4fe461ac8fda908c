"""Core data structures for changetrack."""

from changetrack.models.changes import Action, ChangeSet, Operation, Snapshot
from changetrack.models.config import ChangeTrackConfig, LedgerConfig, LogConfig

__all__ = [
    "Action",
    "ChangeSet",
    "ChangeTrackConfig",
    "LedgerConfig",
    "LogConfig",
    "Operation",
    "Snapshot",
]
