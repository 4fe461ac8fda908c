"""changetrack: consolidate pending add/delete mutations against a slow set.

Callers record intended changes on a :class:`ChangeLedger` and later read the
consolidated ``added`` / ``deleted`` / ``updated`` sets to apply them in a
single batch.
"""

from changetrack.errors import (
    ChangeTrackError,
    InvalidArgumentError,
    InvalidStateError,
    InvalidTransitionError,
)
from changetrack.ledger.change_ledger import ChangeLedger, Restorable
from changetrack.models.changes import Action, ChangeSet, Operation, Snapshot

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ChangeLedger",
    "ChangeSet",
    "ChangeTrackError",
    "InvalidArgumentError",
    "InvalidStateError",
    "InvalidTransitionError",
    "Operation",
    "Restorable",
    "Snapshot",
]
