"""Change Ledger for changetrack.

Records raw insert/delete operations per element and consolidates them into
a single net action on demand.

Submodules:
    state_machine   -- Pure per-element transition function over ElementState.
    change_ledger   -- In-memory element -> operations mapping with snapshots.
"""

from changetrack.ledger.change_ledger import ChangeLedger

__all__ = ["ChangeLedger"]
