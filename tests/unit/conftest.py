"""Shared fixtures for changetrack unit tests."""

from __future__ import annotations

import pytest

from changetrack.ledger.change_ledger import ChangeLedger
from changetrack.models.config import LedgerConfig


@pytest.fixture
def ledger() -> ChangeLedger[int]:
    return ChangeLedger()


@pytest.fixture
def verifying_ledger() -> ChangeLedger[int]:
    """A ledger that replays every snapshot before restoring it."""
    return ChangeLedger(LedgerConfig(verify_snapshots=True))


@pytest.fixture
def partitioned_ledger(ledger: ChangeLedger[int]) -> ChangeLedger[int]:
    """Elements 1..4 resolved to UPDATE, no action, ADD and DELETE respectively."""
    ledger.record_deleted(1)
    ledger.record_added(1)
    ledger.record_added(2)
    ledger.record_deleted(2)
    ledger.record_added(3)
    ledger.record_deleted(4)
    return ledger
