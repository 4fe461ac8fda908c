"""Property-based tests for ChangeLedger.

Uses hypothesis to generate random streams of add/delete calls over a small
element pool and validates that:
 1. The normalized append path never produces a sequence the state machine rejects
 2. No recorded sequence holds two consecutive identical operations
 3. Net actions agree with a reference model of "existed before / exists now"
 4. Restoring a snapshot erases every change recorded after it
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from changetrack.errors import InvalidStateError
from changetrack.ledger.change_ledger import ChangeLedger
from changetrack.models.changes import Action, Operation

_calls = st.lists(
    st.tuples(st.sampled_from(["add", "delete"]), st.integers(min_value=0, max_value=5)),
    max_size=60,
)


def _apply(ledger: ChangeLedger[int], calls: list[tuple[str, int]]) -> None:
    for kind, element in calls:
        if kind == "add":
            try:
                ledger.record_added(element)
            except InvalidStateError:
                pass
        else:
            ledger.record_deleted(element)


def _expected_action(operations: tuple[Operation, ...]) -> Action | None:
    # A leading DELETE means the element existed in the underlying set.
    existed = operations[0] is Operation.DELETE
    exists = operations[-1] is Operation.INSERT
    if existed and exists:
        return Action.UPDATE
    if existed:
        return Action.DELETE
    if exists:
        return Action.ADD
    return None


@given(calls=_calls)
@settings(max_examples=200)
def test_recorded_sequences_always_replay(calls: list[tuple[str, int]]) -> None:
    ledger: ChangeLedger[int] = ChangeLedger()
    _apply(ledger, calls)

    for element in ledger.tracked_elements():
        operations = ledger.operations(element)
        assert operations
        assert all(a != b for a, b in zip(operations, operations[1:], strict=False))
        assert ledger.determine_action(element) is _expected_action(operations)


@given(calls=_calls)
@settings(max_examples=200)
def test_changes_partition_tracked_elements(calls: list[tuple[str, int]]) -> None:
    ledger: ChangeLedger[int] = ChangeLedger()
    _apply(ledger, calls)
    changes = ledger.changes()

    assert changes.added == ledger.added()
    assert changes.deleted == ledger.deleted()
    assert changes.updated == ledger.updated()
    assert not (changes.added & changes.deleted)
    assert not (changes.added & changes.updated)
    assert not (changes.deleted & changes.updated)
    assert changes.added | changes.deleted | changes.updated <= ledger.tracked_elements()


@given(before=_calls, after=_calls)
@settings(max_examples=200)
def test_restore_erases_later_changes(before: list[tuple[str, int]], after: list[tuple[str, int]]) -> None:
    ledger: ChangeLedger[int] = ChangeLedger()
    _apply(ledger, before)
    snapshot = ledger.capture_snapshot()
    expected = {element: ledger.determine_action(element) for element in ledger.tracked_elements()}

    _apply(ledger, after)
    ledger.restore_snapshot(snapshot)

    assert {element: ledger.determine_action(element) for element in ledger.tracked_elements()} == expected
