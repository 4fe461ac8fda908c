"""Per-element change consolidation state machine.

Every query starts a fresh run at ``INITIAL`` and folds the element's
recorded operations through :func:`transition`; no running state is kept
between queries.

    INITIAL       --INSERT--> CREATED        --DELETE--> NON_EXISTING
    INITIAL       --DELETE--> DELETED        --INSERT--> UPDATED
    UPDATED       --DELETE--> DELETED
    NON_EXISTING  --INSERT--> CREATED
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from changetrack.errors import InvalidTransitionError
from changetrack.models.changes import Action, Operation


class ElementState(StrEnum):
    """Net disposition of a single tracked element."""

    INITIAL = "initial"
    CREATED = "created"
    DELETED = "deleted"
    UPDATED = "updated"
    NON_EXISTING = "non_existing"


_TRANSITIONS: dict[tuple[ElementState, Operation], ElementState] = {
    (ElementState.INITIAL, Operation.INSERT): ElementState.CREATED,
    (ElementState.INITIAL, Operation.DELETE): ElementState.DELETED,
    (ElementState.CREATED, Operation.DELETE): ElementState.NON_EXISTING,
    (ElementState.DELETED, Operation.INSERT): ElementState.UPDATED,
    (ElementState.UPDATED, Operation.DELETE): ElementState.DELETED,
    (ElementState.NON_EXISTING, Operation.INSERT): ElementState.CREATED,
}

_REJECTIONS: dict[tuple[ElementState, Operation], str] = {
    (ElementState.CREATED, Operation.INSERT): "adding the same element twice in a row makes no sense",
    (ElementState.DELETED, Operation.DELETE): "delete can't follow a delete",
    (ElementState.UPDATED, Operation.INSERT): "insert can't follow an update",
    (ElementState.NON_EXISTING, Operation.DELETE): "can't delete a non-existing element",
}

_ACTIONS: dict[ElementState, Action | None] = {
    ElementState.INITIAL: None,
    ElementState.CREATED: Action.ADD,
    ElementState.DELETED: Action.DELETE,
    ElementState.UPDATED: Action.UPDATE,
    ElementState.NON_EXISTING: None,
}


def transition(state: ElementState, operation: Operation) -> ElementState:
    """Return the state reached by applying *operation* in *state*.

    Raises:
        InvalidTransitionError: if *operation* is not valid in *state*.
    """
    try:
        return _TRANSITIONS[(state, operation)]
    except KeyError:
        reason = _REJECTIONS.get((state, operation), f"unsupported operation {operation!r}")
        raise InvalidTransitionError(state, operation, reason) from None


def action_of(state: ElementState) -> Action | None:
    """Return the net action a state stands for, or None for no action."""
    return _ACTIONS[state]


def replay(operations: Iterable[Operation]) -> ElementState:
    """Fold *operations* through the machine starting from INITIAL."""
    state = ElementState.INITIAL
    for operation in operations:
        state = transition(state, operation)
    return state


def resolve_action(operations: Iterable[Operation]) -> Action | None:
    """Return the net action of an operation sequence."""
    return action_of(replay(operations))
