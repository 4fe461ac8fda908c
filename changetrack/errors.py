"""Exception hierarchy for changetrack."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from changetrack.ledger.state_machine import ElementState
    from changetrack.models.changes import Action, Operation


class ChangeTrackError(Exception):
    """Base class for every error raised by changetrack."""


class InvalidArgumentError(ChangeTrackError, ValueError):
    """Raised when an element or snapshot argument is missing or of the wrong type."""


class InvalidStateError(ChangeTrackError, RuntimeError):
    """Raised when a ledger policy forbids recording an operation."""

    def __init__(self, element: object, action: Action | None, message: str) -> None:
        super().__init__(message)
        self.element = element
        self.action = action


class InvalidTransitionError(ChangeTrackError, AssertionError):
    """Raised when an operation sequence cannot be replayed by the state machine.

    Only reachable through a corrupted or hand-built operation sequence; the
    ledger's own append path never produces one.
    """

    def __init__(self, state: ElementState, operation: Operation, reason: str) -> None:
        super().__init__(f"cannot apply {operation!s} in state {state!s}: {reason}")
        self.state = state
        self.operation = operation
