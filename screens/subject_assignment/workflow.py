# screens/subject_assignment/workflow.py
"""
Explicit state machines for the subject assignment screen.

SubmissionFlow tracks one batch submission from Idle to a terminal state.
ScreenFlow holds the single active mode of the screen (browsing, creating,
editing, confirming a delete, viewing a roster) in place of separate
on/off flags in the session.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple


class InvalidTransition(ValueError):
    """Raised when a state machine is asked for a move its table forbids."""


# ============================================================================
# SUBMISSION
# ============================================================================

class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    DUPLICATE_CHECK = "duplicate_check"
    ALL_DUPLICATE = "all_duplicate"
    PERSISTING = "persisting"
    PERSIST_ERROR = "persist_error"
    SUCCESS = "success"


SUBMISSION_TRANSITIONS: Dict[SubmissionState, FrozenSet[SubmissionState]] = {
    SubmissionState.IDLE: frozenset({SubmissionState.VALIDATING}),
    # a failed catalog or duplicate-check read ends like a failed write
    SubmissionState.VALIDATING: frozenset({
        SubmissionState.REJECTED,
        SubmissionState.DUPLICATE_CHECK,
        SubmissionState.PERSIST_ERROR,
    }),
    SubmissionState.DUPLICATE_CHECK: frozenset({
        SubmissionState.ALL_DUPLICATE,
        SubmissionState.PERSISTING,
        SubmissionState.PERSIST_ERROR,
    }),
    SubmissionState.PERSISTING: frozenset({SubmissionState.PERSIST_ERROR, SubmissionState.SUCCESS}),
    SubmissionState.REJECTED: frozenset(),
    SubmissionState.ALL_DUPLICATE: frozenset(),
    SubmissionState.PERSIST_ERROR: frozenset(),
    SubmissionState.SUCCESS: frozenset(),
}

TERMINAL_STATES: FrozenSet[SubmissionState] = frozenset(
    s for s, targets in SUBMISSION_TRANSITIONS.items() if not targets
)


class SubmissionFlow:
    """One caller-initiated submission. Never reused once terminal."""

    def __init__(self) -> None:
        self.state = SubmissionState.IDLE
        self.history: List[SubmissionState] = [self.state]

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, target: SubmissionState) -> SubmissionState:
        if target not in SUBMISSION_TRANSITIONS[self.state]:
            raise InvalidTransition(f"{self.state.value} -> {target.value} is not allowed")
        self.state = target
        self.history.append(target)
        return target


# ============================================================================
# SCREEN
# ============================================================================

class ScreenMode(str, Enum):
    BROWSING = "browsing"
    CREATING = "creating"
    EDITING = "editing"
    CONFIRMING_DELETE = "confirming_delete"
    VIEWING_ROSTER = "viewing_roster"


SCREEN_TRANSITIONS: Dict[ScreenMode, FrozenSet[ScreenMode]] = {
    ScreenMode.BROWSING: frozenset({
        ScreenMode.CREATING,
        ScreenMode.EDITING,
        ScreenMode.CONFIRMING_DELETE,
        ScreenMode.VIEWING_ROSTER,
    }),
    ScreenMode.CREATING: frozenset({ScreenMode.BROWSING}),
    ScreenMode.EDITING: frozenset({ScreenMode.BROWSING}),
    ScreenMode.CONFIRMING_DELETE: frozenset({ScreenMode.BROWSING}),
    ScreenMode.VIEWING_ROSTER: frozenset({ScreenMode.BROWSING}),
}

# Modes that act on one existing assignment.
_TARGETED = frozenset({ScreenMode.EDITING, ScreenMode.CONFIRMING_DELETE, ScreenMode.VIEWING_ROSTER})


@dataclass
class ScreenFlow:
    mode: ScreenMode = ScreenMode.BROWSING
    assignment_id: Optional[int] = None
    # filter and notice survive mode changes; field errors belong to one form visit
    year_level_filter: str = "all"
    notice: Optional[Tuple[str, str]] = None
    field_errors: Dict[str, str] = field(default_factory=dict)

    def go(self, target: ScreenMode, assignment_id: Optional[int] = None) -> None:
        if target not in SCREEN_TRANSITIONS[self.mode]:
            raise InvalidTransition(f"{self.mode.value} -> {target.value} is not allowed")
        if target in _TARGETED and assignment_id is None:
            raise InvalidTransition(f"{target.value} needs an assignment id")
        self.mode = target
        self.assignment_id = assignment_id if target in _TARGETED else None
        self.field_errors = {}

    def close(self, notice: Optional[Tuple[str, str]] = None) -> None:
        """Back to the list from any mode; a no-op when already browsing."""
        if self.mode is not ScreenMode.BROWSING:
            self.go(ScreenMode.BROWSING)
        if notice is not None:
            self.notice = notice

    def reject(self, field_errors: Dict[str, str], notice: Tuple[str, str]) -> None:
        """Stay in the current form and show what needs fixing."""
        self.field_errors = dict(field_errors)
        self.notice = notice

    def pop_notice(self) -> Optional[Tuple[str, str]]:
        notice, self.notice = self.notice, None
        return notice
