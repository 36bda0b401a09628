"""Repository snapshot and change event models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Union


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventType(Enum):
    """Kind of change detected between two observations."""
    BRANCH_SWITCH = "branch_switch"
    NEW_COMMIT = "new_commit"


@dataclass(frozen=True)
class Snapshot:
    """Observed (branch, HEAD) pair. ``branch`` is empty when HEAD is detached."""
    branch: str
    head: str
    captured_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class BranchSwitchEvent:
    """The checked-out branch changed."""
    previous_branch: str
    current_branch: str
    timestamp: datetime = field(default_factory=_utcnow)
    event_type: EventType = field(default=EventType.BRANCH_SWITCH, init=False)


@dataclass(frozen=True)
class NewCommitEvent:
    """HEAD moved to a different commit."""
    previous_head: str
    current_head: str
    timestamp: datetime = field(default_factory=_utcnow)
    event_type: EventType = field(default=EventType.NEW_COMMIT, init=False)


GitEvent = Union[BranchSwitchEvent, NewCommitEvent]
