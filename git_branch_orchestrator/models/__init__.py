"""Data models for git-branch-orchestrator."""

from .branch import Branch
from .commit import Commit
from .conflict import ConflictPrediction
from .events import BranchSwitchEvent, EventType, GitEvent, NewCommitEvent, Snapshot
from .status import GitStatus
from .worktree import WorktreeInfo

__all__ = [
    "Branch",
    "BranchSwitchEvent",
    "Commit",
    "ConflictPrediction",
    "EventType",
    "GitEvent",
    "GitStatus",
    "NewCommitEvent",
    "Snapshot",
    "WorktreeInfo",
]
