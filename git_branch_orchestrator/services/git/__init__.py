"""Git-related services for git-branch-orchestrator."""

from .executor import GitExecutor
from .repository import Repository
from .branches import BranchManager, validate_branch_name
from .worktrees import WorktreeService
from .conflicts import ConflictDetector
from .events import EventDetector, PollHandle

__all__ = [
    "GitExecutor",
    "Repository",
    "BranchManager",
    "validate_branch_name",
    "WorktreeService",
    "ConflictDetector",
    "EventDetector",
    "PollHandle",
]
