"""
git-branch-orchestrator - A process-safe model of a git working copy for
tools that run several branches and worktrees in parallel
"""

import logging
import os

# GitPython probes for git at import time; a missing binary is reported by
# GitExecutor.run as SystemGitNotFoundError instead of failing the import
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from .__version__ import __version__
from .config import Config
from .exceptions import (
    GitOrchestratorError,
    GitOperationError,
    SystemGitNotFoundError,
    GitExecutionError,
    NotARepositoryError,
    DetachedHeadError,
    BranchNotFoundError,
    BranchExistsError,
    CannotDeleteCurrentBranchError,
    InvalidBranchNameError,
    DirtyWorkingTreeError,
    WorktreePathExistsError,
    WorktreeNotFoundError,
    WorktreeDirtyError,
    NoMergeBaseError,
    SnapshotRequiredError,
    PollCancelledError,
)
from .models import (
    Branch,
    BranchSwitchEvent,
    Commit,
    ConflictPrediction,
    EventType,
    GitEvent,
    GitStatus,
    NewCommitEvent,
    Snapshot,
    WorktreeInfo,
)
from .services.git import (
    BranchManager,
    ConflictDetector,
    EventDetector,
    GitExecutor,
    PollHandle,
    Repository,
    WorktreeService,
    validate_branch_name,
)
from .utils import CancellationToken, setup_logging

# Silent unless the host application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "Config",
    # Services
    "Repository",
    "BranchManager",
    "WorktreeService",
    "ConflictDetector",
    "EventDetector",
    "PollHandle",
    "GitExecutor",
    "validate_branch_name",
    # Models
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
    # Utilities
    "CancellationToken",
    "setup_logging",
    # Errors
    "GitOrchestratorError",
    "GitOperationError",
    "SystemGitNotFoundError",
    "GitExecutionError",
    "NotARepositoryError",
    "DetachedHeadError",
    "BranchNotFoundError",
    "BranchExistsError",
    "CannotDeleteCurrentBranchError",
    "InvalidBranchNameError",
    "DirtyWorkingTreeError",
    "WorktreePathExistsError",
    "WorktreeNotFoundError",
    "WorktreeDirtyError",
    "NoMergeBaseError",
    "SnapshotRequiredError",
    "PollCancelledError",
]
