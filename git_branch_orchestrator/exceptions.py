"""Custom exceptions for git-branch-orchestrator"""

from typing import Optional


class GitOrchestratorError(Exception):
    """Base exception for all git-branch-orchestrator errors."""
    pass


class GitOperationError(GitOrchestratorError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class SystemGitNotFoundError(GitOperationError):
    """Exception raised when the git executable cannot be located on PATH."""

    def __init__(self, executable: str = "git"):
        self.executable = executable
        super().__init__("locate_git", message=f"'{executable}' executable not found on PATH")


class GitExecutionError(GitOperationError):
    """Exception raised when a git process exits with a non-zero status.

    Carries the git subcommand name, the captured stderr and the exit status
    so callers can render a precise message or decide whether to retry.
    """

    def __init__(self, command: str, stderr: str = "", status: Optional[int] = None):
        self.command = command
        self.stderr = stderr
        self.status = status

        if stderr:
            detail = f"git {command} (exit {status}): {stderr}"
        else:
            detail = f"git {command} exited with status {status}"
        super().__init__(command, message=detail)


class NotARepositoryError(GitOperationError):
    """Exception raised when a path is not inside a git working tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("open_repository", message=f"'{path}' is not a git repository")


class DetachedHeadError(GitOperationError):
    """Exception raised when repository is in detached HEAD state."""

    def __init__(self):
        super().__init__("check_state", message="Repository is in detached HEAD state")


class BranchNotFoundError(GitOperationError):
    """Exception raised when a branch is not found."""

    def __init__(self, branch: str):
        super().__init__("find_branch", branch, "Branch not found")


class BranchExistsError(GitOperationError):
    """Exception raised when creating a branch that already exists."""

    def __init__(self, branch: str):
        super().__init__("create_branch", branch, "Branch already exists")


class CannotDeleteCurrentBranchError(GitOperationError):
    """Exception raised when attempting to delete the checked-out branch."""

    def __init__(self, branch: str):
        super().__init__("delete_branch", branch, "Cannot delete current branch")


class InvalidBranchNameError(GitOperationError):
    """Exception raised when a branch name violates git ref naming rules."""

    def __init__(self, branch: str, rule: str):
        self.rule = rule
        super().__init__("validate_branch_name", branch, f"Invalid branch name: {rule}")


class DirtyWorkingTreeError(GitOperationError):
    """Exception raised when uncommitted changes block an operation."""

    def __init__(self, operation: str, branch: Optional[str] = None):
        super().__init__(operation, branch, "Working tree has uncommitted changes")


class WorktreePathExistsError(GitOperationError):
    """Exception raised when the target path of a new worktree already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("add_worktree", message=f"Path '{path}' already exists")


class WorktreeNotFoundError(GitOperationError):
    """Exception raised when a path is not a registered worktree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__("remove_worktree", message=f"'{path}' is not a registered worktree")


class WorktreeDirtyError(GitOperationError):
    """Exception raised when a worktree has uncommitted changes and force is off."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            "remove_worktree", message=f"Worktree '{path}' contains modified or untracked files"
        )


class NoMergeBaseError(GitOperationError):
    """Exception raised when two refs share no common ancestor."""

    def __init__(self, ref1: str, ref2: str):
        self.ref1 = ref1
        self.ref2 = ref2
        super().__init__("merge_base", message=f"No common ancestor for '{ref1}' and '{ref2}'")


class SnapshotRequiredError(GitOperationError):
    """Exception raised when change detection runs before a snapshot was taken."""

    def __init__(self):
        super().__init__("detect_changes", message="No snapshot taken; call take_snapshot() first")


class PollCancelledError(GitOrchestratorError):
    """Exception raised when a polling loop stops because its token was cancelled."""

    def __init__(self, reason: str = "cancelled"):
        self.reason = reason
        super().__init__(f"Polling stopped: {reason}")
