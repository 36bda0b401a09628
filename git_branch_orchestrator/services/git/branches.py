"""Branch lifecycle service for git-branch-orchestrator."""

from threading import Lock
from typing import List, Optional

from git_branch_orchestrator.constants import (
    BRANCH_LIST_FORMAT,
    REMOTE_LIST_FORMAT,
    REMOTES_PREFIX,
)
from git_branch_orchestrator.exceptions import (
    BranchExistsError,
    BranchNotFoundError,
    CannotDeleteCurrentBranchError,
    DirtyWorkingTreeError,
    InvalidBranchNameError,
)
from git_branch_orchestrator.models.branch import Branch
from git_branch_orchestrator.services.git.base import GitServiceBase
from git_branch_orchestrator.services.git.parsers import parse_branch_list

# Substrings git refuses anywhere in a ref name
_FORBIDDEN_SEQUENCES = [
    ("..", "contains '..'"),
    ("~", "contains '~'"),
    ("^", "contains '^'"),
    (":", "contains ':'"),
    ("\\", "contains '\\'"),
    ("@{", "contains '@{'"),
    ("?", "contains '?'"),
    ("*", "contains '*'"),
    ("[", "contains '['"),
    ("//", "contains '//'"),
]


def validate_branch_name(name: str) -> None:
    """Check a branch name against git's ref naming rules.

    Raises:
        InvalidBranchNameError: with ``rule`` naming the first violated rule
    """
    if not name:
        raise InvalidBranchNameError(name, "empty branch name")
    if name == "@":
        raise InvalidBranchNameError(name, "name is '@'")
    if name.startswith("."):
        raise InvalidBranchNameError(name, "starts with '.'")
    if name.endswith(".lock"):
        raise InvalidBranchNameError(name, "ends with '.lock'")
    if name.endswith("/"):
        raise InvalidBranchNameError(name, "ends with '/'")
    if name.endswith("."):
        raise InvalidBranchNameError(name, "ends with '.'")
    for sequence, rule in _FORBIDDEN_SEQUENCES:
        if sequence in name:
            raise InvalidBranchNameError(name, rule)
    for char in name:
        if ord(char) < 0x20 or ord(char) == 0x7F:
            raise InvalidBranchNameError(name, "contains control character")
        if char.isspace():
            raise InvalidBranchNameError(name, "contains whitespace")
    for component in name.split("/"):
        if component.startswith(".") or component.endswith(".lock"):
            raise InvalidBranchNameError(name, f"invalid path component '{component}'")


class BranchManager(GitServiceBase):
    """Create, switch, delete and list local branches.

    Mutations from this instance are serialized by a lock. Nothing guards
    against another process changing the same refs; whatever git reports in
    that case is surfaced as is.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._lock = Lock()  # Serializes create/switch/delete

    def exists(self, name: str) -> bool:
        """Check whether a local branch exists."""
        return self._branch_exists(name)

    def create(self, name: str, start_point: Optional[str] = None) -> None:
        """Create a local branch from HEAD (or ``start_point``).

        Raises:
            InvalidBranchNameError: Name violates ref naming rules
            BranchExistsError: Branch already exists
            GitExecutionError: git refused to create it
        """
        validate_branch_name(name)

        with self._lock:
            self.logger.debug(f"Creating branch {name}")
            if self._branch_exists(name):
                raise BranchExistsError(name)

            args = ["branch", name]
            if start_point:
                args.append(start_point)
            self._write(*args)
            self.logger.info(f"Created branch {name}")

    def switch(self, name: str) -> None:
        """Check out an existing branch in the repository root.

        Raises:
            BranchNotFoundError: Branch doesn't exist
            DirtyWorkingTreeError: Uncommitted changes would be carried over or lost
        """
        with self._lock:
            self.logger.debug(f"Switching to branch {name}")
            if not self._branch_exists(name):
                raise BranchNotFoundError(name)

            if self._read("status", "--porcelain"):
                raise DirtyWorkingTreeError("switch_branch", name)

            self._write("checkout", name)
            self.logger.info(f"Switched to branch {name}")

    def delete(self, name: str) -> None:
        """Delete a fully merged local branch.

        Raises:
            BranchNotFoundError: Branch doesn't exist
            CannotDeleteCurrentBranchError: Branch is checked out
            GitExecutionError: Branch has unmerged commits
        """
        with self._lock:
            self.logger.debug(f"Deleting branch {name}")
            if not self._branch_exists(name):
                raise BranchNotFoundError(name)

            if self._current_branch_or_empty() == name:
                raise CannotDeleteCurrentBranchError(name)

            self._write("branch", "-d", name)
            self.logger.info(f"Deleted branch {name}")

    def list(self, include_remote: bool = False) -> List[Branch]:
        """List local branches, optionally followed by remote-tracking ones.

        Exactly one local branch is marked current, or none when HEAD is
        detached.
        """
        current = self._current_branch_or_empty()

        output = self._read("branch", f"--format={BRANCH_LIST_FORMAT}")
        branches = [
            Branch(name=name, is_remote=False, is_current=bool(current) and name == current)
            for name in parse_branch_list(output)
        ]

        if include_remote:
            output = self._read("branch", "-r", f"--format={REMOTE_LIST_FORMAT}")
            for ref in parse_branch_list(output):
                # Skip symbolic refs such as origin/HEAD
                if ref.endswith("/HEAD"):
                    continue
                name = ref[len(REMOTES_PREFIX):] if ref.startswith(REMOTES_PREFIX) else ref
                branches.append(Branch(name=name, is_remote=True, is_current=False))

        self.logger.debug(f"Listed {len(branches)} branches")
        return branches
