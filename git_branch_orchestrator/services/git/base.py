"""Shared plumbing for the git-backed services."""

import logging
from typing import Optional, Union, TYPE_CHECKING

from git_branch_orchestrator.config import Config
from git_branch_orchestrator.constants import HEADS_PREFIX
from git_branch_orchestrator.exceptions import DetachedHeadError, GitExecutionError
from git_branch_orchestrator.services.git.executor import GitExecutor
from git_branch_orchestrator.utils.logging import get_logger

if TYPE_CHECKING:
    from git_branch_orchestrator.services.git.interfaces import CommandRunner


class GitServiceBase:
    """Binds a service to one repository root, executor, config and logger."""

    def __init__(
        self,
        root: str,
        executor: Optional["CommandRunner"] = None,
        config: Optional[Union[Config, dict]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the service.

        Args:
            root: Canonical repository root every command runs in
            executor: Command runner; defaults to a GitExecutor
            config: Configuration dictionary or Config object
            logger: Logging sink; defaults to the module logger of the subclass
        """
        self.config = Config.coerce(config)
        self.logger = logger if logger is not None else get_logger(type(self).__module__)
        self.executor = executor or GitExecutor(
            default_timeout=self.config.read_timeout, logger=self.logger
        )
        self._root = root
        self._logger_override = logger

    @property
    def root(self) -> str:
        """Repository root path (constant for the service's lifetime)."""
        return self._root

    def _read(self, *args: str, cwd: Optional[str] = None) -> str:
        """Run a query command."""
        return self.executor.run(cwd or self._root, args, timeout=self.config.read_timeout)

    def _write(self, *args: str, cwd: Optional[str] = None) -> str:
        """Run a command that mutates refs, the index or the filesystem."""
        return self.executor.run(cwd or self._root, args, timeout=self.config.write_timeout)

    def _network(self, *args: str, cwd: Optional[str] = None) -> str:
        """Run a command that talks to a remote."""
        return self.executor.run(cwd or self._root, args, timeout=self.config.network_timeout)

    def _current_branch(self, cwd: Optional[str] = None) -> str:
        """Resolve the symbolic HEAD.

        Raises:
            DetachedHeadError: HEAD does not point at a branch
        """
        try:
            return self._read("symbolic-ref", "--short", "HEAD", cwd=cwd)
        except GitExecutionError as e:
            raise DetachedHeadError() from e

    def _current_branch_or_empty(self, cwd: Optional[str] = None) -> str:
        try:
            return self._current_branch(cwd=cwd)
        except DetachedHeadError:
            return ""

    def _branch_exists(self, name: str) -> bool:
        try:
            self._read("rev-parse", "--verify", "--quiet", f"{HEADS_PREFIX}{name}")
            return True
        except GitExecutionError:
            return False

    def _head(self, cwd: Optional[str] = None) -> str:
        return self._read("rev-parse", "HEAD", cwd=cwd)
