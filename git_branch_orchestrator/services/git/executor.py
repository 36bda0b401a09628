"""Git command executor for git-branch-orchestrator.

Every other service reaches the git binary through ``GitExecutor.run``; it is
the only place that spawns processes, so locale, prompt suppression and
timeouts are uniform for all parsed output.
"""

import logging
import os
import time
from typing import Dict, Optional, Sequence

from git.cmd import Git
from git.exc import GitCommandNotFound

from git_branch_orchestrator.constants import DEFAULT_READ_TIMEOUT, GIT_ENV_OVERRIDES
from git_branch_orchestrator.exceptions import GitExecutionError, SystemGitNotFoundError
from git_branch_orchestrator.utils.logging import get_logger


class GitExecutor:
    """Runs the system git binary and returns its standard output."""

    def __init__(
        self,
        default_timeout: float = DEFAULT_READ_TIMEOUT,
        env: Optional[Dict[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the executor.

        Args:
            default_timeout: Seconds before a git process is killed when the
                caller passes no timeout
            env: Extra environment variables layered over the fixed overrides
            logger: Logging sink; defaults to the module logger
        """
        self.default_timeout = default_timeout
        self.env = dict(GIT_ENV_OVERRIDES)
        if env:
            self.env.update(env)
        self.logger = logger if logger is not None else get_logger(__name__)

    def run(self, cwd: str, args: Sequence[str], timeout: Optional[float] = None) -> str:
        """Run ``git <args>`` inside ``cwd``.

        Args:
            cwd: Working directory for the git process
            args: Argument vector, without the leading ``git``
            timeout: Seconds before the process is killed

        Returns:
            Standard output with trailing newlines removed. Leading
            whitespace is kept since porcelain formats are column based.

        Raises:
            SystemGitNotFoundError: The git executable is not on PATH
            GitExecutionError: git exited non-zero or was killed on timeout
        """
        args = list(args)
        command = args[0] if args else ""
        timeout = timeout if timeout is not None else self.default_timeout

        if not os.path.isdir(cwd):
            raise GitExecutionError(command, f"working directory '{cwd}' does not exist")

        # Resolved through PATH by the OS on every call
        executable = Git.GIT_PYTHON_GIT_EXECUTABLE or "git"
        started = time.monotonic()
        try:
            status, stdout, stderr = Git(cwd).execute(
                [executable, *args],
                with_extended_output=True,
                with_exceptions=False,
                kill_after_timeout=timeout,
                env=self.env,
                strip_newline_in_stdout=False,
            )
        except GitCommandNotFound as e:
            raise SystemGitNotFoundError(executable) from e

        elapsed = time.monotonic() - started
        self.logger.debug(f"git {' '.join(args)} in {cwd} -> exit {status} ({elapsed:.3f}s)")

        if status != 0:
            raise GitExecutionError(command, (stderr or "").strip(), status)

        return (stdout or "").rstrip("\r\n")
