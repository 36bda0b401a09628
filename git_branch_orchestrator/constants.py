"""Shared constants for git-branch-orchestrator."""

from datetime import datetime, timezone
from typing import Dict


# Per-operation-class timeouts (seconds)
DEFAULT_READ_TIMEOUT = 5.0
DEFAULT_WRITE_TIMEOUT = 10.0
DEFAULT_NETWORK_TIMEOUT = 30.0

DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_EVENT_QUEUE_SIZE = 64
DEFAULT_REMOTE = "origin"

# Environment applied to every git invocation
GIT_ENV_OVERRIDES: Dict[str, str] = {
    "GIT_TERMINAL_PROMPT": "0",
    "LC_ALL": "C",
    "LANG": "C",
}

# Field separator for `git log --format`
LOG_FIELD_SEPARATOR = "\x1f"
LOG_FORMAT = LOG_FIELD_SEPARATOR.join(["%H", "%an", "%aI", "%s"])

BRANCH_LIST_FORMAT = "%(refname:short)"
REMOTE_LIST_FORMAT = "%(refname)"

HEADS_PREFIX = "refs/heads/"
REMOTES_PREFIX = "refs/remotes/"

# Returned for commit dates git printed in a form we couldn't parse
ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)

SYNC_STRATEGIES = ("merge", "rebase")
