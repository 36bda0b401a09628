"""Configuration handling for git-branch-orchestrator"""

import queue
from dataclasses import dataclass, fields
from typing import Optional, Union

from git_branch_orchestrator.constants import (
    DEFAULT_EVENT_QUEUE_SIZE,
    DEFAULT_NETWORK_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_REMOTE,
    DEFAULT_WRITE_TIMEOUT,
)


@dataclass
class Config:
    """Configuration for git-branch-orchestrator with validation."""

    # Command timeouts, by operation class
    read_timeout: float = DEFAULT_READ_TIMEOUT
    write_timeout: float = DEFAULT_WRITE_TIMEOUT
    network_timeout: float = DEFAULT_NETWORK_TIMEOUT

    # Event detection
    poll_interval: float = DEFAULT_POLL_INTERVAL
    event_queue_size: int = DEFAULT_EVENT_QUEUE_SIZE

    # Remote used by worktree sync
    remote_name: str = DEFAULT_REMOTE

    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_timeouts()
        self._validate_poll_interval()
        self._validate_event_queue_size()
        self._validate_remote_name()

    def _validate_timeouts(self):
        """Validate every timeout is positive."""
        for name in ("read_timeout", "write_timeout", "network_timeout"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    def _validate_poll_interval(self):
        """Validate poll_interval is positive."""
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")

    def _validate_event_queue_size(self):
        """Validate event_queue_size is positive."""
        if self.event_queue_size <= 0:
            raise ValueError(f"event_queue_size must be positive, got {self.event_queue_size}")

    def _validate_remote_name(self):
        """Validate remote_name is not empty."""
        if not self.remote_name or not self.remote_name.strip():
            raise ValueError("remote_name cannot be empty")
        self.remote_name = self.remote_name.strip()

    def make_event_queue(self) -> queue.Queue:
        """Create a bounded queue suitable as an event sink."""
        return queue.Queue(maxsize=self.event_queue_size)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def get(self, key: str, default=None):
        """Get config value by key."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def coerce(cls, config: Optional[Union["Config", dict]]) -> "Config":
        """Accept a Config, a plain dict, or None and return a Config."""
        if config is None:
            return cls()
        if isinstance(config, cls):
            return config
        return cls.from_dict(config)
