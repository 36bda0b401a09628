"""Version information for git-branch-orchestrator."""

__version__ = "0.1.0"
