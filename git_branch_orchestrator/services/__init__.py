"""Services for git-branch-orchestrator."""
