"""Pytest fixtures for git-branch-orchestrator tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from git_branch_orchestrator.config import Config
from git_branch_orchestrator.services.git.executor import GitExecutor


def _commit_file(repo, name, content, message):
    """Write a file inside the repo working tree and commit it."""
    path = Path(repo.working_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.git.add(name)
    repo.git.commit("-m", message)
    return repo.head.commit.hexsha


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # Resolve symlinked temp roots (macOS /var -> /private/var)
        yield Path(tmpdir).resolve()


@pytest.fixture
def config():
    """Create a configuration with short intervals for tests."""
    return Config(poll_interval=0.05)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    _commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch("-M", "main")

    yield repo

    # Cleanup
    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a Git repository with feature branches.

    - feature/test-feature: one unmerged commit touching feature.txt
    - feature/to-merge: merged back into main with --no-ff
    """
    repo = git_repo

    repo.git.checkout("-b", "feature/test-feature")
    _commit_file(repo, "feature.txt", "Feature content\n", "Add feature")

    repo.git.checkout("main")
    repo.git.checkout("-b", "feature/to-merge")
    _commit_file(repo, "merge.txt", "Merge content\n", "Feature to merge")

    repo.git.checkout("main")
    repo.git.merge("feature/to-merge", "--no-ff", "-m", "Merge feature/to-merge")

    yield repo


@pytest.fixture
def git_repo_with_origin(git_repo, temp_dir):
    """Create a Git repository tracking a local bare 'origin'."""
    origin_path = temp_dir / "origin.git"
    git.Repo.init(origin_path, bare=True)

    git_repo.create_remote("origin", str(origin_path))
    git_repo.git.push("-u", "origin", "main")

    yield git_repo


@pytest.fixture
def repo_path(git_repo):
    """Path of the git_repo working tree as a string."""
    return str(Path(git_repo.working_dir).resolve())


@pytest.fixture
def mock_executor():
    """Create a mock command runner."""
    executor = Mock(spec=GitExecutor)
    executor.run = Mock(return_value="")
    return executor


@pytest.fixture
def commit_file():
    """Helper that writes a file into a repo and commits it."""
    return _commit_file
