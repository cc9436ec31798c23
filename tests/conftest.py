"""Pytest configuration and fixtures for git_multi_repo tests."""

import tempfile
from pathlib import Path

import pytest
from git import Repo

from git_multi_repo.config import MultiRepoConfig, RepoDescriptor, config_path


def _configure(repo: Repo) -> None:
    """Set a git identity and predictable pull behaviour on a repo."""
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("pull", "rebase", "false")


def commit_file(repo_path: Path, name: str, content: str, message: str) -> None:
    """Write a file in a working copy and commit it."""
    repo = Repo(repo_path)
    (repo_path / name).write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


def write_config(home: Path, repos: list[RepoDescriptor]) -> Path:
    """Write a .git-multi-repo.json into `home` and return its path."""
    path = config_path(home)
    MultiRepoConfig(repos=repos).to_json(path)
    return path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def origin_repo(temp_dir: Path):
    """Create a bare repository to act as the shared remote."""
    repo_path = temp_dir / "origin.git"
    Repo.init(repo_path, bare=True)
    yield repo_path


@pytest.fixture
def working_copy(temp_dir: Path, origin_repo: Path):
    """Create a clone with one commit pushed and upstream tracking set."""
    repo_path = temp_dir / "work"
    repo = Repo.clone_from(str(origin_repo), str(repo_path))
    _configure(repo)

    commit_file(repo_path, "README.md", "# Work Repo\n", "Initial commit")
    repo.git.push("-u", "origin", "HEAD")

    yield repo_path


@pytest.fixture
def second_copy(temp_dir: Path, origin_repo: Path, working_copy: Path):
    """Create a second clone of the same remote, for pull tests."""
    repo_path = temp_dir / "second"
    repo = Repo.clone_from(str(origin_repo), str(repo_path))
    _configure(repo)
    yield repo_path


@pytest.fixture
def local_only_repo(temp_dir: Path):
    """Create a repository with a commit but no upstream."""
    repo_path = temp_dir / "local"
    repo_path.mkdir()
    repo = Repo.init(repo_path)
    _configure(repo)
    commit_file(repo_path, "README.md", "# Local Repo\n", "Initial commit")
    yield repo_path


@pytest.fixture
def home_dir(temp_dir: Path):
    """Create an empty directory to act as the user's home."""
    home = temp_dir / "home"
    home.mkdir()
    yield home
