"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from devenv.core.models.configuration import RepositoryConfiguration, RepositoryConfigurations
from devenv.core.models.repository import Repository, RootRepository
from tests.gitutils import RecordingExecutor, init_repo

URL_PREFIX = "git@github.com:metaborg"


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A temporary git repository on branch ``main``."""
    return init_repo(tmp_path / "root")


@pytest.fixture
def make_root(tmp_path: Path) -> Callable[..., RootRepository]:
    """Build a RootRepository in ``tmp_path`` from descriptors."""

    def _make_root(*repos: Repository, root_branch: str | None = "main") -> RootRepository:
        configurations = RepositoryConfigurations(
            root_directory=tmp_path,
            url_prefix=URL_PREFIX,
            configurations={
                repo.name: RepositoryConfiguration(**repo.model_dump())
                for repo in repos
            },
        )
        return RootRepository(
            root_directory=tmp_path,
            root_branch=root_branch,
            url_prefix=URL_PREFIX,
            repositories={repo.name: repo for repo in repos},
            configurations=configurations,
        )

    return _make_root


@pytest.fixture
def recorder(tmp_path: Path) -> RecordingExecutor:
    """Executor recording git invocations against ``tmp_path``."""
    return RecordingExecutor(tmp_path)
