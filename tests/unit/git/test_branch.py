"""Tests for current-branch lookup."""

from pathlib import Path

import pytest

from devenv.config.settings import Settings
from devenv.core.exceptions import ConfigError
from devenv.core.models.repository import RootRepository
from devenv.git.branch import current_branch, shorten_ref_name
from devenv.git.executor import GitExecutor
from tests.gitutils import init_repo, run_git


@pytest.mark.unit
class TestShortenRefName:
    """Tests for shorten_ref_name."""

    @pytest.mark.parametrize(
        ("ref", "expected"),
        [
            ("refs/heads/main", "main"),
            ("refs/heads/feature/x", "feature/x"),
            ("refs/tags/v1.0", "v1.0"),
            ("refs/remotes/origin/main", "origin/main"),
            ("HEAD", "HEAD"),
        ],
    )
    def test_shorten(self, ref: str, expected: str) -> None:
        assert shorten_ref_name(ref) == expected


@pytest.mark.unit
class TestCurrentBranch:
    """Tests for current_branch against real repositories."""

    def test_symbolic_branch(self, git_repo: Path) -> None:
        assert current_branch(GitExecutor(git_repo, print_command_line=False)) == "main"

    def test_nested_branch_name(self, tmp_path: Path) -> None:
        repo = init_repo(tmp_path / "repo", branch="feature/devenv")
        assert current_branch(GitExecutor(repo, print_command_line=False)) == "feature/devenv"

    def test_detached_head(self, git_repo: Path) -> None:
        run_git(git_repo, "checkout", "--quiet", "--detach")
        assert current_branch(GitExecutor(git_repo, print_command_line=False)) is None

    def test_not_a_repository(self, tmp_path: Path) -> None:
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(ConfigError, match="no git repository was found"):
            current_branch(GitExecutor(plain, print_command_line=False))


@pytest.mark.unit
class TestRootRepositoryFromRootDirectory:
    """Tests for loading a RootRepository from a checkout."""

    def test_resolves_against_root_branch(self, git_repo: Path) -> None:
        (git_repo / "repo.properties").write_text("foo=true\nbar=true\nbar.branch=develop\n")
        root = RootRepository.from_root_directory(git_repo, settings=Settings())
        assert root.root_branch == "main"
        assert root.url_prefix == "git@github.com:metaborg"
        assert root.repositories["foo"].branch == "main"
        assert root.repositories["foo"].url == "git@github.com:metaborg/foo.git"
        assert root.repositories["bar"].branch == "develop"

    def test_detached_root(self, git_repo: Path) -> None:
        (git_repo / "repo.properties").write_text("foo=true\n")
        run_git(git_repo, "checkout", "--quiet", "--detach")
        root = RootRepository.from_root_directory(git_repo, settings=Settings())
        assert root.root_branch is None
        assert root.repositories["foo"].branch is None

    def test_settings_url_prefix(self, git_repo: Path) -> None:
        (git_repo / "repo.properties").write_text("foo=true\n")
        root = RootRepository.from_root_directory(
            git_repo, settings=Settings(url_prefix="https://example.org/group")
        )
        assert root.repositories["foo"].url == "https://example.org/group/foo.git"

    def test_missing_manifest(self, git_repo: Path) -> None:
        with pytest.raises(ConfigError):
            RootRepository.from_root_directory(git_repo, settings=Settings())
