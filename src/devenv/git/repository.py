"""Git actions on the root checkout and on individual repositories."""

from pathlib import Path

import structlog

from devenv.core.models.repository import Repository, RootRepository
from devenv.git.command import GitCommand
from devenv.git.executor import GitExecutor
from devenv.git.transport import Transport

logger = structlog.get_logger(__name__)

DEFAULT_REMOTE = "origin"


class RepositoryGit:
    """Runs git commands inside the checkout of one repository."""

    def __init__(self, executor: GitExecutor, repo: Repository) -> None:
        self._executor = executor
        self._repo = repo
        self._repo_dir = repo.repo_dir(executor.root_directory)

    @property
    def repo(self) -> Repository:
        return self._repo

    @property
    def repo_dir(self) -> Path:
        return self._repo_dir

    def _exec(self, command: GitCommand, **kwargs) -> str:
        return self._executor.exec(command, directory=self._repo_dir, **kwargs)

    def _maybe_exec(self, command: GitCommand, **kwargs) -> str | None:
        return self._executor.maybe_exec(command, directory=self._repo_dir, **kwargs)

    def status(self, short: bool = False) -> None:
        self._exec(
            GitCommand("-c", "color.status=always", "status", "--branch").flag("--short", short),
            print_command_line=False,
        )

    def fetch(self) -> None:
        self._exec(GitCommand("fetch", "--quiet", "--recurse-submodules", "--all"))

    def checkout(self) -> None:
        branch = self._repo.require_branch("switch")
        self._exec(GitCommand("switch", "--quiet").paths(branch))

    def pull(self) -> None:
        self._exec(GitCommand("pull", "--quiet", "--recurse-submodules", "--rebase", "--autostash"))

    def push(self, all_branches: bool = False, follow_tags: bool = False) -> None:
        self._exec(GitCommand("push").flag("--all", all_branches).flag("--follow-tags", follow_tags))

    def clean(self, dry_run: bool, remove_ignored: bool = False) -> None:
        # -d: untracked directories too; -x: ignored files too
        self._exec(
            GitCommand("clean", "--force", "-d")
            .flag("-x", remove_ignored)
            .flag("--dry-run", dry_run)
        )

    def reset(self, hard: bool) -> None:
        branch = self._repo.require_branch("reset")
        self._exec(GitCommand("reset", branch).choice(hard, "--hard", "--mixed"))

    def print_commit(self) -> None:
        """Print the current commit and log message, if it can be determined."""
        self._maybe_exec(GitCommand("log", "--decorate", "--oneline", "-1"), print_command_line=False)

    def get_commit(self) -> str | None:
        """Get the current commit hash; or ``None`` if it could not be determined."""
        output = self._maybe_exec(
            GitCommand("rev-parse", "--verify", "HEAD"),
            print_command_line=False,
            capture_output=True,
        )
        return output.strip() if output is not None else None

    def get_default_remote(self) -> str | None:
        """Get ``checkout.defaultRemote``; or ``None`` if unset or unreadable."""
        output = self._maybe_exec(
            GitCommand("config", "--get", "checkout.defaultRemote"),
            print_command_line=False,
            capture_output=True,
        )
        if output is None or not output.strip():
            return None
        return output.strip()

    def get_remote(self) -> str:
        """Get the remote to track, defaulting to ``origin``."""
        return self._repo.remote or self.get_default_remote() or DEFAULT_REMOTE

    def fix_branch(self) -> None:
        """Turn a detached submodule checkout into a branch tracking its remote.

        Any existing local branch of the same name is moved to the current commit.
        """
        branch = self._repo.require_branch("fix branch of")
        remote = self.get_remote()
        self._exec(GitCommand("checkout", "--quiet", "--detach"))
        self._exec(GitCommand("branch", "--quiet", "--force").paths(branch))
        self._exec(GitCommand("branch", "--quiet", f"--set-upstream-to={remote}/{branch}").paths(branch))
        self.checkout()
        logger.debug("Fixed submodule branch", repository=self._repo.name, branch=branch, remote=remote)


class RootRepositoryGit:
    """Runs git commands in the root checkout on behalf of its repositories."""

    def __init__(self, executor: GitExecutor, root: RootRepository) -> None:
        self._executor = executor
        self._root = root

    @property
    def root(self) -> RootRepository:
        return self._root

    def repository(self, repo: Repository) -> RepositoryGit:
        return RepositoryGit(self._executor, repo)

    def is_checked_out(self, repo: Repository) -> bool:
        """Whether ``repo`` is present and, for a submodule, initialized."""
        if not repo.repo_dir(self._executor.root_directory).exists():
            return False
        if repo.submodule:
            return not self.submodule_status(repo).startswith("-")
        return True

    def submodule_status(self, repo: Repository) -> str:
        return self._executor.exec(
            GitCommand("submodule", "status").paths(repo.directory),
            print_command_line=False,
            capture_output=True,
        ).strip()

    def submodule_init(self, repo: Repository) -> None:
        self._executor.exec(
            GitCommand("submodule", "update", "--quiet", "--recursive", "--init").paths(repo.directory)
        )

    def submodule_update(self, repo: Repository) -> None:
        self._executor.exec(
            GitCommand("submodule", "update", "--quiet", "--recursive").paths(repo.directory)
        )

    def clone(self, repo: Repository, transport: Transport) -> None:
        branch = repo.require_branch("clone")
        self._executor.exec(
            GitCommand(
                "clone",
                "--quiet",
                "--recurse-submodules",
                "--branch",
                branch,
                transport.convert(repo.url),
                repo.directory,
            )
        )

    def add(self, repo: Repository) -> None:
        self._executor.exec(GitCommand("add").paths(repo.directory))

    def has_staged_changes(self) -> bool:
        return self._executor.exit_code(GitCommand("diff", "--cached", "--quiet")) != 0

    def commit(self, message: str) -> None:
        self._executor.exec(GitCommand("commit", "--quiet", "--message", message))
