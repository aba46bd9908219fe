"""Runs devenv operations across the repositories of a root checkout."""

from collections.abc import Callable, Sequence

import click
import structlog

from devenv.core.exceptions import DevenvError, OperationFailedError
from devenv.core.models.repository import Repository, RootRepository
from devenv.git.executor import GitExecutor
from devenv.git.repository import RootRepositoryGit
from devenv.git.transport import Transport
from devenv.services.selection import select_repositories

logger = structlog.get_logger(__name__)

DEFAULT_COMMIT_MESSAGE = "Update submodule revisions"


class RepositoryOperationEngine:
    """Sequences git operations over the selected repositories.

    Repositories are processed one at a time in manifest order. By default
    the first failure aborts the operation; with ``keep_going`` every
    repository is attempted and the failures are reported together at the
    end. Nothing is rolled back in either mode.
    """

    def __init__(
        self,
        root: RootRepository,
        executor: GitExecutor,
        echo: Callable[[str], None] = click.echo,
        keep_going: bool = False,
        transport: Transport = Transport.SSH,
    ) -> None:
        self._root = root
        self._executor = executor
        self._git = RootRepositoryGit(executor, root)
        self._echo = echo
        self._keep_going = keep_going
        self._transport = transport

    @property
    def root(self) -> RootRepository:
        return self._root

    def select(self, names: Sequence[str], allow_not_updated: bool = False) -> list[Repository]:
        """Resolve ``names`` to repositories in manifest order; all when empty."""
        return select_repositories(self._root, names, allow_not_updated=allow_not_updated)

    def _updated(self, names: Sequence[str]) -> list[Repository]:
        return [repo for repo in self.select(names) if repo.update]

    def _run(
        self,
        operation: str,
        repos: Sequence[Repository],
        step: Callable[[Repository], None],
    ) -> None:
        failures: list[tuple[str, DevenvError]] = []
        for repo in repos:
            with structlog.contextvars.bound_contextvars(operation=operation, repository=repo.name):
                try:
                    step(repo)
                except DevenvError as e:
                    if not self._keep_going:
                        raise
                    logger.error("Repository operation failed", error=e.message)
                    failures.append((repo.name, e))
        if failures:
            raise OperationFailedError(operation, failures)

    def _ensure_cloned(self, repo: Repository) -> bool:
        if not self._git.is_checked_out(repo):
            self._echo(f"{repo.name}: {repo.type_str} not cloned")
            return False
        return True

    def list_repositories(self, names: Sequence[str] = (), verbose: bool = False) -> None:
        """Print the root repository and the selected repositories."""
        root = self._root
        selected = self.select(names, allow_not_updated=True)
        self._echo("Root repository:")
        self._echo(f"  Git URL prefix: {root.url_prefix}")
        self._echo(f"  Current branch: {root.root_branch or '<unknown>'}")

        repositories = [repo for repo in selected if not repo.submodule]
        if repositories:
            self._echo("Repositories:")
            for repo in repositories:
                self._echo(repo.info() if verbose else f"  {repo.name} ({repo.branch or '<unknown>'})")

        submodules = [repo for repo in selected if repo.submodule]
        if submodules:
            self._echo("Submodules:")
            for repo in submodules:
                if verbose:
                    self._echo(repo.info())
                    continue
                commit = self._git.repository(repo).get_commit()
                self._echo(
                    f"  {repo.name} ({repo.branch or '<unknown branch>'}, {commit or '<unknown commit>'})"
                )

        if not repositories and not submodules:
            self._echo("No repositories or submodules configured.")

    def included_directories(self, names: Sequence[str] = ()) -> list[str]:
        """Directories of the selected repositories that are included and present on disk."""
        configurations = self._root.configurations
        return [
            repo.directory
            for repo in self.select(names, allow_not_updated=True)
            if configurations.is_included(repo.name)
        ]

    def status(self, names: Sequence[str] = (), short: bool = False) -> None:
        def step(repo: Repository) -> None:
            if not repo.update:
                self._echo(f"{repo.name}: {repo.type_str} not updated")
            elif not self._git.is_checked_out(repo):
                self._echo(f"{repo.name}: {repo.type_str} not cloned")
            else:
                self._echo(f"{repo.name} {repo.type_str} status:")
                git = self._git.repository(repo)
                git.print_commit()
                git.status(short)
                self._echo("")

        self._run("status", self.select(names, allow_not_updated=True), step)

    def _clone_one(self, repo: Repository, transport: Transport) -> None:
        git = self._git.repository(repo)
        if repo.submodule:
            self._echo(f"{repo.name}: initializing {repo.type_str}...")
            self._git.submodule_init(repo)
            git.fix_branch()
        else:
            self._echo(f"{repo.name}: cloning {repo.type_str}...")
            self._git.clone(repo, transport)
        git.print_commit()

    def clone(self, names: Sequence[str] = (), transport: Transport | None = None) -> None:
        transport = transport or self._transport

        def step(repo: Repository) -> None:
            if self._git.is_checked_out(repo):
                self._echo(f"{repo.name}: {repo.type_str} already cloned")
                return
            self._clone_one(repo, transport)
            self._echo("")

        self._run("clone", self._updated(names), step)

    def update(self, names: Sequence[str] = (), transport: Transport | None = None) -> None:
        """Clone repositories that are missing; fetch, check out and pull the others."""
        transport = transport or self._transport

        def step(repo: Repository) -> None:
            git = self._git.repository(repo)
            if not self._git.is_checked_out(repo):
                if repo.submodule:
                    self._echo(f"{repo.name}: initializing and updating {repo.type_str}...")
                    self._git.submodule_init(repo)
                    git.fix_branch()
                    git.pull()
                else:
                    self._echo(f"{repo.name}: cloning {repo.type_str}...")
                    self._git.clone(repo, transport)
            else:
                self._echo(f"{repo.name}: updating {repo.type_str}...")
                git.fetch()
                git.checkout()
                git.pull()
            git.print_commit()
            self._echo("")

        self._run("update", self._updated(names), step)

    def fetch(self, names: Sequence[str] = ()) -> None:
        def step(repo: Repository) -> None:
            if not self._ensure_cloned(repo):
                return
            self._echo(f"{repo.name}: fetching {repo.type_str}...")
            self._git.repository(repo).fetch()
            self._echo("")

        self._run("fetch", self._updated(names), step)

    def checkout(self, names: Sequence[str] = ()) -> None:
        def step(repo: Repository) -> None:
            if not self._ensure_cloned(repo):
                return
            git = self._git.repository(repo)
            branch = repo.require_branch("check out")
            self._echo(f"{repo.name}: checking out {branch} for {repo.type_str}...")
            if repo.submodule:
                self._git.submodule_update(repo)
                git.fix_branch()
            else:
                git.checkout()
            git.print_commit()
            self._echo("")

        self._run("checkout", self._updated(names), step)

    def push(self, names: Sequence[str] = (), all_branches: bool = False, follow_tags: bool = False) -> None:
        def step(repo: Repository) -> None:
            if not self._ensure_cloned(repo):
                return
            self._echo(f"{repo.name}: pushing current branch of {repo.type_str}...")
            self._git.repository(repo).push(all_branches=all_branches, follow_tags=follow_tags)
            self._echo("")

        self._run("push", self._updated(names), step)

    def push_tags(self, names: Sequence[str] = ()) -> None:
        self.push(names, follow_tags=True)

    def push_all(self, names: Sequence[str] = ()) -> None:
        self.push(names, all_branches=True)

    def push_all_tags(self, names: Sequence[str] = ()) -> None:
        self.push(names, all_branches=True, follow_tags=True)

    def clean(self, names: Sequence[str] = (), force: bool = False, remove_ignored: bool = False) -> None:
        """Remove untracked files; only previews what would be removed unless ``force``."""

        def step(repo: Repository) -> None:
            if not self._ensure_cloned(repo):
                return
            self._echo(f"{repo.name}: cleaning {repo.type_str}...")
            self._git.repository(repo).clean(dry_run=not force, remove_ignored=remove_ignored)
            self._echo("")

        self._run("clean", self._updated(names), step)

    def reset(self, names: Sequence[str] = (), hard: bool = False) -> None:
        def step(repo: Repository) -> None:
            if not self._ensure_cloned(repo):
                return
            self._echo(f"{repo.name}: resetting {repo.type_str}...")
            self._git.repository(repo).reset(hard)
            self._echo("")

        self._run("reset", self._updated(names), step)

    def commit_submodules(self, names: Sequence[str] = (), message: str = DEFAULT_COMMIT_MESSAGE) -> None:
        """Stage the checked-out commit of each submodule and commit them in the root."""

        def step(repo: Repository) -> None:
            if not self._ensure_cloned(repo):
                return
            if not repo.submodule:
                self._echo(f"{repo.name}: {repo.type_str} is not a submodule")
                return
            commit = self._git.repository(repo).get_commit()
            self._echo(f"{repo.name}: adding {repo.type_str} commit {commit or '<unknown>'}...")
            self._git.add(repo)
            self._echo("")

        self._run("commitSubmodules", self._updated(names), step)

        if not self._git.has_staged_changes():
            self._echo("Nothing to commit")
            return
        self._git.commit(message)
        self._echo("Created commit")
        self._echo("")
