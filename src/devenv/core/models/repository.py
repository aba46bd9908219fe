"""Resolved repository models, ready for execution."""

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from devenv.core.exceptions import ConfigError
from devenv.core.models.configuration import (
    RepositoryConfiguration,
    RepositoryConfigurations,
    RepositoryDefaults,
    resolve,
)

if TYPE_CHECKING:
    from devenv.config.settings import Settings
    from devenv.git.executor import GitExecutor


class Repository(BaseModel):
    """A git repository (or submodule) of the development environment."""

    name: str
    include: bool
    update: bool
    directory: str  # relative to the root directory
    url: str
    branch: str | None = None  # None when neither configured nor known from the root
    remote: str | None = None  # None resolves checkout.defaultRemote, then "origin"
    submodule: bool = False

    class Config:
        frozen = True

    def repo_dir(self, root_directory: Path) -> Path:
        return Path(root_directory) / self.directory

    @property
    def fancy_name(self) -> str:
        return f"submodule {self.name}" if self.submodule else f"repository {self.name}"

    @property
    def type_str(self) -> str:
        return "submodule" if self.submodule else "repository"

    def require_branch(self, verb: str) -> str:
        """Return the branch, or fail for an operation that needs one."""
        if self.branch is None:
            raise ConfigError(
                f"Cannot {verb} {self.fancy_name}, no branch is set and root repository is not on a branch.",
                details={"repository": self.name},
            )
        return self.branch

    def info(self) -> str:
        return (
            f"  {self.name:<30} : include = {str(self.include).lower():<5}, "
            f"update = {str(self.update).lower():<5}, "
            f"submodule = {str(self.submodule).lower():<5}, "
            f"branch = {str(self.branch):<20}, remote = {str(self.remote):<20}, "
            f"path = {self.directory:<30}, url = {self.url}"
        )

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_configuration(
        cls, config: RepositoryConfiguration, url_prefix: str, root_branch: str | None
    ) -> "Repository":
        return cls(
            name=config.name,
            include=config.include,
            update=config.update,
            directory=config.directory,
            url=resolve(config.url, None, f"{url_prefix}/{config.name}.git"),
            branch=resolve(config.branch, None, root_branch),
            remote=config.remote,
            submodule=config.submodule,
        )


class RootRepository(BaseModel):
    """The root checkout that owns all other repositories."""

    root_directory: Path
    root_branch: str | None = None
    url_prefix: str
    repositories: dict[str, Repository] = Field(default_factory=dict)
    configurations: RepositoryConfigurations

    class Config:
        frozen = True

    @classmethod
    def from_configurations(
        cls, configurations: RepositoryConfigurations, root_branch: str | None
    ) -> "RootRepository":
        """Resolve configurations against the root branch.

        Raises ``ConfigError`` when two repositories share a checkout directory.
        """
        repositories: dict[str, Repository] = {}
        owners: dict[str, str] = {}
        for name, config in configurations.configurations.items():
            repo = Repository.from_configuration(config, configurations.url_prefix, root_branch)
            key = Path(repo.directory).as_posix().rstrip("/")
            if key in owners:
                raise ConfigError(
                    f"Repositories {owners[key]} and {name} share checkout directory '{repo.directory}'",
                    details={"repositories": [owners[key], name], "directory": repo.directory},
                )
            owners[key] = name
            repositories[name] = repo

        return cls(
            root_directory=configurations.root_directory,
            root_branch=root_branch,
            url_prefix=configurations.url_prefix,
            repositories=repositories,
            configurations=configurations,
        )

    @classmethod
    def from_root_directory(
        cls,
        root_directory: Path,
        defaults: dict[str, RepositoryDefaults] | None = None,
        settings: "Settings | None" = None,
        executor: "GitExecutor | None" = None,
    ) -> "RootRepository":
        """Load the manifest of ``root_directory`` and resolve it against its current branch."""
        from devenv.config.settings import get_settings
        from devenv.git.branch import current_branch
        from devenv.git.executor import GitExecutor
        from devenv.manifest.loader import load_configurations

        settings = settings or get_settings()
        root_directory = Path(root_directory)
        configurations = load_configurations(
            root_directory,
            defaults=defaults,
            manifest_name=settings.manifest_name,
            url_prefix=settings.url_prefix,
        )
        executor = executor or GitExecutor(root_directory, git_executable=settings.git_executable)
        return cls.from_configurations(configurations, current_branch(executor, root_directory))
