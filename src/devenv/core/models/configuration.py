"""Repository configuration models, as parsed from the manifest."""

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def resolve(explicit: T | None, code_default: T | None, global_default: T) -> T:
    """Pick the first present value: manifest, then code default, then global default."""
    if explicit is not None:
        return explicit
    if code_default is not None:
        return code_default
    return global_default


class RepositoryDefaults(BaseModel):
    """Code-registered defaults for one repository.

    Every field is optional; a manifest entry for the same field wins.
    """

    include: bool | None = None
    update: bool | None = None
    directory: str | None = None
    url: str | None = None
    branch: str | None = None
    remote: str | None = None
    submodule: bool | None = None

    class Config:
        frozen = True


class RepositoryConfiguration(BaseModel):
    """The configuration of one repository."""

    name: str = Field(description="Name of the repository, unique within a manifest")
    include: bool = Field(default=False, description="Whether the repository is included in the build")
    update: bool = Field(default=False, description="Whether devenv operations modify the repository")
    directory: str = Field(description="Checkout directory, relative to the root directory")
    url: str | None = Field(default=None, description="Clone URL override")
    branch: str | None = Field(default=None, description="Branch override; None uses the root branch")
    remote: str | None = Field(default=None, description="Remote override; None uses checkout.defaultRemote")
    submodule: bool = Field(default=False, description="Whether the repository is a git submodule")

    class Config:
        frozen = True


class RepositoryConfigurations(BaseModel):
    """All repository configurations of a root directory, in manifest order."""

    root_directory: Path
    url_prefix: str
    configurations: dict[str, RepositoryConfiguration] = Field(default_factory=dict)

    class Config:
        frozen = True

    def is_included(self, name: str) -> bool:
        """Whether ``name`` is included and its directory is present."""
        config = self.configurations.get(name)
        if config is None:
            return False
        return config.include and (self.root_directory / config.directory).exists()

    def is_updated(self, name: str) -> bool:
        """Whether ``name`` is updated and its directory is present."""
        config = self.configurations.get(name)
        if config is None:
            return False
        return config.update and (self.root_directory / config.directory).exists()

    @classmethod
    def from_root_directory(
        cls,
        root_directory: Path,
        defaults: dict[str, RepositoryDefaults] | None = None,
        manifest_name: str | None = None,
        url_prefix: str | None = None,
    ) -> "RepositoryConfigurations":
        """Load the manifest of ``root_directory``."""
        from devenv.manifest.loader import load_configurations

        return load_configurations(
            root_directory,
            defaults=defaults,
            manifest_name=manifest_name,
            url_prefix=url_prefix,
        )
