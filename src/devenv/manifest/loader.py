"""Loads repository configurations from a ``repo.properties`` manifest."""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import structlog

from devenv.config.settings import DEFAULT_MANIFEST_NAME, DEFAULT_URL_PREFIX
from devenv.core.exceptions import ConfigError
from devenv.core.models.configuration import (
    RepositoryConfiguration,
    RepositoryConfigurations,
    RepositoryDefaults,
    resolve,
)
from devenv.manifest.properties import read_properties

logger = structlog.get_logger(__name__)

URL_PREFIX_KEY = "urlPrefix"

# Keys ending in one of these suffixes are ignored entirely
IGNORED_SUFFIXES = frozenset({"jenkinsjob"})
ROUTED_SUFFIXES = frozenset({"update", "dir", "url", "branch", "remote", "submodule"})


def _is_true(value: str) -> bool:
    return value == "true"


@dataclass
class _ConfigurationBuilder:
    """Mutable collector for the manifest entries of one repository."""

    name: str
    include: bool | None = None
    update: bool | None = None
    directory: str | None = None
    url: str | None = None
    branch: str | None = None
    remote: str | None = None
    submodule: bool | None = None

    def set_suffix(self, suffix: str, value: str) -> None:
        if suffix == "update":
            self.update = _is_true(value)
        elif suffix == "dir":
            self.directory = value
        elif suffix == "url":
            self.url = value
        elif suffix == "branch":
            self.branch = value
        elif suffix == "remote":
            self.remote = value
        elif suffix == "submodule":
            self.submodule = _is_true(value)
        else:
            raise KeyError(suffix)

    def freeze(self, defaults: RepositoryDefaults | None = None) -> RepositoryConfiguration:
        defaults = defaults or RepositoryDefaults()
        include = resolve(self.include, defaults.include, False)
        return RepositoryConfiguration(
            name=self.name,
            include=include,
            update=resolve(self.update, defaults.update, include),
            directory=resolve(self.directory, defaults.directory, self.name),
            url=resolve(self.url, defaults.url, None),
            branch=resolve(self.branch, defaults.branch, None),
            remote=resolve(self.remote, defaults.remote, None),
            submodule=resolve(self.submodule, defaults.submodule, False),
        )


def parse_configurations(
    root_directory: Path,
    properties: Mapping[str, str],
    defaults: Mapping[str, RepositoryDefaults] | None = None,
    url_prefix: str | None = None,
) -> RepositoryConfigurations:
    """Route manifest entries to per-repository builders, then freeze them.

    A key ``<name>.<suffix>`` with a routed suffix configures that field of
    ``<name>``. Any other key, including dotted keys with an unrecognized
    suffix, is a bare repository name whose value sets ``include``.
    Repositories that only appear in ``defaults`` are appended after the
    manifest entries.
    """
    defaults = defaults or {}
    prefix = url_prefix or DEFAULT_URL_PREFIX
    builders: dict[str, _ConfigurationBuilder] = {}

    for key, value in properties.items():
        if key == URL_PREFIX_KEY:
            prefix = value
            continue

        name, _, suffix = key.rpartition(".")
        if name and suffix in IGNORED_SUFFIXES:
            continue
        if name and suffix in ROUTED_SUFFIXES:
            builders.setdefault(name, _ConfigurationBuilder(name)).set_suffix(suffix, value)
        else:
            builders.setdefault(key, _ConfigurationBuilder(key)).include = _is_true(value)

    for name in defaults:
        builders.setdefault(name, _ConfigurationBuilder(name))

    configurations = {
        name: builder.freeze(defaults.get(name)) for name, builder in builders.items()
    }
    return RepositoryConfigurations(
        root_directory=root_directory,
        url_prefix=prefix,
        configurations=configurations,
    )


def load_configurations(
    root_directory: Path,
    defaults: Mapping[str, RepositoryDefaults] | None = None,
    manifest_name: str | None = None,
    url_prefix: str | None = None,
) -> RepositoryConfigurations:
    """Read ``<root_directory>/repo.properties`` into repository configurations."""
    manifest = Path(root_directory) / (manifest_name or DEFAULT_MANIFEST_NAME)
    if not manifest.is_file():
        raise ConfigError(
            f"Cannot read repository configuration from properties file, "
            f"'{manifest}' does not exist or is not a file",
            details={"manifest": str(manifest)},
        )
    try:
        properties = read_properties(manifest)
    except OSError as e:
        raise ConfigError(
            f"Cannot read repository configuration from properties file '{manifest}': {e}",
            details={"manifest": str(manifest)},
        ) from e

    configurations = parse_configurations(
        Path(root_directory), properties, defaults=defaults, url_prefix=url_prefix
    )
    logger.debug(
        "Manifest loaded",
        manifest=str(manifest),
        repositories=len(configurations.configurations),
        url_prefix=configurations.url_prefix,
    )
    return configurations
