"""Domain models for devenv."""

from devenv.core.models.configuration import (
    RepositoryConfiguration,
    RepositoryConfigurations,
    RepositoryDefaults,
)
from devenv.core.models.repository import Repository, RootRepository

__all__ = [
    "RepositoryConfiguration",
    "RepositoryConfigurations",
    "RepositoryDefaults",
    "Repository",
    "RootRepository",
]
