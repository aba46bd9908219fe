"""Core domain models and exceptions for devenv."""

from devenv.core.exceptions import (
    ConfigError,
    DevenvError,
    GitExecutionError,
    OperationFailedError,
    TransportError,
)
from devenv.core.models import (
    Repository,
    RepositoryConfiguration,
    RepositoryConfigurations,
    RepositoryDefaults,
    RootRepository,
)

__all__ = [
    # Models
    "RepositoryConfiguration",
    "RepositoryConfigurations",
    "RepositoryDefaults",
    "Repository",
    "RootRepository",
    # Exceptions
    "DevenvError",
    "ConfigError",
    "TransportError",
    "GitExecutionError",
    "OperationFailedError",
]
