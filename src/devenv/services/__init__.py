"""Services orchestrating devenv operations."""

from devenv.services.engine import RepositoryOperationEngine
from devenv.services.selection import select_repositories

__all__ = ["RepositoryOperationEngine", "select_repositories"]
