"""Git integration: the executor boundary, URL transports and repository actions."""

from devenv.git.branch import current_branch
from devenv.git.command import GitCommand
from devenv.git.executor import GitExecutor
from devenv.git.repository import RepositoryGit, RootRepositoryGit
from devenv.git.transport import Transport

__all__ = [
    "GitCommand",
    "GitExecutor",
    "RepositoryGit",
    "RootRepositoryGit",
    "Transport",
    "current_branch",
]
