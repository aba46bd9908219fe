"""Current-branch lookup for the root checkout."""

from pathlib import Path

import structlog

from devenv.core.exceptions import ConfigError, GitExecutionError
from devenv.git.command import GitCommand
from devenv.git.executor import GitExecutor

logger = structlog.get_logger(__name__)

_REF_PREFIXES = ("refs/heads/", "refs/tags/", "refs/remotes/")

# Exit code of `git symbolic-ref --quiet` when HEAD is detached
_DETACHED_EXIT_CODE = 1


def shorten_ref_name(ref: str) -> str:
    """Strip the ``refs/heads/``, ``refs/tags/`` or ``refs/remotes/`` prefix."""
    for prefix in _REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def current_branch(executor: GitExecutor, directory: Path | None = None) -> str | None:
    """Get the current branch name; or ``None`` when HEAD is detached.

    Raises ``ConfigError`` when ``directory`` is not inside a git repository.
    """
    directory = Path(directory) if directory is not None else executor.root_directory
    try:
        output = executor.exec(
            GitCommand("symbolic-ref", "--quiet", "HEAD"),
            directory=directory,
            print_command_line=False,
            capture_output=True,
        )
    except GitExecutionError as e:
        if e.exit_code == _DETACHED_EXIT_CODE:
            head = executor.maybe_exec(
                GitCommand("rev-parse", "--verify", "HEAD"),
                directory=directory,
                print_command_line=False,
                capture_output=True,
            )
            logger.warning(
                "Root repository is not on a symbolic branch",
                directory=str(directory),
                head=head.strip() if head else None,
            )
            return None
        raise ConfigError(
            f"Cannot retrieve current branch name because no git repository was found at '{directory}'",
            details={"directory": str(directory)},
        ) from e
    return shorten_ref_name(output.strip())
