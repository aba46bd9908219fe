"""Runs the external ``git`` binary."""

import subprocess
from collections.abc import Callable, Iterable
from pathlib import Path

import click
import structlog

from devenv.core.exceptions import GitExecutionError
from devenv.git.command import GitCommand

logger = structlog.get_logger(__name__)


class GitExecutor:
    """Executes git commands in the root directory or one of its repositories.

    This is the only place devenv starts processes. Output of git is either
    inherited (shown to the user as-is) or captured and returned.
    """

    def __init__(
        self,
        root_directory: Path,
        print_command_line: bool = True,
        git_executable: str = "git",
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        self._root_directory = Path(root_directory)
        self._print_command_line = print_command_line
        self._git = git_executable
        self._echo = echo

    @property
    def root_directory(self) -> Path:
        return self._root_directory

    def _display_name(self, directory: Path) -> str:
        try:
            relative = directory.relative_to(self._root_directory)
        except ValueError:
            return str(directory)
        return str(relative) if relative.parts else "."

    def exec(
        self,
        command: GitCommand | Iterable[str],
        directory: Path | None = None,
        print_command_line: bool | None = None,
        capture_output: bool = False,
    ) -> str:
        """Execute a git command, raising ``GitExecutionError`` if it fails.

        Returns the captured standard output, or an empty string when the
        output is not captured.
        """
        args = GitCommand.of(command).args
        workdir = Path(directory) if directory is not None else self._root_directory
        display_name = self._display_name(workdir)

        if not workdir.is_dir():
            raise GitExecutionError(
                f"Cannot execute 'git {' '.join(args)}' in {display_name}; "
                f"directory '{workdir}' does not exist",
                display_name=display_name,
                args=args,
            )

        if self._print_command_line if print_command_line is None else print_command_line:
            self._echo(" ".join([self._git, *args]))
        logger.debug("Executing git", args=args, directory=display_name)

        try:
            result = subprocess.run(
                [self._git, *args],
                cwd=workdir,
                stdout=subprocess.PIPE if capture_output else None,
                text=True,
                check=False,
            )
        except OSError as e:
            raise GitExecutionError(
                f"Cannot execute '{self._git}' in {display_name}: {e}",
                display_name=display_name,
                args=args,
            ) from e

        if result.returncode != 0:
            raise GitExecutionError(
                f"'git {' '.join(args)}' failed in {display_name} "
                f"with exit code {result.returncode}",
                exit_code=result.returncode,
                display_name=display_name,
                args=args,
            )
        return result.stdout if capture_output else ""

    def maybe_exec(
        self,
        command: GitCommand | Iterable[str],
        directory: Path | None = None,
        print_command_line: bool | None = None,
        capture_output: bool = False,
    ) -> str | None:
        """Like ``exec``, but returns ``None`` instead of raising on failure."""
        try:
            return self.exec(
                command,
                directory=directory,
                print_command_line=print_command_line,
                capture_output=capture_output,
            )
        except GitExecutionError as e:
            logger.debug("Git command failed", error=e.message, exit_code=e.exit_code)
            return None

    def exit_code(self, command: GitCommand | Iterable[str], directory: Path | None = None) -> int:
        """Run a quiet query command and return its exit code instead of raising."""
        try:
            self.exec(command, directory=directory, print_command_line=False, capture_output=True)
        except GitExecutionError as e:
            if e.exit_code is None:
                raise
            return e.exit_code
        return 0
