"""Git helpers shared by the test suite."""

import subprocess
from collections.abc import Iterable
from pathlib import Path

from devenv.core.exceptions import GitExecutionError
from devenv.git.command import GitCommand
from devenv.git.executor import GitExecutor


def run_git(directory: Path, *args: str) -> str:
    """Run git in ``directory`` for test setup, returning stdout."""
    result = subprocess.run(
        ["git", *args], cwd=directory, capture_output=True, text=True, check=True
    )
    return result.stdout


def init_repo(path: Path, branch: str = "main") -> Path:
    """Create a git repository on ``branch`` with one commit."""
    path.mkdir(parents=True, exist_ok=True)
    run_git(path, "init", "--quiet")
    run_git(path, "symbolic-ref", "HEAD", f"refs/heads/{branch}")
    run_git(path, "config", "user.email", "test@test.com")
    run_git(path, "config", "user.name", "Test")
    run_git(path, "config", "commit.gpgsign", "false")
    (path / "README.md").write_text("# Test Repo\n")
    run_git(path, "add", ".")
    run_git(path, "commit", "--quiet", "-m", "Initial commit")
    return path


class RecordingExecutor(GitExecutor):
    """Executor that records git invocations instead of running them.

    ``responses`` maps an argument prefix to captured output, or to an
    exception to raise, for invocations starting with that prefix.
    """

    def __init__(
        self,
        root_directory: Path,
        responses: dict[tuple[str, ...], str | Exception] | None = None,
    ) -> None:
        super().__init__(root_directory, print_command_line=False, echo=lambda _: None)
        self.responses = responses or {}
        self.calls: list[tuple[list[str], Path]] = []

    def exec(
        self,
        command: GitCommand | Iterable[str],
        directory: Path | None = None,
        print_command_line: bool | None = None,
        capture_output: bool = False,
    ) -> str:
        args = GitCommand.of(command).args
        workdir = Path(directory) if directory is not None else self.root_directory
        self.calls.append((args, workdir))
        for prefix, response in self.responses.items():
            if tuple(args[: len(prefix)]) == prefix:
                if isinstance(response, Exception):
                    raise response
                return response
        return ""

    @property
    def commands(self) -> list[str]:
        return [" ".join(args) for args, _ in self.calls]

    def commands_in(self, directory: Path) -> list[str]:
        return [" ".join(args) for args, workdir in self.calls if workdir == directory]


def git_failure(exit_code: int = 1) -> GitExecutionError:
    return GitExecutionError("git failed", exit_code=exit_code, display_name="test")


