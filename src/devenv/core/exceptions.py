"""Exception hierarchy for devenv."""

from typing import Any


class DevenvError(Exception):
    """Base exception for all devenv errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(DevenvError):
    """Invalid or missing configuration.

    Raised for a missing manifest, unknown repository names, duplicate
    checkout directories, and branch-dependent operations without a branch.
    """


class TransportError(DevenvError, ValueError):
    """A repository URL matches neither the SSH nor the HTTPS shape."""


class GitExecutionError(DevenvError):
    """A git invocation failed or could not be started."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        display_name: str | None = None,
        args: list[str] | None = None,
    ) -> None:
        super().__init__(
            message,
            details={"exit_code": exit_code, "display_name": display_name, "args": args or []},
        )
        self.exit_code = exit_code
        self.display_name = display_name
        self.command_args = args or []


class OperationFailedError(DevenvError):
    """One or more repositories failed while running with keep-going enabled."""

    def __init__(self, operation: str, failures: list[tuple[str, DevenvError]]) -> None:
        names = ", ".join(name for name, _ in failures)
        super().__init__(
            f"Operation '{operation}' failed for {len(failures)} repositories: {names}",
            details={"operation": operation, "repositories": [name for name, _ in failures]},
        )
        self.operation = operation
        self.failures = failures
