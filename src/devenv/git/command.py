"""Typed builder for git argument vectors."""

from collections.abc import Iterable


class GitCommand:
    """An argument vector for one ``git`` invocation.

    Conditional flags are appended only when their condition holds, so no
    placeholder arguments ever reach the process::

        GitCommand("push").flag("--all", all_branches).flag("--follow-tags", follow_tags)
    """

    def __init__(self, *args: str) -> None:
        self._args: list[str] = []
        self.arg(*args)

    def arg(self, *args: str) -> "GitCommand":
        self._args.extend(a for a in args if a and a.strip())
        return self

    def flag(self, flag: str, condition: bool = True) -> "GitCommand":
        if condition:
            self._args.append(flag)
        return self

    def choice(self, condition: bool, if_true: str, if_false: str) -> "GitCommand":
        self._args.append(if_true if condition else if_false)
        return self

    def paths(self, *paths: str) -> "GitCommand":
        """Append ``--`` followed by ``paths``."""
        self._args.append("--")
        self._args.extend(paths)
        return self

    @property
    def args(self) -> list[str]:
        return list(self._args)

    @classmethod
    def of(cls, command: "GitCommand | Iterable[str]") -> "GitCommand":
        if isinstance(command, GitCommand):
            return command
        return cls(*command)

    def __iter__(self):
        return iter(self._args)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GitCommand):
            return self._args == other._args
        if isinstance(other, (list, tuple)):
            return self._args == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"GitCommand({' '.join(self._args)!r})"

    def __str__(self) -> str:
        return " ".join(["git", *self._args])
