"""Rewrites repository URLs between the SSH and HTTPS transports."""

import re
from enum import Enum

from devenv.core.exceptions import TransportError

_HTTPS_PATTERN = re.compile(r"https?://([\w.@:\-~]+)/(.+)")
_SSH_PATTERN = re.compile(r"(?:ssh://)?([\w.@\-~]+)@([\w.@\-~]+)[:/](.+)")


def split_url(url: str) -> tuple[str, str, str]:
    """Decompose a git URL into ``(user, host, path)``.

    Handles:
    - https://github.com/org/repo.git -> ("git", "github.com", "org/repo.git")
    - git@github.com:org/repo.git -> ("git", "github.com", "org/repo.git")
    - ssh://git@github.com/org/repo.git -> ("git", "github.com", "org/repo.git")
    """
    https_match = _HTTPS_PATTERN.fullmatch(url)
    if https_match:
        host, path = https_match.groups()
        return "git", host, path
    ssh_match = _SSH_PATTERN.fullmatch(url)
    if ssh_match:
        user, host, path = ssh_match.groups()
        return user, host, path
    raise TransportError(
        f"Cannot convert URL '{url}'; unknown URL format",
        details={"url": url},
    )


class Transport(str, Enum):
    """Git transport protocol used to reach a remote repository."""

    SSH = "ssh"
    HTTPS = "https"

    @classmethod
    def parse(cls, value: "str | Transport") -> "Transport":
        if isinstance(value, Transport):
            return value
        try:
            return cls(value.lower())
        except ValueError:
            raise TransportError(
                f"Unknown transport '{value}', expected one of: ssh, https",
                details={"transport": value},
            ) from None

    @property
    def opposite(self) -> "Transport":
        return Transport.HTTPS if self is Transport.SSH else Transport.SSH

    def convert(self, url: str) -> str:
        """Change ``url`` to use this transport."""
        try:
            user, host, path = split_url(url)
        except TransportError as e:
            raise TransportError(
                f"Cannot convert URL '{url}' to '{self.name}' format; unknown URL format.",
                details={"url": url, "transport": self.value},
            ) from e
        if self is Transport.SSH:
            return f"{user}@{host}:{path}"
        return f"https://{host}/{path}"
