"""Tests for URL transport conversion."""

import pytest

from devenv.core.exceptions import TransportError
from devenv.git.transport import Transport, split_url

SSH_URLS = [
    "git@github.com:metaborg/spoofax.git",
    "git@github.com:metaborg/spoofax",
    "ssh://git@github.com/metaborg/spoofax.git",
    "git@gitlab.example.org:group/sub-group/project.git",
    "git@host-1.example.org:~user/repo.git",
]
HTTPS_URLS = [
    "https://github.com/metaborg/spoofax.git",
    "http://github.com/metaborg/spoofax.git",
    "https://gitlab.example.org/group/sub-group/project.git",
]


@pytest.mark.unit
class TestSplitUrl:
    """Tests for URL decomposition."""

    def test_scp_like_ssh(self) -> None:
        assert split_url("git@github.com:org/repo.git") == ("git", "github.com", "org/repo.git")

    def test_ssh_scheme(self) -> None:
        assert split_url("ssh://deploy@github.com/org/repo.git") == ("deploy", "github.com", "org/repo.git")

    def test_https_user_is_git(self) -> None:
        assert split_url("https://github.com/org/repo.git") == ("git", "github.com", "org/repo.git")

    @pytest.mark.parametrize(
        "url", ["", "github.com/org/repo", "/local/path/repo.git", "file:///tmp/repo.git", "ftp://host/repo"]
    )
    def test_unknown_shapes(self, url: str) -> None:
        with pytest.raises(TransportError):
            split_url(url)


@pytest.mark.unit
class TestTransport:
    """Tests for Transport.convert."""

    def test_ssh_to_https(self) -> None:
        assert Transport.HTTPS.convert("git@github.com:metaborg/foo.git") == "https://github.com/metaborg/foo.git"

    def test_https_to_ssh(self) -> None:
        assert Transport.SSH.convert("https://github.com/metaborg/foo.git") == "git@github.com:metaborg/foo.git"

    def test_ssh_scheme_to_ssh(self) -> None:
        assert Transport.SSH.convert("ssh://git@github.com/metaborg/foo.git") == "git@github.com:metaborg/foo.git"

    def test_http_to_https(self) -> None:
        assert Transport.HTTPS.convert("http://github.com/metaborg/foo.git") == "https://github.com/metaborg/foo.git"

    def test_keeps_ssh_user(self) -> None:
        assert Transport.SSH.convert("deploy@example.org:repo.git") == "deploy@example.org:repo.git"

    def test_unknown_format(self) -> None:
        with pytest.raises(TransportError, match="unknown URL format"):
            Transport.SSH.convert("/local/path/repo.git")

    def test_transport_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            Transport.HTTPS.convert("not a url")

    @pytest.mark.parametrize("transport", list(Transport))
    @pytest.mark.parametrize("url", SSH_URLS + HTTPS_URLS)
    def test_conversion_is_idempotent(self, transport: Transport, url: str) -> None:
        converted = transport.convert(url)
        assert transport.convert(converted) == converted

    @pytest.mark.parametrize("transport", list(Transport))
    @pytest.mark.parametrize("url", SSH_URLS + HTTPS_URLS)
    def test_round_trip_through_opposite(self, transport: Transport, url: str) -> None:
        converted = transport.convert(url)
        assert transport.convert(transport.opposite.convert(converted)) == converted

    def test_opposite(self) -> None:
        assert Transport.SSH.opposite is Transport.HTTPS
        assert Transport.HTTPS.opposite is Transport.SSH

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("ssh", Transport.SSH), ("HTTPS", Transport.HTTPS), (Transport.SSH, Transport.SSH)],
    )
    def test_parse(self, value, expected: Transport) -> None:
        assert Transport.parse(value) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(TransportError):
            Transport.parse("git")
