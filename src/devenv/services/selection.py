"""Resolves the repositories an operation applies to."""

from collections.abc import Sequence

from devenv.core.exceptions import ConfigError
from devenv.core.models.repository import Repository, RootRepository


def select_repositories(
    root: RootRepository,
    names: Sequence[str] = (),
    allow_not_updated: bool = False,
) -> list[Repository]:
    """Select repositories by name, in manifest order.

    An empty ``names`` selects every repository. Unknown names are rejected,
    as are selected repositories with ``update=false`` unless
    ``allow_not_updated`` is set.
    """
    known = root.repositories
    if not names:
        return list(known.values())

    unknown = [name for name in dict.fromkeys(names) if name not in known]
    if unknown:
        raise ConfigError(
            f"Unknown repositories: {unknown}, only the following repositories are known: {list(known)}",
            details={"unknown": unknown, "known": list(known)},
        )

    requested = set(names)
    selected = [repo for name, repo in known.items() if name in requested]
    not_updated = [repo.name for repo in selected if not repo.update]
    if not allow_not_updated and not_updated:
        raise ConfigError(
            f"Cannot perform task on repositories that are not updated: {not_updated}",
            details={"repositories": not_updated},
        )
    return selected
