"""CLI for devenv."""

import functools
import sys
from dataclasses import dataclass
from pathlib import Path

import click
import structlog

from devenv.config.logging import configure_logging
from devenv.config.settings import Settings, get_settings
from devenv.core.exceptions import DevenvError
from devenv.services.engine import DEFAULT_COMMIT_MESSAGE

logger = structlog.get_logger(__name__)


@dataclass
class CliState:
    settings: Settings
    root: Path
    print_command_line: bool
    keep_going: bool


def _create_engine(state: CliState, transport: str | None = None):
    """Load the root repository and create the operation engine."""
    from devenv.core.models.repository import RootRepository
    from devenv.git.executor import GitExecutor
    from devenv.git.transport import Transport
    from devenv.services.engine import RepositoryOperationEngine

    settings = state.settings
    executor = GitExecutor(
        state.root,
        print_command_line=state.print_command_line,
        git_executable=settings.git_executable,
    )
    root = RootRepository.from_root_directory(state.root, settings=settings, executor=executor)
    return RepositoryOperationEngine(
        root,
        executor,
        keep_going=state.keep_going,
        transport=Transport.parse(transport or settings.transport),
    )


def repository_command(func):
    """Add the common ``--repo``/``--transport`` options and error reporting."""

    @click.option(
        "--repo",
        "repos",
        multiple=True,
        help="Repository to perform the task on. Defaults to all repositories.",
    )
    @click.option(
        "--transport",
        type=click.Choice(["ssh", "https"], case_sensitive=False),
        default=None,
        help="Transport protocol to use. Defaults to SSH.",
    )
    @click.pass_obj
    @functools.wraps(func)
    def wrapper(state: CliState, repos: tuple[str, ...], transport: str | None, **kwargs):
        try:
            engine = _create_engine(state, transport)
            func(engine, list(repos), **kwargs)
        except DevenvError as e:
            logger.debug("Command failed", error=e.message, details=e.details)
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)

    return wrapper


@click.group()
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Root directory containing repo.properties (default: current directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet-commands", is_flag=True, help="Do not print git command lines")
@click.option(
    "--keep-going",
    is_flag=True,
    default=None,
    help="Continue with the remaining repositories after a failure",
)
@click.pass_context
def cli(
    ctx: click.Context,
    root: Path | None,
    verbose: bool,
    quiet_commands: bool,
    keep_going: bool | None,
) -> None:
    """devenv: Git operations across a multi-repository development environment."""
    settings = get_settings()
    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        json_logs=settings.json_logs,
    )
    ctx.obj = CliState(
        settings=settings,
        root=(root or settings.root_path).resolve(),
        print_command_line=settings.print_command_line and not quiet_commands,
        keep_going=settings.keep_going if keep_going is None else keep_going,
    )


@cli.command("list")
@click.option("--info", is_flag=True, help="Print all properties of each repository")
@repository_command
def list_(engine, repos: list[str], info: bool) -> None:
    """Lists the repositories and their properties."""
    engine.list_repositories(repos, verbose=info)


@cli.command()
@click.option("--short", is_flag=True, help="Print short status info.")
@repository_command
def status(engine, repos: list[str], short: bool) -> None:
    """For each repository (with update=true): show its status."""
    engine.status(repos, short=short)


@cli.command()
@repository_command
def clone(engine, repos: list[str]) -> None:
    """For each repository (with update=true): clone the repository if it has not been cloned yet."""
    engine.clone(repos)


@cli.command()
@repository_command
def fetch(engine, repos: list[str]) -> None:
    """For each repository (with update=true): fetch from all remotes."""
    engine.fetch(repos)


@cli.command()
@repository_command
def checkout(engine, repos: list[str]) -> None:
    """For each repository (with update=true): check out the correct branch."""
    engine.checkout(repos)


@cli.command()
@repository_command
def update(engine, repos: list[str]) -> None:
    """For each repository (with update=true): check out the correct branch and pull,
    or clone the repository if it has not been cloned yet."""
    engine.update(repos)


@cli.command()
@click.option("--all", "all_branches", is_flag=True, help="Push all branches.")
@click.option("--follow-tags", is_flag=True, help="Push annotated tags.")
@repository_command
def push(engine, repos: list[str], all_branches: bool, follow_tags: bool) -> None:
    """For each repository (with update=true): push the current local branch to its remote."""
    engine.push(repos, all_branches=all_branches, follow_tags=follow_tags)


@cli.command("pushTags")
@repository_command
def push_tags(engine, repos: list[str]) -> None:
    """Push the current local branch and annotated tags."""
    engine.push_tags(repos)


@cli.command("pushAll")
@repository_command
def push_all(engine, repos: list[str]) -> None:
    """Push all local branches."""
    engine.push_all(repos)


@cli.command("pushAllTags")
@repository_command
def push_all_tags(engine, repos: list[str]) -> None:
    """Push all local branches and annotated tags."""
    engine.push_all_tags(repos)


@cli.command()
@click.option("--force", is_flag=True, help="Performs the clean without a dry-run.")
@click.option("--removeIgnored", "remove_ignored", is_flag=True, help="Also remove ignored untracked files.")
@repository_command
def clean(engine, repos: list[str], force: bool, remove_ignored: bool) -> None:
    """For each repository (with update=true): remove untracked files and directories."""
    engine.clean(repos, force=force, remove_ignored=remove_ignored)


@cli.command()
@click.option("--hard", is_flag=True, help="Performs a hard reset.")
@repository_command
def reset(engine, repos: list[str], hard: bool) -> None:
    """For each repository (with update=true): reset to the tip of its branch."""
    engine.reset(repos, hard=hard)


@cli.command("commitSubmodules")
@click.option("--message", "-m", default=DEFAULT_COMMIT_MESSAGE, show_default=True, help="Commit message.")
@repository_command
def commit_submodules(engine, repos: list[str], message: str) -> None:
    """Create a commit with the current commit of each submodule (with update=true)."""
    engine.commit_submodules(repos, message=message)


@cli.command()
@repository_command
def included(engine, repos: list[str]) -> None:
    """Print the directory of each included repository that is present on disk."""
    for directory in engine.included_directories(repos):
        click.echo(directory)


if __name__ == "__main__":
    cli()
