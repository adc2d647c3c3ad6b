"""Command-line interface for flake-info."""

from pathlib import Path

import click
import httpx

from flake_info.channels import resolve_nixpkgs
from flake_info.console import console, sources_table, success
from flake_info.env import github_token
from flake_info.errors import ChannelResolutionError, SourceParseError
from flake_info.logging import get_logger, setup_logging
from flake_info.models.source import Source
from flake_info.sources import read_sources_file, write_sources_file

logger = get_logger(__name__)


def _load_sources(path: Path) -> list[Source]:
    """Read a sources file, reporting failures as CLI errors."""
    try:
        return read_sources_file(path)
    except OSError as e:
        raise click.ClickException(f"Cannot read {path}: {e}")
    except SourceParseError as e:
        raise click.ClickException(str(e))


@click.group()
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output (DEBUG level)",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Show only warnings and errors",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Explicit log level (overrides -v/-q)",
)
def cli(verbose, quiet, log_level):
    """Turn declared flake sources into flake references."""
    if sum([verbose, quiet, log_level is not None]) > 1:
        raise click.UsageError("--verbose, --quiet, and --log-level are mutually exclusive")

    setup_logging(verbose=verbose, quiet=quiet, log_level=log_level)


@cli.command(name="refs")
@click.argument("sources_file", type=click.Path(path_type=Path))  # type: ignore[type-var]
def refs(sources_file):
    """Print the flake reference of every source, one per line."""
    for source in _load_sources(sources_file):
        click.echo(source.to_flake_ref())


@cli.command(name="show")
@click.argument("sources_file", type=click.Path(path_type=Path))  # type: ignore[type-var]
def show(sources_file):
    """Show the sources of a file as a table."""
    sources = _load_sources(sources_file)

    if not sources:
        click.echo("No sources declared.")
        return

    console.print(sources_table(sources, title=str(sources_file)))


@cli.command(name="resolve")
@click.argument("channel")
@click.option(
    "--token",
    default=None,
    help="GitHub token (default: $GITHUB_TOKEN or .env)",
)
@click.option(
    "--flake-ref",
    "as_flake_ref",
    is_flag=True,
    help="Print the tarball flake reference instead of the commit",
)
def resolve(channel, token, as_flake_ref):
    """Pin CHANNEL (e.g. 'unstable', '24.05') to its current nixpkgs commit.

    Example:
        flake-info resolve unstable --flake-ref
    """
    if token is None:
        token = github_token()

    try:
        pinned = resolve_nixpkgs(channel, token=token)
    except ChannelResolutionError as e:
        raise click.ClickException(str(e))
    except httpx.HTTPError as e:
        raise click.ClickException(f"Request for channel {channel} failed: {e}")

    click.echo(pinned.to_flake_ref() if as_flake_ref else pinned.git_ref)


@cli.command(name="convert")
@click.argument("sources_file", type=click.Path(path_type=Path))  # type: ignore[type-var]
@click.argument("output", type=click.Path(path_type=Path))  # type: ignore[type-var]
def convert(sources_file, output):
    """Rewrite SOURCES_FILE as OUTPUT, in the format implied by OUTPUT's extension."""
    sources = _load_sources(sources_file)

    try:
        write_sources_file(sources, output)
    except OSError as e:
        raise click.ClickException(f"Cannot write {output}: {e}")

    success(f"Wrote {len(sources)} sources to {output}")


def main():
    """Entry point for flake-info command."""
    cli()


if __name__ == "__main__":
    main()
