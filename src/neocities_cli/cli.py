"""Command-line interface for neocities_cli."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import click
from dotenv import find_dotenv, load_dotenv

from neocities_cli.auth import resolve_auth
from neocities_cli.client import SiteClient
from neocities_cli.config import build_config
from neocities_cli.models import Config, SiteInfo
from neocities_cli.paths import delete_path, upload_path

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class Options:
    """Global options shared by every command."""

    site: str | None = None
    user: str | None = None
    password: str | None = None
    no_interactive: bool = False


def configure_logging(verbosity: int) -> None:
    """Set up logging once for the process: WARNING, then INFO, then DEBUG."""
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT, force=True)


def get_client(options: Options, config: Config) -> SiteClient:
    """Resolve the site and credential, then create a SiteClient."""
    site, credential = resolve_auth(
        config,
        site=options.site,
        user=options.user,
        password=options.password,
        no_interactive=options.no_interactive,
    )
    logger.info(f"Site: {site} ({type(credential).__name__})")
    return SiteClient(credential)


def _error_chain(error: BaseException) -> list[BaseException]:
    """Return error followed by its causes, innermost last."""
    chain = [error]
    current = error
    while True:
        cause = current.__cause__
        if cause is None and not current.__suppress_context__:
            cause = current.__context__
        if cause is None or cause in chain:
            return chain
        chain.append(cause)
        current = cause


def _fail(error: BaseException) -> NoReturn:
    """Print an error with its causal chain and exit with status 1."""
    first, *causes = _error_chain(error)
    click.echo(click.style(f"error: {first}", fg="red"), err=True)
    for cause in causes:
        click.echo(f"caused by: {cause}", err=True)
    sys.exit(1)


def _format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = size_bytes / 1024
    for unit in ["KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def _echo_info(info: SiteInfo) -> None:
    click.echo(click.style(info.sitename, bold=True))
    click.echo(f"  views:        {info.views}")
    click.echo(f"  hits:         {info.hits}")
    click.echo(f"  created:      {info.created_at}")
    if info.last_updated:
        click.echo(f"  last updated: {info.last_updated}")
    if info.domain:
        click.echo(f"  domain:       {info.domain}")
    if info.tags:
        click.echo(f"  tags:         {', '.join(info.tags)}")
    if info.latest_ipfs_hash:
        click.echo(f"  ipfs hash:    {info.latest_ipfs_hash}")


@click.group()
@click.version_option(package_name="neocities-cli")
@click.option("--site", "-s", envvar="NEOCITIES_SITE", help="Site name to operate on")
@click.option("--user", "-u", help="Username, if different from the site name")
@click.option(
    "--password",
    "-p",
    envvar="NEOCITIES_PASSWORD",
    help="Account password (prompted for if omitted)",
)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (repeatable)")
@click.option(
    "--no-interactive",
    "-n",
    is_flag=True,
    help="Fail instead of prompting for a site or password",
)
@click.pass_context
def main(
    ctx: click.Context,
    site: str | None,
    user: str | None,
    password: str | None,
    verbose: int,
    no_interactive: bool,
) -> None:
    """Neocities CLI - Manage your Neocities website (https://neocities.org)."""
    configure_logging(verbose)
    ctx.obj = Options(
        site=site,
        user=user,
        password=password,
        no_interactive=no_interactive,
    )


@main.command()
@click.pass_obj
def info(options: Options) -> None:
    """Show information about the site."""
    try:
        config = build_config()
        with get_client(options, config) as client:
            _echo_info(client.info())
    except Exception as e:
        _fail(e)


@main.command("list")
@click.argument("path", required=False)
@click.pass_obj
def list_files(options: Options, path: str | None) -> None:
    """List the files on the site.

    PATH: Remote directory to list (default: the whole site)

    Examples:

        neo list

        neo ls images
    """
    try:
        config = build_config()
        with get_client(options, config) as client:
            files = client.list_files(path)

        if not files:
            click.echo("(no files)")
        for remote in files:
            if remote.is_directory:
                click.echo(click.style(f"  {remote.path}/", fg="blue"))
            else:
                click.echo(f"  {remote.path}  ({_format_size(remote.size)})")
    except Exception as e:
        _fail(e)


main.add_command(list_files, "ls")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("path", required=False)
@click.pass_obj
def upload(options: Options, file: Path, path: str | None) -> None:
    """Upload a file to the site.

    FILE: The local file to upload

    PATH: Remote path for the file (default: FILE relative to the project
    root holding Neo.toml, or FILE as given)

    Examples:

        neo upload index.html

        neo upload build/about.html about.html
    """
    try:
        config = build_config()
        remote_path = upload_path(file, path, config.site_root)
        logger.info(f"upload: {file} to {remote_path}")
        with get_client(options, config) as client:
            client.upload(remote_path, file)
        click.echo(click.style("✓ ", fg="green") + f"{file} -> {remote_path}")
    except Exception as e:
        _fail(e)


@main.command()
@click.argument("path")
@click.pass_obj
def delete(options: Options, path: str) -> None:
    """Delete a file from the site.

    PATH: Local path of the file to delete, mapped to its remote path like
    upload does. Prefix with ':' to give the remote path directly.

    Examples:

        neo delete old.html

        neo rm :images/unused.png
    """
    try:
        config = build_config()
        remote_path = delete_path(path, config.site_root)
        logger.info(f"delete: {remote_path}")
        with get_client(options, config) as client:
            client.delete([remote_path])
        click.echo(click.style("✓ ", fg="green") + f"deleted {remote_path}")
    except Exception as e:
        _fail(e)


main.add_command(delete, "rm")


def run() -> None:
    """Console entry point: load a .env file from the working directory, then dispatch."""
    load_dotenv(find_dotenv(usecwd=True))
    main()


if __name__ == "__main__":
    run()
