"""
Gitor CLI - manage bare repositories on a remote server.

Usage:
    gitor list --search api
    gitor repo my-project
    gitor new my-project
    gitor delete my-project
"""

import sys
from contextlib import contextmanager

import click
import httpx
from rich.console import Console
from rich.markup import escape

from gitor import __version__
from gitor.client import ApiError, GitorClient
from gitor.config import ClientConfig, ClientConfigError, load_client_config

console = Console()


def get_client(config: ClientConfig) -> GitorClient:
    """Build the API client for a configuration."""
    return GitorClient.from_config(config)


def load_config_or_exit(ctx: click.Context) -> ClientConfig:
    try:
        return load_client_config(ctx.obj.get("config_path"))
    except ClientConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


@contextmanager
def api_errors(server_url: str):
    """Turn request failures into a message and exit status 1."""
    try:
        yield
    except httpx.ConnectError:
        console.print(f"[red]Error:[/red] Could not connect to {server_url}")
        sys.exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Error:[/red] Could not reach {server_url}: {escape(str(e))}")
        sys.exit(1)
    except ApiError as e:
        console.print(e.message)
        sys.exit(1)


def print_line(text: str) -> None:
    """Print server provided text as is."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_repo_info(repo: dict) -> None:
    print_line(repo["Name"])

    console.print("\n  Branches:")
    for branch in repo.get("Branches") or []:
        print_line(f"    {branch}")

    console.print("\n  Remotes:")
    for remote in repo.get("Remotes") or []:
        print_line(f"    {remote}")

    console.print("\n  Tags:")
    for tag in repo.get("Tags") or []:
        print_line(f"    {tag['hash']}: {tag['name']}")


@click.group()
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Client config file (default: GITOR_CLIENT_CONFIG env or ~/.config/gitor/client-config.yml)",
)
@click.version_option(__version__)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None):
    """Gitor - CLI tool to manage your bare repos on a remote server."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command("list")
@click.option("--search", "-s", default=None, help="Only show repos whose name contains this text")
@click.pass_context
def list_repos(ctx: click.Context, search: str | None):
    """List all your repos."""
    config = load_config_or_exit(ctx)

    with api_errors(config.server_url), get_client(config) as client:
        repos = client.list_repositories(search)


    console.print("Repositories:")
    for name in repos:
        print_line(f"  {name}")


@cli.command()
@click.argument("repo_name")
@click.pass_context
def repo(ctx: click.Context, repo_name: str):
    """View a specific repo."""
    config = load_config_or_exit(ctx)

    with api_errors(config.server_url), get_client(config) as client:
        data = client.get_repository(repo_name)

    print_repo_info(data)


@cli.command()
@click.argument("repo_name")
@click.pass_context
def new(ctx: click.Context, repo_name: str):
    """Create a new repo."""
    config = load_config_or_exit(ctx)

    with api_errors(config.server_url), get_client(config) as client:
        data = client.new_repository(repo_name)

    print_repo_info(data)


@cli.command()
@click.argument("repo_name")
@click.pass_context
def delete(ctx: click.Context, repo_name: str):
    """Delete a repo."""
    config = load_config_or_exit(ctx)

    if not click.confirm(f"Are you sure you want to delete {repo_name}?", default=False):
        console.print("Aborted")
        return

    with api_errors(config.server_url), get_client(config) as client:
        message = client.delete_repository(repo_name)

    print_line(message)


cli.add_command(list_repos, name="ls")
cli.add_command(delete, name="rm")


if __name__ == "__main__":
    cli()
