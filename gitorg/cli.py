"""CLI entry point for gitorg."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import NoReturn

import requests
import typer
from github.GithubException import GithubException
from rich import print as rprint
from rich.logging import RichHandler

from gitorg.config import Config
from gitorg.github.client import GitHubClient
from gitorg.github.operations import Operations

app = typer.Typer(help="Browse and download from an organization's GitHub repositories.")


@app.callback()
def main(
    ctx: typer.Context,
    org: str = typer.Option(None, "--org", help="Organization (overrides GITORG_ORGANIZATION)"),
    all_pages: bool = typer.Option(False, "--all-pages", help="Fetch every page of listings"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log GitHub calls"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )

    config = Config.load()
    if org:
        config.organization = org
    if all_pages:
        config.all_pages = True
    ctx.obj = config


def _open(ctx: typer.Context, require_org: bool = True) -> GitHubClient:
    config: Config = ctx.obj
    if require_org and not config.organization:
        rprint("[red]Config error: Organization not set (GITORG_ORGANIZATION or --org)[/red]")
        raise typer.Exit(1)
    if not config.github_token:
        rprint("[yellow]GITORG_GITHUB_TOKEN not set, using anonymous access.[/yellow]")
    return GitHubClient.from_config(config)


def _not_found(what: str) -> NoReturn:
    rprint(f"[red]{what} not found or not accessible. Run with --verbose for details.[/red]")
    raise typer.Exit(1)


@app.command()
def repos(
    ctx: typer.Context,
    repo_type: str = typer.Option("all", "--type", help="all, public, private, forks, sources, member"),
    sort: str = typer.Option("full_name", help="created, updated, pushed, full_name"),
) -> None:
    """List the organization's repositories."""
    client = _open(ctx)
    try:
        repositories = Operations(client).repositories(repo_type, sort)
        if not repositories:
            _not_found(f"Repositories for {client.organization}")
        for repo in repositories:
            visibility = "private" if repo.private else "public"
            rprint(f"  [bold]{repo.name}[/bold] ({visibility}) {repo.description or ''}")
    finally:
        client.close()


@app.command()
def branches(
    ctx: typer.Context,
    repo: str = typer.Argument(help="Repository name"),
) -> None:
    """List branches of a repository."""
    client = _open(ctx)
    try:
        found = Operations(client).branches(repo)
        if not found:
            _not_found(f"Branches of {repo}")
        for branch in found:
            marker = " [yellow](protected)[/yellow]" if branch.protected else ""
            rprint(f"  {branch.name} {branch.commit.sha[:10]}{marker}")
    finally:
        client.close()


@app.command()
def tags(
    ctx: typer.Context,
    repo: str = typer.Argument(help="Repository name"),
) -> None:
    """List tags of a repository."""
    client = _open(ctx)
    try:
        found = Operations(client).tags(repo)
        if not found:
            _not_found(f"Tags of {repo}")
        for tag in found:
            rprint(f"  {tag.name} {tag.commit.sha[:10]}")
    finally:
        client.close()


@app.command()
def tag(
    ctx: typer.Context,
    repo: str = typer.Argument(help="Repository name"),
    name: str = typer.Argument(help="Tag name"),
) -> None:
    """Show the commit a tag points at."""
    client = _open(ctx)
    try:
        found = Operations(client).tag_by_name(repo, name)
        if found is None:
            _not_found(f"Tag {name} in {repo}")
        rprint(f"{found.name} {found.commit.sha}")
    finally:
        client.close()


@app.command()
def ref(
    ctx: typer.Context,
    repo: str = typer.Argument(help="Repository name"),
    branch: str = typer.Argument(help="Branch name"),
) -> None:
    """Show the head reference of a branch."""
    client = _open(ctx)
    try:
        found = Operations(client).reference_by_heads(repo, branch)
        if found is None:
            _not_found(f"Branch {branch} in {repo}")
        rprint(f"{found.ref} {found.object.sha}")
    finally:
        client.close()


@app.command()
def user(
    ctx: typer.Context,
    login: str = typer.Argument("", help="User login (defaults to the token's owner)"),
) -> None:
    """Show a GitHub user."""
    client = _open(ctx, require_org=False)
    try:
        found = Operations(client).user(login)
        if found is None:
            _not_found(f"User {login or '(authenticated)'}")
        rprint(f"[bold]{found.login}[/bold] {found.name or ''}")
        if found.html_url:
            rprint(f"  {found.html_url}")
    finally:
        client.close()


@app.command()
def download(
    ctx: typer.Context,
    repo: str = typer.Argument(help="Repository name"),
    path: str = typer.Argument(help="File path inside the repository"),
    ref: str = typer.Option("", "--ref", "-r", help="Branch, tag or SHA (default branch if omitted)"),
    output: str = typer.Option(None, "--output", "-o", help="Output file (defaults to the file name)"),
) -> None:
    """Download a single file from a repository."""
    client = _open(ctx)
    out_path = Path(output or Path(path).name)
    try:
        try:
            body = Operations(client).download(repo, ref, path)
        except (ValueError, FileNotFoundError) as e:
            rprint(f"[red]{e}[/red]")
            raise typer.Exit(1)
        except (GithubException, requests.HTTPError) as e:
            rprint(f"[red]Download of {path} from {repo} failed: {e}[/red]")
            raise typer.Exit(1)

        try:
            with open(out_path, "wb") as f:
                shutil.copyfileobj(body, f)
        finally:
            body.close()
        rprint(f"[green]Saved {path} to {out_path}[/green]")
    finally:
        client.close()


if __name__ == "__main__":
    app()
