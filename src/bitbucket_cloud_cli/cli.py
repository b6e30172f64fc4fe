import json
from collections.abc import Callable
from typing import Any

import httpx
import typer
from pydantic import ValidationError

from bitbucket_cloud_cli.config import AppConfig
from bitbucket_cloud_cli.errors import BitbucketCliError
from bitbucket_cloud_cli.logging_config import configure_logging
from bitbucket_cloud_cli.services.bitbucket_client import BitbucketClient
from bitbucket_cloud_cli.services.repositories import RepositoriesApi
from bitbucket_cloud_cli.slug import derive_slug

app = typer.Typer(help="Bitbucket Cloud CLI (repositories API)", no_args_is_help=True)
auth_app = typer.Typer(help="Authentication commands")
repo_app = typer.Typer(help="Repository commands")
pr_app = typer.Typer(help="Pull request commands")

app.add_typer(auth_app, name="auth")
app.add_typer(repo_app, name="repo")
app.add_typer(pr_app, name="pr")


def build_client(config: AppConfig) -> BitbucketClient:
    return BitbucketClient(
        base_url=config.url,
        token=config.token,
        username=config.username,
        app_password=config.app_password,
        timeout=config.timeout,
    )


def _load_config() -> AppConfig:
    try:
        return AppConfig()
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=1) from e


def _echo_response(response: httpx.Response) -> None:
    try:
        typer.echo(json.dumps(response.json(), indent=2))
    except ValueError:
        typer.echo(response.text)


def _run(call: Callable[[RepositoriesApi], Any]) -> None:
    config = _load_config()
    configure_logging(config.log_level)
    try:
        with build_client(config) as client:
            _echo_response(call(RepositoriesApi(client)))
    except httpx.HTTPStatusError as e:
        typer.echo(f"Bitbucket returned {e.response.status_code}: {e.response.text}", err=True)
        raise typer.Exit(code=1) from e
    except (BitbucketCliError, httpx.HTTPError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


@auth_app.command("status")
def auth_status() -> None:
    config = _load_config()
    typer.echo(f"Target Bitbucket: {config.url} (auth: {config.auth_mode})")


@repo_app.command("slug")
def repo_slug(name: str) -> None:
    """Print the slug Bitbucket is expected to derive from NAME (approximation)."""
    typer.echo(derive_slug(name))


@repo_app.command("list")
def repo_list(workspace: str) -> None:
    _run(lambda api: api.get_by_workspace(workspace))


@repo_app.command("get")
def repo_get(workspace: str, slug: str) -> None:
    _run(lambda api: api.get(workspace, slug))


@repo_app.command("branches")
def repo_branches(workspace: str, slug: str) -> None:
    _run(lambda api: api.get_branches(workspace, slug))


@repo_app.command("forks")
def repo_forks(workspace: str, slug: str) -> None:
    _run(lambda api: api.get_forks(workspace, slug))


@repo_app.command("commit")
def repo_commit(workspace: str, slug: str, sha: str) -> None:
    _run(lambda api: api.get_commit(workspace, slug, sha))


@repo_app.command("create")
def repo_create(
    workspace: str,
    name: str,
    private: bool = typer.Option(..., "--private/--public", help="Repository visibility"),
    description: str | None = typer.Option(None, help="Repository description"),
) -> None:
    repo: dict[str, Any] = {"scm": "git", "name": name, "is_private": private}
    if description:
        repo["description"] = description
    _run(lambda api: api.create(workspace, repo))


@pr_app.command("list")
def pr_list(
    workspace: str,
    slug: str,
    state: list[str] | None = typer.Option(None, "--state", help="OPEN, MERGED, DECLINED or SUPERSEDED"),
    field: list[str] | None = typer.Option(None, "--field", help="Extra field path to include"),
    strict: bool = typer.Option(False, help="Fail on unknown states instead of listing OPEN"),
) -> None:
    if field:
        _run(lambda api: api.get_pull_requests_with_fields(workspace, slug, fields=field, state=state, strict=strict))
    else:
        _run(lambda api: api.get_pull_requests(workspace, slug, state, strict=strict))


if __name__ == "__main__":
    app()
