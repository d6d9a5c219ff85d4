"""CLI entry point for pdum_iam."""

import sys
from pathlib import Path
from typing import List

import typer
from googleapiclient.errors import HttpError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pdum.iam import admin
from pdum.iam.logging_config import configure_logging
from pdum.iam.types import Policy
from pdum.iam.utils import load_policy_file, save_policy_file

app = typer.Typer(
    help="Inspect and edit Google Cloud IAM policies",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log API calls and retries"),
):
    configure_logging(verbose=verbose)


def _run(action):
    """Run ``action`` and turn expected failures into a message and exit code."""
    try:
        return action()
    except (ValueError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except HttpError as e:
        console.print(f"[bold red]API error ({e.resp.status}):[/bold red] {escape(str(e.reason))}")
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user.[/yellow]")
        sys.exit(130)


def _print_policy(resource_name: str, policy: Policy) -> None:
    table = Table(title=f"IAM policy for {resource_name}")
    table.add_column("Role", style="cyan")
    table.add_column("Members", style="green")

    for binding in policy.to_api_repr()["bindings"]:
        table.add_row(binding["role"], "\n".join(binding["members"]))

    console.print(table)
    console.print(f"[dim]etag: {policy.etag or '-'}  version: {policy.version if policy.version is not None else '-'}[/dim]")


@app.command("version")
def version():
    """Show the version of pdum_iam."""
    from pdum.iam import __version__

    console.print(f"pdum_iam version: [bold green]{__version__}[/bold green]")


@app.command("show")
def show(
    resource: str = typer.Argument(..., help="Full resource name, e.g. projects/my-project"),
):
    """Print the IAM policy of a resource as a table."""
    policy = _run(lambda: admin.get_iam_policy(resource))
    _print_policy(resource, policy)


@app.command("add-binding")
def add_binding(
    resource: str = typer.Argument(..., help="Full resource name, e.g. projects/my-project"),
    role: str = typer.Argument(..., help="Role, e.g. viewer or roles/storage.admin"),
    members: List[str] = typer.Argument(..., help="Members, e.g. user:me@example.com"),
):
    """
    Grant a role to one or more members.

    Examples:
        pdum_iam add-binding projects/my-project viewer user:alice@example.com group:ops@example.com
    """
    policy = _run(lambda: admin.add_iam_binding(resource, role, *members))
    console.print(f"[green]Granted[/green] {role} to {len(members)} member(s) on {resource}")
    _print_policy(resource, policy)


@app.command("remove-binding")
def remove_binding(
    resource: str = typer.Argument(..., help="Full resource name, e.g. projects/my-project"),
    role: str = typer.Argument(..., help="Role, e.g. viewer or roles/storage.admin"),
    members: List[str] = typer.Argument(..., help="Members, e.g. user:me@example.com"),
):
    """Revoke a role from one or more members."""
    policy = _run(lambda: admin.remove_iam_binding(resource, role, *members))
    console.print(f"[green]Revoked[/green] {role} from {len(members)} member(s) on {resource}")
    _print_policy(resource, policy)


@app.command("export")
def export(
    resource: str = typer.Argument(..., help="Full resource name, e.g. projects/my-project"),
    path: Path = typer.Argument(..., help="YAML file to write"),
):
    """Save the IAM policy of a resource to a YAML file (etag included)."""
    policy = _run(lambda: admin.get_iam_policy(resource))
    saved = save_policy_file(policy, path)
    console.print(f"[green]Saved policy to:[/green] {saved}")


@app.command("apply")
def apply(
    resource: str = typer.Argument(..., help="Full resource name, e.g. projects/my-project"),
    path: Path = typer.Argument(..., help="YAML policy file, as written by export"),
):
    """
    Replace the IAM policy of a resource with the one in a YAML file.

    If the file carries an etag and the policy changed since it was exported,
    the server rejects the update.
    """
    policy = _run(lambda: load_policy_file(path))
    updated = _run(lambda: admin.set_iam_policy(resource, policy))
    _print_policy(resource, updated)


@app.command("test-permissions")
def test_permissions(
    resource: str = typer.Argument(..., help="Full resource name, e.g. projects/my-project"),
    permissions: List[str] = typer.Argument(..., help="Permissions, e.g. resourcemanager.projects.get"),
):
    """Show which of the given permissions the caller holds."""
    granted = set(_run(lambda: admin.test_iam_permissions(resource, permissions)))
    for permission in permissions:
        if permission in granted:
            console.print(f"[green]✓[/green] {permission}")
        else:
            console.print(f"[red]✗[/red] {permission}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
