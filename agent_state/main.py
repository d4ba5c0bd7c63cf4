"""
Agent State — Operator CLI

Inspect or reset the agent's current-operation record by hand, e.g. after
an interrupted update left the agent waiting on a stale status.

Usage:
    python -m agent_state.main show [--json]
    python -m agent_state.main clear
    python -m agent_state.main update Restarting
    python -m agent_state.main set 1234 list
    python -m agent_state.main check
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import NoReturn, Optional

import click
from dotenv import find_dotenv, load_dotenv

from .config.loader import load_config
from .logging_config import setup_logging
from .models.state import State, parse_status, status_text
from .persistence.repository import FileStateRepository
from .validation import (
    ConfigurationError,
    StateError,
    StateNotFoundError,
    validate_state_file,
)


def _fail(message: str) -> NoReturn:
    click.secho(f"Error: {message}", fg="red", err=True)
    raise SystemExit(1)


def _describe(state: State) -> None:
    if state.is_idle:
        click.echo("No operation in progress")
        return
    click.echo(f"Operation ID: {state.operation_id or '-'}")
    click.echo(f"Operation:    {status_text(state.operation) if state.operation else '-'}")


@click.group()
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Configuration root holding .agent/ (default: $AGENT_STATE_ROOT or /etc/tedge)",
)
@click.pass_context
def cli(ctx: click.Context, root: Optional[Path]) -> None:
    """Inspect and reset the agent's persisted operation state."""
    load_dotenv(find_dotenv(usecwd=True))
    try:
        config = load_config()
    except ConfigurationError as e:
        _fail(str(e))
    setup_logging(config.log_level, config.log_format)

    ctx.ensure_object(dict)
    ctx.obj["repo"] = FileStateRepository(root or config.root)


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show the recorded operation."""
    repo: FileStateRepository = ctx.obj["repo"]

    try:
        state = asyncio.run(repo.load())
    except StateNotFoundError:
        _fail(f"No state file at {repo.state_repo_path}")
    except StateError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps(state.model_dump(), indent=2))
        return
    _describe(state)


@cli.command()
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Reset to no operation in progress."""
    repo: FileStateRepository = ctx.obj["repo"]

    try:
        asyncio.run(repo.clear())
    except StateError as e:
        _fail(str(e))

    click.secho(f"✓ Cleared {repo.state_repo_path}", fg="green")


@cli.command()
@click.argument("status")
@click.pass_context
def update(ctx: click.Context, status: str) -> None:
    """Replace the operation status, keeping the operation ID."""
    repo: FileStateRepository = ctx.obj["repo"]

    try:
        asyncio.run(repo.update(parse_status(status)))
    except StateError as e:
        _fail(str(e))

    click.secho(f"✓ Operation status set to {status}", fg="green")


@cli.command("set")
@click.argument("operation_id")
@click.argument("status")
@click.pass_context
def set_operation(ctx: click.Context, operation_id: str, status: str) -> None:
    """Record a new operation."""
    repo: FileStateRepository = ctx.obj["repo"]
    state = State(operation_id=operation_id, operation=parse_status(status))

    try:
        asyncio.run(repo.store(state))
    except StateError as e:
        _fail(str(e))

    click.secho(f"✓ Recorded operation {operation_id} ({status})", fg="green")


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Validate the state file."""
    repo: FileStateRepository = ctx.obj["repo"]

    try:
        state = validate_state_file(repo.state_repo_path)
    except StateError as e:
        click.secho(f"✗ {e}", fg="red", err=True)
        for key, value in e.details.items():
            if key != "errors":
                click.echo(f"  {key}: {value}", err=True)
        raise SystemExit(1)

    click.secho(f"✓ {repo.state_repo_path} is valid", fg="green")
    _describe(state)


if __name__ == "__main__":
    cli()
