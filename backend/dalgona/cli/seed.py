"""``flask seed`` commands: demo accounts, profiles and diary entries."""

from __future__ import annotations

import logging
import os

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from dalgona.core.config import ENV_VAR
from dalgona.core.extensions import db
from dalgona.seeds import seed_data

LOGGER = logging.getLogger(__name__)

SEEDERS = {
    "accounts": seed_data.seed_accounts_and_profiles,
    "diary": seed_data.seed_diary_entries,
}


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (nothing seeded)")
        return
    width = max(len(name) for name in summary)
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


def _refuse_in_production() -> None:
    """Stop schema-dropping commands outside development and test setups."""
    app_env = os.getenv(ENV_VAR, "development").strip().lower()
    config = current_app.config
    if app_env == "production" or not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError("'flask seed fresh' only runs with DEBUG or TESTING enabled.")


def _run(only: str | None, verbose: bool) -> dict[str, dict[str, int]]:
    if only is None:
        return seed_data.run_all(db, verbose=verbose)
    return SEEDERS[only](db, verbose=verbose)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Load demo data for the diary."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    for name in (LOGGER.name, seed_data.__name__):
        logging.getLogger(name).setLevel(level)


@seed_cli.command("run")
@click.option(
    "--only",
    type=click.Choice(sorted(SEEDERS)),
    default=None,
    help="Seed a single group instead of everything.",
)
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context, only: str | None) -> None:
    """Insert missing demo rows; existing rows are left alone."""
    try:
        summary = _run(only, bool(ctx.obj.get("verbose", False)))
    except (SQLAlchemyError, RuntimeError) as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask before dropping tables.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Recreate every table, then seed all demo data."""
    _refuse_in_production()
    if not yes:
        click.confirm("Drop and recreate accounts, users and diary tables?", abort=True)
    LOGGER.info("Recreating database schema")
    db.session.remove()
    db.drop_all()
    db.create_all()
    try:
        summary = _run(None, bool(ctx.obj.get("verbose", False)))
    except (SQLAlchemyError, RuntimeError) as exc:
        db.session.rollback()
        raise click.ClickException(f"Fresh seed failed: {exc}") from exc
    _echo_summary(summary)


@seed_cli.command("accounts")
def accounts_command() -> None:
    """Print the demo logins created by ``flask seed run``."""
    for fixture in seed_data.ACCOUNT_FIXTURES:
        click.echo(f"{fixture['email']}  {fixture['password']}  ({fixture['nickname']})")
