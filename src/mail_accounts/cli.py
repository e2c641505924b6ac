# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command-line interface for mail-accounts.

This module provides a CLI for inspecting and maintaining the email accounts
of every installed connector: listing, deletion, the default account,
scenario bindings, SMTP accounts and rate limits.

Usage:
    mail-accounts accounts list
    mail-accounts accounts delete smtp:sales --yes
    mail-accounts accounts default smtp:support
    mail-accounts connectors list
    mail-accounts scenarios assign invoices smtp:billing
    mail-accounts smtp add billing --email billing@example.com --host smtp.example.com
    mail-accounts ratelimit set smtp:billing --per-hour 200
    mail-accounts validate "ann@example.com; bob@example.com"

Accounts are referenced as CONNECTOR:ACCOUNT_ID. Commands that change the
email setup need the admin capability (``--admin`` or ``admin = true`` in
the configuration file).
"""

from __future__ import annotations

import asyncio
import base64
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from .accounts import EmailAccounts
from .address import validate_addresses
from .config_loader import AccountsConfig, load_config
from .connectors import SmtpConnector
from .errors import MailAccountsError
from .mailaccounts_db import MailAccountsDb
from .models import DEFAULT_SCENARIO, AccountRef, EmailAccount
from .prompts import ConsoleChooser, ConsoleConfirm
from .registry import ConnectorRegistry
from .security import AccessContext

console = Console()
err_console = Console(stderr=True)


def run_async(coro):
    """Execute an async coroutine synchronously from CLI context.

    Args:
        coro: Async coroutine to execute.

    Returns:
        The coroutine's return value.
    """
    return asyncio.run(coro)


def print_error(message: str) -> None:
    """Print a formatted error message to stderr.

    Args:
        message: Error message text to display.
    """
    err_console.print(f"[red]Error:[/red] {message}", highlight=False)


def print_success(message: str) -> None:
    """Print a formatted success message with checkmark.

    Args:
        message: Success message text to display.
    """
    console.print(f"[green]✓[/green] {message}", highlight=False)


def print_json(data: Any) -> None:
    """Print data as syntax-highlighted JSON.

    Args:
        data: Any JSON-serializable data structure.
    """
    console.print_json(json.dumps(data, indent=2, default=str))


def _fail(message: str) -> None:
    print_error(message)
    sys.exit(1)


def _run(coro) -> Any:
    """Run a command coroutine, turning domain errors into exit status 1."""
    try:
        return run_async(coro)
    except (MailAccountsError, ValueError) as exc:
        _fail(str(exc))


def _parse_ref(value: str) -> AccountRef:
    try:
        return AccountRef.parse(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


# ============================================================================
# Session
# ============================================================================

@dataclass
class Session:
    """Settings resolved from options, environment and config file."""

    config: AccountsConfig

    @property
    def context(self) -> AccessContext:
        return AccessContext(user=self.config.user, is_admin=self.config.admin)

    async def open(self) -> EmailAccounts:
        """Open the database, install connectors and build the account service."""
        db_path = self.config.db_path
        if not db_path.startswith("sqlite:"):
            Path(db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)

        db = MailAccountsDb(db_path)
        registry = ConnectorRegistry([SmtpConnector(db)])
        registry.discover(db)
        await db.init_db()
        return EmailAccounts(
            db,
            registry,
            confirm=ConsoleConfirm(console),
            chooser=ConsoleChooser(console),
        )


def _account_row(account: EmailAccount, default: AccountRef | None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "account_id": account.account_id,
        "connector": account.connector,
        "name": account.name,
        "email_address": account.email_address,
        "default": account.ref == default,
    }
    if account.logo is not None:
        data["logo"] = base64.b64encode(account.logo).decode("ascii")
    return data


async def _resolve(accounts: EmailAccounts, ref: AccountRef) -> EmailAccount:
    account = await accounts.get_account(ref)
    if account is None:
        raise MailAccountsError(f"Email account '{ref}' not found.")
    return account


# ============================================================================
# Main group
# ============================================================================

@click.group()
@click.version_option(package_name="mail-accounts")
@click.option("--db", "db_path", type=click.Path(dir_okay=False), help="SQLite database file.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="INI configuration file.")
@click.option("--user", help="Acting user name.")
@click.option("--admin/--no-admin", default=None, help="Grant or revoke the admin capability.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    db_path: str | None,
    config_path: str | None,
    user: str | None,
    admin: bool | None,
    verbose: bool,
) -> None:
    """mail-accounts - Manage the email accounts of installed connectors."""
    config = load_config(config_path)
    if db_path:
        config.db_path = db_path
    if user:
        config.user = user
    if admin is not None:
        config.admin = admin
    if verbose:
        config.log_level = "DEBUG"

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Session(config)


# ============================================================================
# Accounts
# ============================================================================

@cli.group("accounts")
def accounts_group() -> None:
    """List, delete and choose the default email account."""


@accounts_group.command("list")
@click.option("--logos", is_flag=True, help="Load connector logos.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def accounts_list(session: Session, logos: bool, as_json: bool) -> None:
    """List the accounts of every installed connector."""

    async def _list():
        accounts = await session.open()
        listing = await accounts.collect_accounts(load_logos=logos)
        return listing, await accounts.defaults.get_default()

    listing, default = _run(_list())

    for connector_id, message in listing.failures.items():
        err_console.print(f"[yellow]Warning:[/yellow] connector '{connector_id}' failed: {message}", highlight=False)

    if as_json:
        print_json([_account_row(account, default) for account in listing.accounts])
        return

    if not listing.accounts:
        console.print("[dim]No email accounts found.[/dim]")
        return

    table = Table(title="Email Accounts")
    table.add_column("Account", style="cyan")
    table.add_column("Name")
    table.add_column("Address")
    table.add_column("Default", justify="center")
    if logos:
        table.add_column("Logo", justify="right")

    for account in listing.accounts:
        row = [
            str(account.ref),
            account.name,
            account.email_address,
            "[green]✓[/green]" if account.ref == default else "[dim]-[/dim]",
        ]
        if logos:
            row.append(f"{len(account.logo)} B" if account.logo else "-")
        table.add_row(*row)

    console.print(table)


@accounts_group.command("delete")
@click.argument("refs", nargs=-1, required=True)
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation and default account prompts.")
@click.pass_obj
def accounts_delete(session: Session, refs: tuple[str, ...], yes: bool) -> None:
    """Delete accounts given as CONNECTOR:ACCOUNT_ID."""
    parsed = [_parse_ref(ref) for ref in refs]

    async def _delete():
        session.context.require_admin("delete email accounts")
        accounts = await session.open()
        listing = await accounts.collect_accounts()
        # Unlisted refs still reach delete_accounts: skipped or a no-op there.
        targets = [
            listing.find(ref) or EmailAccount(account_id=ref.account_id, connector=ref.connector)
            for ref in parsed
        ]
        deleted = await accounts.delete_accounts(
            targets, session.context, prompt=session.config.prompt and not yes
        )
        return deleted, await accounts.defaults.get_default()

    deleted, default = _run(_delete())

    if not deleted:
        console.print("[dim]Nothing deleted.[/dim]")
        return
    for ref in deleted:
        print_success(f"Email account '{ref}' deleted.")
    if default is not None:
        console.print(f"Default account: [cyan]{default}[/cyan]", highlight=False)
    else:
        console.print("[dim]No default account.[/dim]")


@accounts_group.command("default")
@click.argument("ref", required=False)
@click.pass_obj
def accounts_default(session: Session, ref: str | None) -> None:
    """Show the default account, or make CONNECTOR:ACCOUNT_ID the default."""
    target = _parse_ref(ref) if ref else None

    async def _default():
        accounts = await session.open()
        if target is not None:
            account = await _resolve(accounts, target)
            await accounts.make_default(account, session.context)
            return account
        return await accounts.defaults.get_default_account()

    account = _run(_default())

    if target is not None:
        print_success(f"Default email account set to '{account.ref}'.")
    elif account is None:
        console.print("[dim]No default account.[/dim]")
    else:
        console.print(account.describe(), highlight=False)


# ============================================================================
# Connectors
# ============================================================================

@cli.group("connectors")
def connectors_group() -> None:
    """Inspect installed connectors."""


@connectors_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def connectors_list(session: Session, as_json: bool) -> None:
    """List installed connectors with their description."""

    async def _list():
        accounts = await session.open()
        return await accounts.list_all_connectors()

    infos = _run(_list())

    if as_json:
        print_json([
            {
                "connector": info.connector,
                "description": info.description,
                "logo": base64.b64encode(info.logo).decode("ascii") if info.logo else None,
            }
            for info in infos
        ])
        return

    table = Table(title="Installed Connectors")
    table.add_column("Connector", style="cyan")
    table.add_column("Description")
    table.add_column("Logo", justify="right")
    for info in infos:
        table.add_row(info.connector, info.description, f"{len(info.logo)} B" if info.logo else "-")
    console.print(table)


# ============================================================================
# Scenarios
# ============================================================================

@cli.group("scenarios")
def scenarios_group() -> None:
    """Bind usage scenarios to accounts."""


@scenarios_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def scenarios_list(session: Session, as_json: bool) -> None:
    """List scenario bindings."""

    async def _list():
        accounts = await session.open()
        return await accounts.db.scenarios.list_all()

    rows = _run(_list())

    if as_json:
        print_json(rows)
        return
    if not rows:
        console.print("[dim]No scenarios assigned.[/dim]")
        return

    table = Table(title="Scenarios")
    table.add_column("Scenario", style="cyan")
    table.add_column("Account")
    table.add_column("Updated")
    for row in rows:
        ref = AccountRef(row["account_id"], row["connector"])
        table.add_row(row["scenario"], str(ref), str(row.get("updated_at") or "-"))
    console.print(table)


@scenarios_group.command("assign")
@click.argument("scenario")
@click.argument("ref")
@click.pass_obj
def scenarios_assign(session: Session, scenario: str, ref: str) -> None:
    """Bind SCENARIO to the account CONNECTOR:ACCOUNT_ID."""
    target = _parse_ref(ref)

    async def _assign():
        accounts = await session.open()
        account = await _resolve(accounts, target)
        if scenario == DEFAULT_SCENARIO:
            await accounts.make_default(account, session.context)
        else:
            session.context.require_admin("assign email scenarios")
            await accounts.db.scenarios.assign(scenario, account.ref)

    _run(_assign())
    print_success(f"Scenario '{scenario}' assigned to '{target}'.")


@scenarios_group.command("unassign")
@click.argument("scenario")
@click.pass_obj
def scenarios_unassign(session: Session, scenario: str) -> None:
    """Remove the binding of SCENARIO."""

    async def _unassign():
        session.context.require_admin("assign email scenarios")
        accounts = await session.open()
        return await accounts.db.scenarios.unassign(scenario)

    if _run(_unassign()):
        print_success(f"Scenario '{scenario}' unassigned.")
    else:
        console.print(f"[dim]Scenario '{scenario}' was not assigned.[/dim]", highlight=False)


# ============================================================================
# SMTP accounts
# ============================================================================

@cli.group("smtp")
def smtp_group() -> None:
    """Manage accounts of the built-in SMTP connector."""


@smtp_group.command("add")
@click.argument("account_id")
@click.option("--name", "-n", help="Display name (defaults to the address).")
@click.option("--email", "email_address", required=True, help="Sender address.")
@click.option("--host", "-h", required=True, help="SMTP server hostname.")
@click.option("--port", "-p", type=int, default=587, show_default=True, help="SMTP server port.")
@click.option("--user", "-u", "smtp_user", help="SMTP username.")
@click.option("--password", help="SMTP password.")
@click.option("--tls/--no-tls", default=None, help="Use TLS (STARTTLS on 587, implicit on 465).")
@click.pass_obj
def smtp_add(
    session: Session,
    account_id: str,
    name: str | None,
    email_address: str,
    host: str,
    port: int,
    smtp_user: str | None,
    password: str | None,
    tls: bool | None,
) -> None:
    """Create or update an SMTP account."""

    async def _add():
        session.context.require_admin("add email accounts")
        accounts = await session.open()
        connector = accounts.registry.require(SmtpConnector.name)
        return await connector.add_account(
            account_id,
            email_address=email_address,
            host=host,
            name=name,
            port=port,
            user=smtp_user,
            password=password,
            use_tls=tls,
        )

    account = _run(_add())
    print_success(f"SMTP account '{account.ref}' saved ({account.email_address}).")


# ============================================================================
# Rate limits
# ============================================================================

@cli.group("ratelimit")
def ratelimit_group() -> None:
    """Per-account send limits."""


@ratelimit_group.command("set")
@click.argument("ref")
@click.option("--per-minute", type=int, help="Max emails per minute (0=unlimited).")
@click.option("--per-hour", type=int, help="Max emails per hour (0=unlimited).")
@click.option("--per-day", type=int, help="Max emails per day (0=unlimited).")
@click.pass_obj
def ratelimit_set(
    session: Session,
    ref: str,
    per_minute: int | None,
    per_hour: int | None,
    per_day: int | None,
) -> None:
    """Set the send limits of CONNECTOR:ACCOUNT_ID."""
    target = _parse_ref(ref)

    async def _set():
        session.context.require_admin("change rate limits")
        accounts = await session.open()
        account = await _resolve(accounts, target)
        await accounts.db.rate_limits.set_limits(
            account.ref, per_minute=per_minute, per_hour=per_hour, per_day=per_day
        )

    _run(_set())
    print_success(f"Rate limits of '{target}' updated.")


@ratelimit_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def ratelimit_list(session: Session, as_json: bool) -> None:
    """List configured send limits."""

    async def _list():
        accounts = await session.open()
        return await accounts.db.rate_limits.list_all()

    rows = _run(_list())

    if as_json:
        print_json(rows)
        return
    if not rows:
        console.print("[dim]No rate limits configured.[/dim]")
        return

    table = Table(title="Rate Limits")
    table.add_column("Account", style="cyan")
    table.add_column("Minute", justify="right")
    table.add_column("Hour", justify="right")
    table.add_column("Day", justify="right")
    for row in rows:
        table.add_row(
            str(AccountRef(row["account_id"], row["connector"])),
            str(row.get("limit_per_minute") or "-"),
            str(row.get("limit_per_hour") or "-"),
            str(row.get("limit_per_day") or "-"),
        )
    console.print(table)


# ============================================================================
# Address validation
# ============================================================================

@cli.command("validate")
@click.argument("text")
@click.option("--allow-empty", is_flag=True, help="Accept an empty list.")
def validate_cmd(text: str, allow_empty: bool) -> None:
    """Validate a ';'-separated list of email addresses."""
    try:
        addresses = validate_addresses(text, allow_empty=allow_empty)
    except ValueError as exc:
        _fail(str(exc))
    for address in addresses:
        click.echo(address)


def main() -> None:
    """Entry point of the ``mail-accounts`` script."""
    cli()


if __name__ == "__main__":
    main()
