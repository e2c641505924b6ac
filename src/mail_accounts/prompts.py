# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Interactive capabilities injected into the account services.

The services never talk to a terminal directly. They receive:

- a ConfirmDeletion callable, asked before accounts are deleted;
- an AccountChooser callable, asked to pick a new default account when the
  current one was deleted and several candidates remain.

Console implementations based on ``rich`` are provided for the CLI; tests
pass plain functions or lambdas.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table

if TYPE_CHECKING:
    from .models import EmailAccount

ConfirmDeletion = Callable[[Sequence["EmailAccount"]], bool]
AccountChooser = Callable[[Sequence["EmailAccount"]], "EmailAccount | None"]


class ConsoleConfirm:
    """Ask on the console before deleting accounts."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def __call__(self, accounts: Sequence[EmailAccount]) -> bool:
        if len(accounts) == 1:
            question = f"Delete email account [cyan]{accounts[0].describe()}[/cyan]?"
        else:
            for account in accounts:
                self.console.print(f"  - {account.describe()}")
            question = f"Delete these {len(accounts)} email accounts?"
        return Confirm.ask(question, console=self.console, default=False)


class ConsoleChooser:
    """Let the user pick the new default account from a numbered table."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def __call__(self, candidates: Sequence[EmailAccount]) -> EmailAccount | None:
        if not candidates:
            return None

        table = Table(title="Choose the new default email account", show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Name")
        table.add_column("Address")
        table.add_column("Connector")
        for i, account in enumerate(candidates, start=1):
            table.add_row(str(i), account.name, account.email_address, account.connector)
        self.console.print(table)

        choices = [str(i) for i in range(1, len(candidates) + 1)] + [""]
        answer = Prompt.ask(
            "Account number (leave empty for none)",
            console=self.console,
            choices=choices,
            default="",
            show_choices=False,
        )
        if not answer:
            return None
        return candidates[int(answer) - 1]


__all__ = ["AccountChooser", "ConfirmDeletion", "ConsoleChooser", "ConsoleConfirm"]
