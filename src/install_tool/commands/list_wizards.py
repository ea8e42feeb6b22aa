# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

import sys
import click
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..db import DatabaseError
from ..wizards import available_wizards, build_services, get_wizard, WizardNotFoundError

console = Console()


def _status(wizard) -> str:
    if wizard.is_wizard_done():
        return "[green]done[/green]"
    if wizard.check_for_update():
        return "[yellow]update needed[/yellow]"
    return "[dim]not needed[/dim]"


@click.command('list', context_settings={'help_option_names': ['-h', '--help']})
@click.pass_context
def list_wizards(ctx):
    """List upgrade wizards and whether they need to run."""
    config: Config = ctx.obj['config']
    pool, state, installer = build_services(config)

    try:
        table = Table(title="Upgrade wizards")
        table.add_column("Identifier", style="cyan", no_wrap=True)
        table.add_column("Title")
        table.add_column("Status", no_wrap=True)

        for wizard in available_wizards(pool, state, installer):
            table.add_row(wizard.identifier, wizard.title, _status(wizard))

        console.print(table)
    except DatabaseError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    finally:
        pool.close_all()


@click.command('check', context_settings={'help_option_names': ['-h', '--help']})
@click.argument('identifier')
@click.pass_context
def check(ctx, identifier: str):
    """Show what a wizard does and whether it needs to run."""
    config: Config = ctx.obj['config']
    pool, state, installer = build_services(config)

    try:
        wizard = get_wizard(identifier, pool, state, installer)
        console.print(f"[bold]{wizard.title}[/bold]\n")
        console.print(wizard.description)
        console.print()

        if wizard.check_for_update():
            console.print("[yellow]Update needed[/yellow]")
        elif wizard.is_wizard_done():
            console.print("[green]✓ Already done[/green]")
        else:
            console.print("[green]✓ No update needed[/green]")
    except (WizardNotFoundError, DatabaseError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    finally:
        pool.close_all()
