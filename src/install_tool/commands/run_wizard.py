# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

import sys
from typing import Optional
import click
from rich.console import Console

from ..config import Config
from ..db import DatabaseError
from ..wizards import available_wizards, build_services, get_wizard, WizardNotFoundError

console = Console()


def _run_one(wizard, debug: bool) -> bool:
    console.print(f"[blue]Running {wizard.identifier}: {wizard.title}[/blue]")
    result = wizard.perform_update()

    if debug and result.database_queries:
        console.print("[dim]Executed queries:[/dim]")
        for query in result.database_queries:
            console.print(f"  {query}", style="dim", markup=False)

    if result.success:
        console.print(f"[green]✓ {wizard.identifier} finished[/green]")
        if result.custom_message:
            console.print(result.custom_message)
    else:
        console.print(f"[red]✗ {wizard.identifier} failed[/red]")
        if result.custom_message:
            console.print(f"[red]{result.custom_message}[/red]")
    return result.success


@click.command('run', context_settings={'help_option_names': ['-h', '--help']})
@click.argument('identifier', required=False)
@click.option('--all', 'run_all', is_flag=True, help='Run every wizard that needs an update')
@click.option('-y', '--assume-yes', is_flag=True, help='Assume "yes" for confirmation prompts')
@click.pass_context
def run_wizard(ctx, identifier: Optional[str], run_all: bool, assume_yes: bool):
    """
    Run an upgrade wizard.

    Examples:

      install-tool run redirectsExtension

      install-tool run --all -y
    """
    if not identifier and not run_all:
        console.print("[red]Error: Give a wizard identifier or --all[/red]")
        sys.exit(1)

    config: Config = ctx.obj['config']
    debug = ctx.obj.get('debug', False)
    assume_yes = assume_yes or ctx.obj.get('assume_yes', False)
    pool, state, installer = build_services(config)

    try:
        if run_all:
            wizards = [w for w in available_wizards(pool, state, installer) if w.check_for_update()]
        else:
            wizard = get_wizard(identifier, pool, state, installer)
            wizards = [wizard] if wizard.check_for_update() else []

        if not wizards:
            console.print("[green]✓ No update needed[/green]")
            return

        for wizard in wizards:
            if not assume_yes and not click.confirm(f"Run '{wizard.identifier}'?", default=True):
                console.print("[yellow]Skipped[/yellow]")
                continue
            if not _run_one(wizard, debug):
                sys.exit(1)
    except (WizardNotFoundError, DatabaseError) as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    finally:
        pool.close_all()


@click.command('mark-undone', context_settings={'help_option_names': ['-h', '--help']})
@click.argument('identifier')
@click.pass_context
def mark_undone(ctx, identifier: str):
    """Reset a wizard so it is offered again."""
    config: Config = ctx.obj['config']
    pool, state, installer = build_services(config)

    try:
        wizard = get_wizard(identifier, pool, state, installer)
        if not wizard.is_wizard_done():
            console.print(f"[yellow]{identifier} is not marked as done[/yellow]")
            return
        state.mark_undone(identifier)
        console.print(f"[green]✓ {identifier} marked as not done[/green]")
    except WizardNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    finally:
        pool.close_all()
