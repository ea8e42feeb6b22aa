# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Main CLI for the install tool."""

import sys
import logging
from typing import Optional
import click
from rich.console import Console
from rich.logging import RichHandler

from .config import load_config
from .migrations import MigrationError
from .commands.init_config import init_config
from .commands.update_config import update_config
from .commands.list_wizards import list_wizards, check
from .commands.run_wizard import run_wizard, mark_undone

console = Console()


def setup_logging(debug: bool = False):
    """Send log records through rich; --debug shows everything."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=debug)],
        force=True,
    )


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=True),
    help='Path to configuration file'
)
@click.option(
    '--auto',
    is_flag=True,
    help='Run in non-interactive mode (auto-upgrade config, skip prompts)'
)
@click.option(
    '-y', '--assume-yes',
    is_flag=True,
    help='Assume "yes" for all confirmation prompts'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Show detailed debug output'
)
@click.pass_context
def cli(ctx, config: Optional[str], auto: bool, assume_yes: bool, debug: bool):
    """Install tool: upgrade wizards for existing installations."""
    ctx.ensure_object(dict)
    ctx.obj['auto'] = auto
    ctx.obj['assume_yes'] = assume_yes or auto
    ctx.obj['debug'] = debug
    setup_logging(debug)
    # init-config and update-config work without a valid config
    if ctx.invoked_subcommand not in ['init-config', 'update-config']:
        try:
            ctx.obj['config'] = load_config(config, auto_upgrade=auto or assume_yes)
        except (FileNotFoundError, ValueError, MigrationError) as e:
            console.print(f"[red]Error: {e}[/red]")
            sys.exit(1)


cli.add_command(init_config)
cli.add_command(update_config)
cli.add_command(list_wizards)
cli.add_command(check)
cli.add_command(run_wizard)
cli.add_command(mark_undone)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
