# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

import sys
from pathlib import Path
from typing import Optional
import click
from rich.console import Console
import tomlkit

from ..config import find_config_path
from ..migrations import MigrationManager, MigrationError

console = Console()


@click.command('update-config', context_settings={'help_option_names': ['-h', '--help']})
@click.option(
    '--dry-run',
    is_flag=True,
    help='Show what would be upgraded without making changes'
)
@click.option(
    '--target-version',
    help='Target version to upgrade to (default: latest)'
)
@click.option('-y', '--assume-yes', is_flag=True, help='Assume "yes" for confirmation prompts')
@click.pass_context
def update_config(ctx, dry_run: bool, target_version: Optional[str], assume_yes: bool):
    """Update configuration file to the latest version.

    This command upgrades your install_tool.toml configuration file to the
    latest format version, applying any necessary migrations.
    """
    config_path = find_config_path(ctx.parent.params.get('config') if ctx.parent else None)
    if not config_path:
        console.print("[red]Error: No configuration file found[/red]")
        console.print("Please specify a config file with --config or create one using:")
        console.print("  install-tool init-config")
        sys.exit(1)

    config_path = Path(config_path)
    console.print(f"[blue]Checking configuration file: {config_path}[/blue]\n")

    # tomlkit keeps the user's comments
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = tomlkit.load(f)
    except Exception as e:
        console.print(f"[red]Error reading config file: {e}[/red]")
        sys.exit(1)

    manager = MigrationManager()
    current_version = data.get('config_version', manager.UNVERSIONED)
    target_ver = target_version or manager.CURRENT_VERSION

    console.print(f"Current version: [yellow]{current_version}[/yellow]")
    console.print(f"Target version:  [green]{target_ver}[/green]\n")

    if manager.compare_versions(current_version, target_ver) >= 0:
        console.print("[green]✓ Configuration is already up to date![/green]")
        return

    console.print("[blue]Changes:[/blue]")
    console.print(manager.get_changes_description(current_version, target_ver))
    console.print()

    if dry_run:
        console.print("[yellow]Dry-run mode: No changes made[/yellow]")
        return

    assume_yes = assume_yes or ctx.obj.get('assume_yes', False)
    if not assume_yes:
        if not click.confirm(f"Upgrade config from v{current_version} to v{target_ver}?"):
            console.print("[yellow]Upgrade cancelled[/yellow]")
            return

    try:
        console.print("[blue]Upgrading configuration...[/blue]")
        upgraded_data = manager.upgrade_config(data, target_ver)

        with open(config_path, 'w', encoding='utf-8') as f:
            f.write(tomlkit.dumps(upgraded_data))

        console.print(f"[green]✓ Configuration upgraded to v{target_ver}![/green]")
        console.print(f"[green]✓ Saved to {config_path}[/green]")
    except MigrationError as e:
        console.print(f"[red]Error during upgrade: {e}[/red]")
        sys.exit(1)
