# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

import sys
from pathlib import Path
import click
from rich.console import Console

console = Console()


@click.command('init-config', context_settings={'help_option_names': ['-h', '--help']})
@click.option(
    '--output', '-o',
    default='install_tool.toml',
    type=click.Path(dir_okay=False),
    help='Where to write the config file (default: install_tool.toml)'
)
@click.option('-y', '--assume-yes', is_flag=True, help='Assume "yes" for confirmation prompts')
@click.pass_context
def init_config(ctx, output: str, assume_yes: bool):
    """Create an example configuration file."""
    template_path = Path(__file__).parent.parent / "config_template.toml"
    example_config = template_path.read_text(encoding='utf-8')

    config_path = Path(output)
    assume_yes = assume_yes or ctx.obj.get('assume_yes', False)
    if config_path.exists():
        console.print(f"[yellow]Configuration file already exists at {config_path}[/yellow]")
        if not assume_yes and not click.confirm("Overwrite it?", default=False):
            console.print("[yellow]Cancelled[/yellow]")
            sys.exit(1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(example_config, encoding='utf-8')
    console.print(f"[green]✓ Created configuration file: {config_path}[/green]")
    console.print("\n[blue]Next steps:[/blue]")
    console.print("1. Set database.connections.Default.path to your database file")
    console.print("2. Run: install-tool list")
