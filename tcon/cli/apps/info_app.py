#!/usr/bin/env python3
"""
Information commands for TCon CLI.
"""

import typer
from rich.panel import Panel

from tcon.operations import DEFAULTS, get_available_operations, get_operation_class
from tcon.cli.core.ui import console, print_operations_table


def version_command():
    """Display TCon version information."""
    from tcon import __version__ as tcon_version
    from tcon.cli import __version__ as cli_version

    console.print(Panel.fit(
        f"[bold]Terrain Constructor[/bold]\n\n"
        f"CLI Version: {cli_version}\n"
        f"Core Version: {tcon_version}\n"
    ))


def operations_command(
    legacy: bool = typer.Option(False, "--legacy", help="Also list retired operations")
):
    """List the operations that can be added to a pipeline."""
    print_operations_table(DEFAULTS)

    if legacy:
        retired = [k for k in get_available_operations(include_legacy=True) if k not in get_available_operations()]
        for kind in retired:
            console.print(f"[warning]{kind}[/warning] ({get_operation_class(kind).caption}): retired, runs as a no-op")
