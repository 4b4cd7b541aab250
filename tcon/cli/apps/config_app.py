#!/usr/bin/env python3
"""
Settings commands for TCon CLI.

Settings live in a JSON file in the home directory and only affect the
command-line tools; pipeline documents never read them.
"""

import typer
from rich.table import Table

from tcon.cli.core.ui import console, print_error, print_success
from tcon.cli.core.config import (
    SETTING_USAGE,
    get_config_path,
    load_config,
    normalize_log_level,
    parse_config_value,
    reset_config,
    set_config_value,
)


def create_config_app():
    """Create the settings app with show, set and reset."""
    config_app = typer.Typer(help="Manage TCon settings")

    config_app.command(name="show")(config_show)
    config_app.command(name="set")(config_set)
    config_app.command(name="reset")(config_reset)

    return config_app


def config_show():
    """List settings and the commands that read them."""
    config = load_config()

    table = Table(title=f"Settings ({get_config_path()})")
    table.add_column("Setting", style="key", no_wrap=True)
    table.add_column("Value", style="value")
    table.add_column("Read by")

    for key, value in sorted(config.items()):
        table.add_row(key, str(value), SETTING_USAGE.get(key, "[warning]unused[/warning]"))

    console.print(table)


def config_set(
    key: str = typer.Argument(..., help=f"Setting ({', '.join(SETTING_USAGE)})"),
    value: str = typer.Argument(..., help="New value")
):
    """Change one setting."""
    typed_value = parse_config_value(value)
    if key == "log_level":
        typed_value = normalize_log_level(value)
        if typed_value is None:
            print_error(f"Unknown log level '{value}' (use DEBUG, INFO, WARNING, ERROR or CRITICAL)")
            raise typer.Exit(code=1)

    set_config_value(key, typed_value)
    print_success(f"Setting updated: {key} = {typed_value}")


def config_reset():
    """Restore the default settings."""
    reset_config()
    print_success("Settings reset to default values")
