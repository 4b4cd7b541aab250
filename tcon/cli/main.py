#!/usr/bin/env python3
"""TCon Command-Line Interface"""
import logging
import sys

import typer

from tcon.cli.core import console, load_config, normalize_log_level
from tcon.cli.apps.build_app import build_command
from tcon.cli.apps.config_app import create_config_app
from tcon.cli.apps.info_app import operations_command, version_command
from tcon.cli.apps.pipeline_app import create_pipeline_app

logger = logging.getLogger(__name__)

# Create main app
app = typer.Typer(
    help="Terrain Constructor - build terrain meshes from pipelines of mesh operations",
    add_completion=False
)

app.command(name="build", help="Build a pipeline and export the mesh")(build_command)
app.command(name="operations", help="List available operations")(operations_command)
app.command(name="version", help="Show TCon version")(version_command)

app.add_typer(create_pipeline_app(), name="pipeline", help="Create and edit pipeline documents")
app.add_typer(create_config_app(), name="config", help="Configuration management")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress of every stage"),
):
    """
    Terrain Constructor command-line tools.

    Pipelines are JSON documents listing mesh operations; building one
    replays them from scratch and can export the result as OBJ.
    """
    setting = load_config().get("log_level", "WARNING")
    level = normalize_log_level(setting)
    logging.basicConfig(
        level=logging.INFO if verbose else (level or "WARNING"),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    if level is None:
        logger.warning(f"Unknown log_level setting {setting!r}, using WARNING")


def main():
    """Run the TCon CLI application."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
