#!/usr/bin/env python3
"""
Build command for TCon CLI.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.panel import Panel

from tcon.config import load_pipeline, save_pipeline
from tcon.exceptions import TConException
from tcon.export import export_obj
from tcon.render import DisplayMode
from tcon.cli.core import (
    console,
    print_error,
    print_warning,
    print_pipeline_table,
    print_mesh_summary,
    get_config_value,
    update_recent_pipelines,
)

logger = logging.getLogger(__name__)


def build_command(
    pipeline_file: Path = typer.Argument(..., help="Pipeline document (JSON)", exists=True, dir_okay=False),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed override, -1 for a fresh one"),
    upto: Optional[int] = typer.Option(None, "--upto", "-u", help="Build only up to this stage index"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="OBJ output path (default <seed>.obj)"),
    export: bool = typer.Option(True, "--export/--no-export", help="Write an OBJ file"),
    display: str = typer.Option("smooth", "--display", "-d", help="Display mode: wireframe, flat or smooth"),
    record: bool = typer.Option(False, "--record", help="Store stage times and the used seed in the document"),
):
    """Replay a pipeline, report stage times and export the mesh."""
    try:
        mode = DisplayMode.from_name(display)
        pipeline = load_pipeline(pipeline_file)
        if seed is not None:
            pipeline.seed = seed
        elif pipeline.seed < 0:
            pipeline.seed = get_config_value("default_seed", -1)

        with console.status("[info]Building mesh..."):
            result = pipeline.build(upto=upto)

        print_pipeline_table(pipeline, title=f"Pipeline {pipeline_file.name}")
        print_mesh_summary(result)

        indices = result.render_indices(mode)
        unit = "line segments" if mode is DisplayMode.WIREFRAME else "triangles"
        per_item = 2 if mode is DisplayMode.WIREFRAME else 3
        console.print(f"{mode.name.lower()} display: [value]{len(indices) // per_item:,}[/value] {unit}")

        if not result.mesh.is_finite():
            print_warning("Mesh contains non-finite values; exported data will include them")

        if export:
            output_dir = get_config_value("output_dir", ".")
            path = export_obj(result, output_dir=output_dir, filename=str(output) if output else None)
            console.print(Panel.fit(
                f"Exported [filename]{path}[/filename]\nSeed: [value]{result.seed}[/value]",
                title="Export Complete",
                border_style="green",
            ))

        if record:
            pipeline.retrieve_seed()
            save_pipeline(pipeline, pipeline_file)

        update_recent_pipelines(str(pipeline_file))
    except (TConException, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1)
