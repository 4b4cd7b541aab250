#!/usr/bin/env python3
"""
UI components for TCon CLI tools.

This module provides the shared console and the tables used to report
pipelines, builds and meshes.
"""

import logging
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

logger = logging.getLogger(__name__)

tcon_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "bold green",
    "filename": "bold blue",
    "value": "green",
    "key": "cyan",
    "header": "bold magenta",
})

console = Console(theme=tcon_theme)


def print_warning(message: str) -> None:
    console.print(f"[warning]Warning:[/warning] {message}")


def print_error(message: str) -> None:
    console.print(f"[error]Error:[/error] {message}")


def print_success(message: str) -> None:
    console.print(f"[success]{message}[/success]")


def format_time(seconds: float) -> str:
    """Stage time as shown next to a stage; stages that did not run show nothing."""
    return f"{seconds:.2f}s" if seconds > 0.0 else ""


def print_pipeline_table(pipeline, title: str = "Pipeline") -> None:
    """List the stages of a pipeline with their parameters and last times."""
    table = Table(title=title)
    table.add_column("#", style="key", justify="right")
    table.add_column("Operation", style="header")
    table.add_column("Parameters", style="value")
    table.add_column("Time", justify="right")

    for index, stage in enumerate(pipeline.stages):
        params = ", ".join(f"{k}={v}" for k, v in stage.operation.parameters.items())
        table.add_row(str(index), stage.operation.caption, params, format_time(stage.elapsed))

    console.print(table)
    seed = "random" if pipeline.seed < 0 else str(pipeline.seed)
    console.print(f"seed: [value]{seed}[/value]")


def print_mesh_summary(generated) -> None:
    """Show statistics of a generated mesh."""
    stats = generated.mesh.get_statistics()
    bbox = stats["bounding_box"]

    table = Table(title="Generated Mesh")
    table.add_column("Property", style="key")
    table.add_column("Value", style="value")

    table.add_row("Seed", str(generated.seed))
    table.add_row("Vertices", f"{stats['vertex_count']:,}")
    table.add_row("Triangles", f"{stats['triangle_count']:,}")
    table.add_row("Bounds min", ", ".join(f"{v:.3f}" for v in bbox["min"]))
    table.add_row("Bounds max", ", ".join(f"{v:.3f}" for v in bbox["max"]))
    table.add_row("Normals time", f"{generated.normals_time:.2f}s")
    if not stats["finite"]:
        table.add_row("Finite", "[warning]no, mesh contains NaN or Inf[/warning]")

    console.print(table)


def print_operations_table(operations: Sequence) -> None:
    """Describe operations available to add to a pipeline."""
    table = Table(title="Operations")
    table.add_column("Type", style="key")
    table.add_column("Caption", style="header")
    table.add_column("Default parameters", style="value")

    for operation in operations:
        params = ", ".join(f"{k}={v}" for k, v in operation.parameters.items())
        table.add_row(operation.kind, operation.caption, params)

    console.print(table)
