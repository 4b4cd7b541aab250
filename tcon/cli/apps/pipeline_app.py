#!/usr/bin/env python3
"""
Pipeline editing app for TCon CLI.

Mirrors the stage controls of the editor: add from the defaults list,
delete, move up and down, and seed retrieve/reset.
"""

from pathlib import Path

import typer

from tcon.config import default_pipeline, load_pipeline, save_pipeline
from tcon.exceptions import PipelineError, TConException
from tcon.operations import get_available_operations
from tcon.cli.core import console, print_error, print_success, print_pipeline_table


def create_pipeline_app() -> typer.Typer:
    """Create the pipeline editing app with all commands."""
    pipeline_app = typer.Typer(help="Create and edit pipeline documents")

    pipeline_app.command(name="init")(pipeline_init)
    pipeline_app.command(name="show")(pipeline_show)
    pipeline_app.command(name="add")(pipeline_add)
    pipeline_app.command(name="remove")(pipeline_remove)
    pipeline_app.command(name="move")(pipeline_move)
    pipeline_app.command(name="seed")(pipeline_seed)

    return pipeline_app


def _edit(path: Path, action) -> None:
    try:
        pipeline = load_pipeline(path)
        message = action(pipeline)
        save_pipeline(pipeline, path)
    except TConException as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    print_success(message)
    print_pipeline_table(pipeline)


def pipeline_init(
    path: Path = typer.Argument(..., help="Pipeline document to create"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write a default pipeline document."""
    if path.exists() and not force:
        print_error(f"{path} already exists (use --force to overwrite)")
        raise typer.Exit(code=1)
    try:
        save_pipeline(default_pipeline(), path)
    except TConException as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    print_success(f"Created pipeline {path}")


def pipeline_show(path: Path = typer.Argument(..., help="Pipeline document", exists=True, dir_okay=False)):
    """List the stages of a pipeline."""
    try:
        pipeline = load_pipeline(path)
    except TConException as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    print_pipeline_table(pipeline, title=f"Pipeline {path.name}")


def pipeline_add(
    path: Path = typer.Argument(..., help="Pipeline document", exists=True, dir_okay=False),
    kind: str = typer.Argument(..., help=f"Operation type ({', '.join(get_available_operations())})"),
):
    """Append an operation with default parameters."""
    _edit(path, lambda p: f"Added {p.add_default(kind).caption}")


def pipeline_remove(
    path: Path = typer.Argument(..., help="Pipeline document", exists=True, dir_okay=False),
    index: int = typer.Argument(..., help="Stage index"),
):
    """Delete a stage."""
    _edit(path, lambda p: f"Removed {p.delete(index).caption}")


def pipeline_move(
    path: Path = typer.Argument(..., help="Pipeline document", exists=True, dir_okay=False),
    index: int = typer.Argument(..., help="Stage index"),
    direction: str = typer.Argument(..., help="up or down"),
):
    """Swap a stage with its neighbour."""
    def move(pipeline):
        if direction == "up":
            pipeline.move_up(index)
        elif direction == "down":
            pipeline.move_down(index)
        else:
            raise PipelineError(f"direction must be 'up' or 'down', got '{direction}'")
        return f"Moved stage {index} {direction}"

    _edit(path, move)


def pipeline_seed(
    path: Path = typer.Argument(..., help="Pipeline document", exists=True, dir_okay=False),
    value: int = typer.Argument(..., help="Seed to pin, or -1 to draw a fresh seed per build"),
):
    """Pin or reset the seed of a pipeline."""
    def set_seed(pipeline):
        if value < -1:
            raise PipelineError(f"seed must be -1 or non-negative, got {value}")
        pipeline.seed = value
        return "Seed reset to random" if value == -1 else f"Seed pinned to {value}"

    _edit(path, set_seed)
