"""
Pipeline documents.

A pipeline is stored as JSON::

    {
      "seed": -1,
      "operations": [
        {"type": "AddTriangleGrid", "size": 10.0, "subdivisions": 4},
        {"type": "FractalTerrain", "iterations": 5, "displacement_start": 1.53, "displacement_decay": 2.0}
      ],
      "times": [0.01, 0.42]
    }

"times" is optional and only informative: it records the stage timings of
the last build so they can be shown next to the stages.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from tcon.exceptions import ConfigError, OperationError
from tcon.operations import AddTriangle, operation_from_dict
from tcon.pipeline import Pipeline, RANDOM_SEED

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def default_pipeline() -> Pipeline:
    """Single triangle with a fresh seed per build."""
    return Pipeline([AddTriangle(5.0)], seed=RANDOM_SEED)


def pipeline_to_dict(pipeline: Pipeline, include_times: bool = True) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "seed": pipeline.seed,
        "operations": [stage.operation.as_dict() for stage in pipeline.stages],
    }
    if include_times:
        data["times"] = [stage.elapsed for stage in pipeline.stages]
    return data


def pipeline_from_dict(data: Dict[str, Any]) -> Pipeline:
    """
    Build a pipeline from its document form.

    Raises:
        ConfigError: If the document is malformed or an operation is invalid
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Pipeline document must be an object, got {type(data).__name__}")

    seed = data.get("seed", RANDOM_SEED)
    if isinstance(seed, bool) or not isinstance(seed, int) or seed < RANDOM_SEED:
        raise ConfigError(f"Seed must be -1 or a non-negative integer, got {seed!r}")

    entries = data.get("operations", [])
    if not isinstance(entries, list):
        raise ConfigError("'operations' must be a list")

    operations = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f"Operation {position} must be an object, got {entry!r}")
        try:
            operations.append(operation_from_dict(entry))
        except OperationError as e:
            raise ConfigError(f"Operation {position}: {e}") from e

    pipeline = Pipeline(operations, seed=seed)

    times = data.get("times", [])
    if isinstance(times, list):
        for stage, elapsed in zip(pipeline.stages, times):
            if isinstance(elapsed, (int, float)) and not isinstance(elapsed, bool):
                stage.elapsed = float(elapsed)

    return pipeline


def load_pipeline(path: PathLike) -> Pipeline:
    """
    Read a pipeline document.

    Raises:
        ConfigError: If the file is missing, not JSON or not a valid pipeline
    """
    path = Path(path)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Pipeline file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read pipeline file {path}: {e}") from e

    pipeline = pipeline_from_dict(data)
    logger.debug(f"Loaded pipeline with {len(pipeline)} stages from {path}")
    return pipeline


def save_pipeline(pipeline: Pipeline, path: PathLike, include_times: bool = True) -> Path:
    """
    Write a pipeline document.

    Raises:
        ConfigError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(pipeline_to_dict(pipeline, include_times), f, indent=2)
    except OSError as e:
        raise ConfigError(f"Cannot write pipeline file {path}: {e}") from e

    logger.debug(f"Saved pipeline with {len(pipeline)} stages to {path}")
    return path
