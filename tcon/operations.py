"""
Pipeline operations.

Each operation kind is a small frozen dataclass carrying its own parameters.
The class name is the kind used in pipeline documents, and every class
registers itself so documents and the CLI can build operations by name.
Parameter constraints are checked when an operation is created; execution
never validates.
"""

import logging
import numbers
from dataclasses import dataclass, asdict, fields
from typing import Any, ClassVar, Dict, List, Tuple, Type

from tcon.exceptions import OperationError

logger = logging.getLogger(__name__)

Axes = Tuple[bool, bool, bool]

# Operation registry, in declaration order
_OPERATION_REGISTRY: Dict[str, Type['Operation']] = {}


def register_operation(cls: Type['Operation']) -> Type['Operation']:
    """Register an operation class under its class name."""
    _OPERATION_REGISTRY[cls.__name__] = cls
    logger.debug(f"Registered operation: {cls.__name__}")
    return cls


def _check_amount(name: str, value: Any, upper: float = float('inf')) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise OperationError(f"{name} must be a number, got {value!r}")
    if not 0.0 <= value <= upper:
        bounds = f"between 0 and {upper}" if upper != float('inf') else "non-negative"
        raise OperationError(f"{name} must be {bounds}, got {value}")


def _check_count(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise OperationError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise OperationError(f"{name} cannot be negative, got {value}")


def _check_axes(value: Any) -> Axes:
    try:
        axes = tuple(value)
    except TypeError:
        raise OperationError(f"axes must be three booleans, got {value!r}")
    if len(axes) != 3 or not all(isinstance(a, bool) for a in axes):
        raise OperationError(f"axes must be three booleans, got {value!r}")
    return axes


@dataclass(frozen=True)
class Operation:
    """Base class of all pipeline operations."""
    caption: ClassVar[str] = ""
    legacy: ClassVar[bool] = False

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Check parameter constraints.

        Raises:
            OperationError: If a parameter is out of range
        """
        pass

    @property
    def kind(self) -> str:
        return type(self).__name__

    @property
    def parameters(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def as_dict(self) -> Dict[str, Any]:
        """Serializable form used by pipeline documents."""
        data = {"type": self.kind}
        for name, value in asdict(self).items():
            data[name] = list(value) if isinstance(value, tuple) else value
        return data

    def replace(self, **changes) -> 'Operation':
        """Copy of this operation with some parameters changed."""
        params = self.parameters
        params.update(changes)
        return create_operation(self.kind, **params)

    def __str__(self) -> str:
        params = ", ".join(f"{k}={v}" for k, v in self.parameters.items())
        return f"{self.caption}({params})"


@register_operation
@dataclass(frozen=True)
class AddTriangle(Operation):
    caption: ClassVar[str] = "Add Triangle"
    size: float = 5.0

    def validate(self) -> None:
        _check_amount("size", self.size)


@register_operation
@dataclass(frozen=True)
class AddTriSquare(Operation):
    caption: ClassVar[str] = "Add Triangle Square"
    size: float = 5.0

    def validate(self) -> None:
        _check_amount("size", self.size)


@register_operation
@dataclass(frozen=True)
class AddTriangleGrid(Operation):
    caption: ClassVar[str] = "Add Triangle Grid"
    size: float = 10.0
    subdivisions: int = 20

    def validate(self) -> None:
        _check_amount("size", self.size)
        _check_count("subdivisions", self.subdivisions)


@register_operation
@dataclass(frozen=True)
class AddTriSquareGrid(Operation):
    caption: ClassVar[str] = "Add Triangle Square Grid"
    size: float = 10.0
    subdivisions: int = 20

    def validate(self) -> None:
        _check_amount("size", self.size)
        _check_count("subdivisions", self.subdivisions)


@register_operation
@dataclass(frozen=True)
class Subdivide(Operation):
    caption: ClassVar[str] = "Subdivide"
    iterations: int = 1

    def validate(self) -> None:
        _check_count("iterations", self.iterations)


@register_operation
@dataclass(frozen=True)
class SubdivideSmooth(Operation):
    """Never implemented; subdividing then smoothing gives the same effect."""
    caption: ClassVar[str] = "Subdivide Smooth"
    legacy: ClassVar[bool] = True
    iterations: int = 5
    smoothness: float = 1.0


@register_operation
@dataclass(frozen=True)
class DisplaceRandom(Operation):
    caption: ClassVar[str] = "Displace Random"
    amount: float = 0.2
    axes: Axes = (False, True, False)

    def validate(self) -> None:
        _check_amount("amount", self.amount)
        object.__setattr__(self, "axes", _check_axes(self.axes))


@register_operation
@dataclass(frozen=True)
class DisplaceSmooth(Operation):
    caption: ClassVar[str] = "Displace Smooth"
    amount: float = 1.0
    scale: float = 1.0
    octaves: int = 1
    axes: Axes = (False, True, False)

    def validate(self) -> None:
        _check_amount("amount", self.amount)
        _check_amount("scale", self.scale)
        _check_count("octaves", self.octaves)
        object.__setattr__(self, "axes", _check_axes(self.axes))


@register_operation
@dataclass(frozen=True)
class Smooth(Operation):
    caption: ClassVar[str] = "Smooth"
    amount: float = 0.5
    iterations: int = 1

    def validate(self) -> None:
        _check_amount("amount", self.amount, upper=1.0)
        _check_count("iterations", self.iterations)


@register_operation
@dataclass(frozen=True)
class MergeCleanup(Operation):
    """Retired: subdivision shares midpoints, so there is nothing left to merge."""
    caption: ClassVar[str] = "Merge Cleanup"
    legacy: ClassVar[bool] = True


@register_operation
@dataclass(frozen=True)
class FractalTerrain(Operation):
    caption: ClassVar[str] = "Fractal Terrain"
    iterations: int = 6
    displacement_start: float = 2.0
    displacement_decay: float = 2.0

    def validate(self) -> None:
        _check_count("iterations", self.iterations)
        _check_amount("displacement_start", self.displacement_start)
        if isinstance(self.displacement_decay, bool) or not isinstance(self.displacement_decay, numbers.Real):
            raise OperationError(f"displacement_decay must be a number, got {self.displacement_decay!r}")


# Offered when adding an operation, one of each active kind
DEFAULTS: Tuple[Operation, ...] = (
    AddTriangle(5.0),
    AddTriSquare(5.0),
    AddTriangleGrid(10.0, 20),
    AddTriSquareGrid(10.0, 20),
    Subdivide(1),
    DisplaceRandom(0.2, (False, True, False)),
    DisplaceSmooth(1.0, 1.0, 1, (False, True, False)),
    Smooth(0.5, 1),
    FractalTerrain(6, 2.0, 2.0),
)


def get_available_operations(include_legacy: bool = False) -> List[str]:
    """Registered operation kinds in declaration order."""
    return [name for name, cls in _OPERATION_REGISTRY.items() if include_legacy or not cls.legacy]


def get_operation_class(kind: str) -> Type[Operation]:
    """
    Look up an operation class by kind.

    Raises:
        OperationError: If no operation is registered under that name
    """
    try:
        return _OPERATION_REGISTRY[kind]
    except KeyError:
        available = ", ".join(get_available_operations(include_legacy=True))
        raise OperationError(f"Unknown operation '{kind}'. Available: {available}")


def create_operation(kind: str, **params) -> Operation:
    """
    Build an operation from its kind and parameters.

    Raises:
        OperationError: If the kind is unknown or a parameter is invalid
    """
    cls = get_operation_class(kind)
    if "axes" in params and isinstance(params["axes"], list):
        params["axes"] = tuple(params["axes"])
    try:
        return cls(**params)
    except TypeError as e:
        raise OperationError(f"Invalid parameters for {kind}: {e}") from e


def default_operation(kind: str) -> Operation:
    """Default-parameter instance of an active operation kind."""
    for operation in DEFAULTS:
        if operation.kind == kind:
            return operation
    get_operation_class(kind)
    raise OperationError(f"Operation '{kind}' is retired and has no default")


def operation_from_dict(data: Dict[str, Any]) -> Operation:
    """Inverse of Operation.as_dict()."""
    params = dict(data)
    try:
        kind = params.pop("type")
    except KeyError:
        raise OperationError(f"Operation entry has no 'type': {data!r}")
    return create_operation(kind, **params)
