"""Display modes offered to the rendering side."""

from enum import IntEnum


class DisplayMode(IntEnum):
    """How a generated mesh is drawn; the value is what the shader receives."""
    WIREFRAME = 0
    FLAT = 1
    SMOOTH = 2

    @classmethod
    def from_name(cls, name: str) -> 'DisplayMode':
        try:
            return cls[name.upper()]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown display mode '{name}'. Valid modes: {valid}")


def needs_index_rebuild(previous: DisplayMode, current: DisplayMode) -> bool:
    """
    Whether switching modes requires uploading a different index buffer.

    Flat and smooth shading draw the same triangle list; only switching to or
    from wireframe swaps between triangles and lines.
    """
    return previous != current and previous * current == 0
