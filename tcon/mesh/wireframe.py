"""Line list for the wireframe display mode."""

from typing import List, Set, Tuple

import numpy as np

from .buffer import INDEX_DTYPE


def wireframe_indices(indices: np.ndarray) -> np.ndarray:
    """
    Deduplicated edges of a triangle list.

    Edges are visited as (i0, i1), (i1, i2), (i0, i2) per triangle and kept
    in that orientation the first time their unordered pair is seen.

    Args:
        indices: Flat triangle index list

    Returns:
        Flat uint32 list of line endpoint pairs
    """
    seen: Set[Tuple[int, int]] = set()
    lines: List[int] = []

    for i0, i1, i2 in np.asarray(indices).reshape(-1, 3).tolist():
        for a, b in ((i0, i1), (i1, i2), (i0, i2)):
            key = (min(a, b), max(a, b))
            if key not in seen:
                seen.add(key)
                lines.extend((a, b))

    return np.asarray(lines, dtype=INDEX_DTYPE)
