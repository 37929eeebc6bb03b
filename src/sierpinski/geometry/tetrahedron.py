# tetrahedron.py
"""
Regular tetrahedron placement and point-in-tetrahedron tests.

The base triangle lies in the y=0 plane and the apex sits on the +y axis:

    A = (-s/2, 0, -r)    B = (s/2, 0, -r)    C = (0, 0, 2r)    D = (0, h, 0)

with r = s*sqrt(3)/6 the inradius of the base triangle and h = s*sqrt(2/3)
the height of the apex above the base. Callers wanting another orientation
transform the result themselves.
"""

import math

import numpy as np

from sierpinski.errors import rejected
from sierpinski.models import Tetrahedron
from sierpinski.types import POSITIONS, WEIGHTS


def compute_vertices(size: float) -> Tetrahedron:
    """
    Compute the 4 vertices of a regular tetrahedron with edge length ``size``.

    Args:
        size: Edge length, must be finite and > 0

    Returns:
        Tetrahedron with vertices in order A, B, C, D

    Raises:
        InvalidParameter: for zero, negative or non-finite sizes
    """
    if isinstance(size, bool) or not isinstance(size, (int, float, np.integer, np.floating)):
        raise rejected(f"size must be a real number, got {size!r}")
    try:
        s = float(size)
    except OverflowError:
        raise rejected(f"size is too large for a float, got {size!r}") from None
    if not math.isfinite(s) or s <= 0:
        raise rejected(f"size must be a finite number > 0, got {size!r}")

    inr = s * math.sqrt(3) / 6
    h = s * math.sqrt(2 / 3)

    return Tetrahedron(
        [
            [-s / 2, 0.0, -inr],
            [s / 2, 0.0, -inr],
            [0.0, 0.0, 2 * inr],
            [0.0, h, 0.0],
        ],
        size=s,
    )


def centroid(tetra: Tetrahedron) -> np.ndarray:
    return tetra.vertices.mean(axis=0)


def barycentric(tetra: Tetrahedron, points: POSITIONS) -> WEIGHTS:
    """Barycentric weights of ``points`` (shape (3,) or (N, 3)) w.r.t. the vertices."""
    pts = np.asarray(points, dtype=np.float64)
    single = pts.ndim == 1
    pts = pts.reshape(-1, 3)

    a = tetra.vertices[0]
    # Columns are the edge vectors AB, AC, AD
    edges = (tetra.vertices[1:] - a).T
    rest = np.linalg.solve(edges, (pts - a).T).T
    weights = np.column_stack([1.0 - rest.sum(axis=1), rest])
    return weights[0] if single else weights


def contains(tetra: Tetrahedron, points: POSITIONS, tol: float = 1e-9) -> np.ndarray | bool:
    """True where a point lies inside or on the boundary of the tetrahedron."""
    weights = barycentric(tetra, points)
    inside = np.all(weights >= -tol, axis=-1)
    return bool(inside) if np.ndim(inside) == 0 else inside
