# color.py
import numpy as np

from sierpinski.errors import rejected
from sierpinski.sampling import RandomSource, draw_uniform
from sierpinski.types import COLORS, WEIGHTS

# One base color per vertex slot: red, green, blue, yellow
BASE_COLORS = np.array(
    [
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
        [1.0, 1.0, 0.0],
    ],
    dtype=np.float64,
)
BASE_COLORS.setflags(write=False)


def color_from_weights(weights: WEIGHTS, base_colors: np.ndarray = BASE_COLORS) -> COLORS:
    """
    Blend the vertex base colors by barycentric weights.

    A convex combination of colors in [0, 1] stays in [0, 1], so no clamping.
    Accepts a single (4,) vector or an (N, 4) batch.
    """
    w = np.asarray(weights, dtype=np.float64)
    if w.shape[-1:] != (4,) or w.ndim > 2:
        raise rejected(f"weights must have shape (4,) or (N, 4), got {w.shape}")
    return w @ base_colors


def random_colors(rng: RandomSource, count: int) -> COLORS:
    """Independent uniform RGB per point (used for the attractor cloud)."""
    return draw_uniform(rng, 3 * count).reshape(count, 3)
