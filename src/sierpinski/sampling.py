# sampling.py
"""
Random point generation inside a tetrahedron.

Two samplers share one injectable random source:

1. Barycentric (volume fill): 3 sorted uniform cut points split [0, 1] into
   4 segments whose lengths are uniform over the 3-simplex (Dirichlet(1,1,1,1)).
2. Chaos game (attractor): a single point repeatedly moved halfway toward a
   randomly chosen vertex. After burn-in the visited points approximate the
   Sierpinski tetrahedron.

Every random number is drawn through ``RandomSource.random(size)`` so a fixed
sequence gives bit-identical output.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from numba import njit  # type: ignore
import numpy as np

from sierpinski.config import BURN_IN_STEPS
from sierpinski.errors import rejected
from sierpinski.models import Tetrahedron
from sierpinski.types import CHOICES, POSITIONS, VERTS, WEIGHTS

# ===============================
# RANDOM SOURCE
# ===============================


class RandomSource(Protocol):
    """Anything producing uniform floats in [0, 1); numpy's Generator qualifies."""

    def random(self, size: int) -> np.ndarray: ...


def make_rng(seed: int | None = None) -> np.random.Generator:
    return np.random.default_rng(seed)


def in_unit_interval(values: np.ndarray) -> bool:
    """True when every value lies in [0, 1); NaN fails the test."""
    return bool(np.all((values >= 0.0) & (values < 1.0)))


class SequenceRandomSource:
    """Replays a fixed list of uniform values, in order, then refuses to go on."""

    def __init__(self, values: Sequence[float] | np.ndarray) -> None:
        arr = np.asarray(values, dtype=np.float64).ravel()
        if not in_unit_interval(arr):
            raise rejected("sequence values must lie in [0, 1)")
        self._values = arr
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._pos

    def random(self, size: int) -> np.ndarray:
        if size > self.remaining:
            raise rejected(
                f"random sequence exhausted: {size} values requested, {self.remaining} left"
            )
        out = self._values[self._pos : self._pos + size].copy()
        self._pos += size
        return out


def draw_uniform(rng: RandomSource, size: int) -> np.ndarray:
    """Draw ``size`` values and check they really are in [0, 1)."""
    values = np.asarray(rng.random(size), dtype=np.float64).ravel()
    if values.shape != (size,):
        raise rejected(f"random source returned {values.shape[0]} values, expected {size}")
    if not in_unit_interval(values):
        raise rejected("random source returned values outside [0, 1)")
    return values


# ===============================
# BARYCENTRIC SAMPLER
# ===============================


def weights_from_cuts(cuts: np.ndarray) -> WEIGHTS:
    """Turn (N, 3) cut points into (N, 4) segment lengths of [0, 1]."""
    r = np.sort(cuts, axis=1)
    return np.column_stack(
        [
            r[:, 0],
            r[:, 1] - r[:, 0],
            r[:, 2] - r[:, 1],
            1.0 - r[:, 2],
        ]
    )


def sample_weights(rng: RandomSource, count: int) -> WEIGHTS:
    """Uniform barycentric weight vectors, shape (count, 4)."""
    cuts = draw_uniform(rng, 3 * count).reshape(count, 3)
    return weights_from_cuts(cuts)


def points_from_weights(tetra: Tetrahedron, weights: WEIGHTS) -> POSITIONS:
    """Weighted vertex sums; accepts a single (4,) vector or an (N, 4) batch."""
    w = np.asarray(weights, dtype=np.float64)
    if w.shape[-1:] != (4,) or w.ndim > 2:
        raise rejected(f"weights must have shape (4,) or (N, 4), got {w.shape}")
    return w @ tetra.vertices


def sample_uniform_point(tetra: Tetrahedron, rng: RandomSource) -> tuple[np.ndarray, WEIGHTS]:
    """One uniform point inside ``tetra`` together with the weights that made it."""
    weights = sample_weights(rng, 1)[0]
    return points_from_weights(tetra, weights), weights


# ===============================
# CHAOS GAME
# ===============================


def vertex_choices(rng: RandomSource, count: int) -> CHOICES:
    """Vertex indices 0..3, one per uniform draw (index = floor(4u))."""
    u = draw_uniform(rng, count)
    return np.minimum((u * 4.0).astype(np.int64), 3)


@njit(cache=True)  # type: ignore
def run_chaos_game(
    start: np.ndarray,
    vertices: VERTS,
    choices: CHOICES,
    skip: int,
    out: POSITIONS,
) -> tuple[float, float, float]:
    """
    Walk the chain through every entry of ``choices``.

    The first ``skip`` points are not recorded; the rest are written to
    ``out`` in order. Returns the final point.
    """
    x = start[0]
    y = start[1]
    z = start[2]

    for k in range(len(choices)):
        v = choices[k]
        x = (x + vertices[v, 0]) / 2.0
        y = (y + vertices[v, 1]) / 2.0
        z = (z + vertices[v, 2]) / 2.0

        if k >= skip:
            out[k - skip, 0] = x
            out[k - skip, 1] = y
            out[k - skip, 2] = z

    return x, y, z


class ChaosGameSampler:
    """
    Owns the single evolving point of one chaos-game chain.

    The chain is seeded from a uniform interior point (or ``start``) and
    advanced ``burn_in`` steps before anything is emitted. Each sampler is a
    fresh chain; nothing is shared between instances.
    """

    def __init__(
        self,
        tetra: Tetrahedron,
        rng: RandomSource,
        burn_in: int = BURN_IN_STEPS,
        start: np.ndarray | None = None,
    ) -> None:
        if isinstance(burn_in, bool) or not isinstance(burn_in, (int, np.integer)) or burn_in < 0:
            raise rejected(f"burn_in must be an integer >= 0, got {burn_in!r}")

        self.tetra = tetra
        self.rng = rng
        self._vertices = np.array(tetra.vertices)

        if start is None:
            start, _ = sample_uniform_point(tetra, rng)
        state = np.array(start, dtype=np.float64)
        if state.shape != (3,):
            raise rejected(f"start must be a 3D point, got shape {state.shape}")
        self._state = state

        if burn_in:
            self._walk(int(burn_in), record=False)

    @property
    def state(self) -> np.ndarray:
        return self._state.copy()

    def advance(self) -> np.ndarray:
        """Move halfway toward one random vertex and return the new point."""
        v = vertex_choices(self.rng, 1)[0]
        self._state = (self._state + self._vertices[v]) / 2.0
        return self._state.copy()

    def emit(self, count: int) -> POSITIONS:
        """The next ``count`` points of the chain, shape (count, 3)."""
        return self._walk(count, record=True)

    def _walk(self, steps: int, record: bool) -> POSITIONS:
        choices = vertex_choices(self.rng, steps)
        out = np.empty((steps if record else 0, 3), dtype=np.float64)
        final = run_chaos_game(self._state, self._vertices, choices, 0 if record else steps, out)
        self._state = np.array(final, dtype=np.float64)
        return out
