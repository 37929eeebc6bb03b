# builder.py
"""
Assemble full point clouds from the samplers.

Each call recomputes everything from scratch and returns a new, read-only
PointCloud. Nothing is cached between calls.
"""

from loguru import logger
import numpy as np

from sierpinski.color import color_from_weights, random_colors
from sierpinski.config import BURN_IN_STEPS
from sierpinski.errors import rejected
from sierpinski.geometry.tetrahedron import compute_vertices
from sierpinski.models import CloudRequest, Mode, PointCloud, Tetrahedron
from sierpinski.sampling import ChaosGameSampler, RandomSource, make_rng, points_from_weights, sample_weights


def _check_count(count: int) -> int:
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise rejected(f"count must be an integer, got {count!r}")
    if count < 0:
        raise rejected(f"count must be >= 0, got {count}")
    return int(count)


def build_volume_fill_cloud(
    tetra: Tetrahedron,
    count: int,
    rng: RandomSource | None = None,
) -> PointCloud:
    """
    Uniform fill of the solid tetrahedron, colored by barycentric weights.

    Draws 3 * count uniforms in one batch; the points are independent so the
    whole batch is computed vectorized.
    """
    count = _check_count(count)
    if rng is None:
        rng = make_rng()

    weights = sample_weights(rng, count)
    positions = points_from_weights(tetra, weights)
    colors = color_from_weights(weights)

    logger.debug("Built volume fill cloud: {} points", count)
    return PointCloud(positions, colors, Mode.VOLUME_FILL)


def build_attractor_cloud(
    tetra: Tetrahedron,
    count: int,
    burn_in: int = BURN_IN_STEPS,
    rng: RandomSource | None = None,
    start: np.ndarray | None = None,
) -> PointCloud:
    """
    Sierpinski tetrahedron points from one chaos-game chain.

    Colors are drawn independently at random per point, after the chain has
    produced all positions.
    """
    count = _check_count(count)
    if rng is None:
        rng = make_rng()

    sampler = ChaosGameSampler(tetra, rng, burn_in=burn_in, start=start)
    positions = sampler.emit(count)
    colors = random_colors(rng, count)

    logger.debug("Built attractor cloud: {} points, burn-in {}", count, burn_in)
    return PointCloud(positions, colors, Mode.ATTRACTOR)


def build(
    tetra: Tetrahedron,
    count: int,
    mode: Mode | str,
    rng: RandomSource | None = None,
    burn_in: int = BURN_IN_STEPS,
) -> PointCloud:
    try:
        mode = Mode(mode)
    except ValueError:
        raise rejected(f"unknown mode {mode!r}") from None

    if mode is Mode.VOLUME_FILL:
        return build_volume_fill_cloud(tetra, count, rng=rng)
    return build_attractor_cloud(tetra, count, burn_in=burn_in, rng=rng)


def build_from_request(request: CloudRequest, rng: RandomSource | None = None) -> PointCloud:
    """Answer a UI request with a brand new cloud."""
    tetra = compute_vertices(request.size)
    return build(tetra, request.count, request.mode, rng=rng, burn_in=request.burn_in)
