# models.py
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
import math

import numpy as np

from sierpinski import config
from sierpinski.errors import rejected
from sierpinski.types import COLORS, POSITIONS, VERTS


class Vector3:
    __slots__ = ["x", "y", "z"]

    def __init__(self, x: float, y: float, z: float) -> None:
        self.x, self.y, self.z = x, y, z

    @classmethod
    def from_array(cls, values: np.ndarray) -> Vector3:
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        return f"Vector3({self.x:g}, {self.y:g}, {self.z:g})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def length(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)


class Tetrahedron:
    """
    Four vertices A, B, C, D of a tetrahedron, stored as a read-only (4, 3) array.

    Vertex order matters: weight slot i always refers to ``vertices[i]``.
    """

    __slots__ = ["size", "vertices"]

    def __init__(self, vertices: np.ndarray | list[list[float]], size: float) -> None:
        arr = np.array(vertices, dtype=np.float64)
        if arr.shape != (4, 3):
            raise rejected(f"tetrahedron needs 4 vertices of 3 coordinates, got shape {arr.shape}")
        arr.setflags(write=False)
        self.vertices: VERTS = arr
        self.size = float(size)

    def __iter__(self) -> Iterator[Vector3]:
        for row in self.vertices:
            yield Vector3.from_array(row)

    def __getitem__(self, index: int) -> Vector3:
        return Vector3.from_array(self.vertices[index])

    def __len__(self) -> int:
        return 4

    def __repr__(self) -> str:
        return f"Tetrahedron(size={self.size:g})"

    @property
    def A(self) -> Vector3:
        return self[0]

    @property
    def B(self) -> Vector3:
        return self[1]

    @property
    def C(self) -> Vector3:
        return self[2]

    @property
    def D(self) -> Vector3:
        return self[3]

    @property
    def lower(self) -> np.ndarray:
        """Componentwise minimum over the vertices (bounding box corner)."""
        return self.vertices.min(axis=0)

    @property
    def upper(self) -> np.ndarray:
        return self.vertices.max(axis=0)


class Mode(str, Enum):
    VOLUME_FILL = "volume_fill"
    ATTRACTOR = "attractor"


class PointCloud:
    """
    Parallel position and color buffers of equal length.

    Built fresh on every generation request and never mutated afterwards:
    both arrays are flagged read-only.
    """

    __slots__ = ["positions", "colors", "mode"]

    def __init__(self, positions: POSITIONS, colors: COLORS, mode: Mode) -> None:
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        colors = np.asarray(colors, dtype=np.float64).reshape(-1, 3)
        if len(positions) != len(colors):
            raise rejected(
                f"positions and colors differ in length: {len(positions)} != {len(colors)}"
            )
        positions.setflags(write=False)
        colors.setflags(write=False)
        self.positions = positions
        self.colors = colors
        self.mode = Mode(mode)

    @property
    def count(self) -> int:
        return len(self.positions)

    def __len__(self) -> int:
        return self.count

    def __repr__(self) -> str:
        return f"PointCloud(mode={self.mode.value}, count={self.count})"

    def flat_positions(self) -> np.ndarray:
        """Flat [x0, y0, z0, x1, ...] buffer of length 3N."""
        return self.positions.ravel()

    def flat_colors(self) -> np.ndarray:
        return self.colors.ravel()

    def as_float32(self) -> tuple[np.ndarray, np.ndarray]:
        return self.positions.astype(np.float32), self.colors.astype(np.float32)

    def interleaved(self) -> np.ndarray:
        """(N, 6) float32 rows of x, y, z, r, g, b for a single vertex buffer."""
        return np.hstack(self.as_float32())


@dataclass(frozen=True)
class CloudRequest:
    """What the UI asks for; the builder answers with a fresh PointCloud."""

    count: int
    size: float = config.SIZE
    mode: Mode = Mode.VOLUME_FILL
    burn_in: int = config.BURN_IN_STEPS
