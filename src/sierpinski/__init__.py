"""
Sierpinski Tetrahedron Package

Point clouds for a regular tetrahedron: a uniform fill of its volume and the
Sierpinski tetrahedron attractor produced by the chaos game.
"""

from .builder import build, build_attractor_cloud, build_from_request, build_volume_fill_cloud
from .errors import InvalidParameter
from .geometry import compute_vertices
from .models import CloudRequest, Mode, PointCloud, Tetrahedron, Vector3

__version__ = "0.1.0"

__all__ = [
    "CloudRequest",
    "InvalidParameter",
    "Mode",
    "PointCloud",
    "Tetrahedron",
    "Vector3",
    "build",
    "build_attractor_cloud",
    "build_from_request",
    "build_volume_fill_cloud",
    "compute_vertices",
]
