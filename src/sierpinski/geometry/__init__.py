from .tetrahedron import barycentric, centroid, compute_vertices, contains

__all__ = ["barycentric", "centroid", "compute_vertices", "contains"]
