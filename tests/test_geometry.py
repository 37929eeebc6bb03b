import itertools
import math

import numpy as np
import pytest

from sierpinski.errors import InvalidParameter
from sierpinski.geometry import barycentric, centroid, compute_vertices, contains
from sierpinski.models import Vector3


def test_vertices_for_size_100(tetra):
    inr = 100 * math.sqrt(3) / 6
    h = 100 * math.sqrt(2 / 3)

    assert inr == pytest.approx(28.8675, abs=1e-4)
    assert h == pytest.approx(81.6497, abs=1e-4)

    np.testing.assert_allclose(tetra.vertices[0], [-50, 0, -inr])
    np.testing.assert_allclose(tetra.vertices[1], [50, 0, -inr])
    np.testing.assert_allclose(tetra.vertices[2], [0, 0, 2 * inr])
    np.testing.assert_allclose(tetra.vertices[3], [0, h, 0])

    assert tetra.A == Vector3(-50.0, 0.0, -inr)
    assert tetra.D.y == pytest.approx(81.6497, abs=1e-4)
    assert len(list(tetra)) == 4


def test_all_edges_equal_size():
    tetra = compute_vertices(7.5)
    for i, j in itertools.combinations(range(4), 2):
        assert (tetra[i] - tetra[j]).length() == pytest.approx(7.5)


def test_vertices_are_read_only(tetra):
    with pytest.raises(ValueError):
        tetra.vertices[0, 0] = 1.0


@pytest.mark.parametrize("size", [0, -1, -0.001, float("nan"), float("inf")])
def test_bad_size_rejected(size):
    with pytest.raises(InvalidParameter):
        compute_vertices(size)


def test_non_numeric_size_rejected():
    with pytest.raises(InvalidParameter):
        compute_vertices("100")


def test_centroid_and_contains(tetra):
    c = centroid(tetra)
    np.testing.assert_allclose(barycentric(tetra, c), [0.25, 0.25, 0.25, 0.25])
    assert contains(tetra, c)

    outside = tetra.vertices[3] + np.array([0.0, 1.0, 0.0])
    assert not contains(tetra, outside)

    mask = contains(tetra, np.vstack([tetra.vertices, outside]))
    assert mask.tolist() == [True, True, True, True, False]


def test_huge_integer_size_rejected(debug_messages):
    with pytest.raises(InvalidParameter):
        compute_vertices(10**400)
    assert any("too large" in m for m in debug_messages)


def test_non_numeric_size_is_logged(debug_messages):
    with pytest.raises(InvalidParameter):
        compute_vertices(None)
    assert any("real number" in m for m in debug_messages)


def test_vertex_as_vector(tetra):
    x, y, z = tetra.C
    assert (x, y) == (0.0, 0.0)
    assert z == pytest.approx(57.735, abs=1e-3)
    assert repr(tetra.B).startswith("Vector3(50,")
