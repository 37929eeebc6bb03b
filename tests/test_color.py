import numpy as np
import pytest

from sierpinski.color import BASE_COLORS, color_from_weights, random_colors
from sierpinski.errors import InvalidParameter
from sierpinski.sampling import SequenceRandomSource, sample_weights


def test_half_red_half_green():
    np.testing.assert_array_equal(color_from_weights([0.5, 0.5, 0.0, 0.0]), [0.5, 0.5, 0.0])


@pytest.mark.parametrize("slot", range(4))
def test_vertex_weight_gives_base_color(slot):
    weights = np.zeros(4)
    weights[slot] = 1.0
    np.testing.assert_array_equal(color_from_weights(weights), BASE_COLORS[slot])


def test_centroid_is_blended():
    np.testing.assert_allclose(color_from_weights([0.25] * 4), [0.5, 0.5, 0.25])


def test_batch_colors_in_unit_range(rng):
    colors = color_from_weights(sample_weights(rng, 100_000))
    assert colors.shape == (100_000, 3)
    assert np.all(colors >= 0.0)
    assert np.all(colors <= 1.0)


def test_bad_weights_shape():
    with pytest.raises(InvalidParameter):
        color_from_weights(np.zeros((2, 3)))


def test_random_colors_follow_source():
    colors = random_colors(SequenceRandomSource([0.1, 0.2, 0.3, 0.4, 0.5, 0.6]), 2)
    np.testing.assert_array_equal(colors, [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6]])
