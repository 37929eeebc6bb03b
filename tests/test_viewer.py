import pytest

from sierpinski import config
from sierpinski.models import Mode
from sierpinski.viewer import ViewerState, parse_args, regenerate


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, config.MIN_POINTS),
        (10_000, 10_000),
        (123_456, 120_000),
        (15_000, 20_000),
        (25_000, 30_000),
        (999_999, 1_000_000),
        (5_000_000, config.MAX_POINTS),
    ],
)
def test_clamp_point_count(value, expected):
    assert config.clamp_point_count(value) == expected


def test_toggles_are_independent():
    state = ViewerState()
    assert state.toggle(Mode.VOLUME_FILL) is False
    assert state.visibility() == {Mode.VOLUME_FILL: False, Mode.ATTRACTOR: True}
    assert state.toggle(Mode.ATTRACTOR) is False
    assert state.toggle(Mode.VOLUME_FILL) is True


def test_step_count_stays_in_range():
    state = ViewerState()
    assert state.step_count(-1) is False
    assert state.count == config.MIN_POINTS

    assert state.step_count(3) is True
    assert state.count == 40_000

    state.count = config.MAX_POINTS
    assert state.step_count(1) is False
    assert state.count == config.MAX_POINTS


def test_requests_share_count_and_size():
    state = ViewerState(count=20_000, size=50.0)
    requests = state.requests()
    assert [r.mode for r in requests] == [Mode.VOLUME_FILL, Mode.ATTRACTOR]
    assert all(r.count == 20_000 and r.size == 50.0 for r in requests)


def test_regenerate_builds_both_clouds(rng):
    clouds = regenerate(ViewerState(), rng)
    assert [c.mode for c in clouds] == [Mode.VOLUME_FILL, Mode.ATTRACTOR]
    assert all(c.count == config.INITIAL_POINTS for c in clouds)


def test_status_lines_show_toggles():
    state = ViewerState()
    state.toggle(Mode.ATTRACTOR)
    lines = state.status_lines(60.0)
    assert "Points: 10,000" in lines
    assert any("Sierpinski" in line and "off" in line for line in lines)


def test_parse_args_defaults():
    args = parse_args([])
    assert args.size == config.SIZE
    assert args.points == config.INITIAL_POINTS
    assert args.burn_in == config.BURN_IN_STEPS
    assert args.seed is None
