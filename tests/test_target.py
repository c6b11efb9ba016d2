"""
Tests for the bouncing bin.
"""

import pytest

from crumple_toss.toss_core.target import TargetController


@pytest.fixture
def target(config):
    return TargetController(config)


class TestTargetMotion:
    """Test left-right motion and edge bounces."""

    def test_starts_at_config_position(self, target):
        assert (target.x, target.y, target.direction) == (75, 150, 1)

    def test_moves_by_speed(self, target):
        target.advance()
        assert target.x == 77

    def test_bounces_at_right_edge(self, target, config):
        target.place(config.field.width - target.width - 1)
        target.advance()
        assert target.x == config.field.width - target.width
        assert target.direction == -1

    def test_bounces_at_left_edge(self, target):
        target.place(1)
        target.direction = -1
        target.advance()
        assert target.x == 0
        assert target.direction == 1

    def test_flips_exactly_on_boundary(self, target, config):
        target.place(config.field.width - target.width - 2)
        target.advance()
        assert target.x == config.field.width - target.width
        assert target.direction == -1

    def test_stays_in_field(self, target, config):
        max_x = config.field.width - target.width
        directions = set()
        for _ in range(2000):
            target.advance()
            assert 0 <= target.x <= max_x
            directions.add(target.direction)
        assert directions == {-1, 1}

    def test_speed_constant_through_bounce(self, target):
        target.place(0)
        target.direction = -1
        target.advance()
        before = target.x
        target.advance()
        assert target.x - before == pytest.approx(target.speed)

    def test_reset(self, target):
        for _ in range(50):
            target.advance()
        target.reset()
        assert (target.x, target.direction) == (75, 1)

    def test_bounds_box(self, target):
        box = target.bounds()
        assert (box.left, box.bottom, box.right, box.top) == (75, 150, 150, 210)
