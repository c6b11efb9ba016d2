"""
Tests for note motion, bounds, and cosmetic geometry.
"""

import numpy as np
import pytest

from crumple_toss.toss_core.projectile import (
    Outcome,
    Projectile,
    crumple_outline,
    wrinkle_lines,
)


@pytest.fixture
def make_note(config, catalog):
    def _make(x=0.0, y=0.0, vx=0.0, vy=0.0, variant=None, seed=0):
        return Projectile.launch(
            uid=0,
            variant=variant or catalog.medium,
            origin=(x, y),
            velocity=(vx, vy),
            config=config.projectile,
            shape_seed=seed,
        )
    return _make


class TestMotion:
    """Test per-frame integration."""

    def test_gravity_applied_before_move(self, make_note):
        note = make_note(x=100, y=100, vx=4, vy=-10)
        note.advance()
        assert note.velocity.y == pytest.approx(-9.7)
        assert note.x == pytest.approx(104)
        assert note.y == pytest.approx(90.3)

    def test_rotation_advances(self, make_note):
        note = make_note()
        for _ in range(10):
            note.advance()
        assert note.rotation == pytest.approx(1.0)

    def test_dt_scales_step(self, make_note):
        note = make_note(vx=2)
        note.advance(0.5)
        assert note.x == pytest.approx(1.0)
        assert note.velocity.y == pytest.approx(0.15)

    def test_inactive_note_does_not_move(self, make_note):
        note = make_note(vx=5)
        note.mark_missed()
        note.advance()
        assert note.x == 0


class TestBounds:
    """Test field exit detection."""

    def test_inside_field(self, make_note):
        assert not make_note(x=375, y=300).is_out_of_bounds(750, 500)

    def test_margin_is_exclusive(self, make_note):
        assert not make_note(x=-50, y=550).is_out_of_bounds(750, 500)
        assert make_note(y=551).is_out_of_bounds(750, 500)

    def test_sides(self, make_note):
        assert make_note(x=-51).is_out_of_bounds(750, 500)
        assert make_note(x=801).is_out_of_bounds(750, 500)

    def test_top_is_open(self, make_note):
        assert not make_note(x=375, y=-400).is_out_of_bounds(750, 500)


class TestHitBox:
    """Test variant-scaled collision boxes."""

    def test_hard_note_box_shrinks(self, make_note, catalog):
        box = make_note(x=10, y=160, variant=catalog.hard).hit_box()
        assert (box.left, box.bottom) == (10, 160)
        assert box.right - box.left == pytest.approx(21)
        assert box.top - box.bottom == pytest.approx(21)

    def test_easy_note_box_grows(self, make_note, catalog):
        box = make_note(variant=catalog.easy).hit_box()
        assert box.right == pytest.approx(52.5)


class TestOutcome:
    """A note ends up in exactly one state."""

    def test_hit_then_miss_keeps_hit(self, make_note):
        note = make_note()
        note.mark_hit()
        note.mark_missed()
        assert note.outcome is Outcome.HIT
        assert not note.active

    def test_miss_then_hit_keeps_miss(self, make_note):
        note = make_note()
        note.mark_missed()
        note.mark_hit()
        assert note.outcome is Outcome.MISS


class TestCrumpleShape:
    """Test cosmetic geometry."""

    def test_outline_is_deterministic(self):
        np.testing.assert_array_equal(crumple_outline(9, 35), crumple_outline(9, 35))

    def test_outline_radius_range(self):
        radii = np.hypot(*crumple_outline(123, 35).T)
        assert np.all(radii >= 0.7 * 17.5 - 1e-9)
        assert np.all(radii <= 17.5 + 1e-9)

    def test_wrinkles_within_note(self):
        lines = wrinkle_lines(4, 35)
        assert lines.shape == (3, 4)
        assert np.all(np.abs(lines) <= 17.5)

    def test_shape_cached_on_note(self, make_note):
        note = make_note(seed=77)
        assert note.outline is note.outline
        assert note.wrinkles is note.wrinkles
