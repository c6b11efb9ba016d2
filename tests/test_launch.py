"""
Tests for hold-to-charge throwing.
"""

import pytest

from crumple_toss.toss_core.launch import LaunchController
from crumple_toss.toss_core.rng import VariantPicker


@pytest.fixture
def launcher(config, catalog, clock):
    return LaunchController(VariantPicker(catalog, seed=42), config, clock)


class TestGrab:
    """Test idle -> charging."""

    def test_grab_at_player(self, launcher, catalog):
        variant = launcher.grab(375, 300)
        assert variant in catalog.all_variants
        assert launcher.is_charging
        assert launcher.state.variant is variant

    def test_grab_outside_radius_is_noop(self, launcher):
        assert launcher.grab(375 + 50, 300) is None
        assert not launcher.is_charging

    def test_grab_just_inside_radius(self, launcher):
        assert launcher.grab(375 + 49.9, 300) is not None

    def test_second_grab_is_noop(self, launcher):
        first = launcher.grab(375, 300)
        assert launcher.grab(380, 300) is None
        assert launcher.state.variant is first

    def test_records_start_time(self, launcher, clock):
        launcher.grab(375, 300)
        assert launcher.state.start_ms == clock.now


class TestPower:
    """Test charge curve and launch speed."""

    @pytest.mark.parametrize("held_ms, power", [
        (0, 0.0),
        (500, 0.5),
        (2000, 2.0),
        (5000, 2.0),
        (-100, 0.0),
    ])
    def test_power_curve(self, launcher, held_ms, power):
        assert launcher.power_for(held_ms) == pytest.approx(power)

    def test_speed_range(self, launcher):
        assert launcher.speed_for(0.0) == pytest.approx(4.0)
        assert launcher.speed_for(2.0) == pytest.approx(20.0)

    def test_current_power_idle(self, launcher):
        assert launcher.current_power() == 0.0


class TestRelease:
    """Test charging -> idle."""

    def test_zero_charge_throw(self, launcher):
        variant = launcher.grab(375, 300)
        result = launcher.release(475, 300)

        assert result.thrown
        assert result.variant is variant
        assert result.velocity == pytest.approx((4.0, 0.0))
        assert (result.projectile.x, result.projectile.y) == (375, 300)
        assert not launcher.is_charging

    def test_full_charge_throw(self, launcher, clock):
        launcher.grab(375, 300)
        clock.advance(3000)
        result = launcher.release(375, 200)
        assert result.power == pytest.approx(2.0)
        assert result.velocity == pytest.approx((0.0, -20.0))

    def test_diagonal_aim_is_normalized(self, launcher, clock):
        launcher.grab(375, 300)
        clock.advance(1000)
        result = launcher.release(375 - 30, 300 - 40)
        vx, vy = result.velocity
        assert (vx ** 2 + vy ** 2) ** 0.5 == pytest.approx(12.0)
        assert vx / vy == pytest.approx(30 / 40)

    def test_dead_zone_cancels_throw(self, launcher):
        launcher.grab(375, 300)
        result = launcher.release(378, 304)
        assert result is not None
        assert not result.thrown
        assert result.velocity is None
        assert not launcher.is_charging

    def test_release_when_idle(self, launcher):
        assert launcher.release(475, 300) is None

    def test_uids_increase(self, launcher):
        uids = []
        for _ in range(3):
            launcher.grab(375, 300)
            uids.append(launcher.release(475, 300).projectile.uid)
        assert uids == [0, 1, 2]

    def test_cancel(self, launcher):
        launcher.grab(375, 300)
        assert launcher.cancel()
        assert not launcher.is_charging
        assert not launcher.cancel()


class TestHeldNote:
    """Test the render view of the note in hand."""

    def test_idle_has_no_held_note(self, launcher):
        assert launcher.held_note() is None

    def test_grows_with_power(self, launcher, clock):
        launcher.grab(375, 300)
        held = launcher.held_note()
        assert held.display_size == pytest.approx(25.0)
        assert not held.show_power_ring

        clock.advance(1000)
        held = launcher.held_note()
        assert held.power == pytest.approx(1.0)
        assert held.display_size == pytest.approx(30.0)
        assert held.show_power_ring
        assert (held.x, held.y) == (375, 300)

    def test_size_caps_at_full_charge(self, launcher, clock):
        launcher.grab(375, 300)
        clock.advance(10000)
        assert launcher.held_note().display_size == pytest.approx(35.0)
