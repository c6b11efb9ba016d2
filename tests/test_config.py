"""
Tests for configuration loading and validation.
"""

import pytest
import yaml

from crumple_toss.toss_core.config_loader import load_config


def _write_config(tmp_path, mutate):
    """Copy the default config with one change applied."""
    default = load_config()
    raw = {
        "field": {"width": default.field.width, "height": default.field.height},
        "player": {"x": default.player.x, "y": default.player.y},
        "target": {
            "x": default.target.x, "y": default.target.y,
            "width": default.target.width, "height": default.target.height,
            "speed": default.target.speed,
        },
        "projectile": {
            "width": default.projectile.width,
            "height": default.projectile.height,
            "gravity": default.projectile.gravity,
        },
        "launch": {"base_speed": default.launch.base_speed, "max_charge_ms": default.launch.max_charge_ms},
        "session": {"duration_seconds": default.session.duration_seconds},
        "variants": [
            {
                "id": v.id, "tag": v.tag, "difficulty": v.difficulty, "color": v.color,
                "collision_multiplier": v.collision_multiplier, "points": v.points,
            }
            for v in default.variants
        ],
    }
    mutate(raw)
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(raw))
    return str(path)


class TestDefaultConfig:
    """Test the shipped configuration."""

    def test_field_and_player(self, config):
        assert config.field.width == 750
        assert config.field.height == 500
        assert config.field.out_of_bounds_margin == 50
        assert config.player.position == (375, 300)
        assert config.player.grab_radius == 50

    def test_target_start(self, config):
        assert (config.target.x, config.target.y) == (75, 150)
        assert (config.target.width, config.target.height) == (75, 60)
        assert config.target.speed == 2
        assert config.target.direction == 1

    def test_launch_constants(self, config):
        assert config.launch.base_speed == 8
        assert config.launch.dead_zone == 5
        assert config.launch.max_charge_ms == 2000
        assert config.launch.max_power == 2.0

    def test_session_duration(self, config):
        assert config.session.duration_seconds == 20

    def test_three_variants(self, config):
        assert config.num_variants == 3
        assert [v.tag for v in config.variants] == ["green", "yellow", "red"]

    def test_variant_rgb(self, config):
        assert config.get_variant(0).rgb == (0x90, 0xEE, 0x90)

    def test_invalid_variant_id(self, config):
        with pytest.raises(ValueError):
            config.get_variant(3)


class TestValidation:
    """Test rejection of inconsistent configs."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_optional_keys_use_defaults(self, tmp_path):
        config = load_config(_write_config(tmp_path, lambda raw: None))
        assert config.field.out_of_bounds_margin == 50.0
        assert config.launch.min_speed_factor == 0.5
        assert config.snapshot.max_objects == 64

    def test_rejects_fourth_variant(self, tmp_path):
        def add_variant(raw):
            raw["variants"].append({
                "id": 3, "tag": "blue", "difficulty": "extreme", "color": "#0000FF",
                "collision_multiplier": 0.6, "points": 3,
            })
        with pytest.raises(ValueError):
            load_config(_write_config(tmp_path, add_variant))

    def test_rejects_multiplier_out_of_range(self, tmp_path):
        def shrink(raw):
            raw["variants"][2]["collision_multiplier"] = 0.1
        with pytest.raises(ValueError):
            load_config(_write_config(tmp_path, shrink))

    def test_rejects_non_sequential_ids(self, tmp_path):
        def renumber(raw):
            raw["variants"][1]["id"] = 5
        with pytest.raises(ValueError):
            load_config(_write_config(tmp_path, renumber))

    def test_rejects_target_wider_than_field(self, tmp_path):
        def widen(raw):
            raw["target"]["width"] = 1000
        with pytest.raises(ValueError):
            load_config(_write_config(tmp_path, widen))

    def test_rejects_bad_color(self, tmp_path):
        def recolor(raw):
            raw["variants"][0]["color"] = "green"
        with pytest.raises(ValueError):
            load_config(_write_config(tmp_path, recolor))
