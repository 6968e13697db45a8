"""Tests for configuration dataclasses and the TOML loader."""
from __future__ import annotations

import dataclasses

import pytest

from tick_mon import DEFAULT_CONFIG, LifecycleConfig, MonConfig, StatsConfig, TimeConfig, load_config


class TestDefaults:
    def test_time_defaults(self) -> None:
        t = DEFAULT_CONFIG.time
        assert t.hunger_decay_interval == 5
        assert t.waste_generation_interval == 2.5
        assert t.effort_decay_interval == 4
        assert t.hp_regen_interval == 2
        assert t.hp_regen_amount == 5
        assert (t.night_start_hour, t.night_end_hour) == (21, 6)

    def test_stats_defaults(self) -> None:
        s = DEFAULT_CONFIG.stats
        assert (s.max_hunger, s.max_effort, s.max_hp, s.max_waste) == (3, 3, 100, 4)
        assert s.base_weight_gain == 2

    def test_lifecycle_defaults(self) -> None:
        lc = DEFAULT_CONFIG.lifecycle
        assert (lc.neglect_days, lc.sickness_days) == (3, 5)
        assert (lc.adult_max_age, lc.perfect_max_age) == (30, 50)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.time.hunger_decay_interval = 1  # type: ignore[misc]


class TestValidation:
    def test_zero_interval(self) -> None:
        with pytest.raises(ValueError, match="hunger_decay_interval"):
            TimeConfig(hunger_decay_interval=0)

    def test_bad_hour(self) -> None:
        with pytest.raises(ValueError):
            TimeConfig(night_start_hour=24)

    def test_start_above_cap(self) -> None:
        with pytest.raises(ValueError):
            StatsConfig(start_hunger=4)

    def test_negative_lifespan(self) -> None:
        with pytest.raises(ValueError):
            LifecycleConfig(adult_max_age=-1)


class TestFromDict:
    def test_partial_override(self) -> None:
        config = MonConfig.from_dict({"time": {"hunger_decay_interval": 2}})
        assert config.time.hunger_decay_interval == 2
        assert config.time.waste_generation_interval == 2.5
        assert config.stats == StatsConfig()

    def test_upper_case_keys(self) -> None:
        config = MonConfig.from_dict({"STATS": {"BASE_WEIGHT_GAIN": 5}})
        assert config.stats.base_weight_gain == 5

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown key"):
            MonConfig.from_dict({"time": {"moon_phase": 3}})

    def test_bedtime_is_not_a_setting(self) -> None:
        with pytest.raises(ValueError, match="Unknown key"):
            MonConfig.from_dict({"time": {"bedtime_hour": 22}})

    def test_unknown_section(self) -> None:
        with pytest.raises(ValueError, match="Unknown config section"):
            MonConfig.from_dict({"weather": {}})


class TestLoadConfig:
    def test_reads_toml(self, tmp_path) -> None:
        path = tmp_path / "mon.toml"
        path.write_text(
            "[time]\n"
            "HUNGER_DECAY_INTERVAL = 6\n"
            "\n"
            "[lifecycle]\n"
            "neglect_days = 2\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.time.hunger_decay_interval == 6
        assert config.lifecycle.neglect_days == 2
