"""Tunable rate constants and stat caps."""
from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any


def _require_positive(owner: str, **values: float) -> None:
    for name, value in values.items():
        if value <= 0:
            raise ValueError(f"{owner}.{name} must be > 0, got {value}")


def _require_hour(owner: str, **values: int) -> None:
    for name, value in values.items():
        if not 0 <= value <= 23:
            raise ValueError(f"{owner}.{name} must be in 0..23, got {value}")


@dataclass(frozen=True)
class TimeConfig:
    """Decay rates and the day/night window.

    Attributes:
        hunger_decay_interval: Hours per hunger point lost.
        waste_generation_interval: Hours per waste pile produced.
        effort_decay_interval: Hours per effort point lost while starving.
        hp_regen_interval: Hours per HP regeneration step.
        hp_regen_amount: HP regained per step.
        night_start_hour: First hour (inclusive) that counts as night.
        night_end_hour: First hour (exclusive) of the morning.
    """

    hunger_decay_interval: float = 5
    waste_generation_interval: float = 2.5
    effort_decay_interval: float = 4
    hp_regen_interval: float = 2
    hp_regen_amount: float = 5
    night_start_hour: int = 21
    night_end_hour: int = 6

    def __post_init__(self) -> None:
        _require_positive(
            "TimeConfig",
            hunger_decay_interval=self.hunger_decay_interval,
            waste_generation_interval=self.waste_generation_interval,
            effort_decay_interval=self.effort_decay_interval,
            hp_regen_interval=self.hp_regen_interval,
        )
        if self.hp_regen_amount < 0:
            raise ValueError(f"TimeConfig.hp_regen_amount must be >= 0, got {self.hp_regen_amount}")
        _require_hour(
            "TimeConfig",
            night_start_hour=self.night_start_hour,
            night_end_hour=self.night_end_hour,
        )


@dataclass(frozen=True)
class StatsConfig:
    """Stat caps, care effects, cooldowns and the values a new mon starts with.

    Cooldowns are in minutes (training) and hours (healing).
    """

    max_hunger: int = 3
    max_effort: int = 3
    max_hp: int = 100
    max_waste: int = 4
    base_weight_gain: int = 2
    training_cooldown: int = 30
    healing_cooldown: int = 2
    start_hunger: int = 3
    start_effort: int = 3
    start_hp: int = 100
    start_weight: int = 10

    def __post_init__(self) -> None:
        _require_positive(
            "StatsConfig",
            max_hunger=self.max_hunger,
            max_effort=self.max_effort,
            max_hp=self.max_hp,
            max_waste=self.max_waste,
        )
        for name in ("base_weight_gain", "training_cooldown", "healing_cooldown", "start_weight"):
            if getattr(self, name) < 0:
                raise ValueError(f"StatsConfig.{name} must be >= 0, got {getattr(self, name)}")
        if not 0 <= self.start_hunger <= self.max_hunger:
            raise ValueError("StatsConfig.start_hunger must be within [0, max_hunger]")
        if not 0 <= self.start_effort <= self.max_effort:
            raise ValueError("StatsConfig.start_effort must be within [0, max_effort]")
        if not 0 <= self.start_hp <= self.max_hp:
            raise ValueError("StatsConfig.start_hp must be within [0, max_hp]")


@dataclass(frozen=True)
class LifecycleConfig:
    """Death thresholds, in days."""

    neglect_days: float = 3
    sickness_days: float = 5
    adult_max_age: int = 30
    perfect_max_age: int = 50

    def __post_init__(self) -> None:
        _require_positive(
            "LifecycleConfig",
            neglect_days=self.neglect_days,
            sickness_days=self.sickness_days,
            adult_max_age=self.adult_max_age,
            perfect_max_age=self.perfect_max_age,
        )


_SECTIONS = {
    "time": TimeConfig,
    "stats": StatsConfig,
    "lifecycle": LifecycleConfig,
}


@dataclass(frozen=True)
class MonConfig:
    time: TimeConfig = field(default_factory=TimeConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    lifecycle: LifecycleConfig = field(default_factory=LifecycleConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MonConfig:
        """Build a config from nested tables, e.g. ``{"time": {...}}``.

        Keys are case-insensitive, so ``HUNGER_DECAY_INTERVAL`` works too.
        Missing keys keep their defaults; unknown ones raise ValueError.
        """
        sections: dict[str, Any] = {}
        for raw_section, values in data.items():
            section = raw_section.lower()
            if section not in _SECTIONS:
                raise ValueError(f"Unknown config section {raw_section!r}")
            ctype = _SECTIONS[section]
            known = {f.name for f in fields(ctype)}
            kwargs: dict[str, Any] = {}
            for raw_key, value in values.items():
                key = raw_key.lower()
                if key not in known:
                    raise ValueError(f"Unknown key {raw_key!r} in [{section}]")
                kwargs[key] = value
            sections[section] = ctype(**kwargs)
        return cls(**sections)


DEFAULT_CONFIG = MonConfig()


def load_config(path: str | Path) -> MonConfig:
    """Read a TOML file with optional [time], [stats] and [lifecycle] tables."""
    with open(path, "rb") as f:
        data = tomllib.load(f)
    return MonConfig.from_dict(data)
