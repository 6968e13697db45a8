"""Training minigame catalog and battle-power rewards."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

from tick_mon.types import CareEventType

if TYPE_CHECKING:
    from tick_mon.clock import Clock
    from tick_mon.mon import Mon

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class RewardRule(Protocol):
    def __call__(self, score: float) -> float: ...


# --- Reward rules ---
# Scores below zero count as zero.


@dataclass(frozen=True)
class FlatReward:
    """Same reward regardless of score."""

    amount: int

    def __call__(self, score: float) -> float:
        return self.amount


@dataclass(frozen=True)
class CappedReward:
    """score * multiplier, never above cap."""

    cap: float
    multiplier: float = 1.0

    def __call__(self, score: float) -> float:
        return min(self.cap, max(0.0, score) * self.multiplier)


@dataclass(frozen=True)
class LinearReward:
    multiplier: float

    def __call__(self, score: float) -> float:
        return max(0.0, score) * self.multiplier


@dataclass(frozen=True)
class TrainingGame:
    """Immutable minigame definition.

    Attributes:
        id: Catalog key.
        name: Display name.
        difficulty: Difficulty tag.
        reward: Rule mapping a score to battle power.
        duration_seconds: Fixed length of a round.
        settings: Game-specific tuning for the (external) minigame UI.
    """

    id: str
    name: str
    difficulty: Difficulty
    reward: RewardRule
    duration_seconds: int
    settings: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("TrainingGame id must be non-empty")
        if self.duration_seconds <= 0:
            raise ValueError(f"duration_seconds must be > 0, got {self.duration_seconds}")


class TrainingCatalog:
    """Stores minigame definitions by id."""

    def __init__(self, games: list[TrainingGame] | None = None) -> None:
        self._games: dict[str, TrainingGame] = {}
        for game in games or []:
            self.define(game)

    def define(self, game: TrainingGame) -> None:
        """Register a game. Overwrites if id exists."""
        self._games[game.id] = game

    def get(self, game_id: str) -> TrainingGame:
        """Look up a game. Raises KeyError if not defined."""
        if game_id not in self._games:
            raise KeyError(game_id)
        return self._games[game_id]

    def has(self, game_id: str) -> bool:
        return game_id in self._games

    def games(self) -> list[TrainingGame]:
        return list(self._games.values())

    def __len__(self) -> int:
        return len(self._games)


def default_catalog() -> TrainingCatalog:
    return TrainingCatalog([
        TrainingGame(
            id="rhythm_tap",
            name="Rhythm Tap",
            difficulty=Difficulty.EASY,
            reward=LinearReward(0.5),
            duration_seconds=30,
            settings={"tempo_range": [80, 120], "total_beats": 20},
        ),
        TrainingGame(
            id="quick_reflex",
            name="Quick Reflex",
            difficulty=Difficulty.MEDIUM,
            reward=CappedReward(cap=50),
            duration_seconds=45,
            settings={
                "target_count": 30,
                "target_sizes": [30, 50, 70],
                "target_speeds_ms": [1000, 1500, 2000],
            },
        ),
        TrainingGame(
            id="pattern_memory",
            name="Pattern Memory",
            difficulty=Difficulty.HARD,
            reward=LinearReward(2),
            duration_seconds=60,
            settings={
                "start_length": 3,
                "max_length": 10,
                "show_time_ms": 1000,
                "input_time_ms": 5000,
            },
        ),
    ])


def calculate_reward(game: TrainingGame, score: float) -> int:
    """Battle power earned for *score*, floored to an integer, never negative."""
    return max(0, math.floor(game.reward(score)))


def apply_result(mon: Mon, game_id: str, score: float, clock: Clock,
                 catalog: TrainingCatalog | None = None) -> Mon:
    """Credit a finished round to *mon*.

    Unknown game ids and dead mons are ignored: the input comes back as is.
    """
    catalog = catalog if catalog is not None else default_catalog()
    if not catalog.has(game_id):
        logger.debug("ignoring result for unknown game %r", game_id)
        return mon
    if mon.is_dead:
        return mon

    earned = calculate_reward(catalog.get(game_id), score)
    now = clock.now()
    trained = replace(mon.with_stats(bp=mon.stats.bp + earned), last_updated=now)
    return trained.record(now, CareEventType.TRAIN, {
        "game_id": game_id,
        "score": score,
        "bp_earned": earned,
    })
