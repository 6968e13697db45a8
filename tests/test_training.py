"""Tests for the training reward calculator."""
from __future__ import annotations

import pytest

from tick_mon import (
    CappedReward,
    CareEventType,
    Difficulty,
    FlatReward,
    LinearReward,
    ManualClock,
    MonState,
    TrainingCatalog,
    TrainingGame,
    apply_result,
    calculate_reward,
    default_catalog,
)

from conftest import T0


class TestRewardRules:
    def test_flat(self) -> None:
        assert FlatReward(7)(0) == 7
        assert FlatReward(7)(1000) == 7

    def test_capped(self) -> None:
        rule = CappedReward(cap=50)
        assert rule(30) == 30
        assert rule(80) == 50

    def test_capped_with_multiplier(self) -> None:
        assert CappedReward(cap=10, multiplier=0.1)(55) == pytest.approx(5.5)

    def test_linear(self) -> None:
        assert LinearReward(2)(7) == 14

    def test_negative_scores_clamp(self) -> None:
        assert LinearReward(2)(-5) == 0
        assert CappedReward(cap=50)(-5) == 0


class TestCatalog:
    def test_default_games(self) -> None:
        catalog = default_catalog()
        assert len(catalog) == 3
        assert [g.id for g in catalog.games()] == ["rhythm_tap", "quick_reflex", "pattern_memory"]
        rhythm = catalog.get("rhythm_tap")
        assert rhythm.difficulty is Difficulty.EASY
        assert rhythm.duration_seconds == 30
        assert catalog.get("pattern_memory").difficulty is Difficulty.HARD

    def test_get_unknown_raises(self) -> None:
        with pytest.raises(KeyError):
            default_catalog().get("tetris")

    def test_define_overwrites(self) -> None:
        catalog = TrainingCatalog()
        catalog.define(TrainingGame("x", "X", Difficulty.EASY, FlatReward(1), 10))
        catalog.define(TrainingGame("x", "X2", Difficulty.HARD, FlatReward(9), 10))
        assert catalog.get("x").name == "X2"
        assert catalog.has("x")

    def test_game_validation(self) -> None:
        with pytest.raises(ValueError):
            TrainingGame("", "Nameless", Difficulty.EASY, FlatReward(1), 10)
        with pytest.raises(ValueError):
            TrainingGame("z", "Zero", Difficulty.EASY, FlatReward(1), 0)


class TestCalculateReward:
    def test_half_score_floors(self) -> None:
        assert calculate_reward(default_catalog().get("rhythm_tap"), 41) == 20

    def test_quick_reflex_caps(self) -> None:
        game = default_catalog().get("quick_reflex")
        assert calculate_reward(game, 30) == 30
        assert calculate_reward(game, 80) == 50

    def test_pattern_memory_doubles(self) -> None:
        assert calculate_reward(default_catalog().get("pattern_memory"), 7) == 14

    def test_result_is_int(self) -> None:
        assert isinstance(calculate_reward(default_catalog().get("rhythm_tap"), 3), int)


class TestApplyResult:
    def test_adds_bp_and_logs(self, clock, make_mon) -> None:
        mon = make_mon(bp=5)
        trained = apply_result(mon, "rhythm_tap", 41, clock)
        assert trained.stats.bp == 25
        event = trained.care_history[-1]
        assert event.type is CareEventType.TRAIN
        assert event.data == {"game_id": "rhythm_tap", "score": 41, "bp_earned": 20}
        assert trained.last_updated == T0

    def test_bp_unbounded(self, clock, make_mon) -> None:
        mon = make_mon(bp=5000)
        assert apply_result(mon, "pattern_memory", 1000, clock).stats.bp == 7000

    def test_unknown_game_is_noop(self, clock, make_mon) -> None:
        mon = make_mon(bp=5)
        assert apply_result(mon, "tetris", 100, clock) is mon

    def test_dead_mon_is_noop(self, clock, make_mon) -> None:
        mon = make_mon(state=MonState.DEAD)
        assert apply_result(mon, "rhythm_tap", 100, clock) is mon

    def test_custom_catalog(self, make_mon) -> None:
        catalog = TrainingCatalog([TrainingGame("lift", "Lift", Difficulty.MEDIUM, FlatReward(3), 20)])
        trained = apply_result(make_mon(bp=0), "lift", 0, ManualClock(T0), catalog)
        assert trained.stats.bp == 3
        assert apply_result(make_mon(), "rhythm_tap", 10, ManualClock(T0), catalog).care_history == ()
