"""Shared fixtures: a pinned manual clock and a mon factory."""
from __future__ import annotations

from dataclasses import replace

import pytest

from tick_mon import ManualClock, Mon, MonState, Stage, create_mon

T0 = 1_700_000_000_000  # 2023-11-14T22:13:20Z
HOUR = 60 * 60 * 1000
DAY = 24 * HOUR


@pytest.fixture
def clock() -> ManualClock:
    """Clock at T0 pinned to midday so the night rule stays out of the way."""
    return ManualClock(T0, hour=12)


@pytest.fixture
def make_mon():
    """Build a mon created at T0; keyword args override stats."""

    def _make(
        stage: Stage = Stage.BABY,
        state: MonState = MonState.NORMAL,
        species: str = "BasicBaby",
        care_history: tuple = (),
        created_at: int = T0,
        **stats: int,
    ) -> Mon:
        mon = create_mon("mon-1", "Pip", species, ManualClock(created_at))
        mon = replace(mon, stage=stage, state=state, care_history=tuple(care_history))
        if stats:
            mon = mon.with_stats(**stats)
        return mon

    return _make
