"""Time decay: turns an elapsed duration into stat changes and state flags."""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import TYPE_CHECKING

from tick_mon.clock import MS_PER_HOUR, is_night
from tick_mon.config import DEFAULT_CONFIG, MonConfig
from tick_mon.mon import CareEvent
from tick_mon.types import REASON_HUNGER, REASON_WASTE, CareEventType, MonState, Stage

if TYPE_CHECKING:
    from tick_mon.clock import Clock
    from tick_mon.mon import Mon

logger = logging.getLogger(__name__)

# States the night rule may replace with TIRED.
_TIRABLE = frozenset({MonState.NORMAL, MonState.HUNGRY, MonState.TRAINING})


def intervals_elapsed(elapsed_ms: int, interval_hours: float) -> int:
    """Whole intervals contained in *elapsed_ms*, never negative."""
    if elapsed_ms <= 0:
        return 0
    return math.floor(elapsed_ms / (interval_hours * MS_PER_HOUR))


def process(mon: Mon, elapsed_ms: int, clock: Clock,
            config: MonConfig = DEFAULT_CONFIG) -> Mon:
    """Apply *elapsed_ms* of decay to *mon* and return the new snapshot.

    The rules run in a fixed order and each sees the previous one's output:
    hunger, waste, starvation effort loss, HP regeneration, night
    tiredness, waste sickness. A zero or negative duration, or a dead mon,
    yields the input unchanged (``last_updated`` included).
    """
    if elapsed_ms <= 0 or mon.is_dead:
        return mon

    tcfg = config.time
    scfg = config.stats
    now = clock.now()
    stats = mon.stats
    state = mon.state
    mistakes: list[CareEvent] = []

    hunger_lost = intervals_elapsed(elapsed_ms, tcfg.hunger_decay_interval)
    stats = replace(stats, hunger=max(0, stats.hunger - hunger_lost))

    if mon.stage is not Stage.EGG:
        new_waste = intervals_elapsed(elapsed_ms, tcfg.waste_generation_interval)
        stats = replace(stats, poop_count=min(scfg.max_waste, stats.poop_count + new_waste))

    if stats.hunger == 0:
        effort_lost = min(stats.effort, intervals_elapsed(elapsed_ms, tcfg.effort_decay_interval))
        if effort_lost > 0:
            stats = replace(
                stats,
                effort=stats.effort - effort_lost,
                care_mistakes=stats.care_mistakes + 1,
            )
            mistakes.extend(
                CareEvent(now, CareEventType.CARE_MISTAKE, {"reason": REASON_HUNGER})
                for _ in range(effort_lost)
            )

    if stats.hp < scfg.max_hp:
        regained = math.floor(
            elapsed_ms * tcfg.hp_regen_amount / (tcfg.hp_regen_interval * MS_PER_HOUR)
        )
        stats = replace(stats, hp=min(scfg.max_hp, stats.hp + max(0, regained)))

    if state in _TIRABLE and is_night(clock.hour_of_day(), tcfg.night_start_hour, tcfg.night_end_hour):
        state = MonState.TIRED

    if stats.poop_count >= scfg.max_waste and state is not MonState.SICK:
        state = MonState.SICK
        stats = replace(stats, care_mistakes=stats.care_mistakes + 1)
        mistakes.append(CareEvent(now, CareEventType.CARE_MISTAKE, {"reason": REASON_WASTE}))
        logger.debug("mon %s fell sick from waste", mon.id)

    logger.debug("decayed mon %s by %d ms: %s -> %s", mon.id, elapsed_ms, mon.stats, stats)
    updated = replace(mon, stats=stats, state=state, last_updated=now)
    return updated.record_many(mistakes)
