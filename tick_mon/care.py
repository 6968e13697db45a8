"""Care actions: feed, clean, heal and sleep toggling.

Each action validates first and returns a :class:`CareResult`. A failed
action carries the untouched input mon; a successful one carries a new
snapshot with exactly one care event appended.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable

from tick_mon.clock import MS_PER_HOUR
from tick_mon.config import DEFAULT_CONFIG, MonConfig
from tick_mon.types import REASON_WASTE, SICKNESS_ONSET_REASONS, CareEventType, MonState

if TYPE_CHECKING:
    from tick_mon.clock import Clock
    from tick_mon.mon import Mon

logger = logging.getLogger(__name__)

_AILING = frozenset({MonState.SICK, MonState.INJURED})


@dataclass(frozen=True)
class CareResult:
    success: bool
    message: str
    mon: Mon


def _fail(mon: Mon, message: str) -> CareResult:
    logger.debug("care action refused for mon %s: %s", mon.id, message)
    return CareResult(success=False, message=message, mon=mon)


def feed_mon(mon: Mon, clock: Clock, config: MonConfig = DEFAULT_CONFIG) -> CareResult:
    if mon.is_dead:
        return _fail(mon, "Cannot feed a deceased mon.")
    scfg = config.stats
    if mon.stats.hunger >= scfg.max_hunger:
        return _fail(mon, "Mon is already full!")

    now = clock.now()
    fed = mon.with_stats(
        hunger=min(scfg.max_hunger, mon.stats.hunger + 1),
        weight=mon.stats.weight + scfg.base_weight_gain,
    )
    fed = replace(fed, last_updated=now).record(now, CareEventType.FEED)
    return CareResult(success=True, message="Mon has been fed!", mon=fed)


def clean_mon(mon: Mon, clock: Clock, config: MonConfig = DEFAULT_CONFIG) -> CareResult:
    if mon.is_dead:
        return _fail(mon, "Cannot clean a deceased mon.")
    if mon.stats.poop_count <= 0:
        return _fail(mon, "There's nothing to clean!")

    now = clock.now()
    state = mon.state
    if state is MonState.SICK:
        onset = mon.last_event(CareEventType.CARE_MISTAKE, SICKNESS_ONSET_REASONS)
        if onset is not None and onset.reason == REASON_WASTE:
            state = MonState.NORMAL

    cleaned = replace(mon.with_stats(poop_count=0), state=state, last_updated=now)
    cleaned = cleaned.record(now, CareEventType.CLEAN)
    return CareResult(success=True, message="Mon has been cleaned!", mon=cleaned)


def heal_mon(mon: Mon, clock: Clock, config: MonConfig = DEFAULT_CONFIG) -> CareResult:
    if mon.is_dead:
        return _fail(mon, "Cannot heal a deceased mon.")
    if mon.state not in _AILING:
        return _fail(mon, "Mon doesn't need healing.")

    now = clock.now()
    healed = replace(mon, state=MonState.NORMAL, last_updated=now)
    healed = healed.record(now, CareEventType.HEAL)
    return CareResult(success=True, message="Mon has been healed!", mon=healed)


def toggle_sleep(mon: Mon, clock: Clock, config: MonConfig = DEFAULT_CONFIG) -> CareResult:
    if mon.is_dead:
        return _fail(mon, "Cannot change sleep state of a deceased mon.")
    if mon.state in _AILING:
        return _fail(mon, "Cannot change sleep state while mon is sick or injured.")

    now = clock.now()
    if mon.state is MonState.SLEEPING:
        woken = replace(mon, state=MonState.NORMAL, last_updated=now)
        woken = woken.record(now, CareEventType.SLEEP_END)
        return CareResult(success=True, message="Mon is now awake!", mon=woken)

    asleep = replace(mon, state=MonState.SLEEPING, last_updated=now)
    asleep = asleep.record(now, CareEventType.SLEEP_START)
    return CareResult(success=True, message="Mon is now sleeping!", mon=asleep)


CareAction = Callable[["Mon", "Clock", MonConfig], CareResult]

CARE_ACTIONS: dict[str, CareAction] = {
    "feed": feed_mon,
    "clean": clean_mon,
    "heal": heal_mon,
    "sleep": toggle_sleep,
}


def cooldown_remaining(mon: Mon, event_type: CareEventType, clock: Clock,
                       config: MonConfig = DEFAULT_CONFIG) -> int:
    """Milliseconds until another *event_type* event is off cooldown.

    Only TRAIN and HEAL carry cooldowns; anything else returns 0. The
    value is advisory: no action refuses to run because of it.
    """
    scfg = config.stats
    if event_type is CareEventType.TRAIN:
        window = scfg.training_cooldown * 60 * 1000
    elif event_type is CareEventType.HEAL:
        window = scfg.healing_cooldown * MS_PER_HOUR
    else:
        return 0
    last = mon.last_event(event_type)
    if last is None:
        return 0
    return max(0, last.timestamp + window - clock.now())
