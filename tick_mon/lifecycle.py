"""Lifecycle monitor: aging and death."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from tick_mon.clock import MS_PER_DAY
from tick_mon.config import DEFAULT_CONFIG, MonConfig
from tick_mon.types import REASON_SICKNESS, CareEventType, DeathCause, MonState, Stage

if TYPE_CHECKING:
    from tick_mon.clock import Clock
    from tick_mon.mon import Mon

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeathCheck:
    is_dead: bool
    cause: DeathCause


def max_age(stage: Stage, config: MonConfig = DEFAULT_CONFIG) -> int | None:
    """Lifespan in days for *stage*, or None below ADULT (no old-age death)."""
    if stage < Stage.ADULT:
        return None
    if stage is Stage.PERFECT:
        return config.lifecycle.perfect_max_age
    return config.lifecycle.adult_max_age


def check_death(mon: Mon, clock: Clock,
                config: MonConfig = DEFAULT_CONFIG) -> DeathCheck | None:
    """Return the first matching death condition, or None if the mon lives.

    Checked in order: already dead, neglect, old age, prolonged sickness.
    A mon that was never fed counts its neglect window from ``created_at``.
    """
    if mon.is_dead:
        return DeathCheck(is_dead=True, cause=DeathCause.NEGLECT)

    now = clock.now()
    lcfg = config.lifecycle

    if mon.stats.hunger == 0 and mon.stats.effort == 0:
        last_fed = mon.last_event(CareEventType.FEED)
        fed_at = last_fed.timestamp if last_fed is not None else mon.created_at
        if now - fed_at > lcfg.neglect_days * MS_PER_DAY:
            return DeathCheck(is_dead=True, cause=DeathCause.NEGLECT)

    limit = max_age(mon.stage, config)
    if limit is not None and mon.stats.age > limit:
        return DeathCheck(is_dead=True, cause=DeathCause.OLD_AGE)

    if mon.state is MonState.SICK:
        onset = mon.last_event(CareEventType.CARE_MISTAKE, (REASON_SICKNESS,))
        if onset is not None and now - onset.timestamp > lcfg.sickness_days * MS_PER_DAY:
            return DeathCheck(is_dead=True, cause=DeathCause.SICKNESS)

    return None


def process_death(mon: Mon, cause: DeathCause, clock: Clock) -> Mon:
    """Mark *mon* DEAD and log the cause. Already-dead mons are returned as is."""
    if mon.is_dead:
        return mon
    now = clock.now()
    logger.info("mon %s (%s) died: %s", mon.id, mon.species, cause.name)
    dead = replace(mon, state=MonState.DEAD)
    return dead.record(now, CareEventType.DEATH, {"cause": cause.name})


def update_age(mon: Mon, clock: Clock) -> Mon:
    """Recompute age in whole days since creation. Idempotent."""
    if mon.is_dead:
        return mon
    age = max(0, (clock.now() - mon.created_at) // MS_PER_DAY)
    if age == mon.stats.age:
        return mon
    return mon.with_stats(age=age)
