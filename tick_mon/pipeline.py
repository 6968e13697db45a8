"""Tick pipeline: decay -> age -> death -> evolution."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping

from tick_mon.config import DEFAULT_CONFIG, MonConfig
from tick_mon.decay import process
from tick_mon.evolution import EvolutionPath, EvolutionTable, check_eligibility, default_table, evolve_mon
from tick_mon.lifecycle import DeathCheck, check_death, process_death, update_age

if TYPE_CHECKING:
    from tick_mon.clock import Clock
    from tick_mon.mon import Mon

logger = logging.getLogger(__name__)

# Resumes shorter than this leave every mon untouched.
MIN_RESUME_MS = 1000


@dataclass(frozen=True)
class TickResult:
    mon: Mon
    death: DeathCheck | None = None
    evolution: EvolutionPath | None = None


def tick(mon: Mon, elapsed_ms: int, clock: Clock,
         config: MonConfig = DEFAULT_CONFIG,
         table: EvolutionTable | None = None) -> TickResult:
    """Run one tick for a single mon.

    Each stage consumes the previous stage's snapshot. A mon that dies this
    tick does not evolve; a mon that was already dead comes back unchanged.
    """
    if mon.is_dead:
        return TickResult(mon=mon)

    current = process(mon, elapsed_ms, clock, config)
    current = update_age(current, clock)

    death = check_death(current, clock, config)
    if death is not None:
        return TickResult(mon=process_death(current, death.cause, clock), death=death)

    table = table if table is not None else default_table(config)
    path = check_eligibility(current, clock, table)
    if path is not None:
        current = evolve_mon(current, path, clock)
    return TickResult(mon=current, evolution=path)


def resume(mons: Mapping[str, Mon], elapsed_ms: int, clock: Clock,
           config: MonConfig = DEFAULT_CONFIG,
           table: EvolutionTable | None = None,
           min_elapsed_ms: int = MIN_RESUME_MS) -> dict[str, TickResult]:
    """Tick every mon after the app has been away for *elapsed_ms*."""
    if elapsed_ms < min_elapsed_ms:
        logger.debug("resume after %d ms skipped (< %d ms)", elapsed_ms, min_elapsed_ms)
        return {mon_id: TickResult(mon=mon) for mon_id, mon in mons.items()}

    table = table if table is not None else default_table(config)
    results = {
        mon_id: tick(mon, elapsed_ms, clock, config, table)
        for mon_id, mon in mons.items()
    }
    deaths = sum(1 for r in results.values() if r.death is not None)
    evolutions = sum(1 for r in results.values() if r.evolution is not None)
    logger.info(
        "resumed %d mons after %d ms: %d deaths, %d evolutions",
        len(results), elapsed_ms, deaths, evolutions,
    )
    return results
