"""Named predicates for SPECIAL_CONDITION evolution requirements."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Mapping

from tick_mon.clock import is_night
from tick_mon.config import DEFAULT_CONFIG, MonConfig

if TYPE_CHECKING:
    from tick_mon.clock import Clock
    from tick_mon.mon import Mon

Condition = Callable[["Mon", "Clock"], bool]


class SpecialConditions:
    """The conditions an evolution table can name in its requirements.

    A condition sees only the mon snapshot and the clock, so one registry
    can back several tables. Registering an existing name replaces it.
    """

    def __init__(self, conditions: Mapping[str, Condition] | None = None) -> None:
        self._conditions: dict[str, Condition] = {}
        for name, fn in (conditions or {}).items():
            self.register(name, fn)

    def register(self, name: str, fn: Condition) -> None:
        if not name:
            raise ValueError("Special condition name must be non-empty")
        self._conditions[name] = fn

    def check(self, name: str, mon: Mon, clock: Clock) -> bool:
        """Evaluate *name* for *mon* right now.

        Raises KeyError for a name that was never registered; requirement
        matching asks :meth:`has` first and treats unknown names as unmet.
        """
        try:
            fn = self._conditions[name]
        except KeyError:
            raise KeyError(f"Unknown special condition {name!r}") from None
        return bool(fn(mon, clock))

    def has(self, name: str) -> bool:
        return name in self._conditions

    __contains__ = has

    def names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self._conditions)


PERFECT_CARE = "PERFECT_CARE"
NIGHT_EVOLUTION = "NIGHT_EVOLUTION"

# NIGHT_EVOLUTION opens an hour earlier than the decay night window.
EVOLUTION_NIGHT_START = 20


def default_conditions(config: MonConfig = DEFAULT_CONFIG) -> SpecialConditions:
    """PERFECT_CARE and NIGHT_EVOLUTION, bounded by *config*."""

    def perfect_care(mon: Mon, clock: Clock) -> bool:
        return mon.stats.care_mistakes == 0 and mon.stats.effort == config.stats.max_effort

    def night_evolution(mon: Mon, clock: Clock) -> bool:
        return is_night(clock.hour_of_day(), EVOLUTION_NIGHT_START, config.time.night_end_hour)

    return SpecialConditions({PERFECT_CARE: perfect_care, NIGHT_EVOLUTION: night_evolution})
