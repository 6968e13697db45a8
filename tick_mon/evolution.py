"""Evolution engine: a prioritized rule table of species transitions."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable

from tick_mon.config import DEFAULT_CONFIG, MonConfig
from tick_mon.guards import SpecialConditions, default_conditions
from tick_mon.mon import EvolutionEvent
from tick_mon.types import Stage

if TYPE_CHECKING:
    from tick_mon.clock import Clock
    from tick_mon.mon import Mon

logger = logging.getLogger(__name__)


class RequirementType(Enum):
    MIN_AGE = "MIN_AGE"
    MAX_AGE = "MAX_AGE"
    MIN_EFFORT = "MIN_EFFORT"
    MAX_CARE_MISTAKES = "MAX_CARE_MISTAKES"
    MIN_BP = "MIN_BP"
    SPECIAL_CONDITION = "SPECIAL_CONDITION"


@dataclass(frozen=True)
class Requirement:
    """One condition of an evolution path.

    Numeric kinds compare against *value*; SPECIAL_CONDITION names a
    registered condition.
    """

    type: RequirementType
    value: int | str

    def __post_init__(self) -> None:
        if self.type is RequirementType.SPECIAL_CONDITION:
            if not isinstance(self.value, str) or not self.value:
                raise ValueError("SPECIAL_CONDITION requires a non-empty condition name")
        elif isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError(f"{self.type.name} requires an integer value, got {self.value!r}")


@dataclass(frozen=True)
class EvolutionPath:
    from_species: str
    to_species: str
    requirements: tuple[Requirement, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.from_species or not self.to_species:
            raise ValueError("EvolutionPath species must be non-empty")
        # Accept any iterable, store a tuple.
        object.__setattr__(self, "requirements", tuple(self.requirements))


class EvolutionTable:
    """Ordered evolution paths plus the special conditions they may name.

    Insertion order is the tie-break between paths of equal priority.
    """

    def __init__(self, paths: Iterable[EvolutionPath] = (),
                 conditions: SpecialConditions | None = None,
                 config: MonConfig = DEFAULT_CONFIG) -> None:
        self._paths: list[EvolutionPath] = list(paths)
        self.conditions = conditions if conditions is not None else default_conditions(config)

    def add(self, path: EvolutionPath) -> None:
        self._paths.append(path)

    def paths(self) -> list[EvolutionPath]:
        return list(self._paths)

    def paths_from(self, species: str) -> list[EvolutionPath]:
        """Paths leaving *species*, highest priority first (stable)."""
        matches = [p for p in self._paths if p.from_species == species]
        return sorted(matches, key=lambda p: p.priority, reverse=True)

    def species(self) -> set[str]:
        names: set[str] = set()
        for p in self._paths:
            names.add(p.from_species)
            names.add(p.to_species)
        return names

    def __len__(self) -> int:
        return len(self._paths)


def _req(type: RequirementType, value: int | str) -> Requirement:
    return Requirement(type=type, value=value)


def default_table(config: MonConfig = DEFAULT_CONFIG) -> EvolutionTable:
    """The stock tree: one egg line that splits on care quality at CHILD."""
    R = RequirementType
    return EvolutionTable([
        EvolutionPath("BasicEgg", "BasicBaby", (_req(R.MIN_AGE, 1),), priority=1),
        EvolutionPath("BasicBaby", "BasicChild", (
            _req(R.MIN_AGE, 3),
            _req(R.MIN_EFFORT, 2),
        ), priority=1),
        EvolutionPath("BasicChild", "GoodTeen", (
            _req(R.MIN_AGE, 5),
            _req(R.MIN_EFFORT, 3),
            _req(R.MAX_CARE_MISTAKES, 3),
        ), priority=2),
        EvolutionPath("BasicChild", "PoorTeen", (
            _req(R.MIN_AGE, 5),
            _req(R.MIN_EFFORT, 1),
        ), priority=1),
        EvolutionPath("GoodTeen", "GoodAdult", (
            _req(R.MIN_AGE, 8),
            _req(R.MIN_EFFORT, 3),
            _req(R.MIN_BP, 30),
        ), priority=1),
        EvolutionPath("PoorTeen", "PoorAdult", (_req(R.MIN_AGE, 8),), priority=1),
        EvolutionPath("GoodAdult", "PerfectMon", (
            _req(R.MIN_AGE, 12),
            _req(R.MIN_EFFORT, 3),
            _req(R.MIN_BP, 100),
            _req(R.MAX_CARE_MISTAKES, 5),
        ), priority=1),
    ], config=config)


_Check = Callable[["Mon", Requirement, EvolutionTable, "Clock"], bool]


def _special(mon: Mon, req: Requirement, table: EvolutionTable, clock: Clock) -> bool:
    name = str(req.value)
    if not table.conditions.has(name):
        return False
    return table.conditions.check(name, mon, clock)


_CHECKS: dict[RequirementType, _Check] = {
    RequirementType.MIN_AGE: lambda mon, req, table, clock: mon.stats.age >= req.value,
    RequirementType.MAX_AGE: lambda mon, req, table, clock: mon.stats.age <= req.value,
    RequirementType.MIN_EFFORT: lambda mon, req, table, clock: mon.stats.effort >= req.value,
    RequirementType.MAX_CARE_MISTAKES: lambda mon, req, table, clock: mon.stats.care_mistakes <= req.value,
    RequirementType.MIN_BP: lambda mon, req, table, clock: mon.stats.bp >= req.value,
    RequirementType.SPECIAL_CONDITION: _special,
}

_missing = set(RequirementType) - _CHECKS.keys()
if _missing:
    raise RuntimeError(f"No evaluator for requirement types: {sorted(t.name for t in _missing)}")


def meets_requirements(mon: Mon, requirements: Iterable[Requirement],
                       table: EvolutionTable, clock: Clock) -> bool:
    """True when every requirement holds. An empty list always holds."""
    return all(_CHECKS[req.type](mon, req, table, clock) for req in requirements)


def check_eligibility(mon: Mon, clock: Clock,
                      table: EvolutionTable | None = None) -> EvolutionPath | None:
    """First fully satisfied path for the mon's species, by priority."""
    if mon.is_dead:
        return None
    table = table if table is not None else default_table()
    for path in table.paths_from(mon.species):
        if meets_requirements(mon, path.requirements, table, clock):
            return path
    return None


def evolve_mon(mon: Mon, path: EvolutionPath, clock: Clock) -> Mon:
    """Advance one stage (capped at PERFECT) and switch to path.to_species."""
    if mon.is_dead:
        return mon
    new_stage = Stage(min(mon.stage + 1, Stage.PERFECT))
    event = EvolutionEvent(
        timestamp=clock.now(),
        from_species=mon.species,
        to_species=path.to_species,
        stage=new_stage,
    )
    logger.info("mon %s evolved %s -> %s (%s)", mon.id, mon.species, path.to_species, new_stage.name)
    return replace(
        mon,
        species=path.to_species,
        stage=new_stage,
        evolution_history=mon.evolution_history + (event,),
    )
