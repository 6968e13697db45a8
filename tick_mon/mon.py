"""Mon entity model.

Every snapshot is frozen. Transitions build a new value with
``dataclasses.replace`` and histories are tuples that only grow.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from tick_mon.config import DEFAULT_CONFIG, MonConfig, StatsConfig
from tick_mon.types import CareEventType, MonFormatError, MonState, Stage

if TYPE_CHECKING:
    from tick_mon.clock import Clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonStats:
    age: int = 0
    hunger: int = 3
    effort: int = 3
    hp: int = 100
    bp: int = 0
    weight: int = 10
    care_mistakes: int = 0
    poop_count: int = 0


@dataclass(frozen=True)
class CareEvent:
    timestamp: int
    type: CareEventType
    data: Mapping[str, Any] | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        # Events are shared by every later snapshot; keep their payload read-only.
        if self.data is not None:
            object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @property
    def reason(self) -> str | None:
        if self.data is None:
            return None
        return self.data.get("reason")


@dataclass(frozen=True)
class EvolutionEvent:
    timestamp: int
    from_species: str
    to_species: str
    stage: Stage


@dataclass(frozen=True)
class Mon:
    id: str
    name: str
    species: str
    stage: Stage
    created_at: int
    last_updated: int
    stats: MonStats = field(default_factory=MonStats)
    state: MonState = MonState.NORMAL
    care_history: tuple[CareEvent, ...] = ()
    evolution_history: tuple[EvolutionEvent, ...] = ()

    @property
    def is_dead(self) -> bool:
        return self.state is MonState.DEAD

    def with_stats(self, **changes: int) -> Mon:
        return replace(self, stats=replace(self.stats, **changes))

    def record(self, timestamp: int, type: CareEventType,
               data: Mapping[str, Any] | None = None) -> Mon:
        """Return a copy with one CareEvent appended to care_history."""
        event = CareEvent(timestamp=timestamp, type=type, data=data)
        return replace(self, care_history=self.care_history + (event,))

    def record_many(self, events: Iterable[CareEvent]) -> Mon:
        return replace(self, care_history=self.care_history + tuple(events))

    def last_event(self, type: CareEventType,
                   reasons: Iterable[str] | None = None) -> CareEvent | None:
        """Most recent care event of *type*, optionally filtered by reason."""
        wanted = set(reasons) if reasons is not None else None
        for event in reversed(self.care_history):
            if event.type is not type:
                continue
            if wanted is None or event.reason in wanted:
                return event
        return None

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible dict. Enums are stored by name."""
        return {
            "id": self.id,
            "name": self.name,
            "species": self.species,
            "stage": self.stage.name,
            "created_at": self.created_at,
            "last_updated": self.last_updated,
            "stats": {f.name: getattr(self.stats, f.name) for f in fields(MonStats)},
            "state": self.state.name,
            "care_history": [
                {
                    "timestamp": e.timestamp,
                    "type": e.type.name,
                    "data": dict(e.data) if e.data is not None else None,
                }
                for e in self.care_history
            ],
            "evolution_history": [
                {
                    "timestamp": e.timestamp,
                    "from_species": e.from_species,
                    "to_species": e.to_species,
                    "stage": e.stage.name,
                }
                for e in self.evolution_history
            ],
        }

    @staticmethod
    def from_dict(d: dict[str, Any],
                  stats_config: StatsConfig = DEFAULT_CONFIG.stats) -> Mon:
        """Inverse of :meth:`to_dict`. Raises MonFormatError on bad input.

        Out-of-range stats are clamped into the bounds of *stats_config*.
        """
        required = {"id", "name", "species", "stage", "created_at", "last_updated", "stats", "state"}
        missing = required - d.keys()
        if missing:
            raise MonFormatError(f"Missing fields: {sorted(missing)}")
        try:
            stats_data = d["stats"]
            unknown = set(stats_data) - {f.name for f in fields(MonStats)}
            if unknown:
                raise MonFormatError(f"Unknown stats: {sorted(unknown)}")
            raw = MonStats(**{k: int(v) for k, v in stats_data.items()})
            stats = clamp_stats(raw, stats_config)
            if stats != raw:
                logger.warning("mon %s: clamped out-of-range stats %s", d["id"], raw)
            return Mon(
                id=str(d["id"]),
                name=str(d["name"]),
                species=str(d["species"]),
                stage=Stage[d["stage"]],
                created_at=int(d["created_at"]),
                last_updated=int(d["last_updated"]),
                stats=stats,
                state=MonState[d["state"]],
                care_history=tuple(
                    CareEvent(
                        timestamp=int(e["timestamp"]),
                        type=CareEventType[e["type"]],
                        data=e.get("data"),
                    )
                    for e in d.get("care_history", [])
                ),
                evolution_history=tuple(
                    EvolutionEvent(
                        timestamp=int(e["timestamp"]),
                        from_species=str(e["from_species"]),
                        to_species=str(e["to_species"]),
                        stage=Stage[e["stage"]],
                    )
                    for e in d.get("evolution_history", [])
                ),
            )
        except MonFormatError:
            raise
        except KeyError as exc:
            raise MonFormatError(f"Unknown or missing value: {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise MonFormatError(str(exc)) from exc


def clamp_stats(stats: MonStats, config: StatsConfig) -> MonStats:
    """Clamp every bounded stat into its legal range."""
    return replace(
        stats,
        age=max(0, stats.age),
        hunger=max(0, min(config.max_hunger, stats.hunger)),
        effort=max(0, min(config.max_effort, stats.effort)),
        hp=max(0, min(config.max_hp, stats.hp)),
        bp=max(0, stats.bp),
        weight=max(0, stats.weight),
        care_mistakes=max(0, stats.care_mistakes),
        poop_count=max(0, min(config.max_waste, stats.poop_count)),
    )


def create_mon(mon_id: str, name: str, species: str, clock: Clock,
               config: MonConfig = DEFAULT_CONFIG) -> Mon:
    """Hatch a fresh egg with full hunger, effort and HP."""
    now = clock.now()
    stats = config.stats
    return Mon(
        id=mon_id,
        name=name,
        species=species,
        stage=Stage.EGG,
        created_at=now,
        last_updated=now,
        stats=MonStats(
            age=0,
            hunger=stats.start_hunger,
            effort=stats.start_effort,
            hp=stats.start_hp,
            bp=0,
            weight=stats.start_weight,
            care_mistakes=0,
            poop_count=0,
        ),
        state=MonState.NORMAL,
    )
