"""MonKeeper: a session object binding a store, a clock and the rule tables."""
from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Callable

from tick_mon.care import CARE_ACTIONS, CareResult
from tick_mon.config import DEFAULT_CONFIG, MonConfig
from tick_mon.evolution import EvolutionTable, default_table
from tick_mon.mon import create_mon
from tick_mon.pipeline import MIN_RESUME_MS, TickResult, resume
from tick_mon.training import TrainingCatalog, apply_result, default_catalog
from tick_mon.types import UnknownMonError

if TYPE_CHECKING:
    from tick_mon.clock import Clock
    from tick_mon.mon import Mon
    from tick_mon.storage import MonStore

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class MonKeeper:
    """Applies care, training and resume ticks to stored mons by id.

    Every write goes back through the store. One keeper per store; it does
    no locking of its own.
    """

    def __init__(
        self,
        store: MonStore,
        clock: Clock,
        config: MonConfig = DEFAULT_CONFIG,
        table: EvolutionTable | None = None,
        catalog: TrainingCatalog | None = None,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._store = store
        self._clock = clock
        self._config = config
        self._table = table if table is not None else default_table(config)
        self._catalog = catalog if catalog is not None else default_catalog()
        self._id_factory = id_factory
        self._active_id: str | None = None

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def catalog(self) -> TrainingCatalog:
        return self._catalog

    def set_active(self, mon_id: str) -> None:
        self.get(mon_id)
        self._active_id = mon_id

    def get(self, mon_id: str) -> Mon:
        mon = self._store.load(mon_id)
        if mon is None:
            raise UnknownMonError(mon_id)
        return mon

    def adopt(self, name: str, species: str = "BasicEgg", mon_id: str | None = None) -> Mon:
        """Create, store and return a new egg. The first one becomes active."""
        mon = create_mon(mon_id or self._id_factory(), name, species, self._clock, self._config)
        self._store.save(mon)
        if self._active_id is None:
            self._active_id = mon.id
        logger.info("adopted mon %s (%s, %s)", mon.id, name, species)
        return mon

    def release(self, mon_id: str) -> None:
        self.get(mon_id)
        self._store.delete(mon_id)
        if self._active_id == mon_id:
            self._active_id = None

    def care(self, mon_id: str, action: str) -> CareResult:
        """Run one care action ("feed", "clean", "heal", "sleep")."""
        if action not in CARE_ACTIONS:
            raise ValueError(f"Unknown care action {action!r}; expected one of {sorted(CARE_ACTIONS)}")
        result = CARE_ACTIONS[action](self.get(mon_id), self._clock, self._config)
        if result.success:
            self._store.save(result.mon)
        return result

    def train(self, mon_id: str, game_id: str, score: float) -> Mon:
        mon = self.get(mon_id)
        trained = apply_result(mon, game_id, score, self._clock, self._catalog)
        if trained is not mon:
            self._store.save(trained)
        return trained

    def resume(self, elapsed_ms: int, min_elapsed_ms: int = MIN_RESUME_MS) -> dict[str, TickResult]:
        """Tick every stored mon and write the results back."""
        mons = self._store.load_all()
        results = resume(mons, elapsed_ms, self._clock, self._config, self._table, min_elapsed_ms)
        updated = {mon_id: r.mon for mon_id, r in results.items()}
        if any(updated[mon_id] is not mons[mon_id] for mon_id in updated):
            self._store.save_all(updated)
        return results
