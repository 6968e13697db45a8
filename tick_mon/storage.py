"""Persistence stores for mon snapshots.

The simulation never calls these itself. Callers load a snapshot, run it
through the engine and save the result.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Protocol

from tick_mon.config import DEFAULT_CONFIG, MonConfig, StatsConfig
from tick_mon.mon import Mon
from tick_mon.types import MonFormatError, SnapshotError

logger = logging.getLogger(__name__)

_STORE_VERSION = 1


class MonStore(Protocol):
    def load(self, mon_id: str) -> Mon | None: ...

    def save(self, mon: Mon) -> None: ...

    def load_all(self) -> dict[str, Mon]: ...

    def save_all(self, mons: Mapping[str, Mon]) -> None: ...

    def delete(self, mon_id: str) -> None: ...


class MemoryMonStore:
    """Dict-backed store. Snapshots are frozen, so no copying is needed."""

    def __init__(self) -> None:
        self._mons: dict[str, Mon] = {}

    def load(self, mon_id: str) -> Mon | None:
        return self._mons.get(mon_id)

    def save(self, mon: Mon) -> None:
        self._mons[mon.id] = mon

    def load_all(self) -> dict[str, Mon]:
        return dict(self._mons)

    def save_all(self, mons: Mapping[str, Mon]) -> None:
        self._mons = dict(mons)

    def delete(self, mon_id: str) -> None:
        self._mons.pop(mon_id, None)


class JsonMonStore:
    """All mons in one JSON document, rewritten atomically on every save."""

    def __init__(self, path: str | Path, config: MonConfig = DEFAULT_CONFIG) -> None:
        self._path = Path(path)
        self._stats_config = config.stats

    @property
    def path(self) -> Path:
        return self._path

    def load(self, mon_id: str) -> Mon | None:
        return self.load_all().get(mon_id)

    def save(self, mon: Mon) -> None:
        mons = self.load_all()
        mons[mon.id] = mon
        self.save_all(mons)

    def delete(self, mon_id: str) -> None:
        mons = self.load_all()
        if mons.pop(mon_id, None) is not None:
            self.save_all(mons)

    def load_all(self) -> dict[str, Mon]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Malformed store file {self._path}: {exc}") from exc
        return _decode(data, self._stats_config)

    def save_all(self, mons: Mapping[str, Mon]) -> None:
        payload = {
            "version": _STORE_VERSION,
            "mons": {mon_id: mon.to_dict() for mon_id, mon in mons.items()},
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.info("saved %d mons to %s", len(mons), self._path)


def _decode(data: Any, stats_config: StatsConfig) -> dict[str, Mon]:
    if not isinstance(data, dict):
        raise SnapshotError("Store document must be a JSON object")
    version = data.get("version")
    if version != _STORE_VERSION:
        raise SnapshotError(
            f"Unsupported store version {version!r}, expected {_STORE_VERSION}"
        )
    raw = data.get("mons", {})
    if not isinstance(raw, dict):
        raise SnapshotError("'mons' must be an object keyed by mon id")
    mons: dict[str, Mon] = {}
    for mon_id, mon_data in raw.items():
        if not isinstance(mon_data, dict):
            raise SnapshotError(f"Bad mon {mon_id!r}: expected an object")
        try:
            mons[mon_id] = Mon.from_dict(mon_data, stats_config)
        except MonFormatError as exc:
            raise SnapshotError(f"Bad mon {mon_id!r}: {exc}") from exc
    return mons
