"""Shared enums and error types for the mon simulation."""
from __future__ import annotations

from enum import Enum, IntEnum


class Stage(IntEnum):
    """Ordered evolutionary maturity. Only ever increases."""

    EGG = 0
    BABY = 1
    CHILD = 2
    TEEN = 3
    ADULT = 4
    PERFECT = 5


class MonState(Enum):
    """Mutually exclusive status of a mon. DEAD is terminal."""

    NORMAL = "NORMAL"
    SLEEPING = "SLEEPING"
    TIRED = "TIRED"
    HUNGRY = "HUNGRY"
    SICK = "SICK"
    INJURED = "INJURED"
    TRAINING = "TRAINING"
    DEAD = "DEAD"


class CareEventType(Enum):
    FEED = "FEED"
    CLEAN = "CLEAN"
    SLEEP_START = "SLEEP_START"
    SLEEP_END = "SLEEP_END"
    TRAIN = "TRAIN"
    HEAL = "HEAL"
    CARE_MISTAKE = "CARE_MISTAKE"
    EVOLUTION = "EVOLUTION"
    DEATH = "DEATH"


class DeathCause(Enum):
    NEGLECT = "NEGLECT"
    OLD_AGE = "OLD_AGE"
    SICKNESS = "SICKNESS"
    INJURY = "INJURY"  # reserved, no rule produces it yet


# Care-mistake reasons written into CareEvent.data["reason"].
REASON_HUNGER = "hunger"
REASON_WASTE = "waste"
REASON_SICKNESS = "sickness"

# Reasons that mark the onset of a SICK state.
SICKNESS_ONSET_REASONS = (REASON_WASTE, REASON_SICKNESS)


class TickMonError(Exception):
    """Base class for tick-mon faults (never raised for expected outcomes)."""


class MonFormatError(TickMonError, ValueError):
    """Raised when a serialized mon cannot be decoded."""


class SnapshotError(TickMonError):
    """Raised on store restore failures (version mismatch, malformed data)."""


class UnknownMonError(TickMonError, KeyError):
    """Raised when a keeper is asked about a mon id it does not hold."""

    def __init__(self, mon_id: str) -> None:
        self.mon_id = mon_id
        super().__init__(f"No mon with id {mon_id!r}")
