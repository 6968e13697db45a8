"""tick-mon - Virtual pet simulation engine: decay, care, lifecycle, evolution, training."""

from tick_mon.care import (
    CARE_ACTIONS,
    CareResult,
    clean_mon,
    cooldown_remaining,
    feed_mon,
    heal_mon,
    toggle_sleep,
)
from tick_mon.clock import Clock, ManualClock, SystemClock
from tick_mon.config import DEFAULT_CONFIG, LifecycleConfig, MonConfig, StatsConfig, TimeConfig, load_config
from tick_mon.decay import process
from tick_mon.evolution import (
    EvolutionPath,
    EvolutionTable,
    Requirement,
    RequirementType,
    check_eligibility,
    default_table,
    evolve_mon,
    meets_requirements,
)
from tick_mon.guards import SpecialConditions, default_conditions
from tick_mon.keeper import MonKeeper
from tick_mon.lifecycle import DeathCheck, check_death, process_death, update_age
from tick_mon.mon import CareEvent, EvolutionEvent, Mon, MonStats, clamp_stats, create_mon
from tick_mon.pipeline import TickResult, resume, tick
from tick_mon.storage import JsonMonStore, MemoryMonStore, MonStore
from tick_mon.training import (
    CappedReward,
    Difficulty,
    FlatReward,
    LinearReward,
    TrainingCatalog,
    TrainingGame,
    apply_result,
    calculate_reward,
    default_catalog,
)
from tick_mon.types import (
    CareEventType,
    DeathCause,
    MonFormatError,
    MonState,
    SnapshotError,
    Stage,
    TickMonError,
    UnknownMonError,
)

__all__ = [
    # Model
    "Mon",
    "MonStats",
    "CareEvent",
    "EvolutionEvent",
    "Stage",
    "MonState",
    "CareEventType",
    "DeathCause",
    "create_mon",
    "clamp_stats",
    # Collaborators
    "Clock",
    "SystemClock",
    "ManualClock",
    "MonConfig",
    "TimeConfig",
    "StatsConfig",
    "LifecycleConfig",
    "DEFAULT_CONFIG",
    "load_config",
    # Decay
    "process",
    # Care
    "CareResult",
    "CARE_ACTIONS",
    "feed_mon",
    "clean_mon",
    "heal_mon",
    "toggle_sleep",
    "cooldown_remaining",
    # Lifecycle
    "DeathCheck",
    "check_death",
    "process_death",
    "update_age",
    # Evolution
    "RequirementType",
    "Requirement",
    "EvolutionPath",
    "EvolutionTable",
    "SpecialConditions",
    "default_conditions",
    "default_table",
    "meets_requirements",
    "check_eligibility",
    "evolve_mon",
    # Training
    "Difficulty",
    "FlatReward",
    "CappedReward",
    "LinearReward",
    "TrainingGame",
    "TrainingCatalog",
    "default_catalog",
    "calculate_reward",
    "apply_result",
    # Pipeline, storage, session
    "TickResult",
    "tick",
    "resume",
    "MonStore",
    "MemoryMonStore",
    "JsonMonStore",
    "MonKeeper",
    # Errors
    "TickMonError",
    "MonFormatError",
    "SnapshotError",
    "UnknownMonError",
]
