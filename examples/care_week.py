"""A week with a mon -- hatching, care, training and evolution.

Demonstrates:
- Adopting an egg through MonKeeper over an in-memory store
- Resuming after absences of varying length (decay -> age -> death -> evolution)
- Answering care needs after each resume
- Feeding minigame scores into battle power

Run: python -m examples.care_week
"""

from tick_mon import ManualClock, MemoryMonStore, MonKeeper, MonState

HOUR = 60 * 60 * 1000
T0 = 1_700_000_000_000


# ---------------------------------------------------------------------------
# Caretaker routine
# ---------------------------------------------------------------------------

def tend(keeper: MonKeeper, mon_id: str) -> None:
    """Do whatever the mon needs right now."""
    mon = keeper.get(mon_id)
    wanted: list[str] = []
    if mon.stats.poop_count > 0:
        wanted.append("clean")
    if mon.state in (MonState.SICK, MonState.INJURED):
        wanted.append("heal")
    if mon.state is MonState.SLEEPING:
        wanted.append("sleep")
    wanted.extend(["feed"] * (3 - mon.stats.hunger))
    for action in wanted:
        result = keeper.care(mon_id, action)
        print(f"    {action:<6} {result.message}")


def main() -> None:
    clock = ManualClock(T0, hour=12)
    keeper = MonKeeper(MemoryMonStore(), clock)
    mon = keeper.adopt("Pip")
    print(f"  Adopted {mon.name} ({mon.species}, {mon.stage.name})\n")

    for day in range(1, 8):
        for _ in range(4):
            clock.advance(6 * HOUR)
            result = keeper.resume(6 * HOUR)[mon.id]
            if result.death is not None:
                print(f"  [day {day}] {mon.name} died: {result.death.cause.name}")
                return
            if result.evolution is not None:
                print(f"  [day {day}] evolved into {result.evolution.to_species}")
            tend(keeper, mon.id)
        keeper.train(mon.id, "pattern_memory", 10)
        current = keeper.get(mon.id)
        print(f"  [day {day}] {current.species} age={current.stats.age} "
              f"effort={current.stats.effort} bp={current.stats.bp}\n")


if __name__ == "__main__":
    main()
