"""Tests for the lifecycle monitor: death detection, death processing, aging."""
from __future__ import annotations

from tick_mon import (
    CareEvent,
    CareEventType,
    DeathCause,
    ManualClock,
    MonState,
    Stage,
    check_death,
    process_death,
    update_age,
)
from tick_mon.lifecycle import max_age

from conftest import DAY, HOUR, T0


class TestNeglect:
    def test_never_fed_past_three_days(self, make_mon) -> None:
        mon = make_mon(hunger=0, effort=0)
        result = check_death(mon, ManualClock(T0 + 3 * DAY + 1))
        assert result is not None
        assert result.is_dead is True
        assert result.cause is DeathCause.NEGLECT

    def test_never_fed_within_window(self, make_mon) -> None:
        mon = make_mon(hunger=0, effort=0)
        assert check_death(mon, ManualClock(T0 + 2 * DAY)) is None
        assert check_death(mon, ManualClock(T0 + 3 * DAY)) is None

    def test_recent_feed_keeps_alive(self, make_mon) -> None:
        fed = CareEvent(T0 + 2 * DAY, CareEventType.FEED)
        mon = make_mon(hunger=0, effort=0, care_history=(fed,))
        assert check_death(mon, ManualClock(T0 + 4 * DAY)) is None

    def test_stale_feed(self, make_mon) -> None:
        fed = CareEvent(T0, CareEventType.FEED)
        mon = make_mon(hunger=0, effort=0, care_history=(fed,))
        assert check_death(mon, ManualClock(T0 + 4 * DAY)).cause is DeathCause.NEGLECT

    def test_needs_both_stats_empty(self, make_mon) -> None:
        clock = ManualClock(T0 + 10 * DAY)
        assert check_death(make_mon(hunger=0, effort=1), clock) is None
        assert check_death(make_mon(hunger=1, effort=0), clock) is None


class TestOldAge:
    def test_max_age_by_stage(self) -> None:
        assert max_age(Stage.TEEN) is None
        assert max_age(Stage.ADULT) == 30
        assert max_age(Stage.PERFECT) == 50

    def test_adult_past_thirty(self, clock, make_mon) -> None:
        mon = make_mon(stage=Stage.ADULT, age=31)
        assert check_death(mon, clock).cause is DeathCause.OLD_AGE

    def test_adult_at_thirty(self, clock, make_mon) -> None:
        assert check_death(make_mon(stage=Stage.ADULT, age=30), clock) is None

    def test_perfect_lives_longer(self, clock, make_mon) -> None:
        assert check_death(make_mon(stage=Stage.PERFECT, age=45), clock) is None
        assert check_death(make_mon(stage=Stage.PERFECT, age=51), clock).cause is DeathCause.OLD_AGE

    def test_young_stages_never_age_out(self, clock, make_mon) -> None:
        assert check_death(make_mon(stage=Stage.TEEN, age=500), clock) is None


class TestSickness:
    def _sick(self, make_mon, reason: str, at: int):
        event = CareEvent(at, CareEventType.CARE_MISTAKE, {"reason": reason})
        return make_mon(state=MonState.SICK, care_history=(event,))

    def test_prolonged_sickness(self, make_mon) -> None:
        mon = self._sick(make_mon, "sickness", T0)
        assert check_death(mon, ManualClock(T0 + 6 * DAY)).cause is DeathCause.SICKNESS

    def test_recent_sickness(self, make_mon) -> None:
        mon = self._sick(make_mon, "sickness", T0)
        assert check_death(mon, ManualClock(T0 + 4 * DAY)) is None

    def test_waste_onset_does_not_count(self, make_mon) -> None:
        mon = self._sick(make_mon, "waste", T0)
        assert check_death(mon, ManualClock(T0 + 6 * DAY)) is None

    def test_latest_sickness_mistake_starts_the_clock(self, make_mon) -> None:
        events = (
            CareEvent(T0, CareEventType.CARE_MISTAKE, {"reason": "sickness"}),
            CareEvent(T0 + 3 * DAY, CareEventType.CARE_MISTAKE, {"reason": "waste"}),
        )
        mon = make_mon(state=MonState.SICK, care_history=events)
        assert check_death(mon, ManualClock(T0 + 5 * DAY + HOUR)).cause is DeathCause.SICKNESS

    def test_hunger_mistake_is_not_onset(self, make_mon) -> None:
        mon = self._sick(make_mon, "hunger", T0)
        assert check_death(mon, ManualClock(T0 + 9 * DAY)) is None

    def test_recovered_mon_is_safe(self, make_mon) -> None:
        event = CareEvent(T0, CareEventType.CARE_MISTAKE, {"reason": "sickness"})
        mon = make_mon(state=MonState.NORMAL, care_history=(event,))
        assert check_death(mon, ManualClock(T0 + 9 * DAY)) is None


class TestCheckOrder:
    def test_already_dead_reports_neglect(self, clock, make_mon) -> None:
        mon = make_mon(state=MonState.DEAD, stage=Stage.ADULT, age=99)
        assert check_death(mon, clock).cause is DeathCause.NEGLECT

    def test_neglect_before_old_age(self, make_mon) -> None:
        mon = make_mon(stage=Stage.ADULT, age=40, hunger=0, effort=0)
        assert check_death(mon, ManualClock(T0 + 40 * DAY)).cause is DeathCause.NEGLECT

    def test_healthy_mon_lives(self, clock, make_mon) -> None:
        assert check_death(make_mon(), clock) is None


class TestProcessDeath:
    def test_marks_dead_and_logs(self, clock, make_mon) -> None:
        mon = make_mon()
        dead = process_death(mon, DeathCause.OLD_AGE, clock)
        assert dead.state is MonState.DEAD
        last = dead.care_history[-1]
        assert last.type is CareEventType.DEATH
        assert last.data == {"cause": "OLD_AGE"}
        assert dead.stats == mon.stats

    def test_dead_mon_untouched(self, clock, make_mon) -> None:
        mon = make_mon(state=MonState.DEAD)
        assert process_death(mon, DeathCause.NEGLECT, clock) is mon


class TestUpdateAge:
    def test_whole_days(self, make_mon) -> None:
        mon = make_mon(age=0)
        assert update_age(mon, ManualClock(T0 + int(3.5 * DAY))).stats.age == 3

    def test_idempotent(self, make_mon) -> None:
        clock = ManualClock(T0 + 5 * DAY)
        once = update_age(make_mon(), clock)
        assert update_age(once, clock) is once
        assert once.stats.age == 5

    def test_recomputed_not_incremented(self, make_mon) -> None:
        mon = make_mon(age=17)
        assert update_age(mon, ManualClock(T0 + DAY)).stats.age == 1

    def test_clock_before_creation(self, make_mon) -> None:
        mon = make_mon(created_at=T0 + DAY, age=0)
        assert update_age(mon, ManualClock(T0)).stats.age == 0
