"""Tests for the schedule service (timers and series timers)."""

import threading
from datetime import UTC, datetime

import pytest

from arguslive.argus.schedule import (
    NewEpisodesOnlyRule,
    OnDateAndDaysOfWeekRule,
    Schedule,
    ScheduleRuleType,
    TitleRule,
)
from arguslive.argus.types import ScheduleDaysOfWeek
from arguslive.core.exceptions import OperationCancelled, SchedulingConflict
from arguslive.core.types import DayOfWeek, SeriesTimerInfo, TimerInfo
from fakes import make_upcoming

START = datetime(2024, 3, 4, 20, 30, tzinfo=UTC)


def _timer(**kwargs) -> TimerInfo:
    defaults = {
        "channel_id": "ch-1",
        "name": "Evening News",
        "start_date": START,
        "pre_padding_seconds": 125,
        "post_padding_seconds": 600,
    }
    defaults.update(kwargs)
    return TimerInfo(**defaults)


def _series(**kwargs) -> SeriesTimerInfo:
    defaults = {
        "channel_id": "ch-1",
        "name": "Doctor Who",
        "start_date": START,
        "days": frozenset({DayOfWeek.SATURDAY}),
    }
    defaults.update(kwargs)
    return SeriesTimerInfo(**defaults)


# =============================================================================
# CREATE / UPDATE
# =============================================================================


class TestCreateTimer:
    """Creating a one-off timer saves one schedule built from the defaults."""

    def test_saves_schedule_with_four_rules(self, schedule_service, conn):
        schedule_service.create_timer(_timer())

        assert len(conn.scheduler.saved) == 1
        saved = conn.scheduler.saved[0]
        assert saved.name == "Evening News"
        assert len(saved.rules) == 4

    def test_padding_floored_to_minutes(self, schedule_service, conn):
        schedule_service.create_timer(_timer(pre_padding_seconds=125, post_padding_seconds=59))
        saved = conn.scheduler.saved[0]
        assert saved.pre_record_minutes == 2
        assert saved.pre_record_seconds == 120
        assert saved.post_record_seconds == 0

    def test_keeps_template_fields(self, schedule_service, conn):
        schedule_service.create_timer(_timer())
        assert conn.scheduler.saved[0].to_api()["KeepUntilMode"] == 0

    def test_create_ignores_timer_id(self, schedule_service, conn):
        schedule_service.create_timer(_timer(id="existing"))
        assert conn.scheduler.saved[0].schedule_id is None

    def test_handshake_before_save(self, schedule_service, conn):
        schedule_service.create_timer(_timer())
        assert conn.core.ping_count == 1

    def test_template_fault_is_conflict(self, schedule_service, conn):
        conn.scheduler.fail_on.add("create_new_schedule")
        with pytest.raises(SchedulingConflict):
            schedule_service.create_timer(_timer())
        assert conn.scheduler.saved == []

    def test_save_fault_is_conflict(self, schedule_service, conn):
        conn.scheduler.fail_on.add("save_schedule")
        with pytest.raises(SchedulingConflict):
            schedule_service.create_timer(_timer())

    def test_negative_padding_is_conflict(self, schedule_service, conn):
        with pytest.raises(SchedulingConflict):
            schedule_service.create_timer(_timer(pre_padding_seconds=-60))
        assert conn.scheduler.saved == []

    def test_cancelled_before_any_call(self, schedule_service, conn):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(OperationCancelled):
            schedule_service.create_timer(_timer(), cancel)
        assert conn.core.calls == []
        assert conn.scheduler.calls == []


class TestUpdateTimer:
    """Updating overwrites the schedule identified by the timer id."""

    def test_update_keeps_schedule_id(self, schedule_service, conn):
        schedule_service.update_timer(_timer(id="sched-9"))
        assert conn.scheduler.saved[0].schedule_id == "sched-9"

    def test_update_without_id_saves_new(self, schedule_service, conn):
        schedule_service.update_timer(_timer())
        assert conn.scheduler.saved[0].schedule_id is None

    def test_update_series_fault_is_conflict(self, schedule_service, conn):
        conn.scheduler.fail_on.add("save_schedule")
        with pytest.raises(SchedulingConflict):
            schedule_service.update_series_timer(_series(id="sched-9"))


class TestCreateSeriesTimer:
    """Series timers carry their day mask and new-episodes flag."""

    def test_five_rules_by_default(self, schedule_service, conn):
        schedule_service.create_series_timer(_series())
        assert len(conn.scheduler.saved[0].rules) == 5

    def test_any_time_any_channel(self, schedule_service, conn):
        schedule_service.create_series_timer(
            _series(record_any_time=True, record_any_channel=True)
        )
        assert len(conn.scheduler.saved[0].rules) == 3

    def test_day_mask_saved(self, schedule_service, conn):
        schedule_service.create_series_timer(_series())
        saved = conn.scheduler.saved[0]
        [days_rule] = saved.find_rules(ScheduleRuleType.ON_DATE_AND_DAYS_OF_WEEK)
        assert days_rule.days == ScheduleDaysOfWeek.SATURDAYS


# =============================================================================
# CANCEL
# =============================================================================


class TestCancel:
    """Both cancel operations delete the whole schedule."""

    def test_cancel_timer_deletes_schedule(self, schedule_service, conn):
        schedule_service.cancel_timer("sched-1")
        assert conn.scheduler.deleted == ["sched-1"]

    def test_cancel_series_timer_issues_same_call(self, schedule_service, conn):
        schedule_service.cancel_timer("sched-1")
        schedule_service.cancel_series_timer("sched-1")
        assert conn.scheduler.deleted == ["sched-1", "sched-1"]
        assert conn.scheduler.calls == ["delete_schedule", "delete_schedule"]

    def test_delete_fault_is_conflict(self, schedule_service, conn):
        conn.scheduler.fail_on.add("delete_schedule")
        with pytest.raises(SchedulingConflict):
            schedule_service.cancel_timer("sched-1")


# =============================================================================
# LIST TIMERS
# =============================================================================


class TestListTimers:
    """One timer per upcoming recording, no grouping."""

    def test_one_timer_per_upcoming_recording(self, schedule_service, conn):
        conn.control.upcoming = [
            make_upcoming("sched-1", "News", offset_hours=0),
            make_upcoming("sched-1", "News", offset_hours=24),
            make_upcoming("sched-2", "Film", channel_id="ch-2"),
        ]
        timers = schedule_service.list_timers()
        assert [t.id for t in timers] == ["sched-1", "sched-1", "sched-2"]
        assert timers[2].channel_id == "ch-2"

    def test_timer_fields(self, schedule_service, conn):
        conn.guide.descriptions["gp-1"] = "Headlines"
        conn.control.upcoming = [make_upcoming("sched-1", "News")]
        [timer] = schedule_service.list_timers()
        upcoming = conn.control.upcoming[0]
        assert timer.name == "News"
        assert timer.overview == "Headlines"
        assert timer.program_id == "gp-1"
        assert timer.start_date == upcoming.actual_start_time_utc
        assert timer.end_date == upcoming.actual_stop_time_utc
        assert timer.pre_padding_seconds == 120
        assert timer.post_padding_seconds == 300

    def test_one_program_lookup_per_recording(self, schedule_service, conn):
        conn.control.upcoming = [make_upcoming("a"), make_upcoming("b")]
        schedule_service.list_timers()
        assert conn.guide.calls.count("get_program_by_id") == 2

    def test_missing_guide_program_gives_no_overview(self, schedule_service, conn):
        conn.control.upcoming = [make_upcoming("a", guide_program_id=None)]
        [timer] = schedule_service.list_timers()
        assert timer.overview is None
        assert conn.guide.calls == []

    def test_fault_gives_empty_list(self, schedule_service, conn):
        conn.control.upcoming = [make_upcoming("a")]
        conn.guide.fail_on.add("get_program_by_id")
        assert schedule_service.list_timers() == []


# =============================================================================
# LIST SERIES TIMERS
# =============================================================================


class TestListSeriesTimers:
    """Grouped by schedule, first-seen wins, series only."""

    @pytest.fixture
    def weekly_schedule(self):
        return Schedule(
            schedule_id="sched-1",
            name="Doctor Who",
            rules=[
                TitleRule("Doctor Who"),
                OnDateAndDaysOfWeekRule(ScheduleDaysOfWeek.SATURDAYS, START),
                NewEpisodesOnlyRule(True),
            ],
        )

    def test_groups_by_schedule_first_seen(self, schedule_service, conn, weekly_schedule):
        first = make_upcoming("sched-1", "Doctor Who", is_part_of_series=True, offset_hours=0)
        second = make_upcoming("sched-1", "Doctor Who", is_part_of_series=True, offset_hours=168)
        conn.control.upcoming = [first, second]
        conn.scheduler.schedules["sched-1"] = weekly_schedule

        [series] = schedule_service.list_series_timers()
        assert series.id == "sched-1"
        assert series.start_date == first.actual_start_time_utc

    def test_days_and_new_only_decoded(self, schedule_service, conn, weekly_schedule):
        conn.control.upcoming = [make_upcoming("sched-1", is_part_of_series=True)]
        conn.scheduler.schedules["sched-1"] = weekly_schedule

        [series] = schedule_service.list_series_timers()
        assert series.days == frozenset({DayOfWeek.SATURDAY})
        assert series.record_new_only is True

    def test_any_flags_not_reconstructed(self, schedule_service, conn, weekly_schedule):
        # weekly_schedule has neither AroundTime nor Channels rules
        conn.control.upcoming = [make_upcoming("sched-1", is_part_of_series=True)]
        conn.scheduler.schedules["sched-1"] = weekly_schedule

        [series] = schedule_service.list_series_timers()
        assert series.record_any_time is False
        assert series.record_any_channel is False

    def test_non_series_filtered_out(self, schedule_service, conn):
        conn.control.upcoming = [make_upcoming("sched-2", is_part_of_series=False)]
        assert schedule_service.list_series_timers() == []
        assert "get_schedule_by_id" not in conn.scheduler.calls

    def test_first_seen_decides_series_flag(self, schedule_service, conn, weekly_schedule):
        conn.control.upcoming = [
            make_upcoming("sched-1", is_part_of_series=False),
            make_upcoming("sched-1", is_part_of_series=True, offset_hours=24),
        ]
        conn.scheduler.schedules["sched-1"] = weekly_schedule
        assert schedule_service.list_series_timers() == []

    def test_fault_is_conflict_without_partial_results(self, schedule_service, conn, weekly_schedule):
        conn.control.upcoming = [
            make_upcoming("sched-1", is_part_of_series=True),
            make_upcoming("missing", is_part_of_series=True),
        ]
        conn.scheduler.schedules["sched-1"] = weekly_schedule
        with pytest.raises(SchedulingConflict):
            schedule_service.list_series_timers()

    def test_listing_fault_is_conflict(self, schedule_service, conn):
        conn.control.fail_on.add("get_all_upcoming_recordings")
        with pytest.raises(SchedulingConflict):
            schedule_service.list_series_timers()


# =============================================================================
# DEFAULTS
# =============================================================================


class TestNewTimerDefaults:
    """Padding comes from a fresh server template."""

    def test_padding_from_template(self, schedule_service, conn):
        defaults = schedule_service.get_new_timer_defaults()
        assert defaults.pre_padding_seconds == 60
        assert defaults.post_padding_seconds == 180

    def test_missing_padding_is_zero(self, schedule_service, conn):
        conn.scheduler.default_pre_seconds = None
        conn.scheduler.default_post_seconds = None
        defaults = schedule_service.get_new_timer_defaults()
        assert defaults.pre_padding_seconds == 0
        assert defaults.post_padding_seconds == 0

    def test_fault_gives_zero_padding(self, schedule_service, conn):
        conn.scheduler.fail_on.add("create_new_schedule")
        defaults = schedule_service.get_new_timer_defaults()
        assert defaults.pre_padding_seconds == 0
        assert defaults.post_padding_seconds == 0
