"""Schedule service: timers and series timers on top of ARGUS TV schedules.

A host timer is one ARGUS TV schedule whose rules describe a single
occurrence; a series timer is a schedule whose rules describe a recurrence.
Writes raise SchedulingConflict on any server fault. Listing one-off timers
degrades to an empty list; listing series timers is all-or-nothing.
"""

import logging

from arguslive.argus.factory import ArgusConnection
from arguslive.argus.schedule import Schedule, ScheduleRule
from arguslive.argus.types import (
    ChannelType,
    ScheduleType,
    UpcomingRecording,
    UpcomingRecordingsFilter,
)
from arguslive.consumers.connection_gate import ConnectionGate
from arguslive.consumers.rules import (
    padding_minutes,
    rules_to_series_timer_flags,
    series_timer_to_rules,
    timer_to_rules,
)
from arguslive.core.cancellation import CancelSignal, check_cancelled
from arguslive.core.exceptions import SchedulingConflict, TransportFault
from arguslive.core.types import SeriesTimerInfo, TimerInfo

logger = logging.getLogger(__name__)


class ScheduleService:
    """Create, update, cancel and list (series) timers."""

    def __init__(self, gate: ConnectionGate):
        self._gate = gate

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_timer(self, info: TimerInfo, cancel: CancelSignal = None) -> None:
        logger.info("[SCHEDULE] Creating timer '%s' on channel %s", info.name, info.channel_id)
        self._save(info, lambda: timer_to_rules(info), "create timer", cancel, keep_id=False)

    def update_timer(self, info: TimerInfo, cancel: CancelSignal = None) -> None:
        logger.info("[SCHEDULE] Updating timer '%s' on channel %s", info.name, info.channel_id)
        self._save(info, lambda: timer_to_rules(info), "update timer", cancel, keep_id=True)

    def create_series_timer(self, info: SeriesTimerInfo, cancel: CancelSignal = None) -> None:
        logger.info("[SCHEDULE] Creating series timer '%s'", info.name)
        self._save(
            info, lambda: series_timer_to_rules(info), "create series timer", cancel, keep_id=False
        )

    def update_series_timer(self, info: SeriesTimerInfo, cancel: CancelSignal = None) -> None:
        logger.info("[SCHEDULE] Updating series timer '%s'", info.name)
        self._save(
            info, lambda: series_timer_to_rules(info), "update series timer", cancel, keep_id=True
        )

    def cancel_timer(self, timer_id: str, cancel: CancelSignal = None) -> None:
        self._delete(timer_id, "cancel timer", cancel)

    def cancel_series_timer(self, timer_id: str, cancel: CancelSignal = None) -> None:
        # Same server call as cancel_timer: both are whole schedules
        self._delete(timer_id, "cancel series timer", cancel)

    def _save(
        self,
        info: TimerInfo,
        build_rules,
        operation: str,
        cancel: CancelSignal,
        keep_id: bool,
    ) -> None:
        """Fetch a default schedule, fill it from info and save it.

        When keep_id is set and info carries an id, the saved schedule
        replaces that schedule instead of adding a new one.
        """
        check_cancelled(cancel, operation)
        conn = self._gate.ensure_connection(cancel)

        try:
            rules: list[ScheduleRule] = build_rules()
            check_cancelled(cancel, operation)
            schedule = self._default_schedule(conn)

            if keep_id and info.id:
                schedule.schedule_id = info.id
            schedule.name = info.name
            schedule.pre_record_minutes = padding_minutes(info.pre_padding_seconds)
            schedule.post_record_minutes = padding_minutes(info.post_padding_seconds)
            schedule.rules = rules

            logger.debug("[SCHEDULE] %s payload: %s", operation, schedule.to_api())
            check_cancelled(cancel, operation)
            conn.scheduler.save_schedule(schedule)
        except (TransportFault, ValueError) as e:
            logger.error("[SCHEDULE] Failed to %s '%s': %s", operation, info.name, e)
            raise SchedulingConflict(f"Failed to {operation} '{info.name}': {e}") from e

        logger.info("[SCHEDULE] Saved '%s' (%d rules)", info.name, len(rules))

    def _delete(self, schedule_id: str, operation: str, cancel: CancelSignal) -> None:
        check_cancelled(cancel, operation)
        conn = self._gate.ensure_connection(cancel)
        check_cancelled(cancel, operation)
        try:
            conn.scheduler.delete_schedule(schedule_id)
        except TransportFault as e:
            logger.error("[SCHEDULE] Failed to %s %s: %s", operation, schedule_id, e)
            raise SchedulingConflict(f"Failed to {operation} {schedule_id}: {e}") from e

        logger.info("[SCHEDULE] Deleted schedule %s", schedule_id)

    @staticmethod
    def _default_schedule(conn: ArgusConnection) -> Schedule:
        return conn.scheduler.create_new_schedule(ChannelType.TELEVISION, ScheduleType.RECORDING)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_timers(self, cancel: CancelSignal = None) -> list[TimerInfo]:
        """One timer per upcoming recording. Server faults give []."""
        check_cancelled(cancel, "list timers")
        conn = self._gate.ensure_connection(cancel)

        try:
            upcoming = conn.control.get_all_upcoming_recordings(UpcomingRecordingsFilter.RECORDINGS)
            timers = []
            for recording in upcoming:
                check_cancelled(cancel, "list timers")
                timers.append(self._to_timer(conn, recording))
        except TransportFault as e:
            logger.error("[SCHEDULE] Failed to list timers: %s", e)
            return []

        logger.debug("[SCHEDULE] Listed %d timers", len(timers))
        return timers

    def list_series_timers(self, cancel: CancelSignal = None) -> list[SeriesTimerInfo]:
        """Series timers derived from upcoming recordings.

        Upcoming recordings are grouped by schedule id and the first one seen
        stands in for its schedule. This is a heuristic: the first upcoming
        occurrence is not necessarily representative of the whole series.

        Raises:
            SchedulingConflict: any server fault; no partial results
        """
        check_cancelled(cancel, "list series timers")
        conn = self._gate.ensure_connection(cancel)

        try:
            upcoming = conn.control.get_all_upcoming_recordings(UpcomingRecordingsFilter.RECORDINGS)

            first_per_schedule: dict[str, UpcomingRecording] = {}
            for recording in upcoming:
                first_per_schedule.setdefault(recording.program.schedule_id, recording)

            series_timers = []
            for recording in first_per_schedule.values():
                if not recording.program.is_part_of_series:
                    continue
                check_cancelled(cancel, "list series timers")
                schedule = conn.scheduler.get_schedule_by_id(recording.program.schedule_id)
                flags = rules_to_series_timer_flags(schedule.rules)
                timer = self._to_timer(conn, recording)
                series_timers.append(
                    SeriesTimerInfo(
                        id=timer.id,
                        channel_id=timer.channel_id,
                        name=timer.name,
                        overview=timer.overview,
                        program_id=timer.program_id,
                        start_date=timer.start_date,
                        end_date=timer.end_date,
                        pre_padding_seconds=timer.pre_padding_seconds,
                        post_padding_seconds=timer.post_padding_seconds,
                        days=flags.days,
                        record_new_only=flags.record_new_only,
                    )
                )
        except (TransportFault, ValueError) as e:
            logger.error("[SCHEDULE] Failed to list series timers: %s", e)
            raise SchedulingConflict(f"Failed to list series timers: {e}") from e

        logger.debug("[SCHEDULE] Listed %d series timers", len(series_timers))
        return series_timers

    def get_new_timer_defaults(self, cancel: CancelSignal = None) -> SeriesTimerInfo:
        """Padding defaults from a fresh server schedule. Faults give zero padding."""
        check_cancelled(cancel, "get timer defaults")
        conn = self._gate.ensure_connection(cancel)

        try:
            defaults = self._default_schedule(conn)
        except TransportFault as e:
            logger.warning("[SCHEDULE] Could not read timer defaults: %s", e)
            return SeriesTimerInfo()

        return SeriesTimerInfo(
            pre_padding_seconds=defaults.pre_record_seconds or 0,
            post_padding_seconds=defaults.post_record_seconds or 0,
        )

    @staticmethod
    def _to_timer(conn: ArgusConnection, recording: UpcomingRecording) -> TimerInfo:
        program = recording.program
        overview = None
        if program.guide_program_id:
            overview = conn.guide.get_program_by_id(program.guide_program_id).description

        return TimerInfo(
            id=program.schedule_id,
            channel_id=program.channel.channel_id,
            name=recording.title,
            overview=overview,
            program_id=program.guide_program_id,
            start_date=recording.actual_start_time_utc,
            end_date=recording.actual_stop_time_utc,
            pre_padding_seconds=program.pre_record_seconds,
            post_padding_seconds=program.post_record_seconds,
        )
