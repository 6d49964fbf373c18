"""ARGUS TV implementation of the live TV backend contract.

Composes the connection gate, schedule service, stream service and
keep-alive loop behind LiveTvService. Read operations return empty
results when the server fails; writes and stream acquisition raise.

Usage:
    service = ArgusLiveTvService()
    channels = service.get_channels()
    session = service.get_channel_stream(channels[0].id)
    ...
    service.close()
"""

import logging
from datetime import datetime

from arguslive.argus.factory import ArgusFactory, get_factory
from arguslive.argus.types import ChannelType, GuideProgramFlags, RecordingGroupMode
from arguslive.consumers.connection_gate import ConnectionGate
from arguslive.consumers.keepalive import KeepAliveScheduler
from arguslive.core.cancellation import CancelSignal, check_cancelled
from arguslive.core.events import EventHook
from arguslive.core.exceptions import TransportFault, UnsupportedOperation
from arguslive.core.interfaces import LiveTvService
from arguslive.core.types import (
    ChannelInfo,
    LiveTvStatusInfo,
    ProgramInfo,
    RecordingInfo,
    SeriesTimerInfo,
    StreamSession,
    TimerInfo,
)
from arguslive.services.schedule_service import ScheduleService
from arguslive.services.stream_service import StreamService
from arguslive.utilities.categories import is_kids, is_news, is_series, is_sports
from arguslive.utilities.tz import ensure_utc

logger = logging.getLogger(__name__)


class ArgusLiveTvService(LiveTvService):
    """Live TV backend talking to an ARGUS TV server."""

    def __init__(
        self,
        factory: ArgusFactory | None = None,
        start_keepalive: bool = True,
        keepalive_interval_seconds: float | None = None,
    ):
        self._factory = factory or get_factory()
        self.gate = ConnectionGate(self._factory)
        self.schedules = ScheduleService(self.gate)
        self.streams = StreamService(self.gate)

        interval = keepalive_interval_seconds or self._factory.settings.keepalive_interval_seconds
        self.keepalive = KeepAliveScheduler(self.streams.keep_streams_alive, interval)
        self.streams.attach_keepalive(self.keepalive)

        self.data_source_changed = EventHook("data_source_changed")
        self.recording_status_changed = EventHook("recording_status_changed")

        if start_keepalive:
            self.start()

    @property
    def name(self) -> str:
        return "ARGUS TV"

    @property
    def home_page_url(self) -> str:
        return "http://www.argus-tv.com/"

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        self.keepalive.start()

    def close(self) -> None:
        self.keepalive.stop()
        self._factory.close()

    # -------------------------------------------------------------------------
    # Status, channels, guide
    # -------------------------------------------------------------------------

    def get_status_info(self, cancel: CancelSignal = None) -> LiveTvStatusInfo:
        check_cancelled(cancel, "get status")
        conn = self.gate.ensure_connection(cancel)

        version = ""
        has_update = False
        try:
            newer = conn.core.is_newer_version_available()
            has_update = newer is not None
            version = conn.core.get_server_version()
            logger.info(
                "[ARGUS] Server version %s, newer version available: %s",
                version,
                newer.version if newer else None,
            )
        except TransportFault as e:
            logger.error("[ARGUS] Could not read server status: %s", e)

        return LiveTvStatusInfo(
            status=self.gate.state,
            version=version,
            has_update_available=has_update,
        )

    def get_channels(self, cancel: CancelSignal = None) -> list[ChannelInfo]:
        """Television channels, numbered by position from 0."""
        check_cancelled(cancel, "get channels")
        conn = self.gate.ensure_connection(cancel)

        try:
            channels = conn.scheduler.get_all_channels(ChannelType.TELEVISION)
        except TransportFault as e:
            logger.error("[ARGUS] Could not get channels: %s", e)
            return []

        base_url = self._factory.settings.base_url
        return [
            ChannelInfo(
                id=channel.channel_id,
                name=channel.display_name,
                number=str(i),
                image_url=f"{base_url}/Scheduler/ChannelLogo/{channel.channel_id}/1900-01-01",
            )
            for i, channel in enumerate(channels)
        ]

    def get_programs(
        self,
        channel_id: str,
        start_date_utc: datetime,
        end_date_utc: datetime,
        cancel: CancelSignal = None,
    ) -> list[ProgramInfo]:
        """Guide entries of a channel between two UTC times.

        One extra round-trip per program fetches its description.
        """
        check_cancelled(cancel, "get programs")
        conn = self.gate.ensure_connection(cancel)

        try:
            channel = conn.scheduler.get_channel_by_id(channel_id)
            if channel.guide_channel_id is None:
                return []

            summaries = conn.guide.get_channel_programs_between(
                channel.guide_channel_id,
                ensure_utc(start_date_utc),
                ensure_utc(end_date_utc),
            )
            programs = []
            for summary in summaries:
                check_cancelled(cancel, "get programs")
                details = conn.guide.get_program_by_id(summary.guide_program_id)
                category = summary.category
                programs.append(
                    ProgramInfo(
                        id=summary.guide_program_id,
                        channel_id=channel_id,
                        name=summary.title,
                        start_date=summary.start_time_utc,
                        end_date=summary.stop_time_utc,
                        overview=details.description,
                        episode_title=summary.sub_title,
                        genres=(category,) if category else (),
                        is_hd=GuideProgramFlags.HIGH_DEFINITION in summary.flags,
                        is_repeat=summary.is_repeat,
                        is_premiere=summary.is_premiere,
                        is_series=is_series(category),
                        is_news=is_news(category),
                        is_kids=is_kids(category),
                        is_sports=is_sports(category),
                    )
                )
        except TransportFault as e:
            logger.error("[ARGUS] Could not get programs for channel %s: %s", channel_id, e)
            return []

        return programs

    # -------------------------------------------------------------------------
    # Timers
    # -------------------------------------------------------------------------

    def create_timer(self, info: TimerInfo, cancel: CancelSignal = None) -> None:
        self.schedules.create_timer(info, cancel)

    def update_timer(self, info: TimerInfo, cancel: CancelSignal = None) -> None:
        self.schedules.update_timer(info, cancel)

    def cancel_timer(self, timer_id: str, cancel: CancelSignal = None) -> None:
        self.schedules.cancel_timer(timer_id, cancel)

    def get_timers(self, cancel: CancelSignal = None) -> list[TimerInfo]:
        return self.schedules.list_timers(cancel)

    def create_series_timer(self, info: SeriesTimerInfo, cancel: CancelSignal = None) -> None:
        self.schedules.create_series_timer(info, cancel)

    def update_series_timer(self, info: SeriesTimerInfo, cancel: CancelSignal = None) -> None:
        self.schedules.update_series_timer(info, cancel)

    def cancel_series_timer(self, timer_id: str, cancel: CancelSignal = None) -> None:
        self.schedules.cancel_series_timer(timer_id, cancel)

    def get_series_timers(self, cancel: CancelSignal = None) -> list[SeriesTimerInfo]:
        return self.schedules.list_series_timers(cancel)

    def get_new_timer_defaults(self, cancel: CancelSignal = None) -> SeriesTimerInfo:
        return self.schedules.get_new_timer_defaults(cancel)

    # -------------------------------------------------------------------------
    # Recordings
    # -------------------------------------------------------------------------

    def get_recordings(self, cancel: CancelSignal = None) -> list[RecordingInfo]:
        """All television recordings, fetched channel by channel."""
        check_cancelled(cancel, "get recordings")
        conn = self.gate.ensure_connection(cancel)

        recordings = []
        try:
            groups = conn.control.get_all_recording_groups(
                ChannelType.TELEVISION, RecordingGroupMode.GROUP_BY_CHANNEL
            )
            channel_ids = list(dict.fromkeys(g.channel_id for g in groups if g.channel_id))
            for channel_id in channel_ids:
                check_cancelled(cancel, "get recordings")
                for recording in conn.control.get_full_recordings(
                    ChannelType.TELEVISION, channel_id=channel_id
                ):
                    recordings.append(
                        RecordingInfo(
                            id=recording.recording_id,
                            channel_id=recording.channel_id,
                            name=recording.title,
                            overview=recording.description,
                            start_date=recording.program_start_time_utc,
                            end_date=recording.program_stop_time_utc,
                        )
                    )
        except TransportFault as e:
            logger.error("[ARGUS] Could not get recordings: %s", e)
            return []

        logger.debug("[ARGUS] Found %d recordings", len(recordings))
        return recordings

    def delete_recording(self, recording_id: str, cancel: CancelSignal = None) -> bool:
        """Delete a recording and its file. Returns False on failure."""
        check_cancelled(cancel, "delete recording")
        conn = self.gate.ensure_connection(cancel)
        check_cancelled(cancel, "delete recording")

        try:
            conn.control.delete_recording_by_id(recording_id)
        except TransportFault as e:
            logger.error("[ARGUS] Could not delete recording %s: %s", recording_id, e)
            return False

        logger.info("[ARGUS] Deleted recording %s", recording_id)
        return True

    # -------------------------------------------------------------------------
    # Streams
    # -------------------------------------------------------------------------

    def get_channel_stream(self, channel_id: str, cancel: CancelSignal = None) -> StreamSession:
        return self.streams.open_channel_stream(channel_id, cancel)

    def get_recording_stream(self, recording_id: str, cancel: CancelSignal = None) -> StreamSession:
        return self.streams.open_recording_stream(recording_id, cancel)

    def close_live_stream(self, stream_id: str, cancel: CancelSignal = None) -> None:
        self.streams.close_stream(stream_id, cancel)

    # -------------------------------------------------------------------------
    # Not supported by this backend
    # -------------------------------------------------------------------------

    def record_live_stream(self, stream_id: str, cancel: CancelSignal = None) -> None:
        self._unsupported("record_live_stream", cancel)

    def reset_tuner(self, tuner_id: str, cancel: CancelSignal = None) -> None:
        self._unsupported("reset_tuner", cancel)

    def get_channel_image(self, channel_id: str, cancel: CancelSignal = None) -> bytes:
        self._unsupported("get_channel_image", cancel)

    def get_program_image(
        self, program_id: str, channel_id: str, cancel: CancelSignal = None
    ) -> bytes:
        self._unsupported("get_program_image", cancel)

    def get_recording_image(self, recording_id: str, cancel: CancelSignal = None) -> bytes:
        self._unsupported("get_recording_image", cancel)

    def _unsupported(self, operation: str, cancel: CancelSignal) -> None:
        check_cancelled(cancel, operation)
        self.gate.ensure_connection(cancel)
        raise UnsupportedOperation(f"{operation} is not supported by ARGUS TV")
