"""Abstract interfaces.

Defines the live TV backend contract the host application consumes.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from arguslive.core.cancellation import CancelSignal
from arguslive.core.events import EventHook
from arguslive.core.types import (
    ChannelInfo,
    LiveTvStatusInfo,
    ProgramInfo,
    RecordingInfo,
    SeriesTimerInfo,
    StreamSession,
    TimerInfo,
)


class LiveTvService(ABC):
    """Contract between the host media application and a live TV backend.

    Read operations return empty collections when the backend cannot be
    reached. Write and acquire operations raise SchedulingConflict or
    StreamUnavailable. Operations a backend does not support raise
    UnsupportedOperation.
    """

    data_source_changed: EventHook
    recording_status_changed: EventHook

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name of the backend."""
        ...

    @property
    @abstractmethod
    def home_page_url(self) -> str:
        """Backend home page."""
        ...

    # -------------------------------------------------------------------------
    # Status, channels, guide
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_status_info(self, cancel: CancelSignal = None) -> LiveTvStatusInfo: ...

    @abstractmethod
    def get_channels(self, cancel: CancelSignal = None) -> list[ChannelInfo]: ...

    @abstractmethod
    def get_programs(
        self,
        channel_id: str,
        start_date_utc: datetime,
        end_date_utc: datetime,
        cancel: CancelSignal = None,
    ) -> list[ProgramInfo]: ...

    # -------------------------------------------------------------------------
    # Timers
    # -------------------------------------------------------------------------

    @abstractmethod
    def create_timer(self, info: TimerInfo, cancel: CancelSignal = None) -> None: ...

    @abstractmethod
    def update_timer(self, info: TimerInfo, cancel: CancelSignal = None) -> None: ...

    @abstractmethod
    def cancel_timer(self, timer_id: str, cancel: CancelSignal = None) -> None: ...

    @abstractmethod
    def get_timers(self, cancel: CancelSignal = None) -> list[TimerInfo]: ...

    @abstractmethod
    def create_series_timer(self, info: SeriesTimerInfo, cancel: CancelSignal = None) -> None: ...

    @abstractmethod
    def update_series_timer(self, info: SeriesTimerInfo, cancel: CancelSignal = None) -> None: ...

    @abstractmethod
    def cancel_series_timer(self, timer_id: str, cancel: CancelSignal = None) -> None: ...

    @abstractmethod
    def get_series_timers(self, cancel: CancelSignal = None) -> list[SeriesTimerInfo]: ...

    @abstractmethod
    def get_new_timer_defaults(self, cancel: CancelSignal = None) -> SeriesTimerInfo: ...

    # -------------------------------------------------------------------------
    # Recordings and streams
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_recordings(self, cancel: CancelSignal = None) -> list[RecordingInfo]: ...

    @abstractmethod
    def delete_recording(self, recording_id: str, cancel: CancelSignal = None) -> bool: ...

    @abstractmethod
    def get_channel_stream(self, channel_id: str, cancel: CancelSignal = None) -> StreamSession: ...

    @abstractmethod
    def get_recording_stream(
        self, recording_id: str, cancel: CancelSignal = None
    ) -> StreamSession: ...

    @abstractmethod
    def close_live_stream(self, stream_id: str, cancel: CancelSignal = None) -> None: ...

    @abstractmethod
    def record_live_stream(self, stream_id: str, cancel: CancelSignal = None) -> None: ...

    @abstractmethod
    def reset_tuner(self, tuner_id: str, cancel: CancelSignal = None) -> None: ...

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Start background work (no-op by default)."""

    def close(self) -> None:
        """Stop background work and release resources (no-op by default)."""
