"""Pydantic models for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from arguslive.core.types import (
    ChannelInfo,
    ConnectionState,
    DayOfWeek,
    MediaProtocol,
    ProgramInfo,
    RecordingInfo,
    SeriesTimerInfo,
    StreamSession,
    TimerInfo,
)

_DAY_ORDER = list(DayOfWeek)


def _sorted_days(days) -> list[DayOfWeek]:
    return sorted(days, key=_DAY_ORDER.index)


# =============================================================================
# Status
# =============================================================================


class StatusResponse(BaseModel):
    """Backend status."""

    name: str
    home_page_url: str
    status: ConnectionState
    version: str = ""
    has_update_available: bool = False
    api_version: int


# =============================================================================
# Channels and guide
# =============================================================================


class ChannelResponse(BaseModel):
    """A television channel."""

    id: str
    name: str
    number: str
    channel_type: str = "TV"
    image_url: str | None = None

    @classmethod
    def from_info(cls, info: ChannelInfo) -> "ChannelResponse":
        return cls(
            id=info.id,
            name=info.name,
            number=info.number,
            channel_type=info.channel_type,
            image_url=info.image_url,
        )


class ProgramResponse(BaseModel):
    """A guide entry."""

    id: str
    channel_id: str
    name: str
    start_date: datetime
    end_date: datetime
    overview: str | None = None
    episode_title: str | None = None
    genres: list[str] = []
    is_hd: bool = False
    is_repeat: bool = False
    is_premiere: bool = False
    is_series: bool = False
    is_news: bool = False
    is_kids: bool = False
    is_sports: bool = False

    @classmethod
    def from_info(cls, info: ProgramInfo) -> "ProgramResponse":
        return cls(
            id=info.id,
            channel_id=info.channel_id,
            name=info.name,
            start_date=info.start_date,
            end_date=info.end_date,
            overview=info.overview,
            episode_title=info.episode_title,
            genres=list(info.genres),
            is_hd=info.is_hd,
            is_repeat=info.is_repeat,
            is_premiere=info.is_premiere,
            is_series=info.is_series,
            is_news=info.is_news,
            is_kids=info.is_kids,
            is_sports=info.is_sports,
        )


# =============================================================================
# Timers
# =============================================================================


class TimerRequest(BaseModel):
    """Request body for creating or updating a timer."""

    channel_id: str
    name: str
    start_date: datetime
    end_date: datetime | None = None
    overview: str | None = None
    program_id: str | None = None
    pre_padding_seconds: int = Field(default=0, ge=0)
    post_padding_seconds: int = Field(default=0, ge=0)

    def to_info(self, timer_id: str = "") -> TimerInfo:
        return TimerInfo(
            id=timer_id,
            channel_id=self.channel_id,
            name=self.name,
            overview=self.overview,
            program_id=self.program_id,
            start_date=self.start_date,
            end_date=self.end_date,
            pre_padding_seconds=self.pre_padding_seconds,
            post_padding_seconds=self.post_padding_seconds,
        )


class SeriesTimerRequest(TimerRequest):
    """Request body for creating or updating a series timer."""

    days: list[DayOfWeek] = []
    record_new_only: bool = False
    record_any_time: bool = False
    record_any_channel: bool = False

    def to_info(self, timer_id: str = "") -> SeriesTimerInfo:
        return SeriesTimerInfo(
            id=timer_id,
            channel_id=self.channel_id,
            name=self.name,
            overview=self.overview,
            program_id=self.program_id,
            start_date=self.start_date,
            end_date=self.end_date,
            pre_padding_seconds=self.pre_padding_seconds,
            post_padding_seconds=self.post_padding_seconds,
            days=frozenset(self.days),
            record_new_only=self.record_new_only,
            record_any_time=self.record_any_time,
            record_any_channel=self.record_any_channel,
        )


class TimerResponse(BaseModel):
    """A scheduled recording."""

    id: str
    channel_id: str
    name: str
    overview: str | None = None
    program_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    pre_padding_seconds: int = 0
    post_padding_seconds: int = 0

    @classmethod
    def from_info(cls, info: TimerInfo) -> "TimerResponse":
        return cls(
            id=info.id,
            channel_id=info.channel_id,
            name=info.name,
            overview=info.overview,
            program_id=info.program_id,
            start_date=info.start_date,
            end_date=info.end_date,
            pre_padding_seconds=info.pre_padding_seconds,
            post_padding_seconds=info.post_padding_seconds,
        )


class SeriesTimerResponse(TimerResponse):
    """A recurring scheduled recording.

    record_any_time and record_any_channel are not read back from the server
    and are always false here.
    """

    days: list[DayOfWeek] = []
    record_new_only: bool = False
    record_any_time: bool = False
    record_any_channel: bool = False

    @classmethod
    def from_info(cls, info: SeriesTimerInfo) -> "SeriesTimerResponse":
        base = TimerResponse.from_info(info).model_dump()
        return cls(
            **base,
            days=_sorted_days(info.days),
            record_new_only=info.record_new_only,
            record_any_time=info.record_any_time,
            record_any_channel=info.record_any_channel,
        )


# =============================================================================
# Recordings and streams
# =============================================================================


class RecordingResponse(BaseModel):
    """A completed recording."""

    id: str
    channel_id: str
    name: str
    overview: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    @classmethod
    def from_info(cls, info: RecordingInfo) -> "RecordingResponse":
        return cls(
            id=info.id,
            channel_id=info.channel_id,
            name=info.name,
            overview=info.overview,
            start_date=info.start_date,
            end_date=info.end_date,
        )


class StreamSessionResponse(BaseModel):
    """An opened stream."""

    id: str
    path: str
    protocol: MediaProtocol
    container: str | None = None

    @classmethod
    def from_session(cls, session: StreamSession) -> "StreamSessionResponse":
        return cls(
            id=session.id,
            path=session.path,
            protocol=session.protocol,
            container=session.container,
        )
