"""Host-facing data types.

These are the shapes the host media application exchanges with the adapter.
All timestamps are UTC. Inputs are frozen dataclasses; the caller owns them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class DayOfWeek(str, Enum):
    """Day of week as seen by the host."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class MediaProtocol(str, Enum):
    """Transport of a stream session."""

    RTSP = "rtsp"
    FILE = "file"


class ConnectionState(str, Enum):
    """State of the version handshake with the ARGUS TV server."""

    UNVERIFIED = "unverified"
    VERIFIED = "verified"
    INCOMPATIBLE = "incompatible"


@dataclass(frozen=True)
class ChannelInfo:
    """A television channel."""

    id: str
    name: str
    number: str
    channel_type: str = "TV"
    image_url: str | None = None


@dataclass(frozen=True)
class ProgramInfo:
    """A guide entry for a channel."""

    id: str
    channel_id: str
    name: str
    start_date: datetime
    end_date: datetime
    overview: str | None = None
    episode_title: str | None = None
    genres: tuple[str, ...] = field(default_factory=tuple)
    is_hd: bool = False
    is_repeat: bool = False
    is_premiere: bool = False
    is_series: bool = False
    is_news: bool = False
    is_kids: bool = False
    is_sports: bool = False


@dataclass(frozen=True)
class TimerInfo:
    """A single scheduled recording.

    id is the owning ARGUS TV schedule id (empty when creating).
    """

    id: str = ""
    channel_id: str = ""
    name: str = ""
    overview: str | None = None
    program_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    pre_padding_seconds: int = 0
    post_padding_seconds: int = 0


@dataclass(frozen=True)
class SeriesTimerInfo(TimerInfo):
    """A recurring scheduled recording."""

    days: frozenset[DayOfWeek] = field(default_factory=frozenset)
    record_new_only: bool = False
    record_any_time: bool = False
    record_any_channel: bool = False


@dataclass(frozen=True)
class RecordingInfo:
    """A completed recording."""

    id: str
    channel_id: str
    name: str
    overview: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


@dataclass(frozen=True)
class StreamSession:
    """A tuned live stream or a recording file handed to the host.

    id is the owning channel id (live) or recording id (file).
    """

    id: str
    path: str
    protocol: MediaProtocol
    container: str | None = None


@dataclass(frozen=True)
class LiveTvStatusInfo:
    """Backend status summary."""

    status: ConnectionState
    version: str = ""
    has_update_available: bool = False
