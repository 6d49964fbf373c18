"""Dataclasses for ARGUS TV API responses.

These types represent the data structures returned by the ARGUS TV REST
services. Response types are frozen dataclasses; objects that are sent back
to the server verbatim (channels, live streams) keep their raw payload.
"""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta, timezone
from enum import IntEnum, IntFlag

# =============================================================================
# DATE HANDLING
# =============================================================================

# WCF-style JSON date: /Date(1700000000000)/ or /Date(1700000000000+0100)/
_ARGUS_DATE_RE = re.compile(r"^/Date\((-?\d+)([+-]\d{4})?\)/$")


def parse_argus_date(value: str | None) -> datetime | None:
    """Parse an ARGUS TV JSON date into an aware datetime.

    The millisecond count is always UTC; the optional offset only says which
    local time the server meant, so the result carries that offset.
    ISO-8601 strings are accepted as well.
    """
    if not value:
        return None

    match = _ARGUS_DATE_RE.match(value)
    if match:
        millis = int(match.group(1))
        dt = datetime(1970, 1, 1, tzinfo=UTC) + timedelta(milliseconds=millis)
        if offset := match.group(2):
            sign = 1 if offset[0] == "+" else -1
            delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[3:5]))
            dt = dt.astimezone(timezone(sign * delta))
        return dt

    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def format_argus_date(dt: datetime) -> str:
    """Format an aware datetime as an ARGUS TV JSON date.

    Naive datetimes are treated as UTC. Non-UTC datetimes keep their offset
    so the server sees the intended local time.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    millis = int((dt - datetime(1970, 1, 1, tzinfo=UTC)).total_seconds() * 1000)

    offset = dt.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return f"/Date({millis})/"

    total_minutes = int(offset.total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"/Date({millis}{sign}{hours:02d}{minutes:02d})/"


# =============================================================================
# ENUMS
# =============================================================================


class ChannelType(IntEnum):
    TELEVISION = 0
    RADIO = 1


class ScheduleType(IntEnum):
    RECORDING = 82
    SUPPRESSION = 83
    ALERT = 65


class RecordingGroupMode(IntEnum):
    GROUP_BY_SCHEDULE = 0
    GROUP_BY_CHANNEL = 1
    GROUP_BY_PROGRAM_TITLE = 2
    GROUP_BY_CATEGORY = 3
    GROUP_BY_RECORDING_DAY = 4


class UpcomingRecordingsFilter(IntFlag):
    RECORDINGS = 1
    CANCELLED_BY_USER = 2
    CANCELLED_BY_SYSTEM = 4
    ALL = 7


class LiveStreamResult(IntEnum):
    SUCCEEDED = 0
    NO_FREE_CARD_FOUND = 1
    CHANNEL_TUNE_FAILED = 2
    NO_RETUNE_POSSIBLE = 3
    IS_SCRAMBLED = 4
    NOT_SUPPORTED = 5
    UNKNOWN_ERROR = 98


class GuideProgramFlags(IntFlag):
    NONE = 0
    STANDARD_ASPECT_RATIO = 1
    WIDESCREEN = 2
    HIGH_DEFINITION = 4


class ScheduleDaysOfWeek(IntFlag):
    """Day bitmask used by the DaysOfWeek schedule rule."""

    NONE = 0
    MONDAYS = 1
    TUESDAYS = 2
    WEDNESDAYS = 4
    THURSDAYS = 8
    FRIDAYS = 16
    SATURDAYS = 32
    SUNDAYS = 64
    WORKING_DAYS = 31
    WEEKENDS = 96
    ALL_DAYS = 127


class PingResult(IntEnum):
    """Outcome of Core/Ping: our API level relative to the server's.

    -1 means this client is behind the server, +1 that it is ahead.
    """

    BACKEND_NEWER = -1
    EQUAL = 0
    BACKEND_OLDER = 1


def coerce_enum(enum_cls, value, default):
    """Coerce a wire value into enum_cls, falling back to default."""
    if value is None:
        return default
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError):
        return default


def str_or_none(value) -> str | None:
    return str(value) if value is not None else None


# =============================================================================
# RESPONSE TYPES
# =============================================================================


@dataclass(frozen=True)
class ArgusChannel:
    """A channel in ARGUS TV."""

    channel_id: str
    display_name: str
    guide_channel_id: str | None = None
    channel_type: ChannelType = ChannelType.TELEVISION
    visible_in_guide: bool = True
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: dict) -> "ArgusChannel":
        """Create from API response dict."""
        return cls(
            channel_id=str(data["ChannelId"]),
            display_name=data.get("DisplayName", ""),
            guide_channel_id=str_or_none(data.get("GuideChannelId")),
            channel_type=coerce_enum(ChannelType, data.get("ChannelType"), ChannelType.TELEVISION),
            visible_in_guide=data.get("VisibleInGuide", True),
            raw=data,
        )

    def to_api(self) -> dict:
        """Payload to send back to the server."""
        payload = dict(self.raw)
        payload.update(
            {
                "ChannelId": self.channel_id,
                "DisplayName": self.display_name,
                "GuideChannelId": self.guide_channel_id,
                "ChannelType": int(self.channel_type),
                "VisibleInGuide": self.visible_in_guide,
            }
        )
        return payload


@dataclass(frozen=True)
class GuideProgramSummary:
    """A guide program as returned by a channel/time-window query."""

    guide_program_id: str
    guide_channel_id: str
    title: str
    start_time_utc: datetime
    stop_time_utc: datetime
    sub_title: str | None = None
    category: str | None = None
    flags: GuideProgramFlags = GuideProgramFlags.NONE
    is_repeat: bool = False
    is_premiere: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "GuideProgramSummary":
        """Create from API response dict."""
        return cls(
            guide_program_id=str(data["GuideProgramId"]),
            guide_channel_id=str(data.get("GuideChannelId", "")),
            title=data.get("Title", ""),
            start_time_utc=parse_argus_date(data.get("StartTimeUtc")),
            stop_time_utc=parse_argus_date(data.get("StopTimeUtc")),
            sub_title=data.get("SubTitle"),
            category=data.get("Category"),
            flags=GuideProgramFlags(int(data.get("Flags") or 0)),
            is_repeat=bool(data.get("IsRepeat", False)),
            is_premiere=bool(data.get("IsPremiere", False)),
        )


@dataclass(frozen=True)
class GuideProgram:
    """Full guide program details."""

    guide_program_id: str
    title: str
    description: str | None = None
    category: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "GuideProgram":
        """Create from API response dict."""
        return cls(
            guide_program_id=str(data["GuideProgramId"]),
            title=data.get("Title", ""),
            description=data.get("Description"),
            category=data.get("Category"),
        )


@dataclass(frozen=True)
class RecordingGroup:
    """A group of recordings (grouping depends on the requested mode)."""

    channel_id: str | None = None
    channel_display_name: str | None = None
    schedule_id: str | None = None
    program_title: str | None = None
    category: str | None = None
    recordings_count: int = 0

    @classmethod
    def from_api(cls, data: dict) -> "RecordingGroup":
        """Create from API response dict."""
        return cls(
            channel_id=str_or_none(data.get("ChannelId")),
            channel_display_name=data.get("ChannelDisplayName"),
            schedule_id=str_or_none(data.get("ScheduleId")),
            program_title=data.get("ProgramTitle"),
            category=data.get("Category"),
            recordings_count=int(data.get("RecordingsCount") or 0),
        )


@dataclass(frozen=True)
class Recording:
    """A recording (completed or in progress)."""

    recording_id: str
    channel_id: str
    title: str
    description: str | None = None
    program_start_time_utc: datetime | None = None
    program_stop_time_utc: datetime | None = None
    recording_file_name: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Recording":
        """Create from API response dict."""
        return cls(
            recording_id=str(data["RecordingId"]),
            channel_id=str(data.get("ChannelId", "")),
            title=data.get("Title", ""),
            description=data.get("Description"),
            program_start_time_utc=parse_argus_date(data.get("ProgramStartTimeUtc")),
            program_stop_time_utc=parse_argus_date(data.get("ProgramStopTimeUtc")),
            recording_file_name=data.get("RecordingFileName"),
        )


@dataclass(frozen=True)
class UpcomingProgram:
    """A program scheduled for recording by a schedule."""

    schedule_id: str
    title: str
    channel: ArgusChannel
    upcoming_program_id: str | None = None
    guide_program_id: str | None = None
    start_time_utc: datetime | None = None
    stop_time_utc: datetime | None = None
    pre_record_seconds: int = 0
    post_record_seconds: int = 0
    is_part_of_series: bool = False

    @classmethod
    def from_api(cls, data: dict) -> "UpcomingProgram":
        """Create from API response dict."""
        return cls(
            schedule_id=str(data["ScheduleId"]),
            title=data.get("Title", ""),
            channel=ArgusChannel.from_api(data["Channel"]),
            upcoming_program_id=str_or_none(data.get("UpcomingProgramId")),
            guide_program_id=str_or_none(data.get("GuideProgramId")),
            start_time_utc=parse_argus_date(data.get("StartTimeUtc")),
            stop_time_utc=parse_argus_date(data.get("StopTimeUtc")),
            pre_record_seconds=int(data.get("PreRecordSeconds") or 0),
            post_record_seconds=int(data.get("PostRecordSeconds") or 0),
            is_part_of_series=bool(data.get("IsPartOfSeries", False)),
        )


@dataclass(frozen=True)
class UpcomingRecording:
    """An upcoming recording with its actual (padded) start/stop times."""

    program: UpcomingProgram
    actual_start_time_utc: datetime | None = None
    actual_stop_time_utc: datetime | None = None

    @property
    def title(self) -> str:
        return self.program.title

    @classmethod
    def from_api(cls, data: dict) -> "UpcomingRecording":
        """Create from API response dict."""
        return cls(
            program=UpcomingProgram.from_api(data["Program"]),
            actual_start_time_utc=parse_argus_date(data.get("ActualStartTimeUtc")),
            actual_stop_time_utc=parse_argus_date(data.get("ActualStopTimeUtc")),
        )


@dataclass(frozen=True)
class LiveStream:
    """A live stream currently held open by the server."""

    channel: ArgusChannel
    rtsp_url: str | None = None
    timeshift_file: str | None = None
    stream_started_time: datetime | None = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, data: dict) -> "LiveStream":
        """Create from API response dict."""
        return cls(
            channel=ArgusChannel.from_api(data["Channel"]),
            rtsp_url=data.get("RtspUrl"),
            timeshift_file=data.get("TimeshiftFile"),
            stream_started_time=parse_argus_date(data.get("StreamStartedTime")),
            raw=data,
        )

    def to_api(self) -> dict:
        """Payload to send back to the server (keep-alive, stop)."""
        payload = dict(self.raw)
        payload["Channel"] = self.channel.to_api()
        payload["RtspUrl"] = self.rtsp_url
        payload["TimeshiftFile"] = self.timeshift_file
        return payload


@dataclass(frozen=True)
class TuneResult:
    """Result of tuning a live stream."""

    result: LiveStreamResult
    live_stream: LiveStream | None = None

    @property
    def succeeded(self) -> bool:
        return self.result == LiveStreamResult.SUCCEEDED and self.live_stream is not None

    @classmethod
    def from_api(cls, data: dict) -> "TuneResult":
        """Create from API response dict."""
        stream_data = data.get("LiveStream")
        return cls(
            result=coerce_enum(
                LiveStreamResult, data.get("Result"), LiveStreamResult.UNKNOWN_ERROR
            ),
            live_stream=LiveStream.from_api(stream_data) if stream_data else None,
        )


@dataclass(frozen=True)
class NewVersionInfo:
    """Describes a newer ARGUS TV release."""

    name: str
    version: str | None = None
    url: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "NewVersionInfo":
        """Create from API response dict."""
        return cls(
            name=data.get("Name", ""),
            version=data.get("Version"),
            url=data.get("Url"),
        )
