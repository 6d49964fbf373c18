"""Core types, interfaces and errors shared by every layer."""

from arguslive.core.cancellation import CancelSignal, check_cancelled
from arguslive.core.events import EventHook
from arguslive.core.exceptions import (
    ArgusLiveError,
    ConfigurationError,
    OperationCancelled,
    SchedulingConflict,
    StreamUnavailable,
    TransportFault,
    UnsupportedOperation,
    VersionIncompatible,
)
from arguslive.core.interfaces import LiveTvService
from arguslive.core.types import (
    ChannelInfo,
    ConnectionState,
    DayOfWeek,
    LiveTvStatusInfo,
    MediaProtocol,
    ProgramInfo,
    RecordingInfo,
    SeriesTimerInfo,
    StreamSession,
    TimerInfo,
)

__all__ = [
    "ArgusLiveError",
    "CancelSignal",
    "ChannelInfo",
    "ConfigurationError",
    "ConnectionState",
    "DayOfWeek",
    "EventHook",
    "LiveTvService",
    "LiveTvStatusInfo",
    "MediaProtocol",
    "OperationCancelled",
    "ProgramInfo",
    "RecordingInfo",
    "SchedulingConflict",
    "SeriesTimerInfo",
    "StreamSession",
    "StreamUnavailable",
    "TimerInfo",
    "TransportFault",
    "UnsupportedOperation",
    "VersionIncompatible",
    "check_cancelled",
]
