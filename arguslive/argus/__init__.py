"""ARGUS TV backend integration.

HTTP client, wire types, per-service managers and the connection factory.
"""

from arguslive.argus.client import ArgusClient
from arguslive.argus.factory import ArgusConnection, ArgusFactory, close_argus, get_factory
from arguslive.argus.schedule import (
    AroundTimeRule,
    ChannelsRule,
    NewEpisodesOnlyRule,
    OnDateAndDaysOfWeekRule,
    Schedule,
    ScheduleRule,
    ScheduleRuleType,
    TitleMatch,
    TitleRule,
    UnknownRule,
)
from arguslive.argus.types import (
    ArgusChannel,
    ChannelType,
    LiveStream,
    LiveStreamResult,
    PingResult,
    ScheduleDaysOfWeek,
    ScheduleType,
)

__all__ = [
    "ArgusChannel",
    "ArgusClient",
    "ArgusConnection",
    "ArgusFactory",
    "AroundTimeRule",
    "ChannelType",
    "ChannelsRule",
    "LiveStream",
    "LiveStreamResult",
    "NewEpisodesOnlyRule",
    "OnDateAndDaysOfWeekRule",
    "PingResult",
    "Schedule",
    "ScheduleDaysOfWeek",
    "ScheduleRule",
    "ScheduleRuleType",
    "ScheduleType",
    "TitleMatch",
    "TitleRule",
    "UnknownRule",
    "close_argus",
    "get_factory",
]
