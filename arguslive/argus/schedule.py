"""ARGUS TV schedules and schedule rules.

On the wire a schedule rule is a type name plus a positional argument list
whose shape depends on the type. Here each rule type is its own frozen
dataclass so only legal shapes can be built; rule_from_api() and to_api()
convert to and from the positional form.
"""

from dataclasses import dataclass, field
from datetime import datetime, time
from enum import Enum

from arguslive.argus.types import (
    ChannelType,
    ScheduleDaysOfWeek,
    ScheduleType,
    coerce_enum,
    format_argus_date,
    parse_argus_date,
    str_or_none,
)


class ScheduleRuleType(str, Enum):
    """Tag of a schedule rule."""

    TITLE = "Title"
    CHANNELS = "Channels"
    ON_DATE_AND_DAYS_OF_WEEK = "OnDateAndDaysOfWeek"
    AROUND_TIME = "AroundTime"
    NEW_EPISODES_ONLY = "NewEpisodesOnly"
    UNKNOWN = "Unknown"


class TitleMatch(str, Enum):
    """How a title rule compares program titles. Values are wire type names."""

    EQUALS = "TitleEquals"
    STARTS_WITH = "TitleStartsWith"
    CONTAINS = "TitleContains"


# Wire type names
_CHANNELS = "Channels"
_NOT_ON_CHANNELS = "NotOnChannels"
_ON_DATE = "OnDate"
_DAYS_OF_WEEK = "DaysOfWeek"
_AROUND_TIME = "AroundTime"
_NEW_EPISODES_ONLY = "NewEpisodesOnly"


# =============================================================================
# RULE VARIANTS
# =============================================================================


@dataclass(frozen=True)
class TitleRule:
    """Match programs by title."""

    title: str
    match: TitleMatch = TitleMatch.EQUALS

    @property
    def rule_type(self) -> ScheduleRuleType:
        return ScheduleRuleType.TITLE

    def to_api(self) -> dict:
        return {"Type": self.match.value, "Arguments": [self.title]}


@dataclass(frozen=True)
class ChannelsRule:
    """Restrict to (exclusive=True) or exclude (exclusive=False) channels."""

    channel_ids: tuple[str, ...]
    exclusive: bool = True

    @property
    def rule_type(self) -> ScheduleRuleType:
        return ScheduleRuleType.CHANNELS

    def to_api(self) -> dict:
        return {
            "Type": _CHANNELS if self.exclusive else _NOT_ON_CHANNELS,
            "Arguments": list(self.channel_ids),
        }


@dataclass(frozen=True)
class OnDateAndDaysOfWeekRule:
    """Single date (days=NONE) or recurring days starting at on_date.

    Written as the server's OnDate rule when days is NONE, otherwise as
    DaysOfWeek with the bitmask at position 0.
    """

    days: ScheduleDaysOfWeek
    on_date: datetime | None = None

    @property
    def rule_type(self) -> ScheduleRuleType:
        return ScheduleRuleType.ON_DATE_AND_DAYS_OF_WEEK

    def to_api(self) -> dict:
        if self.days == ScheduleDaysOfWeek.NONE:
            if self.on_date is None:
                raise ValueError("OnDate rule requires a date")
            return {"Type": _ON_DATE, "Arguments": [format_argus_date(self.on_date)]}

        arguments: list = [int(self.days)]
        if self.on_date is not None:
            arguments.append(format_argus_date(self.on_date))
        return {"Type": _DAYS_OF_WEEK, "Arguments": arguments}


@dataclass(frozen=True)
class AroundTimeRule:
    """Match programs starting around a local time of day."""

    around: time

    @property
    def rule_type(self) -> ScheduleRuleType:
        return ScheduleRuleType.AROUND_TIME

    def to_api(self) -> dict:
        return {
            "Type": _AROUND_TIME,
            "Arguments": [
                {
                    "Hours": self.around.hour,
                    "Minutes": self.around.minute,
                    "Seconds": self.around.second,
                }
            ],
        }


@dataclass(frozen=True)
class NewEpisodesOnlyRule:
    """Only record episodes not seen before."""

    enabled: bool

    @property
    def rule_type(self) -> ScheduleRuleType:
        return ScheduleRuleType.NEW_EPISODES_ONLY

    def to_api(self) -> dict:
        return {"Type": _NEW_EPISODES_ONLY, "Arguments": [self.enabled]}


@dataclass(frozen=True)
class UnknownRule:
    """A rule type this adapter never writes, preserved verbatim."""

    type_name: str
    arguments: tuple = ()

    @property
    def rule_type(self) -> ScheduleRuleType:
        return ScheduleRuleType.UNKNOWN

    def to_api(self) -> dict:
        return {"Type": self.type_name, "Arguments": list(self.arguments)}


ScheduleRule = (
    TitleRule
    | ChannelsRule
    | OnDateAndDaysOfWeekRule
    | AroundTimeRule
    | NewEpisodesOnlyRule
    | UnknownRule
)


def _parse_schedule_time(value) -> time:
    """Decode a ScheduleTime argument ({Hours, Minutes, Seconds} or {Ticks})."""
    if isinstance(value, dict):
        if "Ticks" in value:
            total_seconds = int(value["Ticks"]) // 10_000_000
            hours, rest = divmod(total_seconds, 3600)
            return time(hours % 24, rest // 60, rest % 60)
        return time(
            int(value.get("Hours", 0)),
            int(value.get("Minutes", 0)),
            int(value.get("Seconds", 0)),
        )
    if isinstance(value, str):
        return time.fromisoformat(value)
    raise ValueError(f"Unrecognized schedule time: {value!r}")


def rule_from_api(data: dict) -> ScheduleRule:
    """Create a rule variant from its wire form."""
    type_name = data.get("Type", "")
    args = list(data.get("Arguments") or [])

    if type_name in {m.value for m in TitleMatch} and args:
        return TitleRule(title=str(args[0]), match=TitleMatch(type_name))
    if type_name in (_CHANNELS, _NOT_ON_CHANNELS):
        return ChannelsRule(
            channel_ids=tuple(str(a) for a in args),
            exclusive=type_name == _CHANNELS,
        )
    if type_name == _ON_DATE and args:
        return OnDateAndDaysOfWeekRule(
            days=ScheduleDaysOfWeek.NONE,
            on_date=parse_argus_date(args[0]),
        )
    if type_name == _DAYS_OF_WEEK and args:
        return OnDateAndDaysOfWeekRule(
            days=ScheduleDaysOfWeek(int(args[0])),
            on_date=parse_argus_date(args[1]) if len(args) > 1 else None,
        )
    if type_name == _AROUND_TIME and args:
        return AroundTimeRule(around=_parse_schedule_time(args[0]))
    if type_name == _NEW_EPISODES_ONLY and args:
        return NewEpisodesOnlyRule(enabled=bool(args[0]))

    return UnknownRule(type_name=type_name, arguments=tuple(args))


# =============================================================================
# SCHEDULE
# =============================================================================


@dataclass
class Schedule:
    """A persisted recording rule-set.

    Padding is stored in seconds on the server; the minute accessors floor
    on read and multiply on write, matching the server's own contract.
    Fields this adapter does not model are kept in `extra` so a fetched
    template can be saved back without losing server-required values.
    """

    schedule_id: str | None = None
    name: str = ""
    channel_type: ChannelType = ChannelType.TELEVISION
    schedule_type: ScheduleType = ScheduleType.RECORDING
    is_active: bool = True
    pre_record_seconds: int | None = None
    post_record_seconds: int | None = None
    rules: list[ScheduleRule] = field(default_factory=list)
    extra: dict = field(default_factory=dict, repr=False)

    @property
    def pre_record_minutes(self) -> int | None:
        if self.pre_record_seconds is None:
            return None
        return self.pre_record_seconds // 60

    @pre_record_minutes.setter
    def pre_record_minutes(self, minutes: int | None) -> None:
        self.pre_record_seconds = None if minutes is None else minutes * 60

    @property
    def post_record_minutes(self) -> int | None:
        if self.post_record_seconds is None:
            return None
        return self.post_record_seconds // 60

    @post_record_minutes.setter
    def post_record_minutes(self, minutes: int | None) -> None:
        self.post_record_seconds = None if minutes is None else minutes * 60

    def find_rules(self, rule_type: ScheduleRuleType) -> list[ScheduleRule]:
        """All rules carrying the given tag."""
        return [r for r in self.rules if r.rule_type == rule_type]

    _KNOWN_KEYS = frozenset(
        {
            "ScheduleId",
            "Name",
            "ChannelType",
            "ScheduleType",
            "IsActive",
            "PreRecordSeconds",
            "PostRecordSeconds",
            "Rules",
        }
    )

    @classmethod
    def from_api(cls, data: dict) -> "Schedule":
        """Create from API response dict."""
        return cls(
            schedule_id=str_or_none(data.get("ScheduleId")),
            name=data.get("Name") or "",
            channel_type=coerce_enum(ChannelType, data.get("ChannelType"), ChannelType.TELEVISION),
            schedule_type=coerce_enum(
                ScheduleType, data.get("ScheduleType"), ScheduleType.RECORDING
            ),
            is_active=bool(data.get("IsActive", True)),
            pre_record_seconds=data.get("PreRecordSeconds"),
            post_record_seconds=data.get("PostRecordSeconds"),
            rules=[rule_from_api(r) for r in data.get("Rules") or []],
            extra={k: v for k, v in data.items() if k not in cls._KNOWN_KEYS},
        )

    def to_api(self) -> dict:
        """Payload for Scheduler/SaveSchedule."""
        payload = dict(self.extra)
        payload.update(
            {
                "ScheduleId": self.schedule_id,
                "Name": self.name,
                "ChannelType": int(self.channel_type),
                "ScheduleType": int(self.schedule_type),
                "IsActive": self.is_active,
                "PreRecordSeconds": self.pre_record_seconds,
                "PostRecordSeconds": self.post_record_seconds,
                "Rules": [r.to_api() for r in self.rules],
            }
        )
        return payload
