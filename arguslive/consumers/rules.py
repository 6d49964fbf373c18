"""Translation between host timers and ARGUS TV schedule rules.

Pure functions, no I/O. Times written into rules are converted to the
configured local timezone, which is what the server matches against.

"Any time" and "any channel" are expressed by leaving out the AroundTime
and Channels rules. The read side (rules_to_series_timer_flags) only
recovers days and the new-episodes flag; it does not rebuild the two
"any" flags from rule absence.
"""

from dataclasses import dataclass, field
from datetime import datetime

from arguslive.argus.schedule import (
    AroundTimeRule,
    ChannelsRule,
    NewEpisodesOnlyRule,
    OnDateAndDaysOfWeekRule,
    ScheduleRule,
    ScheduleRuleType,
    TitleRule,
)
from arguslive.argus.types import ScheduleDaysOfWeek
from arguslive.core.types import DayOfWeek, SeriesTimerInfo, TimerInfo
from arguslive.utilities.tz import to_local

_DAY_FLAGS: dict[DayOfWeek, ScheduleDaysOfWeek] = {
    DayOfWeek.MONDAY: ScheduleDaysOfWeek.MONDAYS,
    DayOfWeek.TUESDAY: ScheduleDaysOfWeek.TUESDAYS,
    DayOfWeek.WEDNESDAY: ScheduleDaysOfWeek.WEDNESDAYS,
    DayOfWeek.THURSDAY: ScheduleDaysOfWeek.THURSDAYS,
    DayOfWeek.FRIDAY: ScheduleDaysOfWeek.FRIDAYS,
    DayOfWeek.SATURDAY: ScheduleDaysOfWeek.SATURDAYS,
    DayOfWeek.SUNDAY: ScheduleDaysOfWeek.SUNDAYS,
}


@dataclass(frozen=True)
class SeriesTimerFlags:
    """What can be read back from a stored series schedule."""

    days: frozenset[DayOfWeek] = field(default_factory=frozenset)
    record_new_only: bool = False


def days_to_mask(days) -> ScheduleDaysOfWeek:
    """Encode a set of days as the server's bitmask."""
    mask = ScheduleDaysOfWeek.NONE
    for day in days:
        mask |= _DAY_FLAGS[DayOfWeek(day)]
    return mask


def mask_to_days(mask: ScheduleDaysOfWeek | int) -> frozenset[DayOfWeek]:
    """Decode the server's bitmask into a set of days."""
    mask = ScheduleDaysOfWeek(int(mask))
    return frozenset(day for day, flag in _DAY_FLAGS.items() if flag in mask)


def padding_minutes(seconds: int) -> int:
    """Whole minutes of padding; partial minutes are dropped."""
    if seconds < 0:
        raise ValueError(f"Padding must not be negative: {seconds}")
    return seconds // 60


def _local_start(timer: TimerInfo) -> datetime:
    if timer.start_date is None:
        raise ValueError(f"Timer '{timer.name}' has no start date")
    return to_local(timer.start_date)


def timer_to_rules(timer: TimerInfo) -> list[ScheduleRule]:
    """Rules for a one-off recording: title, one channel, date, time."""
    start = _local_start(timer)
    return [
        TitleRule(timer.name),
        ChannelsRule((timer.channel_id,), exclusive=True),
        OnDateAndDaysOfWeekRule(days=ScheduleDaysOfWeek.NONE, on_date=start),
        AroundTimeRule(start.time().replace(microsecond=0)),
    ]


def series_timer_to_rules(series: SeriesTimerInfo) -> list[ScheduleRule]:
    """Rules for a recurring recording.

    AroundTime is only emitted when record_any_time is false and Channels
    only when record_any_channel is false, giving 3, 4 or 5 rules.
    """
    start = _local_start(series)
    rules: list[ScheduleRule] = [
        TitleRule(series.name),
        OnDateAndDaysOfWeekRule(days=days_to_mask(series.days), on_date=start),
        NewEpisodesOnlyRule(series.record_new_only),
    ]
    if not series.record_any_time:
        rules.append(AroundTimeRule(start.time().replace(microsecond=0)))
    if not series.record_any_channel:
        rules.append(ChannelsRule((series.channel_id,), exclusive=True))
    return rules


def rules_to_series_timer_flags(rules: list[ScheduleRule]) -> SeriesTimerFlags:
    """Recover days and the new-episodes flag from a schedule's rules.

    Only DaysOfWeek rules (a non-empty day mask) count; OnDate rules are
    ignored, so a schedule may carry one of each.
    """
    day_rules = [
        r
        for r in rules
        if r.rule_type == ScheduleRuleType.ON_DATE_AND_DAYS_OF_WEEK
        and r.days != ScheduleDaysOfWeek.NONE
    ]
    if len(day_rules) > 1:
        raise ValueError(f"Expected at most one days-of-week rule, found {len(day_rules)}")

    days: frozenset[DayOfWeek] = frozenset()
    if day_rules:
        days = mask_to_days(day_rules[0].days)

    record_new_only = any(
        r.enabled for r in rules if r.rule_type == ScheduleRuleType.NEW_EPISODES_ONLY
    )
    return SeriesTimerFlags(days=days, record_new_only=record_new_only)
