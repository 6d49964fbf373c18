"""Tests for ARGUS TV wire types: JSON dates, rules and schedules."""

from datetime import UTC, datetime, time, timedelta, timezone

import pytest

from arguslive.argus.schedule import (
    AroundTimeRule,
    ChannelsRule,
    NewEpisodesOnlyRule,
    OnDateAndDaysOfWeekRule,
    Schedule,
    ScheduleRuleType,
    TitleMatch,
    TitleRule,
    UnknownRule,
    rule_from_api,
)
from arguslive.argus.types import (
    ArgusChannel,
    GuideProgramFlags,
    LiveStreamResult,
    ScheduleDaysOfWeek,
    TuneResult,
    UpcomingRecording,
    format_argus_date,
    parse_argus_date,
)

# =============================================================================
# DATES
# =============================================================================


class TestArgusDates:
    """/Date(ms[+zzzz])/ parsing and formatting."""

    def test_parse_utc(self):
        assert parse_argus_date("/Date(1709582400000)/") == datetime(2024, 3, 4, 20, 0, tzinfo=UTC)

    def test_parse_with_offset_keeps_instant(self):
        dt = parse_argus_date("/Date(1709582400000+0100)/")
        assert dt == datetime(2024, 3, 4, 20, 0, tzinfo=UTC)
        assert dt.utcoffset() == timedelta(hours=1)
        assert dt.hour == 21

    def test_parse_negative_offset(self):
        dt = parse_argus_date("/Date(1709582400000-0530)/")
        assert dt.utcoffset() == -timedelta(hours=5, minutes=30)

    def test_parse_iso(self):
        assert parse_argus_date("2024-03-04T20:00:00Z") == datetime(2024, 3, 4, 20, 0, tzinfo=UTC)

    def test_parse_empty(self):
        assert parse_argus_date(None) is None
        assert parse_argus_date("") is None

    def test_format_utc(self):
        assert format_argus_date(datetime(2024, 3, 4, 20, 0, tzinfo=UTC)) == "/Date(1709582400000)/"

    def test_format_naive_as_utc(self):
        assert format_argus_date(datetime(2024, 3, 4, 20, 0)) == "/Date(1709582400000)/"

    def test_format_keeps_offset(self):
        local = datetime(2024, 3, 4, 21, 0, tzinfo=timezone(timedelta(hours=1)))
        assert format_argus_date(local) == "/Date(1709582400000+0100)/"

    def test_parse_format_agree(self):
        text = "/Date(1709582400000+0100)/"
        assert format_argus_date(parse_argus_date(text)) == text


# =============================================================================
# RULES
# =============================================================================


class TestRuleWireForm:
    """Positional argument shapes per rule type."""

    def test_title(self):
        assert TitleRule("News").to_api() == {"Type": "TitleEquals", "Arguments": ["News"]}

    def test_title_contains_parsed(self):
        rule = rule_from_api({"Type": "TitleContains", "Arguments": ["Who"]})
        assert rule == TitleRule("Who", TitleMatch.CONTAINS)
        assert rule.rule_type == ScheduleRuleType.TITLE

    def test_channels(self):
        assert ChannelsRule(("a", "b")).to_api() == {"Type": "Channels", "Arguments": ["a", "b"]}

    def test_not_on_channels(self):
        rule = rule_from_api({"Type": "NotOnChannels", "Arguments": ["a"]})
        assert rule == ChannelsRule(("a",), exclusive=False)
        assert rule.to_api()["Type"] == "NotOnChannels"

    def test_days_of_week_mask_first(self):
        on = datetime(2024, 3, 4, tzinfo=UTC)
        payload = OnDateAndDaysOfWeekRule(ScheduleDaysOfWeek.WEEKENDS, on).to_api()
        assert payload == {"Type": "DaysOfWeek", "Arguments": [96, "/Date(1709510400000)/"]}

    def test_no_days_written_as_on_date(self):
        on = datetime(2024, 3, 4, tzinfo=UTC)
        payload = OnDateAndDaysOfWeekRule(ScheduleDaysOfWeek.NONE, on).to_api()
        assert payload == {"Type": "OnDate", "Arguments": ["/Date(1709510400000)/"]}

    def test_on_date_requires_date(self):
        with pytest.raises(ValueError):
            OnDateAndDaysOfWeekRule(ScheduleDaysOfWeek.NONE).to_api()

    def test_days_of_week_parsed(self):
        rule = rule_from_api({"Type": "DaysOfWeek", "Arguments": [17]})
        assert rule.days == ScheduleDaysOfWeek.MONDAYS | ScheduleDaysOfWeek.FRIDAYS
        assert rule.on_date is None

    def test_on_date_parsed(self):
        rule = rule_from_api({"Type": "OnDate", "Arguments": ["/Date(1709510400000)/"]})
        assert rule.days == ScheduleDaysOfWeek.NONE
        assert rule.rule_type == ScheduleRuleType.ON_DATE_AND_DAYS_OF_WEEK

    def test_around_time(self):
        payload = AroundTimeRule(time(20, 30)).to_api()
        assert payload == {
            "Type": "AroundTime",
            "Arguments": [{"Hours": 20, "Minutes": 30, "Seconds": 0}],
        }

    def test_around_time_from_ticks(self):
        # 20:30 as .NET ticks
        ticks = (20 * 3600 + 30 * 60) * 10_000_000
        rule = rule_from_api({"Type": "AroundTime", "Arguments": [{"Ticks": ticks}]})
        assert rule == AroundTimeRule(time(20, 30))

    def test_new_episodes_only(self):
        assert NewEpisodesOnlyRule(True).to_api() == {"Type": "NewEpisodesOnly", "Arguments": [True]}

    def test_unknown_preserved(self):
        data = {"Type": "SkipRepeats", "Arguments": [True]}
        rule = rule_from_api(data)
        assert rule == UnknownRule("SkipRepeats", (True,))
        assert rule.to_api() == data


# =============================================================================
# SCHEDULE
# =============================================================================


class TestSchedule:
    """Schedule padding accessors and round trip of unknown fields."""

    def test_minutes_floor_seconds(self):
        schedule = Schedule(pre_record_seconds=125)
        assert schedule.pre_record_minutes == 2

    def test_setting_minutes_stores_seconds(self):
        schedule = Schedule()
        schedule.post_record_minutes = 5
        assert schedule.post_record_seconds == 300

    def test_none_padding(self):
        schedule = Schedule()
        assert schedule.pre_record_minutes is None

    def test_extra_fields_survive(self):
        data = {
            "ScheduleId": None,
            "Name": "",
            "ChannelType": 0,
            "ScheduleType": 82,
            "IsActive": True,
            "PreRecordSeconds": 60,
            "PostRecordSeconds": 120,
            "KeepUntilMode": 2,
            "Rules": [{"Type": "TitleEquals", "Arguments": ["News"]}],
        }
        schedule = Schedule.from_api(data)
        assert schedule.rules == [TitleRule("News")]
        assert schedule.to_api()["KeepUntilMode"] == 2
        assert schedule.to_api()["ScheduleType"] == 82

    def test_find_rules(self):
        schedule = Schedule(rules=[TitleRule("A"), NewEpisodesOnlyRule(False)])
        assert schedule.find_rules(ScheduleRuleType.NEW_EPISODES_ONLY) == [NewEpisodesOnlyRule(False)]
        assert schedule.find_rules(ScheduleRuleType.CHANNELS) == []


# =============================================================================
# RESPONSE TYPES
# =============================================================================


CHANNEL = {
    "ChannelId": "c1",
    "DisplayName": "BBC One",
    "GuideChannelId": "g1",
    "ChannelType": 0,
    "VisibleInGuide": True,
    "LogicalChannelNumber": 1,
}


class TestResponseTypes:
    """from_api/to_api for types sent back to the server."""

    def test_channel_keeps_unknown_fields(self):
        channel = ArgusChannel.from_api(CHANNEL)
        assert channel.guide_channel_id == "g1"
        assert channel.to_api()["LogicalChannelNumber"] == 1

    def test_tune_result_success(self):
        result = TuneResult.from_api(
            {"Result": 0, "LiveStream": {"Channel": CHANNEL, "RtspUrl": "rtsp://x/1"}}
        )
        assert result.succeeded
        assert result.live_stream.rtsp_url == "rtsp://x/1"

    def test_tune_result_failure(self):
        result = TuneResult.from_api({"Result": 1, "LiveStream": None})
        assert result.result == LiveStreamResult.NO_FREE_CARD_FOUND
        assert not result.succeeded

    def test_unknown_tune_result(self):
        assert TuneResult.from_api({"Result": 42}).result == LiveStreamResult.UNKNOWN_ERROR

    def test_upcoming_recording(self):
        upcoming = UpcomingRecording.from_api(
            {
                "Program": {
                    "ScheduleId": "s1",
                    "Title": "News",
                    "Channel": CHANNEL,
                    "GuideProgramId": "p1",
                    "PreRecordSeconds": 60,
                    "IsPartOfSeries": True,
                },
                "ActualStartTimeUtc": "/Date(1709582400000)/",
            }
        )
        assert upcoming.title == "News"
        assert upcoming.program.is_part_of_series
        assert upcoming.program.channel.channel_id == "c1"
        assert upcoming.actual_start_time_utc == datetime(2024, 3, 4, 20, 0, tzinfo=UTC)

    def test_hd_flag_is_a_bit(self):
        flags = GuideProgramFlags(GuideProgramFlags.HIGH_DEFINITION | GuideProgramFlags.WIDESCREEN)
        assert GuideProgramFlags.HIGH_DEFINITION in flags
