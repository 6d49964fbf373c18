"""Tests for the HTTP API over a fake ARGUS TV backend.

The TestClient is used without a context manager so the lifespan (which
builds the real global service) does not run.
"""

import pytest
from fastapi.testclient import TestClient

from arguslive.api.app import create_app
from arguslive.api.dependencies import get_livetv_service
from arguslive.argus.schedule import NewEpisodesOnlyRule, OnDateAndDaysOfWeekRule, Schedule, TitleRule
from arguslive.argus.types import LiveStreamResult, ScheduleDaysOfWeek, TuneResult
from arguslive.config import ArgusSettings
from fakes import BASE_TIME, make_channel, make_live_stream, make_upcoming

TIMER_BODY = {
    "channel_id": "ch-1",
    "name": "Evening News",
    "start_date": "2024-03-04T20:30:00Z",
    "pre_padding_seconds": 60,
    "post_padding_seconds": 300,
}


@pytest.fixture
def client(livetv):
    app = create_app()
    app.dependency_overrides[get_livetv_service] = lambda: livetv
    return TestClient(app)


# =============================================================================
# HEALTH AND STATUS
# =============================================================================


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_status(self, client):
        response = client.get("/api/v1/status")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "ARGUS TV"
        assert data["status"] == "verified"
        assert data["version"] == "2.3.0"
        assert data["api_version"] == 66

    def test_unconfigured_is_503(self, client, factory):
        factory.settings = ArgusSettings()
        assert client.get("/api/v1/status").status_code == 503

    def test_service_not_initialized_is_503(self):
        # no override: the global service was never created
        response = TestClient(create_app()).get("/api/v1/channels")
        assert response.status_code == 503


# =============================================================================
# CHANNELS
# =============================================================================


class TestChannelRoutes:
    def test_list_channels(self, client, conn):
        conn.scheduler.channels = [make_channel("a", "One")]
        [channel] = client.get("/api/v1/channels").json()
        assert channel["id"] == "a"
        assert channel["number"] == "0"

    def test_end_before_start_is_400(self, client):
        response = client.get(
            "/api/v1/channels/a/programs",
            params={"start": "2024-03-04T20:00:00Z", "end": "2024-03-04T19:00:00Z"},
        )
        assert response.status_code == 400

    def test_programs_empty_without_guide(self, client, conn):
        conn.scheduler.channels = [make_channel("a")]
        response = client.get("/api/v1/channels/a/programs")
        assert response.status_code == 200
        assert response.json() == []


# =============================================================================
# TIMERS
# =============================================================================


class TestTimerRoutes:
    def test_create_timer(self, client, conn):
        response = client.post("/api/v1/timers", json=TIMER_BODY)
        assert response.status_code == 201
        assert conn.scheduler.saved[0].name == "Evening News"

    def test_update_timer_keeps_id(self, client, conn):
        response = client.put("/api/v1/timers/sched-1", json=TIMER_BODY)
        assert response.status_code == 200
        assert conn.scheduler.saved[0].schedule_id == "sched-1"

    def test_negative_padding_rejected(self, client, conn):
        body = dict(TIMER_BODY, pre_padding_seconds=-1)
        assert client.post("/api/v1/timers", json=body).status_code == 422
        assert conn.scheduler.saved == []

    def test_save_fault_is_409(self, client, conn):
        conn.scheduler.fail_on.add("save_schedule")
        assert client.post("/api/v1/timers", json=TIMER_BODY).status_code == 409

    def test_cancel_timer(self, client, conn):
        assert client.delete("/api/v1/timers/sched-1").status_code == 204
        assert conn.scheduler.deleted == ["sched-1"]

    def test_list_timers(self, client, conn):
        conn.control.upcoming = [make_upcoming("sched-1", "News")]
        [timer] = client.get("/api/v1/timers").json()
        assert timer["id"] == "sched-1"
        assert timer["pre_padding_seconds"] == 120

    def test_defaults(self, client):
        data = client.get("/api/v1/timers/defaults").json()
        assert data["pre_padding_seconds"] == 60
        assert data["post_padding_seconds"] == 180


class TestSeriesTimerRoutes:
    def test_create_series_timer(self, client, conn):
        body = dict(TIMER_BODY, days=["Saturday", "Sunday"], record_new_only=True)
        assert client.post("/api/v1/series-timers", json=body).status_code == 201
        assert len(conn.scheduler.saved[0].rules) == 5

    def test_unknown_day_rejected(self, client):
        body = dict(TIMER_BODY, days=["Someday"])
        assert client.post("/api/v1/series-timers", json=body).status_code == 422

    def test_list_series_timers(self, client, conn):
        conn.control.upcoming = [make_upcoming("sched-1", is_part_of_series=True)]
        conn.scheduler.schedules["sched-1"] = Schedule(
            schedule_id="sched-1",
            rules=[
                TitleRule("Show"),
                OnDateAndDaysOfWeekRule(
                    ScheduleDaysOfWeek.SUNDAYS | ScheduleDaysOfWeek.MONDAYS, BASE_TIME
                ),
                NewEpisodesOnlyRule(True),
            ],
        )
        [series] = client.get("/api/v1/series-timers").json()
        assert series["days"] == ["Monday", "Sunday"]
        assert series["record_new_only"] is True

    def test_listing_fault_is_409(self, client, conn):
        conn.control.fail_on.add("get_all_upcoming_recordings")
        assert client.get("/api/v1/series-timers").status_code == 409


# =============================================================================
# RECORDINGS AND STREAMS
# =============================================================================


class TestRecordingRoutes:
    def test_delete(self, client, conn):
        assert client.delete("/api/v1/recordings/r1").status_code == 204

    def test_delete_failure_is_502(self, client, conn):
        conn.control.fail_on.add("delete_recording_by_id")
        assert client.delete("/api/v1/recordings/r1").status_code == 502


class TestStreamRoutes:
    def test_open_channel_stream(self, client, conn):
        conn.scheduler.channels = [make_channel("ch-1")]
        response = client.post("/api/v1/streams/channels/ch-1")
        assert response.status_code == 200
        assert response.json() == {
            "id": "ch-1",
            "path": "rtsp://argus/ch-1",
            "protocol": "rtsp",
            "container": None,
        }

    def test_failed_tune_is_404(self, client, conn):
        conn.scheduler.channels = [make_channel("ch-1")]
        conn.control.tune_result = TuneResult(LiveStreamResult.NO_FREE_CARD_FOUND)
        assert client.post("/api/v1/streams/channels/ch-1").status_code == 404

    def test_close_stream(self, client, conn):
        conn.control.live_streams = [make_live_stream("ch-1")]
        assert client.delete("/api/v1/streams/ch-1").status_code == 204
        assert len(conn.control.stopped) == 1
