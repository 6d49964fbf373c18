"""Shared fixtures: a fake ARGUS TV backend wired into the real services."""

import pytest

from arguslive.config import Config
from arguslive.consumers.connection_gate import ConnectionGate
from arguslive.services.livetv_service import ArgusLiveTvService
from arguslive.services.schedule_service import ScheduleService
from arguslive.services.stream_service import StreamService
from fakes import FakeFactory, make_fake_connection


@pytest.fixture(autouse=True)
def reset_config():
    """Keep runtime overrides from leaking between tests."""
    Config.set_timezone("UTC")
    Config.set_argus_settings(None)
    yield
    Config.set_timezone("UTC")
    Config.set_argus_settings(None)


@pytest.fixture
def conn():
    return make_fake_connection()


@pytest.fixture
def factory(conn):
    return FakeFactory(conn)


@pytest.fixture
def gate(factory):
    return ConnectionGate(factory)


@pytest.fixture
def schedule_service(gate):
    return ScheduleService(gate)


@pytest.fixture
def stream_service(gate):
    return StreamService(gate)


@pytest.fixture
def livetv(factory):
    service = ArgusLiveTvService(factory=factory, start_keepalive=False)
    yield service
    service.close()
