"""Tests for ARGUS TV settings resolution."""

from zoneinfo import ZoneInfo

from arguslive.config import ArgusSettings, Config, get_argus_settings, set_argus_settings


class TestArgusSettings:
    def test_unconfigured_without_port(self):
        assert not ArgusSettings(server_ip="argus").is_configured

    def test_unconfigured_without_address(self):
        assert not ArgusSettings(server_port=49943).is_configured

    def test_base_url(self):
        settings = ArgusSettings(server_ip="10.0.0.5", server_port=49943)
        assert settings.is_configured
        assert settings.base_url == "http://10.0.0.5:49943/ArgusTV"


class TestConfig:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ARGUS_SERVER_IP", "tv.local")
        monkeypatch.setenv("ARGUS_SERVER_PORT", "49943")
        monkeypatch.setenv("ARGUS_TIMEOUT", "5")
        settings = get_argus_settings()
        assert settings.server_ip == "tv.local"
        assert settings.server_port == 49943
        assert settings.timeout == 5.0

    def test_bad_port_is_unconfigured(self, monkeypatch):
        monkeypatch.setenv("ARGUS_SERVER_IP", "tv.local")
        monkeypatch.setenv("ARGUS_SERVER_PORT", "not-a-port")
        assert not get_argus_settings().is_configured

    def test_override_wins(self, monkeypatch):
        monkeypatch.setenv("ARGUS_SERVER_IP", "tv.local")
        override = ArgusSettings(server_ip="other", server_port=1)
        set_argus_settings(override)
        assert get_argus_settings() is override

    def test_timezone(self):
        Config.set_timezone("Europe/Brussels")
        assert Config.get_timezone() == ZoneInfo("Europe/Brussels")
