"""arguslive configuration.

Everything configurable comes from environment variables, optionally set in
a .env file at the project root.

The host application owns its own plugin configuration storage; this module
only supplies defaults from the environment and lets the host override the
ARGUS TV server settings at runtime via Config.set_argus_settings().
"""

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

# =============================================================================
# VERSION
# =============================================================================


def _get_base_version() -> str:
    """Version from a source checkout's pyproject.toml, else from the installed dist."""
    try:
        import tomllib

        with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, ValueError):
        pass

    try:
        from importlib.metadata import PackageNotFoundError, version

        try:
            return version("arguslive")
        except PackageNotFoundError:
            pass
    except ImportError:
        pass

    return "0.0.0"


VERSION = _get_base_version()

# .env next to pyproject.toml
_PROJECT_ROOT = Path(__file__).parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"
load_dotenv(_ENV_FILE)


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class ArgusSettings:
    """ARGUS TV server connection settings."""

    server_ip: str | None = None
    server_port: int | None = None
    timeout: float = 30.0
    keepalive_interval_seconds: float = 30.0

    @property
    def is_configured(self) -> bool:
        """True when both address and port are set."""
        return bool(self.server_ip) and self.server_port is not None

    @property
    def base_url(self) -> str:
        """Root URL of the ARGUS TV REST services."""
        return f"http://{self.server_ip}:{self.server_port}/ArgusTV"


class Config:
    """Process-wide settings, read once from the environment at import."""

    # Runtime override set by the host (plugin configuration page)
    _argus_settings_override: ArgusSettings | None = None

    # Local timezone used when building schedule rules
    _timezone_from_env: str | None = os.getenv("TZ") or os.getenv("USER_TIMEZONE")
    _DEFAULT_TIMEZONE: str = "UTC"

    # API
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "text")
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "true").lower() not in ("0", "false", "no")
    _log_dir_from_env: str | None = os.getenv("LOG_DIR") or None

    @classmethod
    def get_log_dir(cls) -> Path:
        """Directory for rotating log files."""
        if cls._log_dir_from_env:
            return Path(cls._log_dir_from_env)
        return _PROJECT_ROOT / "logs"

    @classmethod
    def get_argus_settings(cls) -> ArgusSettings:
        """Get the current ARGUS TV settings.

        Priority:
        1. Runtime override (set by the host)
        2. Environment variables
        """
        if cls._argus_settings_override is not None:
            return cls._argus_settings_override

        return ArgusSettings(
            server_ip=os.getenv("ARGUS_SERVER_IP") or None,
            server_port=_int_env("ARGUS_SERVER_PORT", None),
            timeout=float(os.getenv("ARGUS_TIMEOUT", "30")),
            keepalive_interval_seconds=float(os.getenv("ARGUS_KEEPALIVE_INTERVAL", "30")),
        )

    @classmethod
    def set_argus_settings(cls, settings: ArgusSettings | None) -> None:
        """Override ARGUS TV settings at runtime (None restores env settings)."""
        cls._argus_settings_override = settings

    @classmethod
    def get_timezone_str(cls) -> str:
        """Get the local timezone name used for schedule rules."""
        return cls._timezone_from_env or cls._DEFAULT_TIMEZONE

    @classmethod
    def get_timezone(cls) -> ZoneInfo:
        """Get the local timezone as a ZoneInfo object."""
        return ZoneInfo(cls.get_timezone_str())

    @classmethod
    def set_timezone(cls, timezone: str | None) -> None:
        """Set the local timezone (None restores the default)."""
        cls._timezone_from_env = timezone

    @classmethod
    def reload(cls) -> None:
        """Re-read .env and drop runtime overrides."""
        load_dotenv(_ENV_FILE, override=True)
        cls._timezone_from_env = os.getenv("TZ") or os.getenv("USER_TIMEZONE")
        cls.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        cls.LOG_FORMAT = os.getenv("LOG_FORMAT", "text")
        cls._log_dir_from_env = os.getenv("LOG_DIR") or None
        cls._argus_settings_override = None


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def get_argus_settings() -> ArgusSettings:
    """Get the current ARGUS TV settings."""
    return Config.get_argus_settings()


def set_argus_settings(settings: ArgusSettings | None) -> None:
    """Override ARGUS TV settings at runtime."""
    Config.set_argus_settings(settings)


def get_local_timezone() -> ZoneInfo:
    """Get the local timezone as ZoneInfo."""
    return Config.get_timezone()


def set_timezone(timezone: str | None) -> None:
    """Set the local timezone."""
    Config.set_timezone(timezone)
