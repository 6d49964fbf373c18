"""Connection gate, rule translation and the keep-alive loop."""

from arguslive.consumers.connection_gate import SUPPORTED_API_VERSION, ConnectionGate
from arguslive.consumers.keepalive import KeepAliveScheduler
from arguslive.consumers.rules import (
    SeriesTimerFlags,
    days_to_mask,
    mask_to_days,
    padding_minutes,
    rules_to_series_timer_flags,
    series_timer_to_rules,
    timer_to_rules,
)

__all__ = [
    "SUPPORTED_API_VERSION",
    "ConnectionGate",
    "KeepAliveScheduler",
    "SeriesTimerFlags",
    "days_to_mask",
    "mask_to_days",
    "padding_minutes",
    "rules_to_series_timer_flags",
    "series_timer_to_rules",
    "timer_to_rules",
]
