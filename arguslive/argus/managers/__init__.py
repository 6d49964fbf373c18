"""Per-service ARGUS TV managers."""

from arguslive.argus.managers.control import ControlManager
from arguslive.argus.managers.core import CoreManager
from arguslive.argus.managers.guide import GuideManager
from arguslive.argus.managers.scheduler import SchedulerManager

__all__ = [
    "ControlManager",
    "CoreManager",
    "GuideManager",
    "SchedulerManager",
]
