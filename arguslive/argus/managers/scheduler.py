"""Scheduler service: channels and schedules."""

import logging

from arguslive.argus.client import ArgusClient, decode, decode_list
from arguslive.argus.schedule import Schedule
from arguslive.argus.types import ArgusChannel, ChannelType, ScheduleType
from arguslive.core.exceptions import TransportFault

logger = logging.getLogger(__name__)


class SchedulerManager:
    """ARGUS TV Scheduler service operations.

    Usage:
        manager = SchedulerManager(client)
        template = manager.create_new_schedule(ChannelType.TELEVISION, ScheduleType.RECORDING)
        template.name = "News"
        manager.save_schedule(template)
    """

    def __init__(self, client: ArgusClient):
        self._client = client

    def get_all_channels(
        self,
        channel_type: ChannelType,
        visible_only: bool = True,
    ) -> list[ArgusChannel]:
        """Get all channels of a type."""
        visible = "true" if visible_only else "false"
        data = self._client.get(f"Scheduler/Channels/{int(channel_type)}?visibleOnly={visible}")
        return decode_list(ArgusChannel.from_api, data, "channels")

    def get_channel_by_id(self, channel_id: str) -> ArgusChannel:
        """Get a single channel by ID.

        Raises:
            TransportFault: if the server does not know the channel
        """
        data = self._client.get(f"Scheduler/ChannelById/{channel_id}")
        if not data:
            raise TransportFault(f"Channel {channel_id} not found", status_code=404)
        return decode(ArgusChannel.from_api, data, "channel")

    def create_new_schedule(
        self,
        channel_type: ChannelType,
        schedule_type: ScheduleType,
    ) -> Schedule:
        """Get an unsaved schedule template with server defaults filled in."""
        data = self._client.get(
            f"Scheduler/EmptySchedule/{int(channel_type)}/{int(schedule_type)}"
        )
        if not data:
            raise TransportFault("Server returned no schedule template")
        return decode(Schedule.from_api, data, "schedule")

    def save_schedule(self, schedule: Schedule) -> Schedule:
        """Create or overwrite a schedule. Returns the saved schedule."""
        data = self._client.post("Scheduler/SaveSchedule", json=schedule.to_api())
        logger.debug("[ARGUS] Saved schedule '%s'", schedule.name)
        return decode(Schedule.from_api, data, "schedule") if data else schedule

    def get_schedule_by_id(self, schedule_id: str) -> Schedule:
        """Get a schedule by ID."""
        data = self._client.get(f"Scheduler/ScheduleById/{schedule_id}")
        if not data:
            raise TransportFault(f"Schedule {schedule_id} not found", status_code=404)
        return decode(Schedule.from_api, data, "schedule")

    def delete_schedule(self, schedule_id: str) -> None:
        """Delete a schedule by ID."""
        self._client.post(f"Scheduler/DeleteSchedule/{schedule_id}")
