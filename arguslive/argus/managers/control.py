"""Control service: recordings and live streams."""

import logging

from arguslive.argus.client import ArgusClient, decode, decode_list
from arguslive.argus.types import (
    ArgusChannel,
    ChannelType,
    LiveStream,
    Recording,
    RecordingGroup,
    RecordingGroupMode,
    TuneResult,
    UpcomingRecording,
    UpcomingRecordingsFilter,
)
from arguslive.core.exceptions import TransportFault

logger = logging.getLogger(__name__)


class ControlManager:
    """ARGUS TV Control service operations."""

    def __init__(self, client: ArgusClient):
        self._client = client

    # -------------------------------------------------------------------------
    # Recordings
    # -------------------------------------------------------------------------

    def get_all_recording_groups(
        self,
        channel_type: ChannelType,
        group_mode: RecordingGroupMode,
    ) -> list[RecordingGroup]:
        """Recording groups for a channel type, grouped as requested."""
        data = self._client.get(f"Control/RecordingGroups/{int(channel_type)}/{int(group_mode)}")
        return decode_list(RecordingGroup.from_api, data, "recording groups")

    def get_full_recordings(
        self,
        channel_type: ChannelType,
        schedule_id: str | None = None,
        program_title: str | None = None,
        category: str | None = None,
        channel_id: str | None = None,
    ) -> list[Recording]:
        """Recordings matching the optional filters."""
        body = {
            "ScheduleId": schedule_id,
            "ProgramTitle": program_title,
            "Category": category,
            "ChannelId": channel_id,
        }
        data = self._client.post(f"Control/GetFullRecordings/{int(channel_type)}", json=body)
        return decode_list(Recording.from_api, data, "recordings")

    def get_recording_by_id(self, recording_id: str) -> Recording:
        """A single recording by ID."""
        data = self._client.get(f"Control/RecordingById/{recording_id}")
        if not data:
            raise TransportFault(f"Recording {recording_id} not found", status_code=404)
        return decode(Recording.from_api, data, "recording")

    def delete_recording_by_id(self, recording_id: str, delete_file: bool = True) -> None:
        """Delete a recording (and by default its file)."""
        flag = "true" if delete_file else "false"
        self._client.post(f"Control/DeleteRecordingById/{recording_id}?deleteRecordingFile={flag}")

    def get_all_upcoming_recordings(
        self,
        recordings_filter: UpcomingRecordingsFilter,
        include_active: bool = False,
    ) -> list[UpcomingRecording]:
        """Upcoming recordings of all schedules."""
        active = "true" if include_active else "false"
        data = self._client.get(
            f"Control/AllUpcomingRecordings/{int(recordings_filter)}?includeActive={active}"
        )
        return decode_list(UpcomingRecording.from_api, data, "upcoming recordings")

    # -------------------------------------------------------------------------
    # Live streams
    # -------------------------------------------------------------------------

    def tune_live_stream(
        self,
        channel: ArgusChannel,
        live_stream: LiveStream | None = None,
    ) -> TuneResult:
        """Tune a channel, optionally re-using an existing live stream."""
        body = {
            "Channel": channel.to_api(),
            "LiveStream": live_stream.to_api() if live_stream else None,
        }
        data = self._client.post("Control/TuneLiveStream", json=body)
        if not data:
            raise TransportFault("Server returned no tune result")
        return decode(TuneResult.from_api, data, "tune")

    def get_live_streams(self) -> list[LiveStream]:
        """All live streams currently open on the server."""
        data = self._client.get("Control/GetLiveStreams")
        return decode_list(LiveStream.from_api, data, "live streams")

    def keep_live_stream_alive(self, live_stream: LiveStream) -> bool:
        """Signal that a live stream is still in use.

        Returns:
            False if the server no longer knows the stream
        """
        data = self._client.post("Control/KeepLiveStreamAlive", json=live_stream.to_api())
        return bool(data) if data is not None else True

    def stop_live_stream(self, live_stream: LiveStream) -> None:
        """Stop a live stream."""
        self._client.post("Control/StopLiveStream", json=live_stream.to_api())
        logger.debug("[ARGUS] Stopped live stream %s", live_stream.rtsp_url)
