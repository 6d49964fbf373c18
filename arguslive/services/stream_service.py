"""Stream session manager.

Opens live channel streams and recording file streams, closes live streams
and signals liveness of every open stream on each keep-alive tick.

The server is the source of truth for which live streams are open; nothing
is tracked locally.
"""

import logging

from arguslive.argus.types import LiveStream
from arguslive.consumers.connection_gate import ConnectionGate
from arguslive.consumers.keepalive import KeepAliveScheduler
from arguslive.core.cancellation import CancelSignal, check_cancelled
from arguslive.core.exceptions import OperationCancelled, StreamUnavailable, TransportFault
from arguslive.core.types import MediaProtocol, StreamSession

logger = logging.getLogger(__name__)

RECORDING_CONTAINER = "ts"


class StreamService:
    """Open, close and keep alive ARGUS TV streams."""

    def __init__(self, gate: ConnectionGate):
        self._gate = gate
        self._keepalive: KeepAliveScheduler | None = None

    def attach_keepalive(self, keepalive: KeepAliveScheduler | None) -> None:
        """Loop restarted whenever a channel stream is opened."""
        self._keepalive = keepalive

    def open_channel_stream(self, channel_id: str, cancel: CancelSignal = None) -> StreamSession:
        """Tune a channel and return its RTSP session.

        Raises:
            StreamUnavailable: tune failed or returned a non-success result
        """
        logger.info("[STREAM] Opening channel %s", channel_id)
        check_cancelled(cancel, "open channel stream")
        conn = self._gate.ensure_connection(cancel)

        try:
            check_cancelled(cancel, "open channel stream")
            channel = conn.scheduler.get_channel_by_id(channel_id)
            check_cancelled(cancel, "open channel stream")
            result = conn.control.tune_live_stream(channel, None)
        except TransportFault as e:
            logger.error("[STREAM] Tuning channel %s failed: %s", channel_id, e)
            raise StreamUnavailable(channel_id, f"Could not stream channel {channel_id}") from e

        if not result.succeeded or result.live_stream is None or not result.live_stream.rtsp_url:
            logger.error("[STREAM] Tuning channel %s returned %s", channel_id, result.result.name)
            raise StreamUnavailable(channel_id, f"Could not stream channel {channel_id}")

        self._ensure_keepalive()
        logger.info("[STREAM] Channel %s streaming at %s", channel_id, result.live_stream.rtsp_url)
        return StreamSession(
            id=channel_id,
            path=result.live_stream.rtsp_url,
            protocol=MediaProtocol.RTSP,
        )

    def open_recording_stream(
        self, recording_id: str, cancel: CancelSignal = None
    ) -> StreamSession:
        """Resolve a recording to its file.

        Raises:
            StreamUnavailable: recording unknown or has no file
        """
        logger.info("[STREAM] Opening recording %s", recording_id)
        check_cancelled(cancel, "open recording stream")
        conn = self._gate.ensure_connection(cancel)

        try:
            check_cancelled(cancel, "open recording stream")
            recording = conn.control.get_recording_by_id(recording_id)
        except TransportFault as e:
            logger.error("[STREAM] Resolving recording %s failed: %s", recording_id, e)
            raise StreamUnavailable(
                recording_id, f"Could not stream recording {recording_id}"
            ) from e

        if not recording.recording_file_name:
            raise StreamUnavailable(recording_id, f"Recording {recording_id} has no file")

        return StreamSession(
            id=recording_id,
            path=recording.recording_file_name,
            protocol=MediaProtocol.FILE,
            container=RECORDING_CONTAINER,
        )

    def close_stream(self, stream_id: str, cancel: CancelSignal = None) -> None:
        """Stop the one live stream owned by channel stream_id.

        Raises:
            StreamUnavailable: no stream or several streams match
        """
        logger.info("[STREAM] Closing stream %s", stream_id)
        check_cancelled(cancel, "close stream")
        conn = self._gate.ensure_connection(cancel)

        try:
            check_cancelled(cancel, "close stream")
            streams = conn.control.get_live_streams()
            wanted = stream_id.lower()
            matches = [s for s in streams if s.channel.channel_id.lower() == wanted]
            if len(matches) != 1:
                raise StreamUnavailable(
                    stream_id,
                    f"Expected one open stream for {stream_id}, found {len(matches)}",
                )
            check_cancelled(cancel, "close stream")
            conn.control.stop_live_stream(matches[0])
        except TransportFault as e:
            logger.error("[STREAM] Closing stream %s failed: %s", stream_id, e)
            raise StreamUnavailable(stream_id, f"Could not close stream {stream_id}") from e

    def keep_streams_alive(self, cancel: CancelSignal = None) -> None:
        """Signal liveness of every open live stream. Never raises."""
        try:
            check_cancelled(cancel, "keep-alive")
            conn = self._gate.ensure_connection(cancel)
            streams = conn.control.get_live_streams()
        except OperationCancelled:
            return
        except Exception as e:
            logger.warning("[KEEPALIVE] Could not enumerate live streams: %s", e)
            return

        for stream in streams:
            if cancel is not None and cancel.is_set():
                return
            self._keep_alive(conn.control, stream)

    @staticmethod
    def _keep_alive(control, stream: LiveStream) -> None:
        target = stream.rtsp_url or stream.timeshift_file
        try:
            if control.keep_live_stream_alive(stream):
                logger.debug("[KEEPALIVE] Kept %s alive", target)
            else:
                logger.warning("[KEEPALIVE] Server no longer knows stream %s", target)
        except Exception as e:
            logger.warning("[KEEPALIVE] Keep-alive for %s failed: %s", target, e)

    def _ensure_keepalive(self) -> None:
        # start() is a no-op while the loop thread is alive
        if self._keepalive is not None:
            self._keepalive.start()
