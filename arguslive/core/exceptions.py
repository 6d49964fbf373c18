"""Error taxonomy for the ARGUS TV adapter.

Read operations degrade to empty results; write and acquire operations
raise one of the typed conditions below so the host can react.
"""


class ArgusLiveError(Exception):
    """Base class for all adapter errors."""


class ConfigurationError(ArgusLiveError):
    """Server address or port is not configured."""


class VersionIncompatible(ArgusLiveError):
    """The server's API version does not match the supported version."""

    def __init__(self, message: str, plugin_too_new: bool):
        super().__init__(message)
        self.plugin_too_new = plugin_too_new


class TransportFault(ArgusLiveError):
    """Any failure talking to the ARGUS TV server."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SchedulingConflict(ArgusLiveError):
    """Creating, updating, cancelling or listing a (series) timer failed."""


class StreamUnavailable(ArgusLiveError):
    """A channel or recording could not be streamed."""

    def __init__(self, identifier: str, message: str | None = None):
        super().__init__(message or f"Could not stream {identifier}")
        self.identifier = identifier


class UnsupportedOperation(ArgusLiveError):
    """The operation is deliberately not implemented by this backend."""


class OperationCancelled(ArgusLiveError):
    """The caller's cancellation signal was set."""
