"""Cancellation signal helpers.

Every public operation accepts an optional threading.Event. It is checked
before the connection gate and before each remote call; once a remote call
has been acknowledged there is no rollback.
"""

import threading

from arguslive.core.exceptions import OperationCancelled

CancelSignal = threading.Event | None


def check_cancelled(cancel: CancelSignal, operation: str = "operation") -> None:
    """Raise OperationCancelled if the signal is set."""
    if cancel is not None and cancel.is_set():
        raise OperationCancelled(f"{operation} cancelled")
