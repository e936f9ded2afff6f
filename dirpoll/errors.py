"""Error codes for watch operations and the record of the last error."""

from __future__ import annotations

import enum
import threading


class ErrorCode(enum.Enum):
    """Reasons a watch request can be refused."""

    FILE_NOT_FOUND = "file_not_found"
    FILE_REPEATED = "file_repeated"
    FILE_OUT_OF_SCOPE = "file_out_of_scope"
    FILE_NOT_READABLE = "file_not_readable"
    FILE_REMOTE = "file_remote"
    UNSPECIFIED = "unspecified"


class WatchError(Exception):
    """Raised when a watch cannot be added."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


_MESSAGES = {
    ErrorCode.FILE_NOT_FOUND: "File not found ( {} )",
    ErrorCode.FILE_REPEATED: "File reapeated in watches ( {} )",
    ErrorCode.FILE_OUT_OF_SCOPE: "Symlink file out of scope ( {} )",
    ErrorCode.FILE_REMOTE: (
        "File is located in a remote file system, use a generic watcher. ( {} )"
    ),
}

_lock = threading.Lock()
_last_error = ""


def create_error(code: ErrorCode, log: str) -> WatchError:
    """Record the message for ``code`` as the last error and return the exception."""
    global _last_error
    template = _MESSAGES.get(code)
    message = template.format(log) if template is not None else log
    with _lock:
        _last_error = message
    return WatchError(code, message)


def last_error() -> str:
    """Return the message of the most recently created error."""
    with _lock:
        return _last_error