"""Error taxonomy for damedia.

The transport layer raises these, ``RemoteFileStream`` collapses them into
``None``/``False`` results, and the Python file adapters (``StreamFile``,
``DamFileSystem``) let them through the way ordinary file objects would.
"""

import io

__all__ = [
    "DamediaError",
    "UnsupportedOperation",
    "FetchFailure",
    "OutOfRange",
    "InvalidMode",
]


class DamediaError(Exception):
    """Base class for all damedia errors."""


class UnsupportedOperation(DamediaError, io.UnsupportedOperation):
    """Write, directory, rename and mkdir/rmdir calls on a read-only DAM stream."""


class FetchFailure(DamediaError):
    """A GET or HEAD against the DAM failed, returned non-2xx, or was empty.

    Attributes:
        url: The remote URL that was requested.
        status_code: HTTP status, or None for transport errors.
    """

    def __init__(self, url: str, status_code=None, reason: str = "") -> None:
        self.url = url
        self.status_code = status_code
        self.reason = reason
        detail = f"HTTP {status_code}" if status_code is not None else "transport error"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(f"Failed to fetch {url} ({detail})")


class OutOfRange(DamediaError, ValueError):
    """Seek offset beyond the known content length."""


class InvalidMode(DamediaError, ValueError):
    """Open requested with a mode other than read."""
