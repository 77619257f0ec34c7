"""Read-only virtual file handle over a DAM HTTP resource.

``RemoteFileStream`` maps a ``damedia://<target>`` URI to a remote URL, fetches
the body once on first access, and serves read/seek/tell/eof/stat against the
buffered bytes. Every remote failure collapses into ``None``/``False``; nothing
is raised past the handle.

``StreamFile`` exposes an open handle through the regular Python binary file
protocol (``io.RawIOBase``), raising typed errors where file objects raise.
"""

from __future__ import annotations

import io
import logging
import stat as stat_module
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from . import rewrite
from .config import DamConfig
from .errors import FetchFailure, OutOfRange, UnsupportedOperation
from .transport import HttpClient, RequestsHttpClient

log = logging.getLogger(__name__)

__all__ = ["RemoteFileStream", "StatResult", "StreamFile", "READ_MODES"]

READ_MODES = ("r", "rb")


@dataclass(frozen=True)
class StatResult:
    """Size and mode of a remote file; always a read-only regular file."""

    size: int
    mode: int = stat_module.S_IFREG | 0o444

    def to_dict(self, name: str) -> Dict[str, Any]:
        return {"name": name, "size": self.size, "type": "file", "mode": self.mode}


def _content_length(headers: Mapping[str, str]) -> Optional[int]:
    for key, value in headers.items():
        if key.lower() == "content-length":
            try:
                return int(value)
            except (TypeError, ValueError):
                return None
    return None


class RemoteFileStream:
    """A single open access to a DAM resource.

    A handle is created per access, opened with a read mode, read from, and
    closed. Content is fetched at most once per open; a failed fetch is
    remembered and never retried by the same handle.
    """

    name = "DAMEdia wrapper"
    description = "Use DAM images as they are on your system"
    # Files are shown to users, but the stream never writes.
    visible = True
    writable = False

    def __init__(
        self,
        config: Optional[DamConfig] = None,
        http_client: Optional[HttpClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """Create an unopened handle.

        Parameters:
            config: Shared DAM configuration; defaults to ``DamConfig()``.
            http_client: Transport; defaults to ``RequestsHttpClient``.
            logger: Logger for fetch diagnostics; defaults to the module logger.
        """
        self.config = config or DamConfig()
        self.http = http_client or RequestsHttpClient(timeout=self.config.timeout)
        self.log = logger or log
        self.uri: Optional[str] = None
        self.mode: Optional[str] = None
        self.cursor = 0
        self._content: Optional[bytes] = None
        self._fetched = False

    def __enter__(self) -> RemoteFileStream:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RemoteFileStream(uri={self.uri!r}, mode={self.mode!r})"

    # -- URI helpers --------------------------------------------------------

    def set_uri(self, uri: str) -> None:
        if uri != self.uri:
            self._content = None
            self._fetched = False
            self.cursor = 0
        self.uri = uri

    def get_uri(self) -> Optional[str]:
        return self.uri

    def get_target(self, uri: Optional[str] = None) -> str:
        uri = uri or self.uri
        return rewrite.get_target(uri) if uri else ""

    def get_external_url(self) -> Optional[str]:
        """Return the HTTP URL the current URI resolves to, or None if unset."""
        if self.uri is None:
            return None
        return rewrite.translate(self.uri, self.config.rules())

    @property
    def remote_url(self) -> Optional[str]:
        return self.get_external_url()

    def get_directory_path(self) -> str:
        return ""

    def realpath(self) -> Optional[str]:
        # There is no local copy; the URI is the only path.
        return self.uri

    def dirname(self, uri: Optional[str] = None) -> str:
        uri = uri or self.uri
        return rewrite.dirname(uri) if uri else ""

    # -- stream operations --------------------------------------------------

    def open(self, uri: str, mode: str = "rb") -> bool:
        """Open ``uri`` for reading and fetch its content.

        Returns:
            True if the content was fetched, False for a non-read mode or a
            failed fetch. A rejected mode makes no network call and leaves
            the handle untouched.
        """
        if mode not in READ_MODES:
            self.log.debug("Refusing to open %s with mode %r", uri, mode)
            return False
        self.set_uri(uri)
        self.mode = mode
        if self.fetch_content() is None:
            return False
        self.cursor = 0
        return True

    def fetch_content(self) -> Optional[bytes]:
        """Return the remote body, fetching it on the first call only.

        Transport errors, non-2xx responses, empty bodies and an unset URI
        all yield None.
        """
        if self.uri is None:
            return None
        if not self._fetched:
            self._fetched = True
            url = self.remote_url
            try:
                data = self.http.get(url)
            except FetchFailure as exc:
                self.log.debug("GET %s failed: %s", url, exc)
                data = None
            self._content = data or None
        return self._content

    @property
    def content(self) -> Optional[bytes]:
        return self._content

    @property
    def size(self) -> int:
        return len(self._content) if self._content is not None else 0

    def read(self, max_bytes: int = -1) -> Optional[bytes]:
        """Read up to ``max_bytes`` from the cursor.

        A negative ``max_bytes`` reads everything that remains. Returns None
        when there is no content or nothing left to read.
        """
        if self._content is None:
            return None
        remaining = len(self._content) - self.cursor
        if remaining <= 0:
            return None
        count = remaining if max_bytes < 0 else min(max_bytes, remaining)
        buffer = self._content[self.cursor : self.cursor + count]
        self.cursor += count
        return buffer

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> bool:
        """Move the cursor to ``offset``; only ``SEEK_SET`` is supported.

        On failure the cursor is left where it was.
        """
        if whence != io.SEEK_SET or self._content is None:
            return False
        if 0 <= offset <= len(self._content):
            self.cursor = offset
            return True
        return False

    def tell(self) -> int:
        return self.cursor

    def eof(self) -> bool:
        return self.cursor == self.size

    def stat(self) -> Optional[StatResult]:
        """Return the remote size, preferring a HEAD request.

        Falls back to the (memoized) full fetch when HEAD fails or carries no
        Content-Length. Returns None when neither gives a size.
        """
        if self.uri is None:
            return None
        # A failed fetch stays failed for this handle.
        if self._fetched and self._content is None:
            return None
        url = self.remote_url
        try:
            headers = self.http.head(url)
        except FetchFailure as exc:
            self.log.debug("HEAD %s failed: %s", url, exc)
            headers = {}
        size = _content_length(headers)
        if size is None:
            content = self.fetch_content()
            if content:
                size = len(content)
        if size is None:
            return None
        return StatResult(size=size)

    def url_stat(self, uri: str, quiet: bool = False) -> Optional[StatResult]:
        """Stat ``uri`` without opening it; ``quiet`` silences the warning on failure."""
        self.set_uri(uri)
        result = self.stat()
        if result is None and not quiet:
            self.log.warning("Unable to stat %s", uri)
        return result

    def close(self) -> bool:
        self._content = None
        self._fetched = False
        self.cursor = 0
        self.mode = None
        return True

    def write(self, data: bytes) -> bool:
        return False

    def flush(self) -> bool:
        return True

    def lock(self, operation: int) -> bool:
        return True

    def set_metadata(self, uri: str, option: int, value: Any) -> bool:
        # chown/chgrp/touch are accepted and ignored.
        return True

    def set_option(self, option: int, arg1: Any = None, arg2: Any = None) -> bool:
        return False

    def truncate(self, new_size: int) -> bool:
        return False

    def cast(self, cast_as: int) -> bool:
        return False

    # -- namespace operations -------------------------------------------------

    def unlink(self, uri: str) -> bool:
        """Report success without touching the DAM copy.

        The remote asset stays; callers still get to drop their own record.
        """
        self.log.debug("Ignoring delete of %s; DAM copy is kept", uri)
        return True

    def rename(self, from_uri: str, to_uri: str) -> bool:
        return False

    def mkdir(self, uri: str, mode: int = 0o777, recursive: bool = False) -> bool:
        return False

    def rmdir(self, uri: str) -> bool:
        return False

    def opendir(self, uri: str) -> bool:
        return False

    def readdir(self) -> bool:
        return False

    def rewinddir(self) -> bool:
        return False

    def closedir(self) -> bool:
        return False


class StreamFile(io.RawIOBase):
    """Binary file object over an open ``RemoteFileStream``."""

    def __init__(self, stream: RemoteFileStream) -> None:
        super().__init__()
        self._stream = stream

    @property
    def name(self) -> Optional[str]:
        return self._stream.uri

    @property
    def size(self) -> int:
        return self._stream.size

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def readinto(self, b: Any) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        data = self._stream.read(len(b))
        if data is None:
            return 0
        n = len(data)
        b[:n] = data
        return n

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        if whence == io.SEEK_CUR:
            offset += self._stream.tell()
        elif whence == io.SEEK_END:
            offset += self._stream.size
        elif whence != io.SEEK_SET:
            raise ValueError(f"Invalid whence ({whence!r})")
        if not self._stream.seek(offset):
            raise OutOfRange(
                f"Cannot seek to {offset} in {self.name} ({self._stream.size} bytes)"
            )
        return self._stream.tell()

    def tell(self) -> int:
        return self._stream.tell()

    def write(self, b: Any) -> int:
        raise UnsupportedOperation(f"{self.name} is read-only")

    def truncate(self, size: Optional[int] = None) -> int:
        raise UnsupportedOperation(f"{self.name} is read-only")

    def close(self) -> None:
        if not self.closed:
            self._stream.close()
        super().close()
