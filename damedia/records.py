"""File records handed to the uploader.

The host application owns its file metadata; damedia only needs a name, the
bytes, and a way to point the record at its DAM copy afterwards.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

__all__ = ["FileRecord", "LocalFileRecord"]


@runtime_checkable
class FileRecord(Protocol):
    """Anything that can be uploaded to the DAM and relocated afterwards."""

    def filename(self) -> str: ...

    def read_bytes(self) -> bytes: ...

    def set_location(self, uri: str) -> None: ...


class LocalFileRecord:
    """``FileRecord`` for a file stored on local disk.

    ``location`` starts as the local path and becomes the DAM URI once the
    file has been stored remotely.
    """

    def __init__(self, path: Union[str, Path], name: Optional[str] = None) -> None:
        self.path = Path(path)
        self._name = name or self.path.name
        self.location = str(self.path)

    def filename(self) -> str:
        return self._name

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def set_location(self, uri: str) -> None:
        self.location = uri

    def __repr__(self) -> str:
        return f"LocalFileRecord(path={str(self.path)!r}, location={self.location!r})"
