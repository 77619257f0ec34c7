"""fsspec filesystem for the DAM URI scheme.

Registering ``DamFileSystem`` routes ``damedia://`` paths opened through
``fsspec.open`` / ``fsspec.filesystem`` to ``RemoteFileStream`` instead of the
local disk:

    >>> import fsspec, damedia
    >>> damedia.register()
    >>> with fsspec.open("damedia://images/photo.jpg", "rb") as f:
    ...     data = f.read()

The filesystem is read-only and flat: directory listing, mkdir, rmdir and
move raise ``UnsupportedOperation``; delete succeeds without touching the DAM.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type, Union

import fsspec
from fsspec import AbstractFileSystem

from .config import DamConfig
from .errors import InvalidMode, UnsupportedOperation
from .stream import READ_MODES, RemoteFileStream, StreamFile
from .transport import HttpClient, RequestsHttpClient

logger = logging.getLogger(__name__)

__all__ = ["DamFileSystem", "register"]


class DamFileSystem(AbstractFileSystem):
    """Read-only fsspec filesystem over DAM-hosted files."""

    protocol = "damedia"
    root_marker = ""
    # Instances hold an injected HTTP client; never share them via the fsspec cache.
    cachable = False
    default_config: Optional[DamConfig] = None

    def __init__(
        self,
        config: Optional[DamConfig] = None,
        http_client: Optional[HttpClient] = None,
        **storage_options: Any,
    ) -> None:
        """Initialize the filesystem.

        Parameters:
            config: DAM configuration; defaults to the class ``default_config``
                or ``DamConfig()``.
            http_client: Transport shared by every handle this filesystem opens.
            **storage_options: Passed through to ``AbstractFileSystem``.
        """
        super().__init__(**storage_options)
        self.config = config or self.default_config or DamConfig()
        self.http = http_client or RequestsHttpClient(timeout=self.config.timeout)

    @classmethod
    def _strip_protocol(cls, path: Union[str, List[str]]) -> Union[str, List[str]]:
        path = super()._strip_protocol(path)
        if isinstance(path, list):
            return [p.strip("/\\") for p in path]
        return path.strip("/\\")

    def _uri(self, path: str) -> str:
        return f"{self.config.prefix}{self._strip_protocol(path)}"

    def _stream(self) -> RemoteFileStream:
        return RemoteFileStream(config=self.config, http_client=self.http)

    def _open(
        self,
        path: str,
        mode: str = "rb",
        block_size: Optional[int] = None,
        autocommit: bool = True,
        cache_options: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> StreamFile:
        uri = self._uri(path)
        if mode not in READ_MODES:
            raise InvalidMode(f"{uri} can only be opened for reading, not {mode!r}")
        stream = self._stream()
        if not stream.open(uri, mode):
            raise FileNotFoundError(uri)
        return StreamFile(stream)

    def info(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        uri = self._uri(path)
        result = self._stream().url_stat(uri, quiet=True)
        if result is None:
            raise FileNotFoundError(uri)
        return result.to_dict(self._strip_protocol(path))

    def ls(self, path: str, detail: bool = True, **kwargs: Any) -> List[Any]:
        raise UnsupportedOperation(f"Cannot list {self._uri(path)}: no directories")

    def mkdir(self, path: str, create_parents: bool = True, **kwargs: Any) -> None:
        raise UnsupportedOperation(f"Cannot create directory {self._uri(path)}")

    def makedirs(self, path: str, exist_ok: bool = False) -> None:
        raise UnsupportedOperation(f"Cannot create directory {self._uri(path)}")

    def rmdir(self, path: str) -> None:
        raise UnsupportedOperation(f"Cannot remove directory {self._uri(path)}")

    def mv(self, path1: str, path2: str, **kwargs: Any) -> None:
        raise UnsupportedOperation(
            f"Cannot rename {self._uri(path1)} to {self._uri(path2)}"
        )

    def cp_file(self, path1: str, path2: str, **kwargs: Any) -> None:
        raise UnsupportedOperation(f"Cannot copy to {self._uri(path2)}")

    def rm_file(self, path: str) -> None:
        self._stream().unlink(self._uri(path))

    def rm(
        self,
        path: Union[str, List[str]],
        recursive: bool = False,
        maxdepth: Optional[int] = None,
    ) -> None:
        paths = [path] if isinstance(path, str) else path
        for p in paths:
            self.rm_file(p)


def register(config: Optional[DamConfig] = None) -> Type[DamFileSystem]:
    """Register a ``DamFileSystem`` with fsspec under ``config.scheme``.

    Returns:
        The registered filesystem class, bound to ``config``.
    """
    config = config or DamConfig()
    cls = type(
        "DamFileSystem",
        (DamFileSystem,),
        {"protocol": config.scheme, "default_config": config},
    )
    fsspec.register_implementation(config.scheme, cls, clobber=True)
    logger.debug("Registered %s:// with fsspec", config.scheme)
    return cls
