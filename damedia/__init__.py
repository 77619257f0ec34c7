"""damedia: read DAM-hosted files through a virtual ``damedia://`` scheme.

Quick Start:
    ```python
    import fsspec
    import damedia

    # Stream a DAM file through fsspec
    damedia.register()
    with fsspec.open("damedia://images/photo.jpg", "rb") as f:
        data = f.read()

    # Or use a handle directly
    stream = damedia.RemoteFileStream()
    if stream.open("damedia://images/photo.jpg", "rb"):
        head = stream.read(1024)
        stream.close()

    # Mirror a local file to the DAM and relocate its record
    record = damedia.LocalFileRecord("/tmp/a.txt")
    damedia.DamUploader().store(record)
    record.location  # 'damedia://images/a.txt'
    ```

Main Components:
    - `RemoteFileStream`: read-only handle with lazy, single fetch per open
    - `DamFileSystem` / `register()`: fsspec integration for the scheme
    - `DamUploader`: upload of local file records to the DAM
    - `DamConfig`: immutable base URLs and URL rewrite rules
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from .config import DamConfig
from .errors import (
    DamediaError,
    FetchFailure,
    InvalidMode,
    OutOfRange,
    UnsupportedOperation,
)
from .filesystem import DamFileSystem, register
from .records import FileRecord, LocalFileRecord
from .rewrite import RewriteRule, default_rules, translate
from .stream import RemoteFileStream, StatResult, StreamFile
from .transport import HttpClient, HttpResponse, RequestsHttpClient
from .upload import DamUploader, build_payload

logger = logging.getLogger(__name__)

__all__ = [
    # config.py
    "DamConfig",
    # errors.py
    "DamediaError",
    "FetchFailure",
    "InvalidMode",
    "OutOfRange",
    "UnsupportedOperation",
    # filesystem.py
    "DamFileSystem",
    "register",
    # records.py
    "FileRecord",
    "LocalFileRecord",
    # rewrite.py
    "RewriteRule",
    "default_rules",
    "translate",
    # stream.py
    "RemoteFileStream",
    "StatResult",
    "StreamFile",
    # transport.py
    "HttpClient",
    "HttpResponse",
    "RequestsHttpClient",
    # upload.py
    "DamUploader",
    "build_payload",
]

try:
    __version__ = version("damedia")
except PackageNotFoundError:
    __version__ = "0.0.0"
