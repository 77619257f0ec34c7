"""Process-wide configuration for the DAM stream and uploader.

The configuration is immutable: the URL rewrite rules are shared by every
handle, and handles never modify them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .rewrite import RewriteRule, default_rules

__all__ = ["DamConfig", "DEFAULT_SCHEME", "DEFAULT_BASE_URL", "DEFAULT_UPLOAD_URL"]

DEFAULT_SCHEME = "damedia"
DEFAULT_BASE_URL = "http://dam.docksal/sites/default/files/"
DEFAULT_UPLOAD_URL = "http://dam.docksal/api/file"


@dataclass(frozen=True)
class DamConfig:
    """Immutable DAM connection settings.

    Attributes:
        scheme: URI scheme handled by the stream (without ``://``).
        base_url: Base URL for original assets; replaces ``scheme://``.
        upload_url: Endpoint that accepts file uploads.
        derivative_segment: Path segment marking derivative/preset URIs;
            None means the scheme name.
        public_segment: Public segment the derivative segment maps to.
        rewrite_rules: Explicit ordered rules; when empty the defaults
            built from the fields above are used.
        timeout: Request timeout in seconds, or None for the HTTP client default.
    """

    scheme: str = DEFAULT_SCHEME
    base_url: str = DEFAULT_BASE_URL
    upload_url: str = DEFAULT_UPLOAD_URL
    derivative_segment: Optional[str] = None
    public_segment: str = "public"
    rewrite_rules: Tuple[RewriteRule, ...] = ()
    timeout: Optional[float] = None

    def rules(self) -> Tuple[RewriteRule, ...]:
        """Return the effective ordered rewrite rules."""
        if self.rewrite_rules:
            return tuple(self.rewrite_rules)
        return default_rules(
            self.scheme, self.base_url, self.derivative_segment, self.public_segment
        )

    @property
    def prefix(self) -> str:
        return f"{self.scheme}://"

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> DamConfig:
        """Build a config from ``DAMEDIA_*`` environment variables.

        Recognised variables: ``DAMEDIA_SCHEME``, ``DAMEDIA_BASE_URL``,
        ``DAMEDIA_UPLOAD_URL`` and ``DAMEDIA_TIMEOUT``. Unset variables keep
        the defaults.

        Raises:
            ValueError: If ``DAMEDIA_TIMEOUT`` is not a number.
        """
        env = os.environ if environ is None else environ
        timeout = env.get("DAMEDIA_TIMEOUT")
        return cls(
            scheme=env.get("DAMEDIA_SCHEME", DEFAULT_SCHEME),
            base_url=env.get("DAMEDIA_BASE_URL", DEFAULT_BASE_URL),
            upload_url=env.get("DAMEDIA_UPLOAD_URL", DEFAULT_UPLOAD_URL),
            timeout=float(timeout) if timeout else None,
        )
