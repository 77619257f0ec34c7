"""HTTP transport used by the DAM stream and uploader.

``HttpClient`` is the injected capability; ``RequestsHttpClient`` is the
default implementation on top of ``requests``. Tests swap in a ``Mock``
built with ``spec=HttpClient``.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

from .errors import FetchFailure

logger = logging.getLogger(__name__)

__all__ = ["HttpResponse", "HttpClient", "RequestsHttpClient"]


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers and body of a completed request."""

    status_code: int
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.content)


class HttpClient(ABC):
    """Minimal HTTP capability needed by damedia."""

    @abstractmethod
    def get(self, url: str) -> bytes:
        """Fetch the full body of ``url``.

        Raises:
            FetchFailure: On transport errors or non-2xx responses.
        """
        ...

    @abstractmethod
    def head(self, url: str) -> Mapping[str, str]:
        """Return the response headers for ``url`` (case-insensitive mapping).

        Raises:
            FetchFailure: On transport errors or non-2xx responses.
        """
        ...

    @abstractmethod
    def post(
        self, url: str, data: bytes, headers: Optional[Mapping[str, str]] = None
    ) -> HttpResponse:
        """POST ``data`` to ``url`` and return the response whatever its status.

        Raises:
            FetchFailure: On transport errors only.
        """
        ...


class RequestsHttpClient(HttpClient):
    """``HttpClient`` backed by a ``requests.Session``."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the client.

        Parameters:
            session: Session to reuse; a new one is created when omitted.
            timeout: Per-request timeout; None keeps the requests default.
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise FetchFailure(url, reason=str(exc)) from exc

    def get(self, url: str) -> bytes:
        resp = self._request("GET", url, allow_redirects=True)
        if not resp.ok:
            raise FetchFailure(url, resp.status_code, resp.reason or "")
        return resp.content

    def head(self, url: str) -> Mapping[str, str]:
        resp = self._request("HEAD", url, allow_redirects=True)
        if not resp.ok:
            raise FetchFailure(url, resp.status_code, resp.reason or "")
        return CaseInsensitiveDict(resp.headers)

    def post(
        self, url: str, data: bytes, headers: Optional[Mapping[str, str]] = None
    ) -> HttpResponse:
        resp = self._request("POST", url, data=data, headers=dict(headers or {}))
        return HttpResponse(
            status_code=resp.status_code,
            content=resp.content,
            headers=CaseInsensitiveDict(resp.headers),
        )
