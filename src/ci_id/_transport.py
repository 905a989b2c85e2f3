from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from collections.abc import Mapping
from typing import Protocol, runtime_checkable
from urllib.parse import urlencode, urlparse, urlunparse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 5.0


class TransportError(Exception):
    """A request could not be completed (connection, timeout or HTTP status)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@runtime_checkable
class Transport(Protocol):
    def get(self, url: str, headers: Mapping[str, str]) -> bytes: ...


class UrllibTransport:
    """Production transport using urllib.request with a fixed timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SEC) -> None:
        self.timeout = timeout

    def get(self, url: str, headers: Mapping[str, str]) -> bytes:
        try:
            req = urllib.request.Request(url, headers=dict(headers), method="GET")
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return resp.read()
        except urllib.error.HTTPError as exc:
            raise TransportError(
                f"request failed (code={exc.code})", status=exc.code
            ) from exc
        except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
            raise TransportError(f"request failed: {exc}") from exc
        except ValueError as exc:
            # Request() rejects URLs without a scheme.
            raise TransportError(f"invalid request URL: {exc}") from exc


def with_query_param(url: str, name: str, value: str | None) -> str:
    """Return ``url`` with ``name=value`` appended to its query string.

    The existing query (GitHub's token URL already carries ``api-version``)
    is kept byte for byte. A None value leaves the URL untouched.
    """
    if value is None:
        return url
    parsed = urlparse(url)
    pair = urlencode({name: value})
    query = f"{parsed.query}&{pair}" if parsed.query else pair
    return urlunparse(parsed._replace(query=query))
