"""Immutable HTTP request.

The dispatcher only looks at the path and headers, so the request
carries no body access.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from gzembed.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request."""

    path: str
    method: str = "GET"
    headers: Headers = field(default_factory=Headers)

    @property
    def accept_encoding(self) -> str:
        """The ``Accept-Encoding`` header, or ``""`` when absent."""
        return self.headers.get("accept-encoding", "")

    @property
    def is_head(self) -> bool:
        return self.method == "HEAD"

    @classmethod
    def build(
        cls,
        path: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Create a request from plain strings (tests, embedding)."""
        return cls(path=path, method=method, headers=Headers.from_dict(headers or {}))

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        return cls(
            path=scope["path"],
            method=scope.get("method", "GET"),
            headers=Headers(tuple(scope.get("headers", ()))),
        )
