"""
Origin allow-list and the per-request decision function.

A policy with no registered origins is in wildcard mode: every request is
accepted and the echo value is "*". Once `allow_origin` has been called, only
requests whose `Origin` header exactly matches a registered value are
accepted, and the header value is echoed back verbatim.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from corsguard.utils.errors import MissingOrigin, OriginNotAllowed

WILDCARD = "*"
ORIGIN_HEADER = "origin"


def _header_text(value: Any) -> Optional[str]:
    """Return the header value as text, or None if it is not valid header text.

    Valid text is visible ASCII plus space and horizontal tab.
    """
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("ascii")
        except UnicodeDecodeError:
            return None
    if not isinstance(value, str):
        return None
    if all(ch == "\t" or " " <= ch <= "~" for ch in value):
        return value
    return None


def _first_origin(headers: Mapping[str, Any]) -> Any:
    # Starlette Headers keeps duplicates; items() yields them in order.
    for name, value in headers.items():
        if isinstance(name, (bytes, bytearray)):
            name = bytes(name).decode("latin-1")
        if name.lower() == ORIGIN_HEADER:
            return value
    return None


class OriginPolicy:
    """Allowed origins for cross-origin requests."""

    def __init__(self) -> None:
        self._origins: Optional[frozenset[str]] = None

    @classmethod
    def from_origins(cls, origins: Optional[Iterable[str]]) -> "OriginPolicy":
        policy = cls()
        if origins is not None:
            policy._origins = frozenset()
            for origin in origins:
                policy.allow_origin(origin)
        return policy

    @property
    def is_wildcard(self) -> bool:
        return self._origins is None

    @property
    def allowed_origins(self) -> Optional[frozenset[str]]:
        return self._origins

    def allow_origin(self, origin: str) -> "OriginPolicy":
        # Swap in a new set so concurrent readers never see a partial update.
        current = self._origins or frozenset()
        self._origins = current | {origin}
        return self

    def validate(self, headers: Mapping[str, Any]) -> str:
        """
        Decide whether a request with these headers may proceed.

        Returns the value to send in `Access-Control-Allow-Origin`.
        Raises MissingOrigin when the header is absent or not valid text,
        OriginNotAllowed when it is not registered.
        """
        origins = self._origins
        if origins is None:
            return WILDCARD

        raw = _first_origin(headers)
        origin = _header_text(raw) if raw is not None else None
        if origin is None:
            raise MissingOrigin()
        if origin not in origins:
            raise OriginNotAllowed(origin)
        return origin

    def __repr__(self) -> str:
        if self._origins is None:
            return "OriginPolicy(*)"
        return f"OriginPolicy({sorted(self._origins)!r})"
