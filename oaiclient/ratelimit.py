"""Rate-limit information reported in API response headers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal

_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}
_MAX_NANOSECONDS = 2**63 - 1
_COMPONENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h30m"``, ``"20ms"`` or ``"-1.5s"``.

    Raises ValueError when the text is not a valid duration.
    """
    rest = str(text)
    negative = False
    if rest[:1] in ("+", "-") and rest:
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration {text!r}")

    total = Decimal(0)
    position = 0
    while position < len(rest):
        match = _COMPONENT.match(rest, position)
        whole, fraction, unit = match.group(1), match.group(2) or "", match.group(3)
        if not whole and not fraction:
            raise ValueError(f"invalid duration {text!r}")
        if not unit:
            raise ValueError(f"missing unit in duration {text!r}")
        if unit not in _UNIT_NANOSECONDS:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")
        total += Decimal(f"{whole or '0'}.{fraction or '0'}") * _UNIT_NANOSECONDS[unit]
        position = match.end()

    nanoseconds = int(total)
    limit = _MAX_NANOSECONDS + 1 if negative else _MAX_NANOSECONDS
    if nanoseconds > limit:
        raise ValueError(f"invalid duration {text!r}")
    if negative:
        nanoseconds = -nanoseconds
    return timedelta(microseconds=nanoseconds / 1000)


class ResetTime(str):
    """A reset interval as sent by the server, e.g. ``"6m0s"``."""

    def time(self) -> datetime:
        """The moment the limit resets; now if the interval cannot be parsed."""
        try:
            delta = parse_duration(self)
        except ValueError:
            delta = timedelta(0)
        return datetime.now(timezone.utc) + delta


def _lookup(headers: Mapping, name: str) -> str:
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        value = next((v for k, v in headers.items() if str(k).lower() == lowered), None)
    return "" if value is None else str(value)


def _to_int(value: str) -> int:
    return int(value) if _INTEGER.fullmatch(value) else 0


@dataclass(frozen=True)
class RateLimitHeaders:
    """The ``x-ratelimit-*`` headers of a response."""

    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = ResetTime("")
    reset_tokens: ResetTime = ResetTime("")

    @classmethod
    def from_headers(cls, headers: Mapping) -> RateLimitHeaders:
        """Read the rate-limit fields; missing or malformed numbers become 0."""
        return cls(
            limit_requests=_to_int(_lookup(headers, "x-ratelimit-limit-requests")),
            limit_tokens=_to_int(_lookup(headers, "x-ratelimit-limit-tokens")),
            remaining_requests=_to_int(_lookup(headers, "x-ratelimit-remaining-requests")),
            remaining_tokens=_to_int(_lookup(headers, "x-ratelimit-remaining-tokens")),
            reset_requests=ResetTime(_lookup(headers, "x-ratelimit-reset-requests")),
            reset_tokens=ResetTime(_lookup(headers, "x-ratelimit-reset-tokens")),
        )