"""Utility helpers for validation, identifiers and text folding.

Search filters compare folded text so that ``istanbul`` finds ``İstanbul``
and ``balatasi`` finds ``Balatası``. The classifier does not use folding; it
matches on the plain lowercased description.
"""
from __future__ import annotations

import asyncio
import math
import re
import time
from datetime import datetime, timezone
from typing import Optional

from unidecode import unidecode

from .config import settings
from .randomness import RandomSource, get_rng

VIN_PATTERN = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
INT_PREFIX_PATTERN = re.compile(r"^\s*[+-]?\d+")
FLOAT_PREFIX_PATTERN = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def is_valid_vin(vin: Optional[str]) -> bool:
    """17 characters, alphanumeric without I, O and Q."""
    if not vin or not isinstance(vin, str):
        return False
    return VIN_PATTERN.match(vin) is not None


def is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return False
    return EMAIL_PATTERN.match(value) is not None


def fold_text(value: Optional[str]) -> str:
    """Strip diacritics and lowercase for loose substring comparisons."""
    if not value:
        return ""
    return unidecode(value).lower()


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def utc_timestamp(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def generate_request_id(rng: RandomSource | None = None, now_ms: Optional[int] = None) -> str:
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"req-{timestamp}-{get_rng(rng).randint(0, 9999)}"


async def simulate_delay(min_ms: int = 100, max_ms: int = 500, rng: RandomSource | None = None) -> None:
    """Sleep for a random latency to mimic a remote backend."""
    if not settings.simulate_delay:
        return
    delay_ms = get_rng(rng).randint(min_ms, max_ms)
    await asyncio.sleep(delay_ms / 1000)


def parse_int_prefix(value: Optional[str]) -> Optional[int]:
    """Leading integer of ``value`` (``"2019abc"`` -> 2019), or None when there is none."""
    match = INT_PREFIX_PATTERN.match(value or "")
    return int(match.group()) if match else None


def parse_float_prefix(value: Optional[str]) -> Optional[float]:
    """Leading decimal number of ``value`` (``"4.5x"`` -> 4.5), or None when there is none."""
    match = FLOAT_PREFIX_PATTERN.match(value or "")
    return float(match.group()) if match else None
