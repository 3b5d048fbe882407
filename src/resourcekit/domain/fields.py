"""Reusable pydantic field types for entities.

``Timestamp`` coerces a variety of date inputs to an integer UNIX timestamp;
``Timezone`` only accepts IANA zone names.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Annotated, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AfterValidator, BeforeValidator


def _now() -> int:
    return int(time.time())


def normalize_timestamp(value: Any) -> int:
    """Coerce ``value`` to seconds since the epoch.

    Accepts ``datetime`` objects, ints, numeric strings and ISO-8601 strings.
    Anything that cannot be interpreted yields the current time.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    if isinstance(value, bool):
        return _now()
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        try:
            return normalize_timestamp(datetime.fromisoformat(text))
        except ValueError:
            return _now()
    return _now()


def validate_timezone(value: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise ValueError(f'Invalid timezone "{value}" provided.') from e
    return value


Timestamp = Annotated[int, BeforeValidator(normalize_timestamp)]
Timezone = Annotated[str, AfterValidator(validate_timezone)]
