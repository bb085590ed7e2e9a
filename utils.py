from collections.abc import Sequence
from datetime import datetime
from typing import TypeVar
from urllib.parse import quote

from config import settings

DEBUG_LEVEL = settings.DEBUG_LEVEL

EntityRef = int | str
E = TypeVar("E")


def resolve_index(pool: Sequence[E], ref: EntityRef | None) -> int | None:
    """Position of an entry addressed by index (int) or entity id (str), or None"""
    if ref is None or isinstance(ref, bool):
        return None
    if isinstance(ref, int):
        return ref if 0 <= ref < len(pool) else None
    for idx, entry in enumerate(pool):
        if getattr(entry, "id", None) == ref:
            return idx
    return None


def last_updated_stamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(settings.LAST_UPDATED_FORMAT)


def division_label(age_group: str, season: str) -> str:
    return f"{age_group}/{season}"


def encode_age_group(age_group: str) -> str:
    """URL-encode an age group for use as a path segment"""
    return quote(age_group, safe="")
