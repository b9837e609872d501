"""Deterministic word of the day: every player gets the same word on the same date."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Tuple

from mamipalabra.core.words import DictionaryType, EmptyWordPoolError, WordEntry, WordRepository

DAILY_WORD_LENGTH = 5


def date_seed(day: date) -> str:
    """Seed string ``year-month-day`` with a zero-indexed, unpadded month."""
    return f"{day.year}-{day.month - 1}-{day.day}"


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def seed_hash(text: str) -> int:
    """Rolling ``hash * 31 + code`` hash kept in signed 32-bit range at every step."""
    h = 0
    for ch in text:
        h = _to_int32(h * 31 + ord(ch))
    return h


def word_of_day(repository: WordRepository, day: Optional[date] = None) -> WordEntry:
    day = day or date.today()
    pool = repository.get_word_list(DictionaryType.GENERAL, DAILY_WORD_LENGTH)
    if not pool:
        raise EmptyWordPoolError("The general 5-letter pool is empty; no word of the day")
    return pool[abs(seed_hash(date_seed(day))) % len(pool)]


def time_until_next_word(now: Optional[datetime] = None) -> Tuple[int, int, int]:
    """Return (hours, minutes, seconds) left until local midnight."""
    now = now or datetime.now()
    tomorrow = datetime.combine(now.date() + timedelta(days=1), datetime.min.time())
    remaining = int((tomorrow - now).total_seconds())
    hours, rest = divmod(remaining, 3600)
    minutes, seconds = divmod(rest, 60)
    return hours, minutes, seconds
