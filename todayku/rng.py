# todayku/rng.py
"""
Random sources for puzzle generation.

Every generator is an explicit instance passed by parameter; nothing here
touches the module-level ``random`` state.
"""
import random
from datetime import date, datetime, timezone

GAME_EPOCH = date(2023, 1, 1)


def utc_today():
    return datetime.now(timezone.utc).date()


def seed_key(day=None):
    """
    Return the YYYY-MM-DD key for a calendar day (today in UTC by default).
    """
    if day is None:
        day = utc_today()
    return day.strftime('%Y-%m-%d')


def seed_from_key(key):
    """
    Hash a seed key into a non-negative 32-bit integer.
    Uses h = h * 31 + ord(ch) with signed 32-bit wraparound.
    """
    h = 0
    for ch in key:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def daily_rng(day=None):
    """Deterministic generator: same day, same stream, for every player."""
    return random.Random(seed_from_key(seed_key(day)))


def system_rng():
    """OS entropy backed generator for per-request puzzles."""
    return random.SystemRandom()


def game_number(day=None, epoch=GAME_EPOCH):
    """Days since the epoch, counting the epoch itself as game #1."""
    if day is None:
        day = utc_today()
    return (day - epoch).days + 1


def daily_rng_factory(day=None):
    """
    rng factory for retrying generation: the first call returns the day's
    seeded generator, later calls fall back to fresh system randomness.
    """
    pending = [daily_rng(day)]

    def factory():
        return pending.pop() if pending else system_rng()
    return factory
