# smartspend/services/keys.py
"""
Short human-facing expense keys.

Keys are 4 digits drawn from "0000".."9998" (randrange(9999) never yields
9999) and are unique across every user's expenses, so the whole bot shares
9999 values. The draw loop has no attempt limit: as the table fills up,
collisions get more frequent. A completely full keyspace raises instead of
spinning forever.

Check-then-insert is racy between concurrent requests; the UNIQUE
constraint on expenses.unique_key is what actually guarantees uniqueness
(see repo.expenses.add_expense).
"""
from __future__ import annotations

import logging
import random
from typing import Collection, Optional

from smartspend.services.errors import KeyspaceExhausted

log = logging.getLogger(__name__)

KEY_WIDTH = 4
KEYSPACE_SIZE = 9999

_rng = random.SystemRandom()


def format_key(n: int) -> str:
    return f"{n:0{KEY_WIDTH}d}"


def _keyspace_full(existing: Collection[str]) -> bool:
    if len(existing) < KEYSPACE_SIZE:
        return False
    return all(format_key(n) in existing for n in range(KEYSPACE_SIZE))


def allocate_key(existing: Collection[str], rng: Optional[random.Random] = None) -> str:
    rng = rng or _rng
    if _keyspace_full(existing):
        raise KeyspaceExhausted(KEYSPACE_SIZE)

    attempts = 0
    while True:
        attempts += 1
        key = format_key(rng.randrange(KEYSPACE_SIZE))
        if key not in existing:
            if attempts > 1:
                log.debug("key_allocated key=%s attempts=%s", key, attempts)
            return key
