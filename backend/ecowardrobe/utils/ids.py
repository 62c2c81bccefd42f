"""
Identifier and clock helpers, injectable into the wardrobe store.
"""
import uuid
from datetime import datetime, timezone
from typing import Callable

IdGenerator = Callable[[], str]
Clock = Callable[[], datetime]


def new_id() -> str:
    """Random 32-char hex id."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
