"""Subscriber domain entity."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Subscriber:
    """An email address captured by the reader's sign-up form.

    Email is the natural key; the store enforces its uniqueness.
    """

    id: str
    email: str
    subscribed_at: datetime
    name: Optional[str] = None
