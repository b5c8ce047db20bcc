"""
Newsletter subscriber model.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class Subscriber(Base):
    """Email subscriber captured from the public reader."""

    __tablename__ = "subscribers"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Upserts conflict on this column
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Subscriber(id={self.id}, email={self.email})>"
