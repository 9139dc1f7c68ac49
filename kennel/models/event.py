"""Event model for the append-only fact log."""
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, String, Text, Integer, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from kennel.database import Base


class Event(Base):
    """
    Event model representing one dated occurrence on a dog, litter or puppy.

    Rows are append-only: after insert only reminder_completed and
    deleted_at change.
    """
    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_tenant_entity", "tenant_id", "entity_type", "entity_id"),
        Index("ix_events_reminder", "reminder_date", "reminder_completed"),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        nullable=False
    )

    # Owning breeder
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True
    )

    # Owning entity (polymorphic, no foreign key)
    entity_type: Mapped[str] = mapped_column(
        String(10),
        nullable=False
    )
    entity_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False
    )

    # Event information
    event_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True
    )
    event_date: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        index=True
    )
    event_end_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True
    )
    payload: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )

    # Reminder
    reminder_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True
    )
    reminder_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False
    )

    created_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    def __repr__(self) -> str:
        return (
            f"<Event(id={self.id}, event_type={self.event_type}, "
            f"entity={self.entity_type}:{self.entity_id})>"
        )
