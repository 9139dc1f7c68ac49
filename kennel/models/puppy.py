"""Puppy model for animals born into a litter."""
from datetime import datetime
from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from sqlalchemy import (
    String, Text, Integer, Numeric, DateTime, ForeignKey, UniqueConstraint, func
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kennel.database import Base

if TYPE_CHECKING:
    from kennel.models.litter import Litter


class Puppy(Base):
    """
    Puppy model representing one animal of a litter.

    Created exactly once, in a batch, when the litter's birth is recorded.
    The identifier is unique within its litter.
    """
    __tablename__ = "puppies"
    __table_args__ = (
        UniqueConstraint("litter_id", "identifier", name="uq_puppies_litter_identifier"),
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

    # Foreign keys
    litter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("litters.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Identification
    identifier: Mapped[str] = mapped_column(
        String(50),
        nullable=False
    )
    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )
    sex: Mapped[str] = mapped_column(
        String(10),
        nullable=False
    )
    color: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True
    )
    markings: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="available"
    )

    # Birth information
    birth_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False
    )
    birth_weight: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(8, 2),
        nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
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

    # Relationships
    litter: Mapped["Litter"] = relationship(
        "Litter",
        back_populates="puppies",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Puppy(id={self.id}, litter_id={self.litter_id}, identifier={self.identifier})>"
