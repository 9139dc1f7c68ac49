"""Litter model for one reproduction cycle of a dam and sire."""
from datetime import datetime, date
from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Text, Integer, Date, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kennel.database import Base

if TYPE_CHECKING:
    from kennel.models.puppy import Puppy


class Litter(Base):
    """
    Litter model representing one mating and the puppies it produced.

    One-to-many relationship with Puppy. The count columns are written
    together with the puppies when a birth is recorded. version_id drives
    optimistic concurrency: a stale UPDATE raises StaleDataError.
    """
    __tablename__ = "litters"
    __table_args__ = (
        Index("ix_litters_tenant_status", "tenant_id", "status"),
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

    # Parents (references into dogs, not enforced as foreign keys)
    dam_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True
    )
    sire_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True
    )

    # Litter information
    name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True
    )
    litter_letter: Mapped[Optional[str]] = mapped_column(
        String(1),
        nullable=True
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="planned"
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True
    )

    # Reproduction timeline
    heat_start_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True
    )
    mating_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True
    )
    mating_type: Mapped[Optional[str]] = mapped_column(
        String(30),
        nullable=True
    )
    pregnancy_confirmed_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True
    )
    expected_birth_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        index=True
    )
    actual_birth_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        index=True
    )
    birth_type: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True
    )

    # Birth tallies
    puppies_born_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )
    puppies_alive_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )
    males_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )
    females_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )

    # Optimistic concurrency counter
    version_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False
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
    puppies: Mapped[list["Puppy"]] = relationship(
        "Puppy",
        back_populates="litter",
        lazy="selectin",
        order_by="Puppy.birth_order"
    )

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self) -> str:
        return f"<Litter(id={self.id}, status={self.status}, dam_id={self.dam_id}, sire_id={self.sire_id})>"
