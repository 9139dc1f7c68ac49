"""Dog model for breeding stock and their recorded ancestry."""
from datetime import datetime, date
from typing import Optional

from sqlalchemy import JSON, String, Text, Integer, Date, DateTime, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from kennel.database import Base


class Dog(Base):
    """
    Dog model representing an adult dog owned by a breeder.

    sire_id and dam_id point back into this table without a foreign key:
    an ancestor may be recorded by id before (or without) its own row.
    Dogs are created outside the breeding core and only read here.
    """
    __tablename__ = "dogs"
    __table_args__ = (
        Index("ix_dogs_tenant_status", "tenant_id", "status"),
        Index("ix_dogs_tenant_sex", "tenant_id", "sex"),
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

    # Identification
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )
    call_name: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True
    )
    registration_number: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True
    )
    breed: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default=""
    )
    color: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True
    )
    sex: Mapped[str] = mapped_column(
        String(10),
        nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active"
    )
    birth_date: Mapped[date] = mapped_column(
        Date,
        nullable=False
    )

    # Ancestry (self-referential, nullable when unknown)
    sire_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        index=True
    )
    dam_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        index=True
    )

    # Presentation and records
    photo_main_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True
    )
    titles: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list
    )
    health_tests: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list
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

    def __repr__(self) -> str:
        return f"<Dog(id={self.id}, name={self.name}, sex={self.sex})>"
