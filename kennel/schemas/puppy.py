"""Puppy schemas for birth input and read models."""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from kennel.schemas.dog import Sex


class PuppyStatus(str, Enum):
    """Enum for puppy status values."""
    AVAILABLE = "available"
    RESERVED = "reserved"
    SOLD = "sold"
    RETAINED = "retained"
    DECEASED = "deceased"
    RETURNED = "returned"


class PuppyInput(BaseModel):
    """Schema for one puppy in a recorded birth, in birth order."""
    sex: Sex
    identifier: Optional[str] = Field(None, min_length=1, max_length=50)
    name: Optional[str] = None
    color: Optional[str] = None
    markings: Optional[str] = None
    status: PuppyStatus = PuppyStatus.AVAILABLE
    birth_weight: Optional[Decimal] = Field(None, gt=0, description="Grams")
    notes: Optional[str] = None

    @property
    def is_alive(self) -> bool:
        return self.status != PuppyStatus.DECEASED


class PuppyRead(BaseModel):
    """Schema for reading puppy data."""
    id: int
    tenant_id: int
    litter_id: int
    identifier: str
    name: Optional[str] = None
    sex: Sex
    color: Optional[str] = None
    markings: Optional[str] = None
    status: PuppyStatus
    birth_order: int
    birth_weight: Optional[Decimal] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


def default_identifier(sex: Sex, birth_order: int) -> str:
    """Identifier given to a puppy that was not named at birth: M-1, F-2, ..."""
    prefix = "M" if Sex(sex) == Sex.MALE else "F"
    return f"{prefix}-{birth_order}"
