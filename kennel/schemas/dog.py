"""Dog schemas for validation and read models."""
from datetime import datetime, date
from typing import Optional, List
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Sex(str, Enum):
    """Enum for dog and puppy sex values."""
    MALE = "male"
    FEMALE = "female"


class DogStatus(str, Enum):
    """Enum for dog status values."""
    ACTIVE = "active"
    BREEDING = "breeding"
    RETIRED = "retired"
    SOLD = "sold"
    DECEASED = "deceased"
    COOWNED = "coowned"


class DogBase(BaseModel):
    """Base schema for dog data."""
    name: str = Field(..., min_length=1, max_length=255)
    sex: Sex
    birth_date: date
    breed: str = ""
    call_name: Optional[str] = None
    registration_number: Optional[str] = None
    color: Optional[str] = None
    status: DogStatus = DogStatus.ACTIVE
    sire_id: Optional[int] = None
    dam_id: Optional[int] = None
    photo_main_url: Optional[str] = None
    titles: List[str] = Field(default_factory=list)
    health_tests: List[dict] = Field(default_factory=list)
    notes: Optional[str] = None


class DogCreate(DogBase):
    """Schema for registering a dog in the entity store."""
    pass


class DogRead(DogBase):
    """Schema for reading dog data."""
    id: int
    tenant_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_male(self) -> bool:
        return self.sex == Sex.MALE

    @property
    def is_female(self) -> bool:
        return self.sex == Sex.FEMALE
