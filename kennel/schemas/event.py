"""Event schemas for the fact log."""
from datetime import datetime
from typing import Any, Dict, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntityType(str, Enum):
    """Enum for the kind of entity an event belongs to."""
    DOG = "dog"
    LITTER = "litter"
    PUPPY = "puppy"


class EventType(str, Enum):
    """Enum for event type values."""
    # Reproduction
    HEAT = "heat"
    MATING = "mating"
    PREGNANCY_TEST = "pregnancy_test"
    BIRTH = "birth"
    # Health
    VACCINE = "vaccine"
    DEWORMING = "deworming"
    EXAM = "exam"
    MEDICATION = "medication"
    SURGERY = "surgery"
    VET_VISIT = "vet_visit"
    # Other
    WEIGHING = "weighing"
    GROOMING = "grooming"
    TRAINING = "training"
    SHOW = "show"
    NOTE = "note"


REPRODUCTION_EVENT_TYPES = frozenset({
    EventType.HEAT,
    EventType.MATING,
    EventType.PREGNANCY_TEST,
    EventType.BIRTH,
})

HEALTH_EVENT_TYPES = frozenset({
    EventType.VACCINE,
    EventType.DEWORMING,
    EventType.EXAM,
    EventType.MEDICATION,
    EventType.SURGERY,
    EventType.VET_VISIT,
})


class EventCreate(BaseModel):
    """Schema for appending an event to the fact log."""
    entity_type: EntityType
    entity_id: int
    event_type: EventType
    event_date: datetime
    event_end_date: Optional[datetime] = None
    payload: Dict[str, Any] = Field(default_factory=dict)
    notes: Optional[str] = None
    reminder_date: Optional[datetime] = None
    created_by: Optional[int] = None


class EventRead(EventCreate):
    """Schema for reading event data."""
    id: int
    tenant_id: int
    reminder_completed: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def is_reproduction_event(self) -> bool:
        return self.event_type in REPRODUCTION_EVENT_TYPES

    @property
    def is_health_event(self) -> bool:
        return self.event_type in HEALTH_EVENT_TYPES
