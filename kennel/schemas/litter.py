"""Litter schemas, status machine and lifecycle command inputs."""
from datetime import datetime, date
from typing import Dict, FrozenSet, List, Optional
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from kennel.schemas.event import EventRead


class LitterStatus(str, Enum):
    """Enum for litter status values."""
    PLANNED = "planned"
    CONFIRMED = "confirmed"
    PREGNANT = "pregnant"
    BORN = "born"
    WEANED = "weaned"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class MatingType(str, Enum):
    """Enum for mating type values."""
    NATURAL = "natural"
    ARTIFICIAL_FRESH = "artificial_fresh"
    ARTIFICIAL_FROZEN = "artificial_frozen"


class BirthType(str, Enum):
    """Enum for birth type values."""
    NATURAL = "natural"
    CESAREAN = "cesarean"
    ASSISTED = "assisted"


# Forward moves of the state machine. Cancellation is handled separately:
# cancel_litter may move a litter to CANCELLED from any state.
LITTER_TRANSITIONS: Dict[LitterStatus, FrozenSet[LitterStatus]] = {
    LitterStatus.PLANNED: frozenset({LitterStatus.CONFIRMED}),
    LitterStatus.CONFIRMED: frozenset({LitterStatus.PREGNANT, LitterStatus.BORN}),
    LitterStatus.PREGNANT: frozenset({LitterStatus.BORN}),
    LitterStatus.BORN: frozenset({LitterStatus.WEANED, LitterStatus.CLOSED}),
    LitterStatus.WEANED: frozenset({LitterStatus.CLOSED}),
    LitterStatus.CLOSED: frozenset(),
    LitterStatus.CANCELLED: frozenset(),
}

# Statuses in which the litter's puppies and counts are already recorded
BIRTH_RECORDED_STATUSES = frozenset(
    {LitterStatus.BORN, LitterStatus.WEANED, LitterStatus.CLOSED}
)

AWAITING_BIRTH_STATUSES = (LitterStatus.PREGNANT, LitterStatus.CONFIRMED)


def can_transition(current: LitterStatus, target: LitterStatus) -> bool:
    """Whether the state machine allows moving from current to target."""
    return LitterStatus(target) in LITTER_TRANSITIONS[LitterStatus(current)]


class MatingDetails(BaseModel):
    """Optional details supplied when recording a mating."""
    mating_type: MatingType = MatingType.NATURAL
    heat_start_date: Optional[date] = None
    litter_letter: Optional[str] = Field(None, min_length=1, max_length=1)
    notes: Optional[str] = None


class BirthData(BaseModel):
    """Birth information supplied when recording a birth."""
    birth_type: BirthType = BirthType.NATURAL
    notes: Optional[str] = None


class LitterRead(BaseModel):
    """Schema for reading litter data."""
    id: int
    tenant_id: int
    dam_id: int
    sire_id: int
    name: Optional[str] = None
    litter_letter: Optional[str] = None
    status: LitterStatus
    notes: Optional[str] = None
    heat_start_date: Optional[date] = None
    mating_date: Optional[date] = None
    mating_type: Optional[MatingType] = None
    pregnancy_confirmed_date: Optional[date] = None
    expected_birth_date: Optional[date] = None
    actual_birth_date: Optional[date] = None
    birth_type: Optional[BirthType] = None
    puppies_born_count: int = 0
    puppies_alive_count: int = 0
    males_count: int = 0
    females_count: int = 0
    version_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReproductionHistory(BaseModel):
    """Reproduction events and litters of one dog."""
    events: List[EventRead]
    litters: List[LitterRead]
