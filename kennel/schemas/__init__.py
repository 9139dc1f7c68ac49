"""Pydantic schemas for the breeding core."""
from kennel.schemas.dog import DogCreate, DogRead, DogStatus, Sex
from kennel.schemas.event import (
    EntityType,
    EventCreate,
    EventRead,
    EventType,
    HEALTH_EVENT_TYPES,
    REPRODUCTION_EVENT_TYPES,
)
from kennel.schemas.litter import (
    BirthData,
    BirthType,
    LitterRead,
    LitterStatus,
    MatingDetails,
    MatingType,
    ReproductionHistory,
)
from kennel.schemas.pedigree import (
    AncestorRecord,
    FlatPedigree,
    PedigreeDog,
    PedigreeNode,
    PedigreeResult,
    PedigreeTree,
)
from kennel.schemas.puppy import PuppyInput, PuppyRead, PuppyStatus

__all__ = [
    "AncestorRecord",
    "BirthData",
    "BirthType",
    "DogCreate",
    "DogRead",
    "DogStatus",
    "EntityType",
    "EventCreate",
    "EventRead",
    "EventType",
    "FlatPedigree",
    "HEALTH_EVENT_TYPES",
    "LitterRead",
    "LitterStatus",
    "MatingDetails",
    "MatingType",
    "PedigreeDog",
    "PedigreeNode",
    "PedigreeResult",
    "PedigreeTree",
    "PuppyInput",
    "PuppyRead",
    "PuppyStatus",
    "REPRODUCTION_EVENT_TYPES",
    "ReproductionHistory",
    "Sex",
]
