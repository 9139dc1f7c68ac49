"""SQLAlchemy models for the breeding core."""
from kennel.models.dog import Dog
from kennel.models.litter import Litter
from kennel.models.puppy import Puppy
from kennel.models.event import Event

__all__ = [
    "Dog",
    "Litter",
    "Puppy",
    "Event",
]
