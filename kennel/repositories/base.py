"""Entity store interface consumed by the breeding core.

Every implementation is bound to one tenant: reads and writes are filtered
by it and callers never pass a tenant id.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, ContextManager, List, Mapping, Optional, Protocol

from kennel.schemas.dog import DogCreate, DogRead
from kennel.schemas.event import EntityType, EventCreate, EventRead
from kennel.schemas.litter import LitterRead, LitterStatus
from kennel.schemas.puppy import PuppyRead


class EntityStore(Protocol):
    tenant_id: int

    def transaction(self) -> ContextManager[Any]:
        """Make every store call inside the block one atomic unit."""
        ...

    def find_dog(self, dog_id: int) -> Optional[DogRead]: ...

    def find_litter(self, litter_id: int) -> Optional[LitterRead]: ...

    def find_puppy(self, puppy_id: int) -> Optional[PuppyRead]: ...

    def find_event(self, event_id: int) -> Optional[EventRead]: ...

    def insert_dog(self, data: DogCreate) -> int: ...

    def insert_litter(self, data: Mapping[str, Any]) -> int: ...

    def update_litter(
        self,
        litter_id: int,
        data: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> None:
        """Apply a partial update; ConflictError when expected_version is stale."""
        ...

    def insert_puppy(self, data: Mapping[str, Any]) -> int: ...

    def insert_event(self, data: EventCreate) -> int: ...

    def update_event(self, event_id: int, data: Mapping[str, Any]) -> None:
        """Only reminder_completed and deleted_at may change."""
        ...

    def find_dogs_by_filter(self, filters: Mapping[str, Any]) -> List[DogRead]:
        """Dogs matching every filter, newest birth_date first."""
        ...

    def find_events_by_entity(
        self, entity_type: EntityType, entity_id: int
    ) -> List[EventRead]:
        """Events of one entity, event_date descending."""
        ...

    def find_litters_by_status(self, status: LitterStatus) -> List[LitterRead]: ...

    def find_litters_by_dam(self, dam_id: int) -> List[LitterRead]: ...

    def find_litters_by_sire(self, sire_id: int) -> List[LitterRead]: ...

    def find_puppies_by_litter(self, litter_id: int) -> List[PuppyRead]: ...

    def find_pending_reminders(self, as_of: datetime) -> List[EventRead]: ...

    def find_events_in_range(self, start: datetime, end: datetime) -> List[EventRead]: ...
