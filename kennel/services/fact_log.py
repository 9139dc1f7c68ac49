"""Append-only event log shared by the lifecycle commands."""
import logging
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from kennel.exceptions import NotFoundError
from kennel.repositories.base import EntityStore
from kennel.schemas.event import EntityType, EventCreate, EventRead, EventType
from kennel.services.dates import add_days, to_event_datetime


logger = logging.getLogger(__name__)

EventTarget = Tuple[EntityType, int]


class FactLog:
    """
    Service writing and querying the event log.

    Events are never edited after insert: only the reminder flag and the
    soft-delete marker change.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def record(
        self,
        entity_type: EntityType,
        entity_id: int,
        event_type: EventType,
        event_date: Union[date, datetime],
        payload: Optional[Dict[str, Any]] = None,
        notes: Optional[str] = None,
        reminder_date: Optional[Union[date, datetime]] = None,
        created_by: Optional[int] = None,
    ) -> EventRead:
        """Append one event and return it as stored."""
        return self.fan_out(
            [(entity_type, entity_id)],
            event_type,
            event_date,
            payload=payload,
            notes=notes,
            reminder_date=reminder_date,
            created_by=created_by,
        )[0]

    def fan_out(
        self,
        targets: Iterable[EventTarget],
        event_type: EventType,
        event_date: Union[date, datetime],
        payload: Optional[Dict[str, Any]] = None,
        notes: Optional[str] = None,
        reminder_date: Optional[Union[date, datetime]] = None,
        created_by: Optional[int] = None,
    ) -> List[EventRead]:
        """
        Write the same event once per target entity.

        One canonical event is built and copied onto every (entity_type,
        entity_id) pair, so timelines scoped to any of the targets return it
        without a join. Rows are written in target order and returned in
        that order.

        Args:
            targets: (entity_type, entity_id) pairs receiving a copy
            event_type: Type of the event
            event_date: When the event happened
            payload: Type-specific data, identical on every copy
            notes: Free-text notes
            reminder_date: Optional follow-up date
            created_by: Optional user who recorded the event

        Returns:
            The stored events, one per target
        """
        event_type = EventType(event_type)
        canonical = EventCreate(
            entity_type=EntityType.DOG,
            entity_id=0,
            event_type=event_type,
            event_date=to_event_datetime(event_date),
            payload=dict(payload or {}),
            notes=notes or None,
            reminder_date=to_event_datetime(reminder_date) if reminder_date else None,
            created_by=created_by,
        )

        events = []
        with self.store.transaction():
            for entity_type, entity_id in targets:
                copy = canonical.model_copy(
                    update={"entity_type": EntityType(entity_type), "entity_id": entity_id},
                    deep=True,
                )
                event_id = self.store.insert_event(copy)
                events.append(self.store.find_event(event_id))

        logger.info(
            f"Recorded {event_type.value} event on "
            + ", ".join(f"{e.entity_type.value}:{e.entity_id}" for e in events)
        )
        return events

    def timeline(self, entity_type: EntityType, entity_id: int) -> List[EventRead]:
        """Events of one entity, newest first."""
        return self.store.find_events_by_entity(entity_type, entity_id)

    def mark_reminder_completed(self, event_id: int) -> EventRead:
        """Flag an event's reminder as done."""
        with self.store.transaction():
            self._require(event_id)
            self.store.update_event(event_id, {"reminder_completed": True})
            event = self.store.find_event(event_id)
        logger.info(f"Reminder of event {event_id} marked completed")
        return event

    def delete(self, event_id: int) -> None:
        """Soft-delete an event; it disappears from every query."""
        with self.store.transaction():
            self._require(event_id)
            self.store.update_event(event_id, {"deleted_at": datetime.now(timezone.utc)})
        logger.info(f"Event {event_id} deleted")

    def pending_reminders(self, as_of: Optional[date] = None) -> List[EventRead]:
        """Uncompleted reminders due on or before as_of (default today)."""
        day = as_of or date.today()
        return self.store.find_pending_reminders(datetime.combine(day, time.max))

    def upcoming(self, days: int = 30, today: Optional[date] = None) -> List[EventRead]:
        """Events dated between today and today + days, oldest first."""
        start = today or date.today()
        return self.store.find_events_in_range(
            datetime.combine(start, time.min),
            datetime.combine(add_days(start, days), time.max),
        )

    def _require(self, event_id: int) -> EventRead:
        event = self.store.find_event(event_id)
        if event is None:
            raise NotFoundError("event", event_id)
        return event
