"""SQLAlchemy implementation of the tenant-scoped entity store."""
import logging
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from kennel.database import Base
from kennel.exceptions import ConflictError, NotFoundError, StoreFailure, ValidationError
from kennel.models import Dog, Event, Litter, Puppy
from kennel.schemas.dog import DogCreate, DogRead
from kennel.schemas.event import EntityType, EventCreate, EventRead
from kennel.schemas.litter import LitterRead, LitterStatus
from kennel.schemas.puppy import PuppyRead


logger = logging.getLogger(__name__)

ReadModel = TypeVar("ReadModel", bound=BaseModel)

# Columns a caller may never write through the store
PROTECTED_COLUMNS = frozenset({"id", "tenant_id", "version_id", "created_at", "updated_at"})

DOG_FILTERS = frozenset({"sire_id", "dam_id", "sex", "status", "breed"})

EVENT_MUTABLE_COLUMNS = frozenset({"reminder_completed", "deleted_at"})


def _plain(value: Any) -> Any:
    """Unwrap enum members so drivers receive plain values."""
    if isinstance(value, Enum):
        return value.value
    return value


def _plain_dict(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: _plain(value) for key, value in data.items()}


class SqlAlchemyEntityStore:
    """
    Entity store backed by a SQLAlchemy sessionmaker, bound to one tenant.

    Calls made inside ``transaction()`` share one session and commit or roll
    back together. Calls made outside it run in their own short transaction.
    Read methods return pydantic read models, never ORM instances.

    A store holds the open transaction's session as instance state, so an
    instance serves one request at a time and is not thread-safe. Create one
    per request with kennel.dependencies.get_entity_store.
    """

    def __init__(self, session_factory: sessionmaker[Session], tenant_id: int):
        """
        Initialize the store.

        Args:
            session_factory: Factory from kennel.database.get_session_maker
            tenant_id: Breeder whose rows this store reads and writes
        """
        self.session_factory = session_factory
        self.tenant_id = tenant_id
        self._active: Optional[Session] = None

    # ── Transactions ─────────────────────────────────────────────────────────

    @contextmanager
    def transaction(self) -> Iterator["SqlAlchemyEntityStore"]:
        """
        Run a block of store calls as one atomic unit.

        Nested calls join the outermost transaction. Any exception rolls the
        whole unit back; SQLAlchemy errors are translated into domain errors.
        """
        if self._active is not None:
            yield self
            return

        session = self.session_factory()
        self._active = session
        try:
            with self._translate_errors():
                with session.begin():
                    yield self
        finally:
            self._active = None
            session.close()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self.transaction():
            with self._translate_errors():
                yield self._active

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except StaleDataError as exc:
            logger.warning(f"Concurrent write detected for tenant {self.tenant_id}: {exc}")
            raise ConflictError(
                "The record was modified by another operation; retry the command"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(f"Storage failure for tenant {self.tenant_id}: {exc}")
            raise StoreFailure(f"Storage failure: {type(exc).__name__}") from exc

    # ── Generic helpers ──────────────────────────────────────────────────────

    def _scoped(self, model: Type[Base]):
        return select(model).where(
            model.tenant_id == self.tenant_id,
            model.deleted_at.is_(None),
        )

    def _get(self, session: Session, model: Type[Base], entity_id: int):
        return session.scalars(
            self._scoped(model).where(model.id == entity_id)
        ).first()

    def _find_one(
        self, model: Type[Base], entity_id: int, schema: Type[ReadModel]
    ) -> Optional[ReadModel]:
        with self._session() as session:
            row = self._get(session, model, entity_id)
            return schema.model_validate(row) if row is not None else None

    def _find_many(self, query, schema: Type[ReadModel]) -> List[ReadModel]:
        with self._session() as session:
            return [schema.model_validate(row) for row in session.scalars(query)]

    def _insert(self, model: Type[Base], data: Mapping[str, Any]) -> int:
        values = {
            key: value for key, value in _plain_dict(data).items()
            if key not in PROTECTED_COLUMNS
        }
        with self._session() as session:
            row = model(**values, tenant_id=self.tenant_id)
            session.add(row)
            session.flush()
            return row.id

    # ── Lookups ──────────────────────────────────────────────────────────────

    def find_dog(self, dog_id: int) -> Optional[DogRead]:
        return self._find_one(Dog, dog_id, DogRead)

    def find_litter(self, litter_id: int) -> Optional[LitterRead]:
        return self._find_one(Litter, litter_id, LitterRead)

    def find_puppy(self, puppy_id: int) -> Optional[PuppyRead]:
        return self._find_one(Puppy, puppy_id, PuppyRead)

    def find_event(self, event_id: int) -> Optional[EventRead]:
        return self._find_one(Event, event_id, EventRead)

    def find_dogs_by_filter(self, filters: Mapping[str, Any]) -> List[DogRead]:
        unknown = set(filters) - DOG_FILTERS
        if unknown:
            raise ValidationError(
                {field: "Unsupported dog filter" for field in sorted(unknown)}
            )
        query = self._scoped(Dog)
        for field, value in filters.items():
            query = query.where(getattr(Dog, field) == _plain(value))
        query = query.order_by(Dog.birth_date.desc(), Dog.id.desc())
        return self._find_many(query, DogRead)

    def find_events_by_entity(
        self, entity_type: EntityType, entity_id: int
    ) -> List[EventRead]:
        query = (
            self._scoped(Event)
            .where(
                Event.entity_type == _plain(entity_type),
                Event.entity_id == entity_id,
            )
            .order_by(Event.event_date.desc(), Event.id.desc())
        )
        return self._find_many(query, EventRead)

    def find_litters_by_status(self, status: LitterStatus) -> List[LitterRead]:
        query = self._scoped(Litter).where(Litter.status == _plain(status))
        return self._find_many(query.order_by(Litter.id.desc()), LitterRead)

    def find_litters_by_dam(self, dam_id: int) -> List[LitterRead]:
        query = self._scoped(Litter).where(Litter.dam_id == dam_id)
        return self._find_many(query.order_by(Litter.id.desc()), LitterRead)

    def find_litters_by_sire(self, sire_id: int) -> List[LitterRead]:
        query = self._scoped(Litter).where(Litter.sire_id == sire_id)
        return self._find_many(query.order_by(Litter.id.desc()), LitterRead)

    def find_puppies_by_litter(self, litter_id: int) -> List[PuppyRead]:
        query = (
            self._scoped(Puppy)
            .where(Puppy.litter_id == litter_id)
            .order_by(Puppy.birth_order)
        )
        return self._find_many(query, PuppyRead)

    def find_pending_reminders(self, as_of: datetime) -> List[EventRead]:
        query = (
            self._scoped(Event)
            .where(
                Event.reminder_date.is_not(None),
                Event.reminder_date <= as_of,
                Event.reminder_completed.is_(False),
            )
            .order_by(Event.reminder_date, Event.id)
        )
        return self._find_many(query, EventRead)

    def find_events_in_range(self, start: datetime, end: datetime) -> List[EventRead]:
        query = (
            self._scoped(Event)
            .where(Event.event_date >= start, Event.event_date <= end)
            .order_by(Event.event_date, Event.id)
        )
        return self._find_many(query, EventRead)

    # ── Writes ───────────────────────────────────────────────────────────────

    def insert_dog(self, data: DogCreate) -> int:
        return self._insert(Dog, data.model_dump())

    def insert_litter(self, data: Mapping[str, Any]) -> int:
        return self._insert(Litter, data)

    def insert_puppy(self, data: Mapping[str, Any]) -> int:
        return self._insert(Puppy, data)

    def insert_event(self, data: EventCreate) -> int:
        return self._insert(Event, data.model_dump())

    def update_litter(
        self,
        litter_id: int,
        data: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> None:
        protected = set(data) & PROTECTED_COLUMNS
        if protected:
            raise ValidationError(
                {field: "Field cannot be updated" for field in sorted(protected)}
            )
        with self._session() as session:
            litter = self._get(session, Litter, litter_id)
            if litter is None:
                raise NotFoundError("litter", litter_id)
            if expected_version is not None and litter.version_id != expected_version:
                raise ConflictError(
                    f"Litter {litter_id} changed since it was read "
                    f"(version {expected_version}, now {litter.version_id})"
                )
            for field, value in _plain_dict(data).items():
                setattr(litter, field, value)
            session.flush()

    def update_event(self, event_id: int, data: Mapping[str, Any]) -> None:
        immutable = set(data) - EVENT_MUTABLE_COLUMNS
        if immutable:
            raise ValidationError(
                {field: "Events are append-only" for field in sorted(immutable)}
            )
        with self._session() as session:
            event = self._get(session, Event, event_id)
            if event is None:
                raise NotFoundError("event", event_id)
            for field, value in data.items():
                setattr(event, field, value)
            session.flush()
