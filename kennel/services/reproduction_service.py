"""Reproduction service driving the litter lifecycle.

heat -> mating -> pregnancy confirmation -> birth, with every command written
as one atomic unit and its events fanned out to the dam and the litter.
"""
import logging
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from kennel.exceptions import (
    ConflictError,
    NotFoundError,
    StoreFailure,
    ValidationError,
)
from kennel.i18n import Translator
from kennel.repositories.base import EntityStore
from kennel.schemas.dog import DogRead, Sex
from kennel.schemas.event import EntityType, EventRead, EventType, REPRODUCTION_EVENT_TYPES
from kennel.schemas.litter import (
    AWAITING_BIRTH_STATUSES,
    BIRTH_RECORDED_STATUSES,
    BirthData,
    LitterRead,
    LitterStatus,
    MatingDetails,
    ReproductionHistory,
    can_transition,
)
from kennel.schemas.puppy import PuppyInput, PuppyRead, default_identifier
from kennel.services import dates
from kennel.services.fact_log import FactLog


logger = logging.getLogger(__name__)

InputModel = TypeVar("InputModel", bound=BaseModel)

# Statuses only reachable through their own command
COMMAND_OWNED_STATUSES = frozenset(
    {LitterStatus.PREGNANT, LitterStatus.BORN, LitterStatus.CANCELLED}
)


def _coerce(schema: Type[InputModel], data: Any, field: str) -> InputModel:
    """Validate command input given as a model instance or a mapping."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data if data is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc, prefix=field) from exc


class BirthTally(BaseModel):
    total: int = 0
    alive: int = 0
    males: int = 0
    females: int = 0

    @classmethod
    def of(cls, puppies: Sequence[PuppyInput]) -> "BirthTally":
        return cls(
            total=len(puppies),
            alive=sum(1 for puppy in puppies if puppy.is_alive),
            males=sum(1 for puppy in puppies if puppy.sex == Sex.MALE),
            females=sum(1 for puppy in puppies if puppy.sex == Sex.FEMALE),
        )


class ReproductionService:
    """
    Service for the breeding lifecycle of a tenant's litters.

    Each command validates that the referenced dogs and litters exist for
    the tenant, then performs all of its writes inside one store
    transaction: either every row is written or none is.
    """

    def __init__(
        self,
        store: EntityStore,
        fact_log: Optional[FactLog] = None,
        gestation_days: int = dates.GESTATION_DAYS,
        translator: Optional[Translator] = None,
        upcoming_days: int = 30,
        clock: Callable[[], date] = dates.today,
        on_action: Optional[Callable[..., None]] = None,
    ):
        """
        Initialize the reproduction service.

        Args:
            store: Tenant-scoped entity store
            fact_log: Event log writer (built on the same store if omitted)
            gestation_days: Days from mating to expected birth
            translator: Label catalog for generated litter names
            upcoming_days: Default look-ahead for get_upcoming_births
            clock: Returns today's date
            on_action: Called as on_action(name, **details) after a command
                commits
        """
        self.store = store
        self.fact_log = fact_log or FactLog(store)
        self.gestation_days = gestation_days
        self.translator = translator or Translator()
        self.upcoming_days = upcoming_days
        self.clock = clock
        self.on_action = on_action

    # ── Commands ─────────────────────────────────────────────────────────────

    def start_heat(
        self,
        dam_id: int,
        heat_date: dates.DateInput,
        notes: str = "",
    ) -> EventRead:
        """
        Register the start of a heat for a female dog.

        Only a heat event is written on the dam; no litter is created.

        Raises:
            NotFoundError: If the dog does not exist
            ValidationError: If the dog is not a female or the date is invalid
        """
        heat_day = dates.require_date(heat_date, "heat_date")

        with self.store.transaction():
            dam = self._require_dog(dam_id)
            if dam.sex != Sex.FEMALE:
                raise ValidationError({"dam_id": "Only females can enter heat"})

            event = self.fact_log.record(
                EntityType.DOG,
                dam_id,
                EventType.HEAT,
                heat_day,
                payload={
                    "heat_start_date": heat_day.isoformat(),
                    "dog_name": dam.name,
                },
                notes=notes,
            )

        logger.info(f"Heat started for dam {dam_id} on {heat_day}")
        self._notify("heat_started", dog=dam, event=event)
        return event

    def record_mating(
        self,
        dam_id: int,
        sire_id: int,
        mating_date: dates.DateInput,
        details: Union[MatingDetails, Mapping[str, Any], None] = None,
    ) -> Tuple[LitterRead, EventRead]:
        """
        Record a mating and open the litter it starts.

        The litter starts directly at ``confirmed`` with its expected birth
        date derived from the mating date. A mating event with a reminder on
        the expected birth date is written on the dam and copied onto the
        new litter.

        Args:
            dam_id: Female dog
            sire_id: Male dog
            mating_date: Date of the mating
            details: Optional mating type, heat start date, litter letter, notes

        Returns:
            Tuple of (created litter, dam-scoped mating event)

        Raises:
            NotFoundError: If the dam or the sire does not exist
            ValidationError: If either dog has the wrong sex for its role
        """
        details = _coerce(MatingDetails, details, "details")
        mating_day = dates.require_date(mating_date, "mating_date")

        try:
            with self.store.transaction():
                dam = self._require_dog(dam_id, role="dam")
                sire = self._require_dog(sire_id, role="sire")
                self._check_pair(dam, sire)

                expected_birth = dates.calculate_expected_birth(mating_day, self.gestation_days)

                litter_id = self.store.insert_litter({
                    "name": self.translator.litter_name(dam.name, sire.name),
                    "litter_letter": details.litter_letter,
                    "dam_id": dam_id,
                    "sire_id": sire_id,
                    "status": LitterStatus.CONFIRMED,
                    "heat_start_date": details.heat_start_date,
                    "mating_date": mating_day,
                    "mating_type": details.mating_type,
                    "expected_birth_date": expected_birth,
                    "notes": details.notes,
                })

                dam_event, _ = self.fact_log.fan_out(
                    [(EntityType.DOG, dam_id), (EntityType.LITTER, litter_id)],
                    EventType.MATING,
                    mating_day,
                    payload={
                        "litter_id": litter_id,
                        "sire_id": sire_id,
                        "sire_name": sire.name,
                        "dam_id": dam_id,
                        "dam_name": dam.name,
                        "mating_type": details.mating_type.value,
                        "expected_birth_date": expected_birth.isoformat(),
                    },
                    notes=details.notes,
                    reminder_date=expected_birth,
                )
                litter = self.store.find_litter(litter_id)
        except (ConflictError, StoreFailure) as exc:
            logger.error(f"Failed to record mating of dam {dam_id} with sire {sire_id}: {exc}")
            raise

        logger.info(
            f"Mating recorded: litter {litter.id} ({dam.name} x {sire.name}), "
            f"expected birth {expected_birth}"
        )
        self._notify("mating_recorded", litter=litter, event=dam_event)
        return litter, dam_event

    def confirm_pregnancy(
        self,
        litter_id: int,
        confirmation_date: dates.DateInput,
        method: str = "ultrasound",
        notes: str = "",
    ) -> Tuple[LitterRead, EventRead]:
        """
        Mark a litter pregnant.

        Allowed from any litter status, including a repeated confirmation.
        A pregnancy_test event is written on the litter and copied onto the dam.

        Returns:
            Tuple of (updated litter, litter-scoped pregnancy_test event)

        Raises:
            NotFoundError: If the litter does not exist
        """
        confirmed_day = dates.require_date(confirmation_date, "confirmation_date")
        if not method or not method.strip():
            raise ValidationError({"method": "This field is required"})

        with self.store.transaction():
            litter = self._require_litter(litter_id)
            self.store.update_litter(
                litter_id,
                {
                    "status": LitterStatus.PREGNANT,
                    "pregnancy_confirmed_date": confirmed_day,
                },
                expected_version=litter.version_id,
            )

            litter_event, _ = self.fact_log.fan_out(
                [(EntityType.LITTER, litter_id), (EntityType.DOG, litter.dam_id)],
                EventType.PREGNANCY_TEST,
                confirmed_day,
                payload={
                    "result": "positive",
                    "method": method.strip(),
                    "litter_id": litter_id,
                    "dam_id": litter.dam_id,
                    "sire_id": litter.sire_id,
                },
                notes=notes,
            )
            litter = self.store.find_litter(litter_id)

        logger.info(f"Pregnancy confirmed for litter {litter_id} ({method})")
        self._notify("pregnancy_confirmed", litter=litter, event=litter_event)
        return litter, litter_event

    def record_birth(
        self,
        litter_id: int,
        birth_date: dates.DateInput,
        birth_data: Union[BirthData, Mapping[str, Any], None] = None,
        puppies_data: Sequence[Union[PuppyInput, Mapping[str, Any]]] = (),
    ) -> Tuple[LitterRead, List[PuppyRead], EventRead]:
        """
        Record a birth and create its puppies.

        Puppies are created in input order with birth_order 1, 2, 3... and a
        default identifier of "{M|F}-{birth_order}". A puppy with a birth
        weight also gets a weighing event. The litter moves to ``born`` with
        its counts, and a birth event is written on the litter and copied
        onto the dam. Everything is written in a single transaction.

        Args:
            litter_id: Litter giving birth
            birth_date: Date of birth
            birth_data: Optional birth type and notes
            puppies_data: One entry per puppy, in birth order

        Returns:
            Tuple of (updated litter, created puppies in birth order,
            litter-scoped birth event)

        Raises:
            NotFoundError: If the litter does not exist
            ValidationError: If the input is invalid or the birth was already recorded
            ConflictError: If the litter was changed concurrently
        """
        birth_day = dates.require_date(birth_date, "birth_date")
        birth = _coerce(BirthData, birth_data, "birth_data")
        puppies = self._validate_puppies(puppies_data)
        tally = BirthTally.of(puppies)

        try:
            with self.store.transaction():
                litter = self._require_litter(litter_id)
                if litter.status in BIRTH_RECORDED_STATUSES:
                    raise ValidationError(
                        {"litter_id": f"Birth already recorded for litter {litter_id}"}
                    )
                dam = self.store.find_dog(litter.dam_id)
                sire = self.store.find_dog(litter.sire_id)

                created = [
                    self._create_puppy(litter_id, order, puppy, birth_day)
                    for order, puppy in enumerate(puppies, start=1)
                ]

                self.store.update_litter(
                    litter_id,
                    {
                        "status": LitterStatus.BORN,
                        "actual_birth_date": birth_day,
                        "birth_type": birth.birth_type,
                        "puppies_born_count": tally.total,
                        "puppies_alive_count": tally.alive,
                        "males_count": tally.males,
                        "females_count": tally.females,
                    },
                    expected_version=litter.version_id,
                )

                litter_event, _ = self.fact_log.fan_out(
                    [(EntityType.LITTER, litter_id), (EntityType.DOG, litter.dam_id)],
                    EventType.BIRTH,
                    birth_day,
                    payload={
                        "birth_type": birth.birth_type.value,
                        "puppies_born_count": tally.total,
                        "puppies_alive_count": tally.alive,
                        "males_count": tally.males,
                        "females_count": tally.females,
                        "litter_id": litter_id,
                        "dam_id": litter.dam_id,
                        "dam_name": dam.name if dam else "",
                        "sire_id": litter.sire_id,
                        "sire_name": sire.name if sire else "",
                    },
                    notes=birth.notes,
                )
                litter = self.store.find_litter(litter_id)
        except (ConflictError, StoreFailure) as exc:
            logger.error(f"Failed to record birth for litter {litter_id}: {exc}")
            raise

        logger.info(
            f"Birth recorded for litter {litter_id}: {tally.total} puppies "
            f"({tally.alive} alive, {tally.males} male, {tally.females} female)"
        )
        self._notify("birth_recorded", litter=litter, puppies=created, event=litter_event)
        return litter, created, litter_event

    def cancel_litter(self, litter_id: int, reason: str = "") -> LitterRead:
        """
        Cancel a litter from any status.

        The notes are replaced by the reason when one is given.
        """
        with self.store.transaction():
            litter = self._require_litter(litter_id)
            changes: Dict[str, Any] = {"status": LitterStatus.CANCELLED}
            if reason and reason.strip():
                changes["notes"] = reason
            self.store.update_litter(litter_id, changes, expected_version=litter.version_id)
            litter = self.store.find_litter(litter_id)

        logger.info(f"Litter {litter_id} cancelled")
        self._notify("litter_cancelled", litter=litter, reason=reason)
        return litter

    def update_mating_date(self, litter_id: int, mating_date: dates.DateInput) -> LitterRead:
        """Correct a litter's mating date; the expected birth date follows it."""
        mating_day = dates.require_date(mating_date, "mating_date")

        with self.store.transaction():
            litter = self._require_litter(litter_id)
            self.store.update_litter(
                litter_id,
                {
                    "mating_date": mating_day,
                    "expected_birth_date": dates.calculate_expected_birth(
                        mating_day, self.gestation_days
                    ),
                },
                expected_version=litter.version_id,
            )
            litter = self.store.find_litter(litter_id)

        logger.info(f"Mating date of litter {litter_id} set to {mating_day}")
        return litter

    def advance_status(self, litter_id: int, status: Union[LitterStatus, str]) -> LitterRead:
        """
        Move a litter forward along the state machine.

        Pregnancy, birth and cancellation have their own commands and are
        rejected here.
        """
        try:
            target = LitterStatus(status)
        except ValueError:
            raise ValidationError({"status": f"Unknown litter status: {status!r}"})
        if target in COMMAND_OWNED_STATUSES:
            raise ValidationError(
                {"status": f"Status '{target.value}' is set by its own command"}
            )

        with self.store.transaction():
            litter = self._require_litter(litter_id)
            if not can_transition(litter.status, target):
                raise ValidationError({
                    "status": f"Cannot move litter from '{litter.status.value}' to '{target.value}'"
                })
            self.store.update_litter(
                litter_id, {"status": target}, expected_version=litter.version_id
            )
            litter = self.store.find_litter(litter_id)

        logger.info(f"Litter {litter_id} moved to {target.value}")
        return litter

    # ── Queries ──────────────────────────────────────────────────────────────

    def get_litter_timeline(self, litter_id: int) -> List[EventRead]:
        """All events of a litter, newest first."""
        self._require_litter(litter_id)
        return self.fact_log.timeline(EntityType.LITTER, litter_id)

    def get_dog_reproduction_history(self, dog_id: int) -> ReproductionHistory:
        """
        Reproduction events of a dog and the litters it parented.

        Litters are those where the dog is the dam (females) or the sire
        (males).
        """
        dog = self._require_dog(dog_id)
        events = [
            event for event in self.fact_log.timeline(EntityType.DOG, dog_id)
            if event.event_type in REPRODUCTION_EVENT_TYPES
        ]
        if dog.sex == Sex.FEMALE:
            litters = self.store.find_litters_by_dam(dog_id)
        else:
            litters = self.store.find_litters_by_sire(dog_id)
        return ReproductionHistory(events=events, litters=litters)

    def get_upcoming_births(self, days: Optional[int] = None) -> List[LitterRead]:
        """Pregnant or confirmed litters expected within [today, today + days]."""
        days = self.upcoming_days if days is None else days
        if days < 0:
            raise ValidationError({"days": "Must be zero or greater"})

        start = self.clock()
        end = dates.add_days(start, days)
        litters = [
            litter
            for status in AWAITING_BIRTH_STATUSES
            for litter in self.store.find_litters_by_status(status)
            if litter.expected_birth_date is not None
            and start <= litter.expected_birth_date <= end
        ]
        return sorted(litters, key=lambda litter: (litter.expected_birth_date, litter.id))

    # ── Helpers ──────────────────────────────────────────────────────────────

    def _notify(self, action: str, **details: Any) -> None:
        if self.on_action is not None:
            self.on_action(action, **details)

    def _require_dog(self, dog_id: int, role: str = "dog") -> DogRead:
        dog = self.store.find_dog(dog_id)
        if dog is None:
            raise NotFoundError(role, dog_id)
        return dog

    def _require_litter(self, litter_id: int) -> LitterRead:
        litter = self.store.find_litter(litter_id)
        if litter is None:
            raise NotFoundError("litter", litter_id)
        return litter

    @staticmethod
    def _check_pair(dam: DogRead, sire: DogRead) -> None:
        errors = {}
        if dam.sex != Sex.FEMALE:
            errors["dam_id"] = "The dam must be a female"
        if sire.sex != Sex.MALE:
            errors["sire_id"] = "The sire must be a male"
        if errors:
            raise ValidationError(errors)

    @staticmethod
    def _validate_puppies(
        puppies_data: Sequence[Union[PuppyInput, Mapping[str, Any]]],
    ) -> List[PuppyInput]:
        puppies: List[PuppyInput] = []
        errors: Dict[str, str] = {}
        for index, data in enumerate(puppies_data):
            try:
                puppies.append(_coerce(PuppyInput, data, f"puppies_data.{index}"))
            except ValidationError as exc:
                errors.update(exc.errors)
        if errors:
            raise ValidationError(errors)

        seen: Dict[str, int] = {}
        for index, puppy in enumerate(puppies):
            identifier = puppy.identifier or default_identifier(puppy.sex, index + 1)
            if identifier in seen:
                errors[f"puppies_data.{index}.identifier"] = (
                    f"Duplicate identifier '{identifier}' (also used by puppy {seen[identifier] + 1})"
                )
            seen.setdefault(identifier, index)
        if errors:
            raise ValidationError(errors)
        return puppies

    def _create_puppy(
        self,
        litter_id: int,
        birth_order: int,
        puppy: PuppyInput,
        birth_day: date,
    ) -> PuppyRead:
        puppy_id = self.store.insert_puppy({
            "litter_id": litter_id,
            "identifier": puppy.identifier or default_identifier(puppy.sex, birth_order),
            "name": puppy.name,
            "sex": puppy.sex,
            "color": puppy.color,
            "markings": puppy.markings,
            "status": puppy.status,
            "birth_order": birth_order,
            "birth_weight": puppy.birth_weight,
            "notes": puppy.notes,
        })

        if puppy.birth_weight:
            self.fact_log.record(
                EntityType.PUPPY,
                puppy_id,
                EventType.WEIGHING,
                birth_day,
                payload={
                    "weight": float(puppy.birth_weight),
                    "weight_unit": "g",
                    "type": "birth_weight",
                },
            )

        return self.store.find_puppy(puppy_id)
