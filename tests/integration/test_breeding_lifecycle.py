"""Integration tests for complete breeding workflows.

These tests wire the services through the composition root, the way an
embedding application would.
"""

import pytest
from datetime import date, datetime

from kennel.config import Settings
from kennel.dependencies import (
    dispose_engine,
    get_entity_store,
    get_pedigree_service,
    get_reproduction_service,
    get_session_factory,
)
from kennel.database import create_schema
from kennel.exceptions import ValidationError, to_error_response
from kennel.schemas.dog import DogCreate, Sex
from kennel.schemas.event import EntityType, EventType
from kennel.schemas.litter import LitterStatus


@pytest.fixture
def app_settings() -> Settings:
    return Settings(database_url="sqlite://", locale="pt_BR", gestation_days=63)


@pytest.fixture
def wired(app_settings):
    """Services for tenant 1 built from settings, on a fresh database."""
    dispose_engine()
    session_factory = get_session_factory(app_settings)
    create_schema(session_factory.kw["bind"])

    store = get_entity_store(1, session_factory)
    yield {
        "store": store,
        "reproduction": get_reproduction_service(store, app_settings),
        "pedigree": get_pedigree_service(store, app_settings),
        "session_factory": session_factory,
    }

    dispose_engine()


class TestBreedingLifecycle:
    """Test heat -> mating -> pregnancy -> birth end to end."""

    def test_full_cycle(self, wired):
        """
        Test a complete cycle and the events it leaves behind.

        Mating, confirmation and birth each write one litter event and a
        copy on the dam; the litter timeline lists them newest first.
        """
        store = wired["store"]
        reproduction = wired["reproduction"]

        dam_id = store.insert_dog(DogCreate(name="Bella", sex=Sex.FEMALE, birth_date=date(2019, 5, 10)))
        sire_id = store.insert_dog(DogCreate(name="Max", sex=Sex.MALE, birth_date=date(2018, 3, 22)))

        heat = reproduction.start_heat(dam_id, date(2024, 1, 2))
        litter, mating = reproduction.record_mating(
            dam_id, sire_id, date(2024, 1, 10), details={"litter_letter": "A", "heat_start_date": "2024-01-02"}
        )
        assert litter.name == "Ninhada Bella x Max"
        assert litter.expected_birth_date == date(2024, 3, 13)

        litter, confirmation = reproduction.confirm_pregnancy(litter.id, date(2024, 2, 5))
        assert litter.status == LitterStatus.PREGNANT

        litter, puppies, birth = reproduction.record_birth(
            litter.id,
            date(2024, 3, 12),
            birth_data={"birth_type": "natural"},
            puppies_data=[
                {"sex": "male", "birth_weight": 410},
                {"sex": "female", "birth_weight": 385},
                {"sex": "female", "name": "Aurora"},
            ],
        )
        assert litter.status == LitterStatus.BORN
        assert (litter.puppies_born_count, litter.males_count, litter.females_count) == (3, 1, 2)
        assert [p.identifier for p in puppies] == ["M-1", "F-2", "F-3"]

        timeline = reproduction.get_litter_timeline(litter.id)
        assert [e.event_type for e in timeline] == [EventType.BIRTH, EventType.PREGNANCY_TEST, EventType.MATING]
        assert [e.event_date for e in timeline] == [
            datetime(2024, 3, 12), datetime(2024, 2, 5), datetime(2024, 1, 10),
        ]

        history = reproduction.get_dog_reproduction_history(dam_id)
        assert [e.event_type for e in history.events] == [
            EventType.BIRTH, EventType.PREGNANCY_TEST, EventType.MATING, EventType.HEAT,
        ]
        assert history.events[-1].id == heat.id
        assert [l.id for l in history.litters] == [litter.id]

        # Each fanned-out event exists once per target with identical content
        for event in (mating, confirmation, birth):
            copies = [
                e for e in store.find_events_in_range(event.event_date, event.event_date)
                if e.event_type == event.event_type
            ]
            assert {(e.entity_type, e.entity_id) for e in copies} == {
                (EntityType.DOG, dam_id), (EntityType.LITTER, litter.id),
            }
            assert len({str(e.payload) for e in copies}) == 1

        assert reproduction.advance_status(litter.id, "weaned").status == LitterStatus.WEANED

    def test_upcoming_births_uses_configured_window(self, wired, app_settings):
        store = wired["store"]
        reproduction = wired["reproduction"]
        reproduction.clock = lambda: date(2024, 3, 1)

        dam_id = store.insert_dog(DogCreate(name="Bella", sex=Sex.FEMALE, birth_date=date(2019, 5, 10)))
        sire_id = store.insert_dog(DogCreate(name="Max", sex=Sex.MALE, birth_date=date(2018, 3, 22)))
        soon, _ = reproduction.record_mating(dam_id, sire_id, date(2024, 1, 10))
        reproduction.record_mating(dam_id, sire_id, date(2024, 3, 1))

        assert reproduction.upcoming_days == app_settings.upcoming_births_days
        assert [l.id for l in reproduction.get_upcoming_births()] == [soon.id]

    def test_validation_errors_map_to_response_body(self, wired):
        store = wired["store"]
        male_id = store.insert_dog(DogCreate(name="Max", sex=Sex.MALE, birth_date=date(2018, 3, 22)))

        with pytest.raises(ValidationError) as exc_info:
            wired["reproduction"].record_mating(male_id, male_id, date(2024, 1, 10))

        body = to_error_response(exc_info.value)
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["errors"] == {"dam_id": "The dam must be a female"}


class TestPedigreeAcrossLitters:
    """Test pedigrees of dogs registered from earlier litters."""

    def test_three_generation_flat_pedigree(self, wired):
        """Test that the default depth of 3 stops at the grandparents."""
        store = wired["store"]
        pedigree = wired["pedigree"]

        great_grandsire = store.insert_dog(DogCreate(name="Odin", sex=Sex.MALE, birth_date=date(2008, 1, 1)))
        grandsire = store.insert_dog(DogCreate(name="Thor", sex=Sex.MALE, birth_date=date(2012, 1, 1), sire_id=great_grandsire))
        sire = store.insert_dog(DogCreate(name="Max", sex=Sex.MALE, birth_date=date(2018, 3, 22), sire_id=grandsire))
        dam = store.insert_dog(DogCreate(name="Bella", sex=Sex.FEMALE, birth_date=date(2019, 5, 10), dam_id=777))
        pup = store.insert_dog(DogCreate(name="Nina", sex=Sex.FEMALE, birth_date=date(2024, 3, 12), sire_id=sire, dam_id=dam))

        flat = pedigree.get_pedigree_flat(pup)

        assert flat.generations == 3
        assert set(flat.ancestors) == {"S", "D", "SS", "DD"}
        assert max(record.generation for record in flat.ancestors.values()) == 2
        assert flat.ancestors["S"].role == "Pai"
        assert flat.ancestors["SS"].role == "Avô"
        assert flat.ancestors["DD"].is_unknown is True
        assert flat.ancestors["DD"].display_name == "Desconhecido"
        assert flat.generation_labels[2] == "Avós"

        assert [d.id for d in pedigree.get_offspring(sire)] == [pup]
        assert pedigree.get_siblings(pup) == []
