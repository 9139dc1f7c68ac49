"""Shared test fixtures and configuration."""

import pytest
from datetime import date
from typing import Callable, Generator
import os

# Set TESTING flag to prevent loading .env file
os.environ['TESTING'] = '1'

# Set up test environment BEFORE any imports
os.environ['DATABASE_URL'] = 'sqlite://'

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from kennel.config import Settings
from kennel.database import create_schema, get_engine, get_session_maker
from kennel.i18n import Translator
from kennel.repositories.sqlalchemy_store import SqlAlchemyEntityStore
from kennel.schemas.dog import DogCreate, DogRead, Sex
from kennel.services.fact_log import FactLog
from kennel.services.pedigree_service import PedigreeService
from kennel.services.reproduction_service import ReproductionService


TENANT_ID = 1
OTHER_TENANT_ID = 2


@pytest.fixture(autouse=True)
def setup_test_env() -> Generator[None, None, None]:
    """Set up test environment variables before each test."""
    original_env = os.environ.copy()

    os.environ['TESTING'] = '1'
    os.environ['DATABASE_URL'] = 'sqlite://'

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide a clean environment for tests that need to test missing variables."""
    original_env = os.environ.copy()

    # Clear all environment variables except TESTING
    os.environ.clear()
    os.environ['TESTING'] = '1'

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an in-memory SQLite database."""
    return Settings(database_url="sqlite://")


@pytest.fixture
def engine(test_settings: Settings) -> Generator[Engine, None, None]:
    """Provide a fresh in-memory database with every table created."""
    engine = get_engine(test_settings)
    create_schema(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return get_session_maker(engine)


@pytest.fixture
def store(session_factory: sessionmaker[Session]) -> SqlAlchemyEntityStore:
    """Entity store bound to the main test tenant."""
    return SqlAlchemyEntityStore(session_factory, TENANT_ID)


@pytest.fixture
def other_store(session_factory: sessionmaker[Session]) -> SqlAlchemyEntityStore:
    """Entity store bound to a second tenant sharing the same database."""
    return SqlAlchemyEntityStore(session_factory, OTHER_TENANT_ID)


@pytest.fixture
def fact_log(store: SqlAlchemyEntityStore) -> FactLog:
    return FactLog(store)


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 3, 1)


@pytest.fixture
def reproduction_service(
    store: SqlAlchemyEntityStore,
    fact_log: FactLog,
    fixed_today: date,
) -> ReproductionService:
    """Reproduction service with a fixed clock."""
    return ReproductionService(store, fact_log=fact_log, clock=lambda: fixed_today)


@pytest.fixture
def pedigree_service(store: SqlAlchemyEntityStore) -> PedigreeService:
    return PedigreeService(store, translator=Translator("en"))


@pytest.fixture
def make_dog(store: SqlAlchemyEntityStore) -> Callable[..., DogRead]:
    """Factory registering a dog for the main tenant."""

    def _make_dog(
        name: str = "Rex",
        sex: Sex = Sex.MALE,
        birth_date: date = date(2020, 1, 1),
        target_store: SqlAlchemyEntityStore = None,
        **fields,
    ) -> DogRead:
        target = target_store or store
        dog_id = target.insert_dog(
            DogCreate(name=name, sex=sex, birth_date=birth_date, breed="Golden Retriever", **fields)
        )
        return target.find_dog(dog_id)

    return _make_dog


@pytest.fixture
def dam(make_dog) -> DogRead:
    """A female dog."""
    return make_dog(name="Bella", sex=Sex.FEMALE, birth_date=date(2019, 5, 10))


@pytest.fixture
def sire(make_dog) -> DogRead:
    """A male dog."""
    return make_dog(name="Max", sex=Sex.MALE, birth_date=date(2018, 3, 22))
