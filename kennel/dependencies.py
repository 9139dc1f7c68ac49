"""Composition root wiring settings, the entity store and the services."""
import logging
from typing import Callable, Optional

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from kennel.config import Settings
from kennel.database import get_engine, get_session_maker
from kennel.i18n import Translator
from kennel.repositories.base import EntityStore
from kennel.repositories.sqlalchemy_store import SqlAlchemyEntityStore
from kennel.services.fact_log import FactLog
from kennel.services.pedigree_service import PedigreeService
from kennel.services.reproduction_service import ReproductionService


logger = logging.getLogger(__name__)

# Engine singleton, created on first use
_engine: Optional[Engine] = None
_session_maker: Optional[sessionmaker[Session]] = None


def get_settings() -> Settings:
    """Load settings from the environment."""
    return Settings()


def get_session_factory(settings: Optional[Settings] = None) -> sessionmaker[Session]:
    """
    Get the process-wide session factory.

    The engine is created once from settings and reused by every store.

    Returns:
        sessionmaker: Factory producing Session objects
    """
    global _engine, _session_maker

    if _session_maker is None:
        settings = settings or get_settings()
        _engine = get_engine(settings)
        _session_maker = get_session_maker(_engine)
        logger.info(f"Database engine created for {_engine.url.render_as_string(hide_password=True)}")

    return _session_maker


def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _session_maker

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_maker = None


def get_entity_store(
    tenant_id: int,
    session_factory: Optional[sessionmaker[Session]] = None,
) -> EntityStore:
    """
    Get an entity store bound to one tenant.

    Args:
        tenant_id: Breeder the caller acts for
        session_factory: Factory to use (the process-wide one if omitted)

    Returns:
        EntityStore: Tenant-scoped store
    """
    return SqlAlchemyEntityStore(session_factory or get_session_factory(), tenant_id)


def get_translator(settings: Optional[Settings] = None) -> Translator:
    settings = settings or get_settings()
    return Translator(settings.locale)


def get_fact_log(store: EntityStore) -> FactLog:
    return FactLog(store)


def get_reproduction_service(
    store: EntityStore,
    settings: Optional[Settings] = None,
    on_action: Optional[Callable[..., None]] = None,
) -> ReproductionService:
    """
    Get the reproduction service for a tenant's store.

    Gestation length, look-ahead window and locale come from settings.
    on_action, when given, is called after every committed command.
    """
    settings = settings or get_settings()
    return ReproductionService(
        store,
        fact_log=get_fact_log(store),
        gestation_days=settings.gestation_days,
        translator=get_translator(settings),
        upcoming_days=settings.upcoming_births_days,
        on_action=on_action,
    )


def get_pedigree_service(
    store: EntityStore,
    settings: Optional[Settings] = None,
    on_action: Optional[Callable[..., None]] = None,
) -> PedigreeService:
    """Get the pedigree service for a tenant's store."""
    settings = settings or get_settings()
    return PedigreeService(
        store,
        translator=get_translator(settings),
        default_generations=settings.default_pedigree_generations,
        on_action=on_action,
    )
