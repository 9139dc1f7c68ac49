"""Entity store interface and its SQLAlchemy implementation."""
from kennel.repositories.base import EntityStore
from kennel.repositories.sqlalchemy_store import SqlAlchemyEntityStore

__all__ = ["EntityStore", "SqlAlchemyEntityStore"]
