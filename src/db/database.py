"""Generate database session"""

from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings, get_settings
from src.db.schema import Base


@lru_cache
def _session_factory(database_url: str, echo: bool) -> sessionmaker[Session]:
    """One engine (and connection pool) per database. Ensures all tables are created"""
    engine = create_engine(database_url, echo=echo)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def build_session_factory(settings: Settings) -> sessionmaker[Session]:
    return _session_factory(settings.database_url, settings.database_echo)


def get_db(settings: Optional[Settings] = None) -> Generator[Session, None, None]:
    session_factory = build_session_factory(settings or get_settings())
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
