"""Generate database session"""

from functools import lru_cache
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from pcn.core.config import Settings, get_settings
from pcn.db.schema import Base


def create_db_engine(settings: Settings) -> Engine:
    engine = create_engine(settings.database_url, echo=settings.echo_sql)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=create_db_engine(get_settings()))


def get_db() -> Generator[Session, None, None]:
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
