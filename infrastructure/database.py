import logging
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from infrastructure.settings import get_settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    logger.info(f"Connecting to {database_url.rsplit('@', 1)[-1]}")
    return create_engine(database_url, pool_pre_ping=True)


@lru_cache
def get_session_factory() -> sessionmaker:
    engine = build_engine(get_settings().database_url)
    return sessionmaker(autoflush=False, bind=engine)


# FastAPI dependency: one session per request
def get_db():
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
