"""
Database engine + session factory.

Always initializes — defaults to SQLite for local dev, Postgres in production.
get_session() checks a connection out of the engine's pool; close() returns it.
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from leadcheck.config import DATABASE_URL, DB_POOL_SIZE

logger = logging.getLogger('leadcheck.database')


class Base(DeclarativeBase):
    pass


# Heroku-style URLs use postgres:// but SQLAlchemy 2.x requires postgresql://
url = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

# SQLite needs different engine kwargs than Postgres
if url.startswith('sqlite'):
    engine = create_engine(url, connect_args={'check_same_thread': False})
else:
    engine = create_engine(url, pool_pre_ping=True, pool_size=DB_POOL_SIZE, max_overflow=0)

SessionLocal = sessionmaker(bind=engine)


def get_session():
    """Return a new DB session."""
    return SessionLocal()


class DatabaseLifecycle:
    """
    Owns shutdown of the engine's connection pool.

    Created by the process entry point. shutdown() disposes the pool once;
    later calls are no-ops.
    """

    def __init__(self, db_engine=None):
        self.engine = db_engine if db_engine is not None else engine
        self._closed = False

    @property
    def closed(self):
        return self._closed

    def shutdown(self):
        if self._closed:
            logger.info("Database pool already closed, skipping")
            return
        logger.info("Closing database pool...")
        try:
            self.engine.dispose()
        except Exception as e:
            logger.error("Error closing database pool: %s", e)
            return
        self._closed = True
        logger.info("Database pool closed")
