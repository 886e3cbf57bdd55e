# infra/db/base.py
from __future__ import annotations
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from infra.path import database_url

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(url: str | None = None) -> Engine:
    db_url = url or database_url()
    logger.info("Using database at: %s", db_url)
    return create_engine(db_url, echo=False, future=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    # Import models so every table is registered on Base.metadata
    from infra.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
