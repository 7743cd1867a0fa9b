from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(settings.database_url, echo=settings.db_echo, pool_pre_ping=True)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)
    return _session_factory


def get_db() -> Iterator[Session]:
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Commit everything done inside the block, or nothing.

    Blocks nest: an inner block only flushes, and the outermost block owns the
    commit or rollback. A service can therefore wrap several repository writes
    in one ``transaction(db)`` and have them land together.
    """
    depth = db.info.get("transaction_depth", 0)
    db.info["transaction_depth"] = depth + 1
    try:
        yield db
        if depth:
            db.flush()
        else:
            db.commit()
    except Exception:
        if not depth:
            db.rollback()
        raise
    finally:
        db.info["transaction_depth"] = depth
