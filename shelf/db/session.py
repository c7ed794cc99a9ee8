# shelf/db/session.py
from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import sessionmaker


def make_engine(db_path: Path) -> Engine:
    """
    Engine for Calibre's metadata.db, opened read-only.
    Calibre owns the file; we never write to it.
    """
    url = URL.create(
        "sqlite",
        # as_uri() percent-escapes spaces, as in "Calibre Library"
        database=Path(db_path).resolve().as_uri(),
        query={"mode": "ro", "uri": "true"},
    )
    # Sync routes run in a threadpool, so connections cross threads.
    return create_engine(url, connect_args={"check_same_thread": False})


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
