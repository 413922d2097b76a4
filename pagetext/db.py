"""Database utilities for the pagetext app.

``init_db`` returns a SQLAlchemy engine and session factory bound to the
given database URI and creates the tables. For SQLite file databases the
parent directory is created if it does not exist.
"""

from __future__ import annotations

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import scoped_session, sessionmaker

from .models import Base


def init_db(database_uri: str):
    """Initialise the database engine and session factory.

    Parameters
    ----------
    database_uri: str
        The SQLAlchemy database URI, e.g. ``sqlite:///data/app.db``.

    Returns
    -------
    engine: sqlalchemy.engine.Engine
        The configured database engine.
    Session: sqlalchemy.orm.scoped_session
        A scoped session factory bound to the engine.
    """
    if database_uri.startswith("sqlite:///"):
        db_path = database_uri.replace("sqlite:///", "")
        db_dir = os.path.dirname(db_path)
        if db_dir and not os.path.exists(db_dir):
            os.makedirs(db_dir, exist_ok=True)

    engine = create_engine(database_uri, future=True)
    Base.metadata.create_all(bind=engine)
    Session = scoped_session(sessionmaker(bind=engine))
    return engine, Session
