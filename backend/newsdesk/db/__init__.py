"""Database connections package."""

from newsdesk.db.database import (
    create_session_factory,
    get_engine,
    get_session_factory,
    init_db,
)

__all__ = ["get_session_factory", "create_session_factory", "get_engine", "init_db"]
