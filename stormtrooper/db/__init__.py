"""Database access for Stormtrooper."""

from stormtrooper.db.session import (
    check_database,
    create_engine_from_url,
    create_session_factory,
    dispose_engine,
    get_db,
    get_engine,
    get_session_factory,
    init_models,
)

__all__ = [
    "check_database",
    "create_engine_from_url",
    "create_session_factory",
    "dispose_engine",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_models",
]
