from decksmith.db.database import (
    create_local_engine,
    create_session_factory,
    drop_db,
    init_db,
)

__all__ = [
    "create_local_engine",
    "create_session_factory",
    "drop_db",
    "init_db",
]
