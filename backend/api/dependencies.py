"""
dependencies.py — FastAPI dependency injection

Provides get_store() for use with Depends() in route handlers. The store
wraps the single process-wide engine from db.database; tests swap it out
through app.dependency_overrides.

Usage in a route handler:
    from fastapi import Depends
    from api.dependencies import get_store
    from db.store import EventStore

    @router.get("/example")
    def example(store: EventStore = Depends(get_store)):
        return store.list_events()
"""

from db.database import engine
from db.store import EventStore

_store = EventStore(engine)


def get_store() -> EventStore:
    """Return the shared EventStore."""
    return _store
