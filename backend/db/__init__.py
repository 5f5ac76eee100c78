"""Database package for the Event Store API."""

from .database import build_engine, engine
from .store import EventStore, StoreError

__all__ = [
    "build_engine",
    "engine",
    "EventStore",
    "StoreError",
]
