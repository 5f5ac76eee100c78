"""db/store.py — SQL access for the events table.

EventStore wraps the process-wide engine and runs exactly one statement per
call. Driver failures come out as StoreError carrying the driver's own
message; the API layer turns that into a 500 response.

Table (created outside this service):

    events(event_id PK, event_name, sport, event_date, winner_player_name NULL)
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


LIST_SQL = text("""
    SELECT event_id, event_name, sport, event_date, winner_player_name
    FROM events
    ORDER BY event_date DESC
""")

INSERT_SQL = text("""
    INSERT INTO events (event_name, sport, event_date, winner_player_name)
    VALUES (:event_name, :sport, :event_date, :winner_player_name)
""")

UPDATE_SQL = text("""
    UPDATE events
    SET event_name = :event_name,
        sport = :sport,
        event_date = :event_date,
        winner_player_name = :winner_player_name
    WHERE event_id = :event_id
""")

SET_WINNER_SQL = text("""
    UPDATE events
    SET winner_player_name = :winner_player_name
    WHERE event_id = :event_id
""")

DELETE_SQL = text("DELETE FROM events WHERE event_id = :event_id")


class StatementOutcome(NamedTuple):
    rowcount: int
    lastrowid: Optional[int] = None


class StoreError(Exception):
    """A database call failed. `message` is the driver's error text."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def driver_message(exc: BaseException) -> str:
    """Extract the driver's message from a (possibly wrapped) DBAPI error.

    PyMySQL errors carry ``(errno, message)`` in args; SQLite and most
    others carry just the message.
    """
    orig = getattr(exc, "orig", None) or exc
    args = getattr(orig, "args", ())
    if len(args) == 2 and isinstance(args[0], int):
        return str(args[1])
    return str(orig)


class EventStore:
    """One method per API operation, each a single SQL statement."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def _execute(self, statement, params: Optional[dict] = None):
        """Run one statement in its own transaction.

        Returns the rows as dicts for queries, a StatementOutcome otherwise.
        """
        try:
            with self.engine.begin() as conn:
                result = conn.execute(statement, params or {})
                if result.returns_rows:
                    return [dict(row) for row in result.mappings().all()]
                return StatementOutcome(
                    rowcount=result.rowcount,
                    lastrowid=result.lastrowid,
                )
        except SQLAlchemyError as exc:
            raise StoreError(driver_message(exc)) from exc
        except OSError as exc:
            # TLS setup failures (unreadable CA file, bad certificate) happen
            # before the driver connects and are not DBAPI errors
            raise StoreError(str(exc)) from exc

    def connect(self) -> bool:
        """Open the shared connection once at startup.

        Failure is logged and reported, never raised: the process keeps
        running and individual requests fail against the dead connection.
        """
        try:
            self.ping()
        except StoreError as exc:
            logger.error(
                "Database connection failed",
                extra={"db_url": self.engine.url.render_as_string(hide_password=True),
                       "error": exc.message},
            )
            return False
        logger.info(
            "Connected to the database",
            extra={"db_url": self.engine.url.render_as_string(hide_password=True)},
        )
        return True

    def ping(self) -> None:
        self._execute(text("SELECT 1"))

    def list_events(self) -> list[dict[str, Any]]:
        return self._execute(LIST_SQL)

    def create_event(
        self,
        event_name: str,
        sport: str,
        event_date: str,
        winner_player_name: Optional[str] = None,
    ) -> int:
        """Insert a row and return the id the database assigned (cursor lastrowid)."""
        result = self._execute(INSERT_SQL, {
            "event_name": event_name,
            "sport": sport,
            "event_date": event_date,
            "winner_player_name": winner_player_name or None,
        })
        return result.lastrowid

    def update_event(
        self,
        event_id: int,
        event_name: str,
        sport: str,
        event_date: str,
        winner_player_name: Optional[str] = None,
    ) -> int:
        """Overwrite all four columns. Returns the number of rows matched."""
        result = self._execute(UPDATE_SQL, {
            "event_id": event_id,
            "event_name": event_name,
            "sport": sport,
            "event_date": event_date,
            "winner_player_name": winner_player_name or None,
        })
        return result.rowcount

    def set_winner(self, event_id: int, winner_player_name: str) -> int:
        result = self._execute(SET_WINNER_SQL, {
            "event_id": event_id,
            "winner_player_name": winner_player_name,
        })
        return result.rowcount

    def delete_event(self, event_id: int) -> int:
        result = self._execute(DELETE_SQL, {"event_id": event_id})
        return result.rowcount
