"""schemas/event.py — Event request/response schemas.

DB source: events — event_id, event_name, sport, event_date, winner_player_name

Request fields are all optional here: presence is checked by the route
handlers so a missing field is answered with 400 and a readable message.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class EventPayload(BaseModel):
    """Body of POST /events and PUT /events/{id}."""

    event_name: Optional[str] = None
    sport: Optional[str] = None
    event_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    winner_player_name: Optional[str] = None

    def has_required_fields(self) -> bool:
        return bool(self.event_name and self.sport and self.event_date)


class WinnerPayload(BaseModel):
    """Body of PUT /events/{id}/winner."""

    winner_player_name: Optional[str] = None


class EventResponse(BaseModel):
    event_id: int
    event_name: str
    sport: str
    event_date: date
    winner_player_name: Optional[str] = None


class EventCreatedResponse(BaseModel):
    message: str
    eventId: int


class MessageResponse(BaseModel):
    message: str
