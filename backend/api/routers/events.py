"""
events.py — Event endpoints

Routes:
    GET    /events               All events, most recent first
    POST   /events               Create an event
    PUT    /events/{id}          Overwrite an event
    PUT    /events/{id}/winner   Set only the winner
    DELETE /events/{id}          Remove an event

Each handler runs one statement through EventStore. Driver failures raise
StoreError, which api/main.py turns into a 500 carrying the driver message.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store
from db.store import EventStore
from schemas.event import (
    EventCreatedResponse,
    EventPayload,
    EventResponse,
    MessageResponse,
    WinnerPayload,
)
from schemas.shared import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])

REQUIRED_FIELDS_ERROR = "Event name, sport, and date are required."
WINNER_REQUIRED_ERROR = "Winner name is required."
NOT_FOUND_ERROR = "Event not found."

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _not_found(event_id) -> HTTPException:
    logger.info("event not found", extra={"event_id": event_id})
    return HTTPException(status_code=404, detail=NOT_FOUND_ERROR)


def _parse_event_id(raw: str) -> int:
    """An id that is not an integer cannot match any row: 404, like an unknown id."""
    try:
        return int(raw)
    except ValueError:
        raise _not_found(raw) from None


def _ensure_found(rowcount: int, event_id: int) -> None:
    if rowcount == 0:
        raise _not_found(event_id)


@router.get(
    "",
    response_model=list[EventResponse],
    responses={500: _ERRORS[500]},
    summary="List events",
)
def list_events(store: EventStore = Depends(get_store)):
    return store.list_events()


@router.post(
    "",
    status_code=201,
    response_model=EventCreatedResponse,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="Create event",
)
def create_event(
    payload: Optional[EventPayload] = None,
    store: EventStore = Depends(get_store),
):
    """Insert an event. A missing or empty winner is stored as NULL."""
    payload = payload or EventPayload()
    if not payload.has_required_fields():
        raise HTTPException(status_code=400, detail=REQUIRED_FIELDS_ERROR)

    event_id = store.create_event(
        payload.event_name,
        payload.sport,
        payload.event_date,
        payload.winner_player_name,
    )
    logger.info("event created", extra={"event_id": event_id})
    return EventCreatedResponse(message="Event created successfully!", eventId=event_id)


@router.put(
    "/{event_id}",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Update event",
)
def update_event(
    event_id: str,
    payload: Optional[EventPayload] = None,
    store: EventStore = Depends(get_store),
):
    """Overwrite all four fields of an event."""
    payload = payload or EventPayload()
    if not payload.has_required_fields():
        raise HTTPException(status_code=400, detail=REQUIRED_FIELDS_ERROR)
    event_id = _parse_event_id(event_id)

    rowcount = store.update_event(
        event_id,
        payload.event_name,
        payload.sport,
        payload.event_date,
        payload.winner_player_name,
    )
    _ensure_found(rowcount, event_id)
    return MessageResponse(message="Event updated successfully!")


@router.put(
    "/{event_id}/winner",
    response_model=MessageResponse,
    responses=_ERRORS,
    summary="Set event winner",
)
def set_winner(
    event_id: str,
    payload: Optional[WinnerPayload] = None,
    store: EventStore = Depends(get_store),
):
    payload = payload or WinnerPayload()
    if not payload.winner_player_name:
        raise HTTPException(status_code=400, detail=WINNER_REQUIRED_ERROR)
    event_id = _parse_event_id(event_id)

    _ensure_found(store.set_winner(event_id, payload.winner_player_name), event_id)
    return MessageResponse(message="Winner has been set successfully!")


@router.delete(
    "/{event_id}",
    response_model=MessageResponse,
    responses={404: _ERRORS[404], 500: _ERRORS[500]},
    summary="Delete event",
)
def delete_event(event_id: str, store: EventStore = Depends(get_store)):
    event_id = _parse_event_id(event_id)
    _ensure_found(store.delete_event(event_id), event_id)
    logger.info("event deleted", extra={"event_id": event_id})
    return MessageResponse(message="Event deleted successfully.")
