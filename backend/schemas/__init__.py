from schemas.shared import ErrorResponse
from schemas.event import (
    EventPayload,
    WinnerPayload,
    EventResponse,
    EventCreatedResponse,
    MessageResponse,
)

__all__ = [
    "ErrorResponse",
    "EventPayload", "WinnerPayload",
    "EventResponse", "EventCreatedResponse", "MessageResponse",
]
