"""schemas/shared.py — Reusable building blocks shared across schema modules."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    error: str
