"""
main.py — Convenience entry point for the Event Store API.

The FastAPI application is defined in api/main.py.
This file re-exports `app` so uvicorn can be invoked from backend/ as:

    uvicorn main:app --reload --port 3000
"""

from api.main import app  # noqa: F401  (re-export)
