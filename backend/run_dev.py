"""run_dev.py — Start the Event Store API in development mode.

Equivalent CLI command (run from backend/):
    uvicorn api.main:app --reload --host 0.0.0.0 --port $PORT

The listening port comes from the PORT environment variable (default 3000).
"""

import uvicorn

from core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
