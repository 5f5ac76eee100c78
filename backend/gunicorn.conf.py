# gunicorn.conf.py — Production server configuration.
#
# Run from backend/ with:
#   gunicorn api.main:app -c gunicorn.conf.py

import os

# One worker: the whole process shares a single database connection
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"

bind = f"0.0.0.0:{os.getenv('PORT', '3000')}"

# Logging — stdout/stderr; structured JSON is handled by core/logging.py
accesslog = "-"
errorlog  = "-"
loglevel  = "info"

# No worker timeout: a slow query holds its request until the database answers
timeout          = 0
keepalive        = 5
graceful_timeout = 30
