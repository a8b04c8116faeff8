"""
Gunicorn configuration for the moodlog API.

Run with:  gunicorn -c gunicorn.conf.py moodlog.main:app

Env vars that override defaults:
  PORT                     TCP port to bind (default: 8000)
  WORKERS                  number of worker processes (default: 2)
  REQUEST_TIMEOUT_SECONDS  upper bound on handling time per request (default: 60)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

workers = int(os.environ.get("WORKERS", "2"))

# Each worker runs Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# A request that exceeds this is aborted with its worker. Nothing needs
# cleaning up: every write is a single-row commit.
timeout = int(float(os.environ.get("REQUEST_TIMEOUT_SECONDS", "60")))

# Application logs go through structlog; these cover gunicorn itself.
loglevel = "info"
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
