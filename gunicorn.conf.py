"""
Gunicorn Configuration for Production

Run with: gunicorn main:app -c gunicorn.conf.py

Request handling is I/O bound (database round-trips); the personalization
work per request is pure Python and bounded by transcript size, so a few
async workers per CPU are enough.
"""

import multiprocessing
import os

from dotenv import load_dotenv

# BIND / GUNICORN_WORKERS / LOG_LEVEL may live in .env alongside app settings
load_dotenv()

# =============================================================================
# Server Socket
# =============================================================================

bind = os.getenv("BIND", "0.0.0.0:8000")
backlog = 2048

# =============================================================================
# Worker Processes
# =============================================================================

workers = int(os.getenv("GUNICORN_WORKERS", min(2 * multiprocessing.cpu_count() + 1, 4)))

# Use Uvicorn worker for async support
worker_class = "uvicorn.workers.UvicornWorker"

timeout = 60
graceful_timeout = 30
keepalive = 5

# Max requests per worker before restart
max_requests = 1000
max_requests_jitter = 100

# =============================================================================
# Logging
# =============================================================================

accesslog = "-"  # stdout
errorlog = "-"   # stderr
loglevel = os.getenv("LOG_LEVEL", "info")

access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# =============================================================================
# Process Naming
# =============================================================================

proc_name = "dictation-api"
