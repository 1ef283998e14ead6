import multiprocessing
import os

# Gunicorn configuration for the TaskHub API
# Run with: gunicorn -c gunicorn_conf.py
# Uvicorn workers serve the ASGI app; each worker owns its own database pool

wsgi_app = "taskhub.main:app"

bind = os.getenv("BIND", "0.0.0.0:8000")

# Standard formula: (2 x num_cores) + 1
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

timeout = 120
keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

name = "taskhub_api"
reload = False
