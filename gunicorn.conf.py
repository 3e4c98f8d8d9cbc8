"""
Gunicorn configuration for serving main:app with uvicorn workers.
"""
import multiprocessing
from pathlib import Path

from framework.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)

bind = "0.0.0.0:8000"
workers = min(multiprocessing.cpu_count() * 2 + 1, 4)
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 60
keepalive = 5
graceful_timeout = 30
# Each worker builds its own container (engine + pool) in the app lifespan
preload_app = False

proc_name = (settings.GUNICORN_PROC_NAME or settings.APP_NAME.lower().replace(" ", "-"))[:32]

accesslog = str(LOG_DIR / "gunicorn_access.log")
errorlog = str(LOG_DIR / "gunicorn_error.log")
loglevel = settings.LOG_LEVEL.lower()
pidfile = str(LOG_DIR / "gunicorn.pid")

def when_ready(server):
    server.log.info("%s is ready. Listening on %s", settings.APP_NAME, server.address)

def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)
