"""
Gunicorn settings for running attendance_tracker.main:app behind uvicorn workers.

    gunicorn -c gunicorn.conf.py attendance_tracker.main:app

BIND, WEB_CONCURRENCY, GUNICORN_TIMEOUT and LOG_LEVEL come from the environment.
"""
import multiprocessing
import os

bind = os.getenv("BIND", "0.0.0.0:8000")
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

max_requests = 1000
max_requests_jitter = 50
timeout = int(os.getenv("GUNICORN_TIMEOUT", "60"))
graceful_timeout = 30

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(D)sus'

proc_name = "attendance-tracker"
preload_app = True


def when_ready(server):
    server.log.info(f"Attendance tracker listening on {bind} with {workers} workers")


def worker_abort(worker):
    worker.log.warning(f"Worker {worker.pid} aborted")
