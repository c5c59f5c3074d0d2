"""
Gunicorn configuration for the keydash dashboard
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '5000')}"

# SQLite and the in-memory rate limiter are per process; keep the pool small
workers = int(os.environ.get('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
timeout = int(os.environ.get('GUNICORN_TIMEOUT', '30'))
keepalive = 2
max_requests = 1000
max_requests_jitter = 50

accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(L)s'

proc_name = 'keydash'

limit_request_line = 4094
limit_request_fields = 100


def when_ready(server):
    """Called just after the server is started."""
    server.log.info(f"keydash is ready. Listening on {bind}")


def on_exit(server):
    """Called just before exiting."""
    server.log.info("Shutting down keydash...")
