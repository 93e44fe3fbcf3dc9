"""
Gunicorn configuration for the Springz admin service.
"""
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Worker configuration
# Each analytics request fans out its own query threads, keep workers modest
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
timeout = 120  # Reports over large order tables can be slow
keepalive = 5

# Logging
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = os.getenv('LOG_LEVEL', 'info')
capture_output = True

proc_name = 'springz-admin'

preload_app = True

graceful_timeout = 30


def on_starting(server):
    print("[Gunicorn] Starting Springz admin service...")


def on_exit(server):
    print("[Gunicorn] Springz admin service shutting down...")
