"""Gunicorn configuration for the social data hub.

Run with:
    gunicorn -c gunicorn.conf.py

Secrets are read by app.config.settings in each worker (priority:
/run/secrets, then environment). The post_fork hook only reports what a
worker will find, so misconfigured deployments show up in the logs early.

The metadata push store lives in process memory, so the hub runs a single
worker process and scales with threads. More workers would each keep their
own role set and report different push diffs.
"""
import os
from pathlib import Path

wsgi_app = "app.flask_app:create_app()"
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")
workers = 1
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
loglevel = os.environ.get("LOG_LEVEL", "info").lower()


def post_fork(server, worker):
    """
    Called just after a worker has been forked.

    Warns when neither /run/secrets nor the environment provides the token
    secret outside demo mode; the worker will then fail to load settings.
    """
    demo_mode = os.environ.get("DEMO_MODE", "false").lower() == "true"

    secret_file = Path("/run/secrets") / "api_token_secret"
    if secret_file.is_file():
        worker.log.info("Found api_token_secret in /run/secrets (using cached secret)")
        return

    if os.environ.get("API_TOKEN_SECRET"):
        worker.log.info("Using API_TOKEN_SECRET from environment")
        return

    if demo_mode:
        worker.log.warning("DEMO_MODE=true: worker will generate a temporary API_TOKEN_SECRET")
    else:
        worker.log.error("API_TOKEN_SECRET missing from /run/secrets and environment")
