"""
Logging configuration for the Springz admin service.

Configures the root logger once with a single stream handler. Modules log
through ``logging.getLogger(__name__)``.

Environment Variables:
    LOG_LEVEL: Root log level (default INFO)
"""
import logging
import os
import sys

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_configured = False


def setup_logging(level: str = None) -> None:
    """
    Configure root logging for the process.

    Safe to call more than once (app factory runs per test).
    """
    global _configured
    if _configured:
        return

    level_name = (level or os.getenv('LOG_LEVEL', 'INFO')).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.addHandler(handler)

    # SQLAlchemy engine logging is noisy at INFO
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    _configured = True
