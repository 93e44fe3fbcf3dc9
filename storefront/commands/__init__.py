"""
CLI Commands for the Springz admin service.

Usage:
    flask seed demo                       # Populate demo catalog and orders
    flask analytics report --range 30days # Print an analytics report
    flask analytics report --stats        # Print dashboard statistics
"""
from .seed import init_app as init_seed_commands
from .analytics import init_app as init_analytics_commands


def init_app(app):
    """Register all CLI commands with the Flask app."""
    init_seed_commands(app)
    init_analytics_commands(app)
