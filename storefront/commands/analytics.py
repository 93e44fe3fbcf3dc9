"""
CLI Commands for admin analytics.

Usage:
    flask analytics report                 # 12-month analytics report
    flask analytics report --range 30days
    flask analytics report --stats         # Fixed-window dashboard stats
"""
import json

import click
from flask import current_app
from flask.cli import with_appcontext

from ..services.analytics_service import create_analytics_service
from ..services.periods import VALID_RANGES
from ..utils.exceptions import AnalyticsError


@click.group('analytics')
def analytics_cli():
    """Admin analytics commands."""
    pass


@analytics_cli.command('report')
@click.option('--range', 'range_token', type=click.Choice(VALID_RANGES), default='12months',
              help='Reporting range')
@click.option('--stats', is_flag=True, help='Print the fixed-window stats report instead')
@with_appcontext
def print_report(range_token, stats):
    """Compute a report and print it as JSON."""
    service = create_analytics_service(current_app._get_current_object())

    try:
        if stats:
            report = service.get_stats_report()
        else:
            report = service.get_analytics_report(range_token, strict=True)
    except AnalyticsError as e:
        raise click.ClickException(f'{e.message}: {e.original_error}')

    click.echo(json.dumps(report, indent=2))


def init_app(app):
    app.cli.add_command(analytics_cli)
