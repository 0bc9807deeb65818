"""
CLI Commands.

Organized by domain/feature area.
"""

from rpaasv2.cli.commands.autoscale import app as autoscale_app
from rpaasv2.cli.commands.logs import logs

__all__ = [
    "autoscale_app",
    "logs",
]
