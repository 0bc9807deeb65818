"""
CLI Module.

Command-line client built with Typer for the RPaaS API.

Architecture:
- Commands only parse flags, build requests and render responses
- All HTTP calls go through rpaasv2.client (httpx)
- Per-invocation state lives in CommandContext, never in globals

Usage:
    rpaasv2 --help
    rpaasv2 autoscale info -s SERVICE -i INSTANCE
    rpaasv2 logs -s SERVICE -i INSTANCE --follow
"""
