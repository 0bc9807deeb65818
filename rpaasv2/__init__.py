"""
rpaasv2.

Command-line client for the RPaaS (Reverse Proxy as a Service) API.

- core/: Configuration, logging, exceptions
- client/: HTTP client and wire types for the RPaaS API (httpx)
- cli/: Typer commands, request building and output formatting
"""

__version__ = "0.1.0"
