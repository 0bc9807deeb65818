"""
RPaaS API Client.

Async HTTP client (httpx) for the RPaaS API, reachable either directly or
through the Tsuru service proxy.
"""

from rpaasv2.client.client import (
    DirectClient,
    RpaasClient,
    TsuruProxyClient,
    new_client,
)
from rpaasv2.client.types import Autoscale, LogArgs, ScheduledWindow

__all__ = [
    "Autoscale",
    "DirectClient",
    "LogArgs",
    "RpaasClient",
    "ScheduledWindow",
    "TsuruProxyClient",
    "new_client",
]
