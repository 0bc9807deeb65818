"""Flag declarations shared by several commands."""

from typing import Any

import typer


def service_option() -> Any:
    return typer.Option(
        None,
        "--service",
        "--tsuru-service",
        "-s",
        help="the Tsuru service name",
    )


def instance_option() -> Any:
    return typer.Option(
        None,
        "--instance",
        "--tsuru-service-instance",
        "-i",
        help="the reverse proxy instance name",
    )


def instance_label(service: str | None, instance: str | None) -> str:
    """SERVICE/INSTANCE as shown in confirmation messages."""
    return f"{service}/{instance}" if service else f"{instance}"
