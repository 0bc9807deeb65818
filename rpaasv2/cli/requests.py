"""
Request Builders.

Turn validated command-line flag values into the request objects sent by
the RPaaS client. Every check here runs before any network call.
"""

import json
import re
from datetime import timedelta

from pydantic import ValidationError as PydanticValidationError

from rpaasv2.cli.formatting import describe_cron
from rpaasv2.client.types import Autoscale, LogArgs, ScheduledWindow
from rpaasv2.core.exceptions import ValidationError

_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1,
    "m": 60,
    "h": 3600,
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a relative duration like ``5s``, ``2m``, ``3h`` or ``1h30m``.

    Raises:
        ValidationError: If the value is not a valid duration
    """
    text = value.strip()
    if text == "0":
        return timedelta(0)

    seconds = 0.0
    position = 0
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if match is None:
            break
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    if not text or position != len(text):
        raise ValidationError(
            f"invalid duration {value!r}: use values like 5s, 2m or 3h",
            details={"flag": "since", "value": value},
        )
    return timedelta(seconds=seconds)


def parse_schedule(fragment: str) -> ScheduledWindow:
    """
    Parse one --schedule JSON fragment into a ScheduledWindow.

    Raises:
        ValidationError: If the fragment is not valid JSON, misses a field,
            has wrong types or holds an invalid cron expression
    """
    try:
        data = json.loads(fragment)
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"invalid schedule {fragment!r}: {e}",
            details={"flag": "schedule", "value": fragment},
        ) from e

    if not isinstance(data, dict):
        raise ValidationError(
            f"invalid schedule {fragment!r}: expected a JSON object",
            details={"flag": "schedule", "value": fragment},
        )

    try:
        window = ScheduledWindow.model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(
            f"invalid schedule {fragment!r}: {problems}",
            details={"flag": "schedule", "value": fragment},
        ) from e

    for field in ("start", "end"):
        expression = getattr(window, field)
        try:
            describe_cron(expression)
        except ValueError as e:
            raise ValidationError(
                f"invalid schedule {fragment!r}: {field} {expression!r} is not a valid cron expression",
                details={"flag": "schedule", "value": fragment},
            ) from e

    return window


def build_autoscale_update(
    min_replicas: int,
    max_replicas: int,
    cpu: int | None = None,
    memory: int | None = None,
    rps: int | None = None,
    schedules: list[str] | None = None,
) -> Autoscale:
    """
    Build the autoscale update payload from command-line flags.

    Only the optional fields the caller supplied are set on the result, so
    ``Autoscale.to_payload`` never sends an omitted trigger as zero.

    Raises:
        ValidationError: On negative values, min >= max or a malformed schedule
    """
    if min_replicas < 0:
        raise ValidationError("min replicas must not be negative", details={"flag": "min"})
    if max_replicas <= min_replicas:
        raise ValidationError(
            f"max replicas ({max_replicas}) must be greater than min replicas ({min_replicas})",
            details={"flag": "max"},
        )

    fields: dict = {"minReplicas": min_replicas, "maxReplicas": max_replicas}

    optional = {"cpu": cpu, "memory": memory, "rps": rps}
    for name, value in optional.items():
        if value is None:
            continue
        if value <= 0:
            raise ValidationError(f"{name} must be a positive integer", details={"flag": name})
        fields[name] = value

    if schedules:
        fields["schedules"] = [parse_schedule(fragment) for fragment in schedules]

    return Autoscale.model_validate(fields)


def build_log_args(
    instance: str | None,
    pod: str | None = None,
    container: str | None = None,
    lines: int | None = None,
    since: str | None = None,
    follow: bool = False,
    color: bool = True,
) -> LogArgs:
    """Marshal the log flags into LogArgs; no filtering happens client-side."""
    if not instance:
        raise ValidationError("instance is required", details={"flag": "instance"})
    if lines is not None and lines < 0:
        raise ValidationError("lines must not be negative", details={"flag": "lines"})

    return LogArgs(
        instance=instance,
        pod=pod or None,
        container=container or None,
        lines=lines,
        since=parse_duration(since) if since else None,
        follow=follow,
        color=color,
    )
