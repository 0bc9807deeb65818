"""
RPaaS API Types.

Pydantic models for the JSON bodies exchanged with the RPaaS API.
Field names on the wire are camelCase; attributes are snake_case.
"""

import math
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    """Accepts both wire (alias) and attribute names; ignores unknown keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ScheduledWindow(_WireModel):
    """Time-bounded override of the minimum number of replicas."""

    min_replicas: int = Field(alias="minReplicas", ge=0, description="Replicas kept during the window")
    start: str = Field(description="Cron expression opening the window")
    end: str = Field(description="Cron expression closing the window")
    timezone: str | None = Field(default=None, description="IANA time zone of start/end")


class Autoscale(_WireModel):
    """
    Autoscaling policy of an instance.

    A trigger left as None is unset, which is different from zero. Payloads
    must be dumped with ``to_payload`` so unset triggers stay off the wire;
    the replica bounds are always present.
    """

    min_replicas: int = Field(default=0, alias="minReplicas", ge=0)
    max_replicas: int = Field(default=0, alias="maxReplicas", ge=0)
    cpu: int | None = Field(default=None, description="Target CPU utilization (%)")
    memory: int | None = Field(default=None, description="Target memory utilization (%)")
    rps: int | None = Field(default=None, description="Target requests per second")
    schedules: list[ScheduledWindow] | None = None

    def to_payload(self) -> dict:
        """Wire representation: both replica bounds plus the fields that were set."""
        return {
            "minReplicas": self.min_replicas,
            "maxReplicas": self.max_replicas,
            **self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True),
        }


class LogArgs(BaseModel):
    """Parameters of a log request, forwarded as-is to the API."""

    instance: str
    pod: str | None = None
    container: str | None = None
    lines: int | None = Field(default=None, ge=0)
    since: timedelta | None = None
    follow: bool = False
    color: bool = True

    def to_query(self) -> dict[str, str]:
        """Query string parameters understood by the log endpoint."""
        params: dict[str, str] = {
            "follow": str(self.follow).lower(),
            "color": str(self.color).lower(),
        }
        if self.lines:
            params["lines"] = str(self.lines)
        if self.since:
            # Whole seconds on the wire, rounded up.
            params["since"] = str(math.ceil(self.since.total_seconds()))
        if self.pod:
            params["pod"] = self.pod
        if self.container:
            params["container"] = self.container
        return params
