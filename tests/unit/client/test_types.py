"""Unit tests for RPaaS API types."""

import json
from datetime import timedelta

import pytest

from rpaasv2.client.types import Autoscale, LogArgs, ScheduledWindow

AUTOSCALE_BODIES = [
    {"minReplicas": 0, "maxReplicas": 1},
    {"minReplicas": 2, "maxReplicas": 5, "cpu": 50, "memory": 55, "rps": 100},
    {
        "minReplicas": 0,
        "maxReplicas": 100,
        "schedules": [
            {"minReplicas": 1, "start": "00 08 * * 1-5", "end": "00 20 * * 1-5"},
            {"minReplicas": 5, "start": "00 22 * * 0", "end": "00 02 * * 1", "timezone": "America/Sao_Paulo"},
        ],
    },
]


class TestAutoscale:
    """Tests for the Autoscale model."""

    @pytest.mark.parametrize("body", AUTOSCALE_BODIES)
    def test_json_round_trip(self, body) -> None:
        autoscale = Autoscale.model_validate(body)

        decoded = Autoscale.model_validate_json(json.dumps(autoscale.to_payload()))

        assert decoded == autoscale
        assert decoded.to_payload() == body

    def test_unset_triggers_are_none(self) -> None:
        autoscale = Autoscale.model_validate({"minReplicas": 1, "maxReplicas": 2})

        assert autoscale.cpu is None
        assert autoscale.memory is None
        assert autoscale.rps is None
        assert autoscale.schedules is None

    def test_explicit_nulls_are_not_sent(self) -> None:
        autoscale = Autoscale.model_validate({"minReplicas": 1, "maxReplicas": 2, "cpu": None})

        assert autoscale.to_payload() == {"minReplicas": 1, "maxReplicas": 2}

    @pytest.mark.parametrize(
        "body, expected",
        [
            ({"maxReplicas": 3, "cpu": 50}, {"minReplicas": 0, "maxReplicas": 3, "cpu": 50}),
            ({"minReplicas": 1}, {"minReplicas": 1, "maxReplicas": 0}),
            ({}, {"minReplicas": 0, "maxReplicas": 0}),
        ],
    )
    def test_replica_bounds_always_present(self, body, expected) -> None:
        assert Autoscale.model_validate(body).to_payload() == expected

    def test_unknown_fields_are_ignored(self) -> None:
        autoscale = Autoscale.model_validate({"minReplicas": 1, "maxReplicas": 2, "unknown": True})

        assert autoscale.to_payload() == {"minReplicas": 1, "maxReplicas": 2}


class TestScheduledWindow:
    """Tests for the ScheduledWindow model."""

    def test_wire_names(self) -> None:
        window = ScheduledWindow.model_validate({"minReplicas": 3, "start": "0 9 * * *", "end": "0 18 * * *"})

        assert window.min_replicas == 3
        assert window.timezone is None

    def test_negative_min_replicas(self) -> None:
        with pytest.raises(ValueError):
            ScheduledWindow.model_validate({"minReplicas": -1, "start": "0 9 * * *", "end": "0 18 * * *"})


class TestLogArgs:
    """Tests for log query parameters."""

    def test_minimal_query(self) -> None:
        assert LogArgs(instance="my-instance").to_query() == {"follow": "false", "color": "true"}

    def test_since_in_whole_seconds(self) -> None:
        args = LogArgs(instance="my-instance", since=timedelta(minutes=2))

        assert args.to_query()["since"] == "120"

    @pytest.mark.parametrize(
        "since, expected",
        [
            (timedelta(milliseconds=500), "1"),
            (timedelta(seconds=1, milliseconds=500), "2"),
            (timedelta(minutes=2, milliseconds=900), "121"),
        ],
    )
    def test_partial_seconds_round_up(self, since, expected) -> None:
        assert LogArgs(instance="my-instance", since=since).to_query()["since"] == expected
