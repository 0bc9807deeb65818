"""
Unit Test Fixtures.

The RPaaS API is faked with httpx.MockTransport; no test touches the network.
Commands run end to end through Typer's CliRunner against both targets
(direct RPaaS URL and Tsuru service proxy).
"""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from rpaasv2.cli.app import app
from rpaasv2.cli.context import CommandContext

Handler = Callable[[httpx.Request], httpx.Response]

TARGET_ARGS = {
    "direct": ["--rpaas-url", "http://rpaas.test"],
    "tsuru": ["--tsuru-target", "http://tsuru.test", "--tsuru-token", "t0k3n"],
}


class FakeRpaasAPI:
    """
    MockTransport handler that records requests.

    Usage:
        api = FakeRpaasAPI(lambda request: httpx.Response(204))
        result = api.invoke(["autoscale", "remove", "-s", "svc", "-i", "inst"])
        assert api.requests[0].method == "DELETE"
    """

    def __init__(self, handler: Handler, target: str = "direct") -> None:
        self.handler = handler
        self.target = target
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request reached the API"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)

    def resource_path(self) -> str:
        """Path of the last request as seen by the RPaaS API."""
        request = self.last_request
        if self.target == "tsuru":
            return request.url.params["callback"]
        return request.url.path

    def invoke(self, args: list[str]) -> Any:
        context = CommandContext(transport=httpx.MockTransport(self))
        return CliRunner().invoke(app, TARGET_ARGS[self.target] + args, obj=context)


@pytest.fixture(params=["direct", "tsuru"])
def target(request: pytest.FixtureRequest) -> str:
    """Run a test once per API target."""
    return request.param


@pytest.fixture
def fake_api(target: str) -> Callable[[Handler], FakeRpaasAPI]:
    """Factory for a FakeRpaasAPI bound to the current target."""

    def factory(handler: Handler) -> FakeRpaasAPI:
        return FakeRpaasAPI(handler, target=target)

    return factory


@pytest.fixture
def not_found() -> Handler:
    """Handler answering like the API does for an unknown instance."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"msg": 'instance "my-instance" not found'})

    return handler
