"""
Command Context.

Explicit per-invocation state handed to every command through the Typer
context object: API target, client settings and output stream. The global
callback fills it from flags, environment and the settings file.
"""

import asyncio
import sys
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any, NoReturn, TextIO

import httpx
import typer
from rich.console import Console
from rich.text import Text

from rpaasv2.client.client import RpaasClient, new_client
from rpaasv2.core.config import AppConfig, Settings
from rpaasv2.core.exceptions import RpaasError

err_console = Console(stderr=True)


@dataclass
class CommandContext:
    """
    State shared by the commands of one invocation.

    Tests pass a pre-built instance (usually with an httpx.MockTransport)
    as the Click ``obj``; the global callback then only fills the target.
    """

    rpaas_url: str | None = None
    rpaas_user: str | None = None
    rpaas_password: str | None = None
    tsuru_target: str | None = None
    tsuru_token: str | None = None
    timeout: float | None = None
    user_agent: str | None = None
    transport: httpx.AsyncBaseTransport | None = None
    stdout: TextIO | None = None

    def configure(
        self,
        settings: Settings,
        app_config: AppConfig | None = None,
        **overrides: str | None,
    ) -> None:
        """Resolve target and settings: flags over environment over current values."""
        for name in ("rpaas_url", "rpaas_user", "rpaas_password", "tsuru_target", "tsuru_token"):
            value = overrides.get(name) or getattr(settings, name) or getattr(self, name)
            setattr(self, name, value)

        if app_config is not None:
            if self.timeout is None:
                self.timeout = app_config.client.timeout
            if self.user_agent is None:
                self.user_agent = app_config.client.user_agent

    @property
    def out(self) -> TextIO:
        """Stream receiving command output."""
        return self.stdout if self.stdout is not None else sys.stdout

    def new_client(self, service: str | None) -> RpaasClient:
        """Build the RPaaS client for the configured target."""
        return new_client(
            service=service,
            rpaas_url=self.rpaas_url,
            rpaas_user=self.rpaas_user,
            rpaas_password=self.rpaas_password,
            tsuru_target=self.tsuru_target,
            tsuru_token=self.tsuru_token,
            timeout=self.timeout,
            user_agent=self.user_agent,
            transport=self.transport,
        )

    def echo(self, message: str) -> None:
        """Write a line to the output stream."""
        self.out.write(f"{message}\n")
        self.out.flush()


def get_command_context(ctx: typer.Context) -> CommandContext:
    """Return the CommandContext attached to the Click context."""
    return ctx.ensure_object(CommandContext)


def fail(error: RpaasError) -> NoReturn:
    """Print the error on stderr and exit with status 1."""
    err_console.print(Text(f"Error: {error.message}", style="red"), soft_wrap=True)
    raise typer.Exit(1)


def run_command(coro: Coroutine[Any, Any, None]) -> None:
    """Run an async command body, turning RpaasError into a failed exit."""
    try:
        asyncio.run(coro)
    except RpaasError as e:
        fail(e)
