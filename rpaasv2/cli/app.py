"""
CLI Application.

Command-line client for the RPaaS API.
Built with Typer for commands and Rich for formatted output.

Usage:
    rpaasv2 --help

    # Autoscale
    rpaasv2 autoscale info -s SERVICE -i INSTANCE [--json]
    rpaasv2 autoscale update -s SERVICE -i INSTANCE --min 1 --max 10 --cpu 75
    rpaasv2 autoscale remove -s SERVICE -i INSTANCE

    # Logs
    rpaasv2 logs -s SERVICE -i INSTANCE [--follow] [--since 5m]

Targets:
    --rpaas-url (RPAAS_URL)                  talk to the RPaaS API directly
    --tsuru-target/--tsuru-token             go through the Tsuru service proxy
      (TSURU_TARGET, TSURU_TOKEN)
"""

from pathlib import Path
from typing import Optional

import typer

from rpaasv2 import __version__
from rpaasv2.cli.commands import autoscale_app, logs
from rpaasv2.cli.context import fail, get_command_context
from rpaasv2.core.config import get_app_config, get_settings
from rpaasv2.core.exceptions import RpaasError
from rpaasv2.core.logging import get_logger, setup_logging

app = typer.Typer(
    name="rpaasv2",
    help="RPaaS CLI - autoscale policies and logs of reverse proxy instances.",
    no_args_is_help=True,
    add_completion=False,
)

app.add_typer(autoscale_app, name="autoscale")
app.command("logs")(logs)
app.command("log", hidden=True)(logs)


@app.command()
def version() -> None:
    """Display version information."""
    typer.echo(f"rpaasv2 version {__version__}")


@app.callback()
def main_callback(
    ctx: typer.Context,
    rpaas_url: Optional[str] = typer.Option(None, "--rpaas-url", help="URL of the RPaaS API (env: RPAAS_URL)"),
    rpaas_user: Optional[str] = typer.Option(None, "--rpaas-user", help="user for RPaaS API basic auth"),
    rpaas_password: Optional[str] = typer.Option(None, "--rpaas-password", help="password for RPaaS API basic auth"),
    tsuru_target: Optional[str] = typer.Option(None, "--tsuru-target", help="URL of the Tsuru API (env: TSURU_TARGET)"),
    tsuru_token: Optional[str] = typer.Option(None, "--tsuru-token", help="Tsuru API token (env: TSURU_TOKEN)"),
    config: Optional[Path] = typer.Option(
        None, "--config", help="settings file (default: ~/.rpaasv2/config.yaml, env: RPAASV2_CONFIG)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output (INFO level logging)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode (DEBUG level logging)"),
) -> None:
    """
    RPaaS CLI.

    Inspect and manage reverse proxy instances through the RPaaS API.
    """
    try:
        settings = get_settings()
        app_config = get_app_config(str(config) if config else None)
    except RpaasError as e:
        fail(e)

    level = "DEBUG" if debug else "INFO" if verbose else None
    setup_logging(app_config.logging, level=level)

    command_ctx = get_command_context(ctx)
    command_ctx.configure(
        settings,
        app_config,
        rpaas_url=rpaas_url,
        rpaas_user=rpaas_user,
        rpaas_password=rpaas_password,
        tsuru_target=tsuru_target,
        tsuru_token=tsuru_token,
    )

    get_logger(__name__).debug(
        "CLI invoked",
        command=ctx.invoked_subcommand,
        direct=bool(command_ctx.rpaas_url),
    )


def main() -> None:
    """Console script entry point."""
    app()
