"""
Autoscale Commands.

Inspect, update and remove the autoscale policy of an instance.
"""

from typing import Optional

import httpx
import typer
from pydantic import ValidationError as PydanticValidationError

from rpaasv2.cli.context import CommandContext, get_command_context, run_command
from rpaasv2.cli.formatting import Renderer, get_renderer
from rpaasv2.cli.options import instance_label, instance_option, service_option
from rpaasv2.cli.requests import build_autoscale_update
from rpaasv2.client.types import Autoscale
from rpaasv2.core.exceptions import ApiError, CommandError
from rpaasv2.core.logging import get_logger

logger = get_logger(__name__)

app = typer.Typer(help="Manage the autoscale policy of instances", no_args_is_help=True)

API_ERRORS = (ApiError, httpx.HTTPError, PydanticValidationError)


@app.command()
def info(
    ctx: typer.Context,
    service: Optional[str] = service_option(),
    instance: Optional[str] = instance_option(),
    json_output: bool = typer.Option(False, "--json", help="show as JSON instead of table format"),
) -> None:
    """
    Show the autoscale policy of an instance.

    Examples:
        rpaasv2 autoscale info -s rpaasv2 -i my-instance
        rpaasv2 autoscale info -s rpaasv2 -i my-instance --json
    """
    command_ctx = get_command_context(ctx)
    run_command(_info(command_ctx, service, instance, get_renderer(json_output)))


async def _info(
    command_ctx: CommandContext,
    service: str | None,
    instance: str | None,
    renderer: Renderer,
) -> None:
    async with command_ctx.new_client(service) as client:
        try:
            autoscale = await client.get_autoscale(instance or "")
        except API_ERRORS as e:
            raise CommandError("could not get autoscale from RPaaS API", e) from e

    command_ctx.out.write(renderer.render_autoscale(autoscale))


@app.command()
def update(
    ctx: typer.Context,
    service: Optional[str] = service_option(),
    instance: Optional[str] = instance_option(),
    min_replicas: int = typer.Option(..., "--min", help="minimum number of replicas"),
    max_replicas: int = typer.Option(..., "--max", help="maximum number of replicas"),
    cpu: Optional[int] = typer.Option(None, "--cpu", help="target CPU utilization (%)"),
    memory: Optional[int] = typer.Option(None, "--memory", help="target memory utilization (%)"),
    rps: Optional[int] = typer.Option(None, "--rps", help="target requests per second"),
    schedules: Optional[list[str]] = typer.Option(
        None,
        "--schedule",
        help='scheduled window as JSON, e.g. \'{"minReplicas": 1, "start": "00 08 * * 1-5", '
        '"end": "00 20 * * 1-5"}\' (repeatable)',
    ),
) -> None:
    """
    Create or update the autoscale policy of an instance.

    Only the triggers given on the command line are sent.

    Examples:
        rpaasv2 autoscale update -s rpaasv2 -i my-instance --min 1 --max 10 --cpu 75
    """
    command_ctx = get_command_context(ctx)
    run_command(_update(command_ctx, service, instance, min_replicas, max_replicas, cpu, memory, rps, schedules))


async def _update(
    command_ctx: CommandContext,
    service: str | None,
    instance: str | None,
    min_replicas: int,
    max_replicas: int,
    cpu: int | None,
    memory: int | None,
    rps: int | None,
    schedules: list[str] | None,
) -> None:
    autoscale: Autoscale = build_autoscale_update(
        min_replicas,
        max_replicas,
        cpu=cpu,
        memory=memory,
        rps=rps,
        schedules=schedules,
    )
    logger.debug("Autoscale update payload", instance=instance, payload=autoscale.to_payload())

    async with command_ctx.new_client(service) as client:
        try:
            await client.update_autoscale(instance or "", autoscale)
        except API_ERRORS as e:
            raise CommandError("could not update the autoscale on RPaaS API", e) from e

    command_ctx.echo(f"Autoscale of {instance_label(service, instance)} successfully updated!")


@app.command()
def remove(
    ctx: typer.Context,
    service: Optional[str] = service_option(),
    instance: Optional[str] = instance_option(),
) -> None:
    """
    Remove the autoscale policy of an instance.

    Examples:
        rpaasv2 autoscale remove -s rpaasv2 -i my-instance
    """
    command_ctx = get_command_context(ctx)
    run_command(_remove(command_ctx, service, instance))


async def _remove(command_ctx: CommandContext, service: str | None, instance: str | None) -> None:
    async with command_ctx.new_client(service) as client:
        try:
            await client.remove_autoscale(instance or "")
        except API_ERRORS as e:
            raise CommandError("could not delete the autoscale on RPaaS API", e) from e

    command_ctx.echo(f"Autoscale of {instance_label(service, instance)} successfully removed")
