"""
Log Commands.

Stream log entries from the pods of an instance.
"""

from typing import Optional

import httpx
import typer

from rpaasv2.cli.context import CommandContext, get_command_context, run_command
from rpaasv2.cli.options import instance_option, service_option
from rpaasv2.cli.requests import build_log_args
from rpaasv2.client.types import LogArgs
from rpaasv2.core.exceptions import ApiError, CommandError


def logs(
    ctx: typer.Context,
    service: Optional[str] = service_option(),
    instance: Optional[str] = instance_option(),
    pod: Optional[str] = typer.Option(
        None, "--pod", "-p", help="specific pod to log from (default: all pods from instance)"
    ),
    container: Optional[str] = typer.Option(
        None, "--container", "-c", help="specific container to log from (default: all containers from pods)"
    ),
    lines: Optional[int] = typer.Option(None, "--lines", "-l", help="number of earlier log lines to show"),
    since: Optional[str] = typer.Option(
        None, "--since", help="only return logs newer than a relative duration like 5s, 2m, or 3h"
    ),
    follow: bool = typer.Option(False, "--follow", "-f", help="specify if the logs should be streamed"),
    without_color: bool = typer.Option(
        False, "--without-color", "--no-color", help="defines whether or not to display colorful output."
    ),
) -> None:
    """
    Shows the log entries from instance pods.

    Examples:
        rpaasv2 logs -s rpaasv2 -i my-instance --lines 100
        rpaasv2 logs -s rpaasv2 -i my-instance -p my-instance-6f86f957b7-abcde -f
    """
    command_ctx = get_command_context(ctx)
    run_command(_logs(command_ctx, service, instance, pod, container, lines, since, follow, not without_color))


async def _logs(
    command_ctx: CommandContext,
    service: str | None,
    instance: str | None,
    pod: str | None,
    container: str | None,
    lines: int | None,
    since: str | None,
    follow: bool,
    color: bool,
) -> None:
    args: LogArgs = build_log_args(
        instance,
        pod=pod,
        container=container,
        lines=lines,
        since=since,
        follow=follow,
        color=color,
    )

    async with command_ctx.new_client(service) as client:
        try:
            await client.log(args, command_ctx.out)
        except (ApiError, httpx.HTTPError) as e:
            raise CommandError("could not get logs from RPaaS API", e) from e
