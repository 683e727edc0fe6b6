"""CLI entry point for the broadcast probe.

    broadcast-probe [-r] [-aAAAA] [-pPPPP] [-tTTTT] [-?]
    python -m broadcast_probe -r -p41000

Arguments are handed to the resolver untouched so the single-token
``-pPPPP`` style and unknown-flag tolerance keep working.
"""

import sys
import threading
from typing import Callable, Optional, Sequence

import click

from .config.parser import parse_args
from .config.schema import RunConfiguration
from .errors import ProbeError
from .runner.broadcaster import Broadcaster
from .runner.receiver import Receiver
from .transport.socket_provisioner import provisioned_socket


def run_probe(
    config: RunConfiguration,
    out: Callable[[str], None] = print,
    stop_event: Optional[threading.Event] = None,
    max_messages: Optional[int] = None,
) -> None:
    """Provision the socket and run the loop selected by ``config.mode``.

    Raises:
        ProbeError: On any provisioning or transport failure.
    """
    with provisioned_socket(config) as sock:
        loop_cls = Receiver if config.is_receiver else Broadcaster
        loop = loop_cls(sock, config, out=out, stop_event=stop_event)
        loop.run(max_messages=max_messages)


class RawArgsCommand(click.Command):
    """Command that records argv before click's parser consumes ``--``."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.meta["raw_argv"] = list(args)
        return super().parse_args(ctx, args)


@click.command(
    cls=RawArgsCommand,
    context_settings={
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
@click.argument("argv", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx: click.Context, argv: Sequence[str]):
    """Send or receive UDP broadcast counters."""
    config = parse_args(ctx.meta.get("raw_argv", argv), out=click.echo)

    try:
        run_probe(config, out=click.echo)
    except ProbeError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("Interrupted")
        sys.exit(0)


if __name__ == "__main__":
    main()
