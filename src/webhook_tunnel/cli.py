from typing import Iterable, Optional

import click

from webhook_tunnel import __version__
from webhook_tunnel.mockserver.app import mock_server
from webhook_tunnel.relay.app import webhook


VERSION_MESSAGE = "Webhook Tunnel CLI version %(version)s"

DEFAULT_COMMANDS = (webhook, mock_server)


def create_cli(commands: Optional[Iterable[click.Command]] = None) -> click.Group:
    """Build the command registry.

    Each command is registered under its own name. Commands take options
    only, so any bare argument is rejected before a command runs.
    """

    @click.group(context_settings={"help_option_names": ["-h", "--help"]})
    @click.version_option(__version__, "--version", "-v", message=VERSION_MESSAGE)
    @click.option(
        "--log-level",
        default=None,
        help="Log level for diagnostics written to stderr (default INFO)",
    )
    @click.pass_context
    def cli(ctx: click.Context, log_level: Optional[str]):
        """The webhook tunnel CLI.

        Relays events from the local webhook stream to the console or to a
        locally hosted URL.
        """
        ctx.ensure_object(dict)
        ctx.obj["log_level"] = log_level

    for command in DEFAULT_COMMANDS if commands is None else commands:
        cli.add_command(command)
    return cli


def main():
    create_cli()(prog_name="webhook-tunnel")


if __name__ == "__main__":
    main()
