import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
import yaml
from loguru import logger

from webhook_tunnel.common.config import MockServerConfig
from webhook_tunnel.common.logging import configure_logging
from webhook_tunnel.mockserver.server import run_server


def load_events_from_file(events_path: str) -> List[Dict[str, Any]]:
    """Load the events to replay from a YAML (or JSON) file."""
    file_path = Path(events_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Events file not found: {events_path}")

    with open(file_path, "r") as f:
        events = yaml.safe_load(f)

    if not isinstance(events, list) or not all(isinstance(e, dict) for e in events):
        raise ValueError(f"Events file must contain a list of objects: {events_path}")
    return events


@click.command("mock-server")
@click.option("--host", default=None, help="Interface to bind (default 127.0.0.1)")
@click.option("--port", type=int, default=None, help="Port to listen on (default 8080)")
@click.option(
    "--interval",
    type=float,
    default=None,
    help="Seconds to wait between events (default 1)",
)
@click.option(
    "--events",
    "events_file",
    default=None,
    help="YAML file with the list of events to replay",
)
@click.pass_context
def mock_server(
    ctx: click.Context,
    host: Optional[str],
    port: Optional[int],
    interval: Optional[float],
    events_file: Optional[str],
):
    """Serve a local event stream for trying out the relay."""
    overrides = {
        "host": host,
        "port": port,
        "interval": interval,
        "events_file": events_file,
        "log_level": (ctx.obj or {}).get("log_level"),
    }
    try:
        config = MockServerConfig(**{k: v for k, v in overrides.items() if v is not None})
        configure_logging(config.log_level)

        events = None
        if config.events_file:
            events = load_events_from_file(config.events_file)
            logger.info(f"Loaded {len(events)} events from {config.events_file}")

        run_server(config, events)
    except Exception as e:
        logger.error(f"Failed to start mock server: {e}")
        sys.exit(1)
