import asyncio
import sys
from typing import Optional

import click
from loguru import logger
from pydantic import ValidationError

from webhook_tunnel.common.config import DEFAULT_STREAM_URL, MetricsConfig, RelayConfig
from webhook_tunnel.common.logging import configure_logging
from webhook_tunnel.common.metrics import start_metrics_server
from webhook_tunnel.relay.controller import StreamRelay
from webhook_tunnel.relay.sink import ForwardingSink


def create_relay(config: RelayConfig) -> StreamRelay:
    """Build the relay and its sink for the given config."""
    sink = ForwardingSink(config.forward_target(), timeout=config.forward_timeout)
    return StreamRelay(
        stream_url=config.stream_url,
        sink=sink,
        connect_timeout=config.connect_timeout,
    )


async def run_relay(config: RelayConfig) -> bool:
    """Run one relay session, then let in-flight forwards complete."""
    if config.metrics.enabled:
        start_metrics_server(config.metrics.port, config.metrics.host)
        logger.info(
            f"Metrics server started on {config.metrics.host}:{config.metrics.port}"
        )

    relay = create_relay(config)
    if config.tunnel_url:
        logger.info(f"Forwarding events to {config.tunnel_url}")

    closed_cleanly = await relay.run()

    if relay.sink.pending:
        logger.debug(f"Waiting for {relay.sink.pending} in-flight forwards")
    await relay.sink.wait_pending()
    return closed_cleanly


@click.command("webhook")
@click.option(
    "--tunnel",
    "-t",
    default=None,
    help="The locally hosted URL (http://localhost:PORT) to forward webhook messages to",
)
@click.option(
    "--stream-url",
    default=DEFAULT_STREAM_URL,
    show_default=True,
    help="Event stream to relay",
)
@click.option(
    "--connect-timeout",
    type=float,
    default=None,
    help="Seconds to wait for the stream connection (default: wait forever)",
)
@click.option(
    "--metrics-port",
    type=int,
    default=None,
    help="Expose Prometheus metrics on this port",
)
@click.pass_context
def webhook(
    ctx: click.Context,
    tunnel: Optional[str],
    stream_url: str,
    connect_timeout: Optional[float],
    metrics_port: Optional[int],
):
    """Relay webhook events to the console or a local tunnel."""
    log_level = (ctx.obj or {}).get("log_level") or "INFO"
    try:
        config = RelayConfig(
            stream_url=stream_url,
            tunnel_url=tunnel,
            connect_timeout=connect_timeout,
            log_level=log_level,
            metrics=MetricsConfig(
                enabled=metrics_port is not None,
                port=metrics_port if metrics_port is not None else MetricsConfig().port,
            ),
        )
    except ValidationError as e:
        raise click.BadParameter(str(e))

    configure_logging(config.log_level)
    try:
        asyncio.run(run_relay(config))
    except KeyboardInterrupt:
        logger.info("Relay interrupted")
    except Exception as e:
        logger.error(f"Relay failed: {e}")
        sys.exit(1)
