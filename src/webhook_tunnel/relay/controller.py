import asyncio
from enum import Enum
from typing import Optional

import aiohttp
import click
from loguru import logger

from webhook_tunnel.common.metrics import metrics
from webhook_tunnel.common.models import Ignored
from webhook_tunnel.relay.classifier import classify_line
from webhook_tunnel.relay.framer import iter_lines
from webhook_tunnel.relay.sink import ForwardingSink


class RelayState(str, Enum):
    CONNECTING = "connecting"
    STREAMING = "streaming"
    CLOSED = "closed"


class StreamConnectionError(Exception):
    """The upstream event stream could not be opened."""

    def __init__(self, reason: str, status: Optional[int] = None):
        super().__init__(reason)
        self.status = status


class StreamRelay:
    """Relay one upstream event stream into a forwarding sink.

    The relay goes CONNECTING -> STREAMING -> CLOSED and never reconnects.
    Failures are logged rather than raised, so ``run`` always returns.
    """

    def __init__(
        self,
        stream_url: str,
        sink: ForwardingSink,
        connect_timeout: Optional[float] = None,
    ):
        self.stream_url = stream_url
        self.sink = sink
        self.connect_timeout = connect_timeout
        self.state = RelayState.CONNECTING

    def _client_timeout(self) -> aiohttp.ClientTimeout:
        # Only connecting may time out; the stream itself is long-lived
        return aiohttp.ClientTimeout(
            total=None,
            connect=self.connect_timeout,
            sock_read=None,
        )

    async def run(self) -> bool:
        """Consume the stream until the server closes it.

        Returns True when the server closed the stream, False when the
        connection could not be established or broke while reading.
        """
        self.state = RelayState.CONNECTING
        logger.info(f"Connecting to event stream at {self.stream_url}")

        try:
            async with aiohttp.ClientSession(timeout=self._client_timeout()) as session:
                async with session.get(
                    self.stream_url,
                    headers={"Accept": "text/event-stream"},
                ) as response:
                    self._check_response(response)
                    return await self._consume(response)
        except StreamConnectionError as e:
            logger.error(str(e))
        except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as e:
            logger.error(f"Error making request: {str(e) or e.__class__.__name__}")
        finally:
            self.state = RelayState.CLOSED
            metrics.stream_connected.set(0)

        return False

    def _check_response(self, response: aiohttp.ClientResponse):
        if not 200 <= response.status < 300:
            raise StreamConnectionError(
                f"Server returned non-200 status: {response.status}",
                status=response.status,
            )

    async def _consume(self, response: aiohttp.ClientResponse) -> bool:
        self.state = RelayState.STREAMING
        metrics.stream_connected.set(1)
        logger.info("Connected, waiting for events")

        try:
            async for line in iter_lines(response.content.iter_any()):
                self.process_line(line)
        except (aiohttp.ClientError, OSError) as e:
            logger.error(f"Error reading from stream: {e}")
            return False

        click.echo("Server closed the connection.")
        return True

    def process_line(self, line: str):
        frame = classify_line(line.strip())
        metrics.frames_total.labels(kind=frame.__class__.__name__).inc()
        if isinstance(frame, Ignored):
            return
        self.sink.handle(frame)
