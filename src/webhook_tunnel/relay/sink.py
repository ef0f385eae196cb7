import asyncio
import errno
from typing import Optional, Set
from urllib.parse import urlparse

import aiohttp
import click
from loguru import logger

from webhook_tunnel.common.metrics import measure_time, metrics
from webhook_tunnel.common.models import (
    CommentFrame,
    DataFrame,
    Delivered,
    Failed,
    ForwardOutcome,
    ForwardTarget,
    RemoteTarget,
    SSEFrame,
    Suppressed,
)


def is_benign_disconnect(exc: BaseException) -> bool:
    """Whether the error is the peer hanging up while shutting down."""
    if isinstance(exc, (aiohttp.ServerDisconnectedError, ConnectionResetError)):
        return True
    if isinstance(exc, aiohttp.ClientOSError) and exc.errno == errno.ECONNRESET:
        return True
    return False


class ForwardingSink:
    def __init__(self, target: ForwardTarget, timeout: Optional[float] = None):
        self.target = target
        self.timeout = timeout
        self._pending: Set[asyncio.Task] = set()

        if isinstance(target, RemoteTarget):
            # Extract hostname for metrics labels
            parsed_url = urlparse(target.url)
            self.target_label = f"{parsed_url.netloc}{parsed_url.path}"
        else:
            self.target_label = "console"

    @property
    def pending(self) -> int:
        return len(self._pending)

    def handle(self, frame: SSEFrame) -> Optional[asyncio.Task]:
        """Route a classified frame. Comments are echoed, never forwarded."""
        if isinstance(frame, DataFrame):
            return self.deliver(frame.payload)
        if isinstance(frame, CommentFrame):
            click.echo(f"Received comment: {frame.text}")
        return None

    def deliver(self, payload: str) -> Optional[asyncio.Task]:
        """Deliver a data payload without blocking the caller.

        Remote deliveries run as a detached task which is returned so callers
        may await it, but the relay itself never does.
        """
        if not isinstance(self.target, RemoteTarget):
            click.echo(f"Received message: {payload}")
            metrics.forward_total.labels(target=self.target_label).inc()
            return None

        task = asyncio.create_task(self.forward(payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @measure_time(metrics.forward_latency, lambda self: {"target": self.target_label})
    async def forward(self, payload: str) -> ForwardOutcome:
        """POST a payload to the remote target once, without retrying."""
        url = self.target.url
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    url,
                    data=payload.encode("utf-8"),
                    headers={"Content-Type": "application/json"},
                ) as response:
                    metrics.forward_total.labels(target=self.target_label).inc()
                    logger.debug(
                        f"Event forwarded to {url} (status={response.status})"
                    )
                    return Delivered(status=response.status)
        except Exception as e:
            reason = str(e) or e.__class__.__name__
            if is_benign_disconnect(e):
                metrics.forward_errors.labels(
                    target=self.target_label, reason="suppressed"
                ).inc()
                logger.debug(f"Ignoring disconnect from {url}: {reason}")
                return Suppressed(reason=reason)

            metrics.forward_errors.labels(
                target=self.target_label, reason="failed"
            ).inc()
            logger.error(f"Forwarding error: {reason}")
            return Failed(reason=reason)

    async def wait_pending(self):
        """Wait for every in-flight forward to finish."""
        if self._pending:
            await asyncio.gather(*self._pending)
