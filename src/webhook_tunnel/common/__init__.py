"""Common configuration, models and utilities for the webhook tunnel."""

from webhook_tunnel.common.config import (
    DEFAULT_STREAM_URL,
    MetricsConfig,
    MockServerConfig,
    RelayConfig,
)
from webhook_tunnel.common.logging import configure_logging
from webhook_tunnel.common.metrics import (
    MetricsRegistry,
    measure_time,
    metrics,
    start_metrics_server,
)
from webhook_tunnel.common.models import (
    CommentFrame,
    ConsoleTarget,
    DataFrame,
    Delivered,
    Failed,
    ForwardOutcome,
    ForwardTarget,
    Ignored,
    RemoteTarget,
    SSEFrame,
    Suppressed,
)

__all__ = [
    # Config
    "DEFAULT_STREAM_URL",
    "MetricsConfig",
    "MockServerConfig",
    "RelayConfig",
    # Logging
    "configure_logging",
    # Metrics
    "MetricsRegistry",
    "measure_time",
    "metrics",
    "start_metrics_server",
    # Models
    "CommentFrame",
    "ConsoleTarget",
    "DataFrame",
    "Delivered",
    "Failed",
    "ForwardOutcome",
    "ForwardTarget",
    "Ignored",
    "RemoteTarget",
    "SSEFrame",
    "Suppressed",
]
