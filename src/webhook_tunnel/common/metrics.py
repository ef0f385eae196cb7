import time
from functools import wraps
from typing import Callable, Dict, Optional, Union

from loguru import logger
from prometheus_client import REGISTRY, Counter, Gauge, Histogram, start_http_server


class MetricsRegistry:
    def __init__(self, registry=None):
        # Use a provided registry or the default one
        self.registry = registry or REGISTRY

        # Stream metrics
        self.frames_total = Counter(
            "webhook_tunnel_frames_total",
            "Total number of lines read from the event stream",
            ["kind"],
            registry=self.registry,
        )
        self.stream_connected = Gauge(
            "webhook_tunnel_stream_connected",
            "Whether the upstream event stream is connected",
            registry=self.registry,
        )

        # Forwarding metrics
        self.forward_total = Counter(
            "webhook_tunnel_forward_total",
            "Total number of events forwarded",
            ["target"],
            registry=self.registry,
        )
        self.forward_errors = Counter(
            "webhook_tunnel_forward_errors",
            "Total number of errors forwarding events",
            ["target", "reason"],
            registry=self.registry,
        )
        self.forward_latency = Histogram(
            "webhook_tunnel_forward_seconds",
            "Time spent forwarding events",
            ["target"],
            registry=self.registry,
        )


# Global metrics registry
metrics = MetricsRegistry()


def start_metrics_server(port: int = 9090, host: str = "127.0.0.1"):
    """Start the Prometheus metrics server."""
    start_http_server(port, host)


def measure_time(
    metric: Histogram, labels: Optional[Union[Dict[str, str], Callable]] = None
) -> Callable:
    """Decorator to measure the execution time of a coroutine function."""

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            labels_dict = {}
            if callable(labels) and args:
                # Labels computed from the bound instance
                try:
                    labels_dict = labels(args[0])
                except Exception as e:
                    logger.error(f"Error getting labels from function: {e}")
            elif isinstance(labels, dict):
                labels_dict = labels

            start_time = time.time()
            try:
                return await func(*args, **kwargs)
            finally:
                duration = time.time() - start_time
                try:
                    metric.labels(**labels_dict).observe(duration)
                except Exception as e:
                    logger.error(f"Error recording metric: {e}")

        return wrapper

    return decorator
