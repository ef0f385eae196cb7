"""Event stream relay for the webhook tunnel."""

from webhook_tunnel.relay.app import create_relay, run_relay, webhook
from webhook_tunnel.relay.classifier import classify_line
from webhook_tunnel.relay.controller import RelayState, StreamConnectionError, StreamRelay
from webhook_tunnel.relay.framer import LineFramer, iter_lines
from webhook_tunnel.relay.sink import ForwardingSink, is_benign_disconnect

__all__ = [
    "classify_line",
    "create_relay",
    "iter_lines",
    "is_benign_disconnect",
    "ForwardingSink",
    "LineFramer",
    "RelayState",
    "run_relay",
    "StreamConnectionError",
    "StreamRelay",
    "webhook",
]
