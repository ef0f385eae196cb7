"""Mock event stream server for local development."""

from webhook_tunnel.mockserver.app import load_events_from_file, mock_server
from webhook_tunnel.mockserver.server import create_app, event_stream, run_server

__all__ = [
    "create_app",
    "event_stream",
    "load_events_from_file",
    "mock_server",
    "run_server",
]
