"""Relay a local webhook event stream to the console or a local tunnel."""

__version__ = "1.0.0"
