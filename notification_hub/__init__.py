"""Notification delivery service: REST CRUD plus per-user realtime fan-out."""

__version__ = "1.0.0"
