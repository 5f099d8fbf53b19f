"""Application layer: notification use cases orchestrating store and push."""
