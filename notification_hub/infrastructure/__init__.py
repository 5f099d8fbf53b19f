"""Infrastructure layer: persistence and realtime transport."""
