"""Transport adapters exposing the application."""
