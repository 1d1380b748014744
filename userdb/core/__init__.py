"""Core constants and error types."""
