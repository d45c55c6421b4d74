"""Command-line interface for Agent PR Stats."""
