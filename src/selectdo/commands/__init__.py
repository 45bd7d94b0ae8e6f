"""CLI commands for Select + Do."""
