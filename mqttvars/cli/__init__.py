"""Command-line interface for mqttvars."""
