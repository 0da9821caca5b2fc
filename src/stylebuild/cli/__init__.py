"""Command-line interface for stylebuild."""
