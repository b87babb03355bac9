"""Command-line interface for vackup."""
