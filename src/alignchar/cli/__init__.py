"""Command-line interface for alignchar."""
