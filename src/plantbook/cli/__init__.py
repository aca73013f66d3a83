"""Command line interface for plantbook."""
