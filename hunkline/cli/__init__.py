"""Command line interface for hunkline."""
