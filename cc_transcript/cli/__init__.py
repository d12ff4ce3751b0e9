"""Command-line interface for cc-transcript."""
