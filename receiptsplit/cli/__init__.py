"""Command-line interface for receiptsplit."""
