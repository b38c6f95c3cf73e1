"""Command-line interface for acadsched."""
