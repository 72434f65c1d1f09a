"""Command-line interface for clawcode."""
