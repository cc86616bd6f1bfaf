"""Command line interface for nabreport."""
