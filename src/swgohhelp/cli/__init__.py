"""Command-line interface for swgohhelp."""
