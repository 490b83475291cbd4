"""Shared errors, logging helpers and constants for swgohhelp."""
