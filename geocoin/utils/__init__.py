"""Logging setup and the event feed."""
