"""Shared core utilities for configuration loading, placeholders and console output."""
