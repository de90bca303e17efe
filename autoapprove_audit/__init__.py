"""Audit editor auto-approve rules for terminal commands."""

__version__ = "0.1.0"
