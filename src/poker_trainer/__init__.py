"""Heads-up No-Limit Hold'em training engine."""

__version__ = "0.1.0"
