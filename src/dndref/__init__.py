"""Resilient proxy for the D&D 5e reference API."""

__version__ = "0.1.0"
