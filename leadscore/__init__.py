"""Weighted lead scoring and smart filtering for company directory records."""

__version__ = "0.1.0"
