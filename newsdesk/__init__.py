"""Newsdesk - AI-assisted news prospecting and editorial workflow."""

__version__ = "0.1.0"
