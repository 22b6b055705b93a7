"""Metadata-driven form, table and list components for the hotel dashboard."""

__version__ = "0.1.0"
