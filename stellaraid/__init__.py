"""Stellar transaction fee estimation tools."""

__version__ = "0.1.0"