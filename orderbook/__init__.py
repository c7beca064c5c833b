"""A price-time priority limit order book with a small demonstration command."""

__version__ = "0.1.0"