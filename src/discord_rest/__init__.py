"""Async Discord REST client with route-aware rate limiting."""

__version__ = "0.1.0"
