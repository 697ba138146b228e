"""Endpoint method groups."""
