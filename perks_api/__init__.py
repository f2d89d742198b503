"""
Top-level package for the Perks API.

The service itself lives in ``perks_api.app``; ``perks_api.perks_client``
is a small HTTP client for it.
"""

__all__ = []
