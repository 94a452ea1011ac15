"""Business logic for Stormtrooper."""

from stormtrooper.services import accounts, streams

__all__ = ["accounts", "streams"]
