"""Middleware module for Stormtrooper.

This module provides error handling and standardized error responses.
"""

from stormtrooper.middleware.error_handler import (
    StormtrooperException,
    NotFoundException,
    UnauthorizedException,
    ConflictException,
    ServiceUnavailableException,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)

__all__ = [
    "StormtrooperException",
    "NotFoundException",
    "UnauthorizedException",
    "ConflictException",
    "ServiceUnavailableException",
    "http_exception_handler",
    "validation_exception_handler",
    "general_exception_handler",
]
