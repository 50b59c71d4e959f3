"""Utility functions and helpers for feedclean."""

from feedclean.utils.errors import (
    APIError,
    APIResultError,
    APIStatusError,
    AuthenticationError,
    ConfigError,
    FeedCleanError,
    InvalidConfigError,
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
    ResponseDecodeError,
)

__all__ = [
    "FeedCleanError",
    "ConfigError",
    "InvalidConfigError",
    "NetworkError",
    "NetworkConnectionError",
    "NetworkTimeoutError",
    "APIError",
    "APIStatusError",
    "ResponseDecodeError",
    "APIResultError",
    "AuthenticationError",
]
