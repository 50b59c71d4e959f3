"""Run options, credentials and logging setup."""

from feedclean.config.schema import (
    DEFAULT_DELETE_AGE_DAYS,
    CleanOptions,
    Credentials,
    build_credentials,
    build_options,
)

__all__ = [
    "DEFAULT_DELETE_AGE_DAYS",
    "CleanOptions",
    "Credentials",
    "build_credentials",
    "build_options",
]
