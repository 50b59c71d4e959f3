"""Custom exceptions for feedclean."""


class FeedCleanError(Exception):
    """Base exception for all feedclean errors."""

    pass


class ConfigError(FeedCleanError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid run options or credentials."""

    pass


class NetworkError(FeedCleanError):
    """Network-related errors."""

    pass


class NetworkConnectionError(NetworkError):
    """Connection failures."""

    pass


class NetworkTimeoutError(NetworkError):
    """Request timeout."""

    pass


class APIError(FeedCleanError):
    """FeedWrangler API errors."""

    def __init__(self, message: str, endpoint: str | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class APIStatusError(APIError):
    """Non-200 HTTP status from an API endpoint."""

    def __init__(self, endpoint: str, status_code: int) -> None:
        super().__init__(f"Http error {status_code} in {endpoint}", endpoint=endpoint)
        self.status_code = status_code


class ResponseDecodeError(APIError):
    """Response body is not a valid JSON envelope."""

    pass


class APIResultError(APIError):
    """Envelope decoded but its result is not success."""

    def __init__(self, endpoint: str, result: str | None, error: str | None) -> None:
        super().__init__(
            f"FeedWrangler error in {endpoint}: {result or 'no result'} -- {error or 'no error message'}",
            endpoint=endpoint,
        )
        self.result = result
        self.error = error


class AuthenticationError(APIResultError):
    """Authorize call rejected the credentials."""

    pass
