"""Synchronous client for the FeedWrangler v2 API.

Every endpoint is a GET with its parameters in the query string and a JSON
body decoding into :class:`~feedclean.api.models.Envelope`. Failures are
raised as :mod:`feedclean.utils.errors` exceptions; nothing is retried.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import requests
from pydantic import ValidationError

from feedclean import __version__
from feedclean.api.models import Envelope, Feed, Session
from feedclean.config.schema import Credentials
from feedclean.utils.errors import (
    APIResultError,
    APIStatusError,
    AuthenticationError,
    FeedCleanError,
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
    ResponseDecodeError,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://feedwrangler.net/api/v2"

AUTHORIZE_ENDPOINT = "users/authorize"
LOGOUT_ENDPOINT = "users/logout"
LIST_IDS_ENDPOINT = "feed_items/list_ids"
REMOVE_FEED_ENDPOINT = "subscriptions/remove_feed"

# Upper bound on waiting for a response to start, in seconds
DEFAULT_TIMEOUT = 15


def http_get(
    http: requests.Session, url: str, timeout: float, label: str, **kwargs: Any
) -> requests.Response:
    """GET a URL, translating transport failures into NetworkError.

    The exception message never includes the URL, since API URLs carry
    credentials in their query string.
    """
    try:
        return http.get(url, timeout=timeout, **kwargs)
    except requests.Timeout as e:
        raise NetworkTimeoutError(f"No response from {label} within {timeout}s") from e
    except requests.RequestException as e:
        raise NetworkConnectionError(f"Error calling {label} ({type(e).__name__})") from e
    except ValueError as e:
        # urllib3 raises LocationParseError unwrapped for malformed hosts
        raise NetworkConnectionError(f"Invalid URL for {label} ({type(e).__name__})") from e


class FeedWranglerClient:
    """Client for the four FeedWrangler endpoints feedclean needs."""

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, without trailing slash
            timeout: Seconds to wait for each response before failing
            http: Optional requests session. One is created (and owned) if omitted.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_http = http is None
        self.http = http if http is not None else requests.Session()
        if self._owns_http:
            self.http.headers.update({"User-Agent": f"feedclean/{__version__}"})

    def __enter__(self) -> "FeedWranglerClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session if this client created it."""
        if self._owns_http:
            self.http.close()

    def _get(self, endpoint: str, params: dict[str, str]) -> requests.Response:
        return http_get(
            self.http, f"{self.base_url}/{endpoint}", self.timeout, endpoint, params=params
        )

    def _call(
        self,
        endpoint: str,
        params: dict[str, str],
        result_error: type[APIResultError] = APIResultError,
    ) -> Envelope:
        """Run one request/decode/validate cycle.

        Raises:
            NetworkError: Transport failure or timeout
            APIStatusError: Status other than 200
            ResponseDecodeError: Body is not a JSON envelope
            APIResultError: Envelope result is not success
        """
        response = self._get(endpoint, params)
        try:
            if response.status_code != 200:
                raise APIStatusError(endpoint, response.status_code)
            try:
                envelope = Envelope.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                raise ResponseDecodeError(
                    f"Error decoding {endpoint} json response: {e}", endpoint=endpoint
                ) from e
        finally:
            response.close()

        if not envelope.success:
            raise result_error(endpoint, envelope.result, envelope.error)
        return envelope

    def authorize(self, credentials: Credentials) -> tuple[Session, list[Feed]]:
        """Log in and fetch the subscription list.

        Returns:
            The new session and every subscribed feed

        Raises:
            AuthenticationError: If FeedWrangler rejects the credentials
        """
        logger.info("FeedWrangler authorize")
        envelope = self._call(
            AUTHORIZE_ENDPOINT,
            {
                "email": credentials.email,
                "password": credentials.password.get_secret_value(),
                "client_key": credentials.client_key,
            },
            result_error=AuthenticationError,
        )
        logger.info("FeedWrangler authorize success, %d feeds", len(envelope.feeds))
        return Session(access_token=envelope.access_token or ""), envelope.feeds

    def list_item_count(self, session: Session, feed_id: int, since: int) -> int:
        """Count items in a feed created after ``since`` (unix seconds)."""
        envelope = self._call(
            LIST_IDS_ENDPOINT,
            {
                "access_token": session.access_token,
                "feed_id": str(feed_id),
                "created_since": str(since),
            },
        )
        return envelope.count

    def remove_feed(self, session: Session, feed_id: int) -> None:
        """Unsubscribe from a feed."""
        self._call(
            REMOVE_FEED_ENDPOINT,
            {"access_token": session.access_token, "feed_id": str(feed_id)},
        )

    def logout(self, session: Session | None) -> None:
        """Invalidate the session token.

        Does nothing for a session that was never really authorized. A
        transport failure is only logged; a non-200 status is raised.

        Raises:
            APIStatusError: If logout returns a status other than 200
        """
        if session is None or not session.is_active:
            logger.debug("No active session, skipping logout")
            return

        logger.info("FeedWrangler logout")
        try:
            response = self._get(LOGOUT_ENDPOINT, {"access_token": session.access_token})
        except NetworkError as e:
            logger.warning("Logout failed: %s", e)
            return

        try:
            if response.status_code != 200:
                raise APIStatusError(LOGOUT_ENDPOINT, response.status_code)
        finally:
            response.close()

    @contextmanager
    def authorized(self, credentials: Credentials) -> Iterator[tuple[Session, list[Feed]]]:
        """Authorize for the duration of a ``with`` block.

        Logout is attempted exactly once when the block exits, however it
        exits. If the block raised, a failing logout is logged and the
        block's own exception propagates.

        Example:
            with client.authorized(credentials) as (session, feeds):
                ...
        """
        session, feeds = self.authorize(credentials)
        try:
            yield session, feeds
        except BaseException:
            try:
                self.logout(session)
            except FeedCleanError as e:
                logger.error("Logout failed during cleanup: %s", e)
            raise
        self.logout(session)
