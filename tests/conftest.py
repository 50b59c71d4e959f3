"""Shared fixtures for feedclean tests."""

from unittest.mock import Mock

import pytest
import requests

from feedclean.api.client import (
    AUTHORIZE_ENDPOINT,
    BASE_URL,
    LIST_IDS_ENDPOINT,
    LOGOUT_ENDPOINT,
    REMOVE_FEED_ENDPOINT,
    FeedWranglerClient,
)
from feedclean.config.schema import build_credentials, build_options

TOKEN = "token-abc123"


def make_response(status_code: int = 200, payload=None) -> Mock:
    """Build a fake requests.Response.

    ``payload`` is returned from ``.json()``, or raised if it is an exception.
    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


class FakeFeedWrangler:
    """In-memory stand-in for the FeedWrangler API and the feed hosts.

    Attributes tests may change before a run:
        feeds: feed dicts returned by authorize
        counts: feed_id -> item count returned by list_ids
        probes: feed URL -> status code or exception for reachability probes
        overrides: endpoint -> response or exception replacing the default
    """

    def __init__(self) -> None:
        self.feeds: list[dict] = []
        self.counts: dict[int, int] = {}
        self.probes: dict[str, int | Exception] = {}
        self.overrides: dict[str, Mock | Exception] = {}
        self.token = TOKEN
        self.calls: list[tuple[str, dict]] = []
        self.http = Mock(spec=requests.Session)
        self.http.get.side_effect = self._get

    def _get(self, url: str, params=None, timeout=None, **kwargs):
        self.calls.append((url, dict(params or {})))
        prefix = BASE_URL + "/"
        if url.startswith(prefix):
            endpoint = url[len(prefix):]
            override = self.overrides.get(endpoint)
            if isinstance(override, Exception):
                raise override
            if override is not None:
                return override
            return self._api(endpoint, params or {})

        outcome = self.probes.get(url, 200)
        if isinstance(outcome, Exception):
            raise outcome
        return make_response(outcome)

    def _api(self, endpoint: str, params: dict) -> Mock:
        if endpoint == AUTHORIZE_ENDPOINT:
            return make_response(
                200,
                {
                    "result": "success",
                    "error": None,
                    "access_token": self.token,
                    "feeds": self.feeds,
                },
            )
        if endpoint == LIST_IDS_ENDPOINT:
            count = self.counts.get(int(params["feed_id"]), 0)
            return make_response(
                200,
                {"result": "success", "error": None, "count": count, "feed_items": []},
            )
        if endpoint in (REMOVE_FEED_ENDPOINT, LOGOUT_ENDPOINT):
            return make_response(200, {"result": "success", "error": None})
        raise AssertionError(f"Unexpected endpoint {endpoint}")

    def api_calls(self, endpoint: str) -> list[dict]:
        """Query parameters of every call made to ``endpoint``."""
        return [params for url, params in self.calls if url == f"{BASE_URL}/{endpoint}"]

    def probe_calls(self) -> list[str]:
        """URLs hit by reachability probes."""
        return [url for url, _ in self.calls if not url.startswith(BASE_URL)]


@pytest.fixture
def fake_api() -> FakeFeedWrangler:
    return FakeFeedWrangler()


@pytest.fixture
def client(fake_api: FakeFeedWrangler) -> FeedWranglerClient:
    return FeedWranglerClient(http=fake_api.http)


@pytest.fixture
def credentials():
    return build_credentials("reader@example.com", "hunter2", "client-key")


@pytest.fixture
def make_options():
    def _make(commit: bool = False, delete_age_days: int = 300):
        return build_options(
            "reader@example.com",
            "hunter2",
            "client-key",
            delete_age_days=delete_age_days,
            commit=commit,
        )

    return _make


@pytest.fixture
def sample_feeds() -> list[dict]:
    return [
        {
            "title": "Quiet Blog",
            "feed_id": 1,
            "feed_url": "https://quiet.example.com/feed.xml",
            "site_url": "https://quiet.example.com",
        },
        {
            "title": "Busy Blog",
            "feed_id": 2,
            "feed_url": "https://busy.example.com/rss",
            "site_url": "https://busy.example.com",
        },
    ]


@pytest.fixture
def response_factory():
    return make_response
