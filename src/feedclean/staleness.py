"""Stale feed detection.

A feed is stale when it has no items newer than the cutoff, or when its
source URL no longer answers with HTTP 200. The recency check runs first;
a feed that fails it is never probed.
"""

import logging
import time
from enum import Enum

import requests
from pydantic import BaseModel, ConfigDict

from feedclean.api.client import DEFAULT_TIMEOUT, FeedWranglerClient, http_get
from feedclean.api.models import Feed, Session
from feedclean.utils.errors import NetworkError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def compute_cutoff(delete_age_days: int, now: float | None = None) -> int:
    """Unix timestamp ``delete_age_days`` before ``now``.

    Args:
        delete_age_days: Look-back window in days
        now: Reference time in unix seconds (defaults to the current time)

    Returns:
        Cutoff in whole unix seconds
    """
    if now is None:
        now = time.time()
    return int(now) - SECONDS_PER_DAY * delete_age_days


class StaleReason(str, Enum):
    """Why a feed was marked for deletion."""

    NO_RECENT_ITEMS = "no recent items"
    UNREACHABLE = "unreachable"


class Verdict(BaseModel):
    """Keep/delete decision for one feed."""

    model_config = ConfigDict(frozen=True)

    feed: Feed
    reason: StaleReason | None = None

    @property
    def stale(self) -> bool:
        return self.reason is not None


class StalenessEvaluator:
    """Decides whether each feed should be kept."""

    def __init__(
        self,
        client: FeedWranglerClient,
        session: Session,
        since: int,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.client = client
        self.session = session
        self.since = since
        self.timeout = timeout

    def check_recency(self, feed: Feed) -> bool:
        """True if the feed has at least one item created since the cutoff.

        API failures propagate.
        """
        count = self.client.list_item_count(self.session, feed.feed_id, self.since)
        logger.debug("%s: %d items since %d", feed.title, count, self.since)
        return count > 0

    def check_reachable(self, feed: Feed) -> bool:
        """True if the feed URL answers with HTTP 200.

        Redirects are followed and the final status decides. Network
        failures count as unreachable and are only logged.
        """
        try:
            response = http_get(
                self.client.http, feed.feed_url, self.timeout, feed.feed_url, stream=True
            )
        except NetworkError as e:
            logger.warning("Error resolving %r -- %s", feed.feed_url, e)
            return False

        try:
            if response.status_code != 200:
                logger.warning(
                    "Http error %d resolving %s", response.status_code, feed.feed_url
                )
                return False
            return True
        finally:
            response.close()

    def evaluate(self, feed: Feed) -> Verdict:
        if not self.check_recency(feed):
            return Verdict(feed=feed, reason=StaleReason.NO_RECENT_ITEMS)
        if not self.check_reachable(feed):
            return Verdict(feed=feed, reason=StaleReason.UNREACHABLE)
        return Verdict(feed=feed)
