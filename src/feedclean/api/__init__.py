"""FeedWrangler API client and response models."""

from feedclean.api.client import DEFAULT_TIMEOUT, FeedWranglerClient
from feedclean.api.models import Envelope, Feed, Session

__all__ = ["DEFAULT_TIMEOUT", "FeedWranglerClient", "Envelope", "Feed", "Session"]
