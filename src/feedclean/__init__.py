"""feedclean - remove stale FeedWrangler subscriptions."""

__version__ = "0.1.0"
