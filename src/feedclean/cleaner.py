"""Run orchestration: authorize, find stale feeds, optionally delete them, logout."""

import logging

from pydantic import BaseModel, Field

from feedclean.api.client import FeedWranglerClient
from feedclean.api.models import Feed
from feedclean.config.schema import CleanOptions
from feedclean.staleness import StalenessEvaluator, Verdict, compute_cutoff

logger = logging.getLogger(__name__)

DRY_RUN_START_BANNER = "**** DRY RUN MODE -- NO CHANGES WILL BE MADE ****"
DRY_RUN_END_BANNER = "**** DRY RUN MODE -- NO CHANGES WERE MADE ****"


class CleanReport(BaseModel):
    """Outcome of a cleaning run."""

    since: int
    commit: bool
    total_feeds: int = 0
    verdicts: list[Verdict] = Field(default_factory=list)
    stale: list[Feed] = Field(default_factory=list)  # Deletion set, API order
    deleted: list[Feed] = Field(default_factory=list)

    @property
    def dry_run(self) -> bool:
        return not self.commit


class FeedCleaner:
    """Runs one cleaning pass over a FeedWrangler account.

    Example:
        >>> options = build_options(email, password, client_key, commit=False)
        >>> with FeedWranglerClient() as client:
        ...     report = FeedCleaner(client, options).run()
        >>> len(report.stale)
    """

    def __init__(self, client: FeedWranglerClient, options: CleanOptions) -> None:
        self.client = client
        self.options = options

    def run(self, now: float | None = None) -> CleanReport:
        """Execute the run.

        Logout is always attempted once authorize has succeeded, including
        when a later step raises.

        Args:
            now: Reference time for the look-back cutoff (defaults to now)

        Returns:
            CleanReport with every verdict and the feeds deleted, if any

        Raises:
            FeedCleanError: On any fatal API or network failure
        """
        commit = self.options.commit
        report = CleanReport(
            since=compute_cutoff(self.options.delete_age_days, now),
            commit=commit,
        )

        if not commit:
            logger.info(DRY_RUN_START_BANNER)

        with self.client.authorized(self.options.credentials) as (session, feeds):
            report.total_feeds = len(feeds)
            evaluator = StalenessEvaluator(self.client, session, report.since)

            logger.info("Checking for stale feeds...")
            for feed in feeds:
                verdict = evaluator.evaluate(feed)
                report.verdicts.append(verdict)
                if verdict.stale:
                    logger.info("STALE %s (%s)", feed.title, verdict.reason.value)
                    report.stale.append(feed)

            logger.info("%d stale feeds found", len(report.stale))

            if commit:
                logger.info("Deleting %d stale feeds...", len(report.stale))
                for feed in report.stale:
                    logger.info("DELETE %s", feed.title)
                    self.client.remove_feed(session, feed.feed_id)
                    report.deleted.append(feed)

        if not commit:
            logger.info(DRY_RUN_END_BANNER)

        return report
