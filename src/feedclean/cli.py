"""CLI entry point for feedclean."""

import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from feedclean.api.client import FeedWranglerClient
from feedclean.cleaner import CleanReport, FeedCleaner
from feedclean.config.logging import setup_logging
from feedclean.config.schema import (
    DEFAULT_DELETE_AGE_DAYS,
    build_credentials,
    build_options,
)
from feedclean.utils.errors import APIResultError, FeedCleanError, InvalidConfigError

app = typer.Typer(
    name="feedclean",
    help="Find and remove stale FeedWrangler subscriptions",
    no_args_is_help=True,
)
console = Console()

EmailOption = Annotated[
    str, typer.Option("--email", "-e", help="FeedWrangler account email address")
]
PasswordOption = Annotated[
    str, typer.Option("--password", "-p", help="FeedWrangler account password")
]
ClientOption = Annotated[
    str,
    typer.Option(
        "--client",
        "-c",
        help="FeedWrangler client key from https://feedwrangler.net/developers/clients",
    ),
]
JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable verbose (DEBUG) logging")
    ] = False,
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Write logs to file")
    ] = None,
) -> None:
    """feedclean - Remove FeedWrangler subscriptions that have gone quiet."""
    setup_logging(verbose=verbose, log_file=log_file)


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from feedclean import __version__

    console.print(f"[bold cyan]feedclean[/bold cyan] v{__version__}")


def _fail(error: FeedCleanError) -> None:
    """Print a diagnostic for a fatal error and exit."""
    if isinstance(error, InvalidConfigError):
        console.print(f"[red]✗[/red] {escape(str(error))}")
        console.print("[dim]  Run with --help for usage[/dim]")
    else:
        console.print(f"[red]✗[/red] Error: {escape(str(error))}")
        if isinstance(error, APIResultError) and error.error:
            console.print(f"[dim]  FeedWrangler said: {escape(error.error)}[/dim]")
    sys.exit(1)


def _print_report(report: CleanReport) -> None:
    if not report.stale:
        console.print(
            f"\n[green]✓[/green] No stale feeds among {report.total_feeds} subscription(s)"
        )
        return

    title = "Deleted Feeds" if report.commit else "Stale Feeds (dry run)"
    table = Table(title=f"[bold]{title}[/bold]")
    table.add_column("ID", justify="right", style="yellow")
    table.add_column("Title", style="cyan")
    table.add_column("Reason", style="magenta")
    table.add_column("Feed URL", style="blue")

    for verdict in report.verdicts:
        if not verdict.stale:
            continue
        feed = verdict.feed
        table.add_row(
            str(feed.feed_id),
            escape(feed.title),
            verdict.reason.value,
            escape(feed.feed_url),
        )

    console.print(table)
    console.print(
        f"\n[dim]{len(report.stale)} stale of {report.total_feeds} feed(s)[/dim]"
    )
    if report.commit:
        console.print(
            f"[green]✓[/green] Removed {len(report.deleted)} subscription(s)"
        )
    else:
        console.print(
            "[yellow]Dry run: nothing was deleted. Re-run with --commit to remove them.[/yellow]"
        )


@app.command("clean")
def clean_command(
    email: EmailOption,
    password: PasswordOption,
    client_key: ClientOption,
    delete_age: Annotated[
        int,
        typer.Option(
            "--delete-age",
            "-d",
            help="Delete feeds with no new items in this many days",
            min=0,
        ),
    ] = DEFAULT_DELETE_AGE_DAYS,
    commit: Annotated[
        bool,
        typer.Option("--commit", help="Actually delete stale feeds (default is a dry run)"),
    ] = False,
    json_output: JsonOption = False,
) -> None:
    """Find stale feeds and, with --commit, unsubscribe from them.

    A feed is stale when nothing new was posted within --delete-age days,
    or when its feed URL no longer returns HTTP 200.

    Examples:
        feedclean clean -e me@example.com -p secret -c KEY

        feedclean clean -e me@example.com -p secret -c KEY --delete-age 90 --commit
    """
    try:
        options = build_options(
            email=email,
            password=password,
            client_key=client_key,
            delete_age_days=delete_age,
            commit=commit,
        )
        with FeedWranglerClient() as client:
            report = FeedCleaner(client, options).run()
    except FeedCleanError as e:
        _fail(e)
        return

    if json_output:
        data = {
            "since": report.since,
            "commit": report.commit,
            "total_feeds": report.total_feeds,
            "stale": [
                {**v.feed.model_dump(mode="json"), "reason": v.reason.value}
                for v in report.verdicts
                if v.stale
            ],
            "deleted": [f.feed_id for f in report.deleted],
        }
        print(json.dumps(data, indent=2))
        return

    _print_report(report)


@app.command("feeds")
def list_feeds(
    email: EmailOption,
    password: PasswordOption,
    client_key: ClientOption,
    json_output: JsonOption = False,
) -> None:
    """List subscribed feeds without checking them."""
    try:
        credentials = build_credentials(email, password, client_key)
        with FeedWranglerClient() as client:
            session, feeds = client.authorize(credentials)
            client.logout(session)
    except FeedCleanError as e:
        _fail(e)
        return

    if json_output:
        result = {
            "feeds": [f.model_dump(mode="json") for f in feeds],
            "total": len(feeds),
        }
        print(json.dumps(result, indent=2))
        return

    if not feeds:
        console.print("[yellow]No subscribed feeds.[/yellow]")
        return

    table = Table(title="[bold]Subscribed Feeds[/bold]")
    table.add_column("ID", justify="right", style="yellow")
    table.add_column("Title", style="cyan")
    table.add_column("Feed URL", style="blue")
    table.add_column("Site URL", style="green")

    for feed in feeds:
        table.add_row(
            str(feed.feed_id),
            escape(feed.title),
            escape(feed.feed_url),
            escape(feed.site_url or "—"),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(feeds)} feed(s)[/dim]")
