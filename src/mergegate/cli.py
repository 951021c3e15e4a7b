import asyncio
from contextlib import asynccontextmanager
import json
import logging
from pathlib import Path
from typing import List, Optional

import aiohttp
import cachetools
from gidgethub import GitHubException
from gidgethub import aiohttp as gh_aiohttp
from tabulate import tabulate
import typer
import yaml

from mergegate import config
from mergegate.github import (
    API,
    InvalidIssueUrl,
    InvalidTimelineDump,
    IssueNotFound,
    collect_related_pull_requests,
    find_related_open_prs,
    get_adapter,
    load_timeline_pages,
)
from mergegate.logger import configure_logging
from mergegate.metric import push_metrics
from mergegate.readiness import ReadinessVerdict, classify_issue

logger = logging.getLogger("mergegate")

app = typer.Typer()
httpcache = cachetools.LRUCache(maxsize=500)


@app.callback()
def init():
    configure_logging()


def _flag(value: bool) -> str:
    return "yes" if value else "no"


def format_verdicts(verdicts: List[ReadinessVerdict]) -> str:
    rows = [
        (
            v.url,
            _flag(v.is_conflicted),
            _flag(v.is_passed_all_ci_job),
            _flag(v.is_resolved_all_review_comments),
            _flag(v.is_branch_out_of_date),
            _flag(v.is_merge_ready),
        )
        for v in verdicts
    ]
    return tabulate(
        rows,
        headers=(
            "Pull request",
            "Conflicted?",
            "CI passed?",
            "Reviews resolved?",
            "Out of date?",
            "Ready?",
        ),
        tablefmt="github",
    )


def _fail(message: str) -> None:
    logger.debug("Command failed", exc_info=True)
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@asynccontextmanager
async def graphql_client(token: str):
    async with aiohttp.ClientSession() as session:
        gh = gh_aiohttp.GitHubAPI(
            session,
            "mergegate",
            oauth_token=token,
            cache=httpcache,
        )
        yield gh


@app.command()
def evaluate(
    path: Path,
    adapter: str = typer.Option(config.SNAPSHOT_ADAPTER, help="Snapshot adapter"),
    as_json: bool = typer.Option(False, "--json", help="Print verdicts as JSON"),
):
    """Evaluate merge readiness from a dumped issue timeline (JSON or YAML)."""
    try:
        snapshot_adapter = get_adapter(adapter)
        with path.open() as fh:
            pages = load_timeline_pages(yaml.safe_load(fh))
    except (KeyError, InvalidTimelineDump, OSError, yaml.YAMLError) as e:
        _fail(str(e))

    verdicts = list(collect_related_pull_requests(pages, snapshot_adapter).values())

    if as_json:
        typer.echo(json.dumps([v.to_dict() for v in verdicts], indent=2))
    else:
        typer.echo(format_verdicts(verdicts))


@app.command()
def related_prs(
    issue_url: str,
    adapter: str = typer.Option(config.SNAPSHOT_ADAPTER, help="Snapshot adapter"),
    comment_count: int = typer.Option(0, help="Number of comments on the issue"),
    threshold: Optional[int] = typer.Option(
        config.COMMENT_COUNT_THRESHOLD,
        help="Comment count from which the issue is escalated",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print verdicts as JSON"),
):
    """Fetch the open pull requests linked to an issue and evaluate them."""
    if config.GITHUB_TOKEN is None:
        _fail("GITHUB_TOKEN is not set")

    async def handle():
        async with graphql_client(config.GITHUB_TOKEN) as gh:
            return await find_related_open_prs(API(gh), issue_url, get_adapter(adapter))

    try:
        verdicts = asyncio.run(handle())
    except (
        KeyError,
        InvalidIssueUrl,
        IssueNotFound,
        GitHubException,
        aiohttp.ClientError,
    ) as e:
        _fail(str(e))
    finally:
        push_metrics()

    outcome = classify_issue(
        verdicts, comment_count=comment_count, comment_count_threshold=threshold
    )
    next_status = outcome.next_status(
        config.PREPARATION_STATUS, config.AWAITING_QUALITY_CHECK_STATUS
    )

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "pullRequests": [v.to_dict() for v in verdicts],
                    "outcome": outcome.value,
                    "nextStatus": next_status,
                },
                indent=2,
            )
        )
        return

    typer.echo(format_verdicts(verdicts))
    typer.echo("")
    typer.echo(f"Outcome: {outcome.value}")
    if next_status is not None:
        typer.echo(f"Next status: {next_status}")


def main():
    app()
