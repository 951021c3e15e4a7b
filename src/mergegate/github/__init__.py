from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Any, Dict, Iterable, List

import pydantic

from mergegate.github.api import API, IssueNotFound
from mergegate.github.model import TimelineData, TimelineItemConnection, nodes_of
from mergegate.github.snapshot import (
    ADAPTERS,
    CompareSnapshotAdapter,
    PolicySnapshotAdapter,
    SnapshotAdapter,
    get_adapter,
)
from mergegate.metric import evaluation_count
from mergegate.readiness import ReadinessVerdict, evaluate_pull_request

logger = logging.getLogger(__name__)

_ISSUE_URL_RE = re.compile(r"github\.com/([^/]+)/([^/]+)/(issues|pull)/(\d+)")


class InvalidIssueUrl(ValueError):
    pass


class InvalidTimelineDump(ValueError):
    pass


@dataclass(frozen=True)
class IssueRef:
    owner: str
    repo: str
    number: int
    is_pull_request: bool = False

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


def parse_issue_url(url: str) -> IssueRef:
    m = _ISSUE_URL_RE.search(url)
    if m is None:
        raise InvalidIssueUrl(f"Invalid GitHub issue URL: {url}")
    return IssueRef(
        owner=m.group(1),
        repo=m.group(2),
        number=int(m.group(4)),
        is_pull_request=m.group(3) == "pull",
    )


def collect_related_pull_requests(
    pages: Iterable[TimelineItemConnection], adapter: SnapshotAdapter
) -> Dict[str, ReadinessVerdict]:
    verdicts: Dict[str, ReadinessVerdict] = {}
    for page in pages:
        for item in nodes_of(page):
            if not item.is_cross_reference:
                continue
            pr = item.source
            if pr is None or not pr.is_pull_request:
                continue
            if not pr.is_open:
                logger.debug("Skipping %s in state %s", pr.url, pr.state)
                continue

            verdict = evaluate_pull_request(adapter.to_snapshot(pr))
            evaluation_count.labels(
                result="ready" if verdict.is_merge_ready else "not_ready"
            ).inc()
            verdicts[verdict.url] = verdict

    logger.debug("Collected %d related open pull requests", len(verdicts))
    return verdicts


def load_timeline_pages(raw: Any) -> List[TimelineItemConnection]:
    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        raise InvalidTimelineDump(
            f"Expected a timeline page or a list of pages, got {type(raw).__name__}"
        )

    pages: List[TimelineItemConnection] = []
    for idx, page in enumerate(raw, start=1):
        if isinstance(page, dict) and "data" in page:
            page = page["data"]
        try:
            issue = TimelineData.model_validate(page).issue
        except pydantic.ValidationError as e:
            raise InvalidTimelineDump(f"Page #{idx} is not a timeline response: {e}")
        if issue is None or issue.timeline_items is None:
            raise InvalidTimelineDump(f"Page #{idx} has no issue timeline")
        pages.append(issue.timeline_items)
    return pages


async def find_related_open_prs(
    api: API, issue_url: str, adapter: SnapshotAdapter
) -> List[ReadinessVerdict]:
    issue = parse_issue_url(issue_url)
    if issue.is_pull_request:
        raise InvalidIssueUrl(
            f"Only issue URLs are supported, not pull request URLs: {issue_url}"
        )

    logger.info("Finding related open pull requests of %s (%s)", issue, adapter.name)
    pages = [
        page
        async for page in api.iter_timeline_pages(
            issue.owner, issue.repo, issue.number, adapter.query
        )
    ]
    verdicts = collect_related_pull_requests(pages, adapter)
    logger.info(
        "Finished %s, pull requests: %d, API calls: %d",
        issue,
        len(verdicts),
        api.call_count,
    )
    return list(verdicts.values())


__all__ = [
    "ADAPTERS",
    "API",
    "CompareSnapshotAdapter",
    "InvalidIssueUrl",
    "InvalidTimelineDump",
    "IssueNotFound",
    "IssueRef",
    "PolicySnapshotAdapter",
    "SnapshotAdapter",
    "collect_related_pull_requests",
    "find_related_open_prs",
    "get_adapter",
    "load_timeline_pages",
    "parse_issue_url",
]
