from __future__ import annotations

import logging

from mergegate.readiness.checks import passed_check_names
from mergegate.readiness.policy import determine_required_checks
from mergegate.readiness.types import (
    MERGEABLE,
    SUCCESS,
    PullRequestSnapshot,
    ReadinessVerdict,
)

logger = logging.getLogger(__name__)


def evaluate_pull_request(snapshot: PullRequestSnapshot) -> ReadinessVerdict:
    """Decide merge readiness of a single pull request.

    Pure: only the snapshot is read, and identical snapshots give identical
    verdicts. ``UNKNOWN`` mergeability counts as conflicted, an empty set of
    required checks is satisfied by a ``SUCCESS`` rollup alone, and a missing
    behind-by count means the branch is not reported as out of date.
    """
    is_conflicted = snapshot.mergeable != MERGEABLE

    required = determine_required_checks(
        snapshot.base_branch_name,
        snapshot.default_branch_name,
        snapshot.rules,
        snapshot.rulesets,
    )
    passed = passed_check_names(snapshot.last_commit_check_state, snapshot.checks)
    missing = required - passed
    if len(missing) > 0:
        logger.debug(
            "%s: required checks without passing result: %s",
            snapshot.url,
            sorted(missing),
        )

    is_passed_all_ci_job = (
        snapshot.last_commit_check_state == SUCCESS and len(missing) == 0
    )

    is_resolved_all_review_comments = all(snapshot.review_threads_resolved)

    is_branch_out_of_date = snapshot.behind_by is not None and snapshot.behind_by > 0

    verdict = ReadinessVerdict(
        url=snapshot.url,
        is_conflicted=is_conflicted,
        is_passed_all_ci_job=is_passed_all_ci_job,
        is_resolved_all_review_comments=is_resolved_all_review_comments,
        is_branch_out_of_date=is_branch_out_of_date,
    )
    logger.debug("Verdict for %s: %s", snapshot.url, verdict)
    return verdict
