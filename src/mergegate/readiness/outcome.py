from __future__ import annotations

from enum import Enum
import logging
from typing import Iterable, Optional

from mergegate.readiness.types import ReadinessVerdict

logger = logging.getLogger(__name__)


class ReadinessOutcome(Enum):
    no_related_pr = "NO_RELATED_PR"
    too_many_comments = "TOO_MANY_COMMENTS"
    branch_not_up_to_date = "BRANCH_NOT_UP_TO_DATE"
    ci_not_passed = "CI_NOT_PASSED"
    review_comment_not_resolved = "REVIEW_COMMENT_NOT_RESOLVED"
    all_passed = "ALL_CI_PASSED, ALL_REVIEW_COMMENT_RESOLVED"

    @property
    def marker(self) -> Optional[str]:
        if self is ReadinessOutcome.no_related_pr:
            return None
        return self.value

    @property
    def is_escalation(self) -> bool:
        return self in (ReadinessOutcome.all_passed, ReadinessOutcome.too_many_comments)

    @property
    def is_rejection(self) -> bool:
        return self in (
            ReadinessOutcome.branch_not_up_to_date,
            ReadinessOutcome.ci_not_passed,
            ReadinessOutcome.review_comment_not_resolved,
        )

    def next_status(
        self, preparation_status: str, awaiting_quality_check_status: str
    ) -> Optional[str]:
        if self.is_escalation:
            return awaiting_quality_check_status
        if self.is_rejection:
            return preparation_status
        return None


def classify_issue(
    verdicts: Iterable[ReadinessVerdict],
    comment_count: int = 0,
    comment_count_threshold: Optional[int] = None,
) -> ReadinessOutcome:
    verdicts = list(verdicts)

    if len(verdicts) == 0:
        outcome = ReadinessOutcome.no_related_pr
    elif (
        comment_count_threshold is not None
        and comment_count >= comment_count_threshold
    ):
        outcome = ReadinessOutcome.too_many_comments
    elif any(v.is_conflicted or v.is_branch_out_of_date for v in verdicts):
        outcome = ReadinessOutcome.branch_not_up_to_date
    elif not all(v.is_passed_all_ci_job for v in verdicts):
        outcome = ReadinessOutcome.ci_not_passed
    elif not all(v.is_resolved_all_review_comments for v in verdicts):
        outcome = ReadinessOutcome.review_comment_not_resolved
    else:
        outcome = ReadinessOutcome.all_passed

    logger.debug(
        "Issue outcome from %d pull requests (%d comments): %s",
        len(verdicts),
        comment_count,
        outcome.name,
    )
    return outcome
