import pytest

from mergegate.readiness import ReadinessOutcome, ReadinessVerdict, classify_issue


def _verdict(url="https://github.com/org/repo/pull/1", **kwargs):
    fields = dict(
        is_conflicted=False,
        is_passed_all_ci_job=True,
        is_resolved_all_review_comments=True,
        is_branch_out_of_date=False,
    )
    fields.update(kwargs)
    return ReadinessVerdict(url=url, **fields)


def test_no_related_pull_request():
    outcome = classify_issue([])
    assert outcome is ReadinessOutcome.no_related_pr
    assert outcome.marker is None
    assert outcome.next_status("Preparation", "Awaiting Quality Check") is None


def test_all_passed():
    outcome = classify_issue([_verdict()], comment_count=1, comment_count_threshold=5)
    assert outcome is ReadinessOutcome.all_passed
    assert outcome.marker == "ALL_CI_PASSED, ALL_REVIEW_COMMENT_RESOLVED"
    assert outcome.is_escalation
    assert outcome.next_status("Preparation", "Awaiting Quality Check") == (
        "Awaiting Quality Check"
    )


def test_comment_threshold_escalates_first():
    outcome = classify_issue(
        [_verdict(is_passed_all_ci_job=False)],
        comment_count=5,
        comment_count_threshold=5,
    )
    assert outcome is ReadinessOutcome.too_many_comments
    assert outcome.is_escalation


@pytest.mark.parametrize(
    "fields,expected",
    [
        ({"is_conflicted": True}, ReadinessOutcome.branch_not_up_to_date),
        ({"is_branch_out_of_date": True}, ReadinessOutcome.branch_not_up_to_date),
        ({"is_passed_all_ci_job": False}, ReadinessOutcome.ci_not_passed),
        (
            {"is_resolved_all_review_comments": False},
            ReadinessOutcome.review_comment_not_resolved,
        ),
        (
            {"is_passed_all_ci_job": False, "is_resolved_all_review_comments": False},
            ReadinessOutcome.ci_not_passed,
        ),
    ],
)
def test_rejections(fields, expected):
    outcome = classify_issue([_verdict(), _verdict(url="other", **fields)])
    assert outcome is expected
    assert outcome.is_rejection
    assert not outcome.is_escalation
    assert outcome.next_status("Preparation", "Awaiting Quality Check") == "Preparation"
