from mergegate.readiness.checks import PASSING_CONCLUSIONS, passed_check_names
from mergegate.readiness.evaluator import evaluate_pull_request
from mergegate.readiness.glob import glob_match
from mergegate.readiness.outcome import ReadinessOutcome, classify_issue
from mergegate.readiness.policy import determine_required_checks
from mergegate.readiness.types import (
    BranchProtectionRule,
    CheckResult,
    CheckRunResult,
    PullRequestSnapshot,
    ReadinessVerdict,
    Ruleset,
    StatusContextResult,
)

__all__ = [
    "BranchProtectionRule",
    "CheckResult",
    "CheckRunResult",
    "PASSING_CONCLUSIONS",
    "PullRequestSnapshot",
    "ReadinessOutcome",
    "ReadinessVerdict",
    "Ruleset",
    "StatusContextResult",
    "classify_issue",
    "determine_required_checks",
    "evaluate_pull_request",
    "glob_match",
    "passed_check_names",
]
