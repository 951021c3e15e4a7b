from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict, Optional, Tuple, Union

MERGEABLE = "MERGEABLE"
SUCCESS = "SUCCESS"
ACTIVE = "ACTIVE"
REQUIRED_STATUS_CHECKS = "REQUIRED_STATUS_CHECKS"


@dataclass(frozen=True)
class BranchProtectionRule:
    pattern: str
    required_status_check_contexts: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Ruleset:
    name: str
    enforcement: Optional[str] = None
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    required_status_checks: Tuple[str, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.enforcement == ACTIVE


@dataclass(frozen=True)
class CheckRunResult:
    kind: ClassVar[str] = "run"

    name: str
    conclusion: Optional[str] = None

    @property
    def check_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class StatusContextResult:
    kind: ClassVar[str] = "status"

    context: str
    state: Optional[str] = None

    @property
    def check_name(self) -> str:
        return self.context


CheckResult = Union[CheckRunResult, StatusContextResult]


@dataclass(frozen=True)
class PullRequestSnapshot:
    url: str
    mergeable: Optional[str] = None
    base_branch_name: Optional[str] = None
    default_branch_name: Optional[str] = None
    rules: Tuple[BranchProtectionRule, ...] = ()
    rulesets: Tuple[Ruleset, ...] = ()
    last_commit_check_state: Optional[str] = None
    checks: Tuple[CheckResult, ...] = ()
    review_threads_resolved: Tuple[bool, ...] = ()
    behind_by: Optional[int] = None


@dataclass(frozen=True)
class ReadinessVerdict:
    url: str
    is_conflicted: bool
    is_passed_all_ci_job: bool
    is_resolved_all_review_comments: bool
    is_branch_out_of_date: bool

    @property
    def is_merge_ready(self) -> bool:
        return (
            not self.is_conflicted
            and self.is_passed_all_ci_job
            and self.is_resolved_all_review_comments
            and not self.is_branch_out_of_date
        )

    def to_dict(self) -> Dict[str, Union[str, bool]]:
        return {
            "url": self.url,
            "isConflicted": self.is_conflicted,
            "isPassedAllCiJob": self.is_passed_all_ci_job,
            "isResolvedAllReviewComments": self.is_resolved_all_review_comments,
            "isBranchOutOfDate": self.is_branch_out_of_date,
        }
