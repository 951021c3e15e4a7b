from __future__ import annotations

from typing import FrozenSet, Iterable, Optional, Set

from mergegate.readiness.types import (
    SUCCESS,
    CheckResult,
    CheckRunResult,
    StatusContextResult,
)

# GitHub reports conditionally skipped jobs as SKIPPED or NEUTRAL.
PASSING_CONCLUSIONS: FrozenSet[str] = frozenset({"SUCCESS", "SKIPPED", "NEUTRAL"})


def is_passed(check: CheckResult) -> bool:
    if isinstance(check, CheckRunResult):
        return check.conclusion in PASSING_CONCLUSIONS
    if isinstance(check, StatusContextResult):
        return check.state == SUCCESS
    raise TypeError(f"Unknown check result {check!r}")


def passed_check_names(
    last_commit_state: Optional[str], checks: Iterable[CheckResult]
) -> Set[str]:
    # rollup state is gated on by the evaluator
    return {check.check_name for check in checks if is_passed(check)}
