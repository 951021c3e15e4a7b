from __future__ import annotations

import logging
from typing import Iterable, Optional, Set

from mergegate.readiness.glob import glob_match
from mergegate.readiness.types import BranchProtectionRule, Ruleset

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_TOKEN = "~DEFAULT_BRANCH"
ALL_BRANCHES_TOKEN = "~ALL"
BRANCH_REF_PREFIX = "refs/heads/"


def branch_pattern_matches(pattern: str, branch: str) -> bool:
    return pattern == branch or glob_match(pattern, branch)


def ref_pattern_matches(
    pattern: str,
    base_branch: str,
    default_branch: Optional[str],
    allow_all: bool = True,
) -> bool:
    if pattern == DEFAULT_BRANCH_TOKEN:
        return base_branch == (default_branch or "")
    if allow_all and pattern == ALL_BRANCHES_TOKEN:
        return True
    if pattern.startswith(BRANCH_REF_PREFIX):
        pattern = pattern[len(BRANCH_REF_PREFIX) :]
    return branch_pattern_matches(pattern, base_branch)


def ruleset_applies(
    ruleset: Ruleset, base_branch: str, default_branch: Optional[str]
) -> bool:
    matching_includes = [
        p
        for p in ruleset.include
        if ref_pattern_matches(p, base_branch, default_branch)
    ]
    if len(matching_includes) == 0:
        logger.debug(
            "-- no include pattern of ruleset '%s' matches base branch '%s'",
            ruleset.name,
            base_branch,
        )
        return False
    for pattern in matching_includes:
        logger.debug(
            "-- include pattern '%s' matches base branch '%s'", pattern, base_branch
        )

    for pattern in ruleset.exclude:
        if ref_pattern_matches(pattern, base_branch, default_branch, allow_all=False):
            logger.debug(
                "-- exclude pattern '%s' removes ruleset '%s' for base branch '%s'",
                pattern,
                ruleset.name,
                base_branch,
            )
            return False
    return True


def determine_required_checks(
    base_branch: Optional[str],
    default_branch: Optional[str],
    rules: Iterable[BranchProtectionRule],
    rulesets: Iterable[Ruleset],
) -> Set[str]:
    required: Set[str] = set()

    if not base_branch:
        logger.debug("No base branch known, no checks are required by policy")
        return required

    for rule in rules:
        if not branch_pattern_matches(rule.pattern, base_branch):
            continue
        logger.debug(
            "- branch protection rule '%s' matches base branch '%s': %s",
            rule.pattern,
            base_branch,
            rule.required_status_check_contexts,
        )
        required.update(rule.required_status_check_contexts)

    for idx, ruleset in enumerate(rulesets, start=1):
        logger.debug("Evaluate ruleset #%d '%s'", idx, ruleset.name)
        if not ruleset.is_active:
            logger.debug("-- ruleset enforcement is %s, skipping", ruleset.enforcement)
            continue
        if not ruleset_applies(ruleset, base_branch, default_branch):
            continue
        logger.debug(
            "- ruleset '%s' requires checks: %s",
            ruleset.name,
            ruleset.required_status_checks,
        )
        required.update(ruleset.required_status_checks)

    logger.debug("Required checks for '%s': %s", base_branch, required)
    return required
