from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Tuple

from mergegate.github.api import COMPARE_TIMELINE_QUERY, POLICY_TIMELINE_QUERY
from mergegate.github.model import (
    PullRequestNode,
    RollupContextNode,
    RulesetNode,
    StatusCheckRollup,
    nodes_of,
)
from mergegate.readiness.types import (
    REQUIRED_STATUS_CHECKS,
    BranchProtectionRule,
    CheckResult,
    CheckRunResult,
    PullRequestSnapshot,
    Ruleset,
    StatusContextResult,
)

logger = logging.getLogger(__name__)


class SnapshotAdapter(Protocol):
    name: str
    query: str

    def to_snapshot(self, pr: PullRequestNode) -> PullRequestSnapshot:
        ...


def base_branch_name(pr: PullRequestNode) -> Optional[str]:
    if pr.base_ref_name is not None:
        return pr.base_ref_name
    if pr.base_ref is not None:
        return pr.base_ref.name
    return None


def last_commit_rollup(pr: PullRequestNode) -> Optional[StatusCheckRollup]:
    commits = nodes_of(pr.commits)
    if len(commits) == 0 or commits[0].commit is None:
        return None
    return commits[0].commit.status_check_rollup


def review_threads_resolved(pr: PullRequestNode) -> Tuple[bool, ...]:
    return tuple(bool(t.is_resolved) for t in nodes_of(pr.review_threads))


def check_result_from_context(node: RollupContextNode) -> Optional[CheckResult]:
    typename = node.typename
    if typename is None:
        if node.name is not None:
            typename = "CheckRun"
        elif node.context is not None:
            typename = "StatusContext"

    if typename == "CheckRun" and node.name is not None:
        return CheckRunResult(name=node.name, conclusion=node.conclusion)
    if typename == "StatusContext" and node.context is not None:
        return StatusContextResult(context=node.context, state=node.state)

    logger.debug("Ignoring rollup context %s", node)
    return None


def check_results(rollup: Optional[StatusCheckRollup]) -> Tuple[CheckResult, ...]:
    if rollup is None:
        return ()
    results = (check_result_from_context(n) for n in nodes_of(rollup.contexts))
    return tuple(r for r in results if r is not None)


def ruleset_from_node(node: RulesetNode) -> Ruleset:
    include: List[str] = []
    exclude: List[str] = []
    if node.conditions is not None and node.conditions.ref_name is not None:
        include = [p for p in node.conditions.ref_name.include or [] if p is not None]
        exclude = [p for p in node.conditions.ref_name.exclude or [] if p is not None]

    required: List[str] = []
    for rule in nodes_of(node.rules):
        if rule.type != REQUIRED_STATUS_CHECKS or rule.parameters is None:
            continue
        for check in rule.parameters.required_status_checks or []:
            if check is not None and check.context is not None:
                required.append(check.context)

    return Ruleset(
        name=node.name or "",
        enforcement=node.enforcement,
        include=tuple(include),
        exclude=tuple(exclude),
        required_status_checks=tuple(required),
    )


class PolicySnapshotAdapter:
    """Snapshot from the timeline query that carries branch protection rules,
    rulesets and the individual rollup contexts. There is no comparison with
    the base ref in this query, so ``behind_by`` stays unknown."""

    name = "policy"
    query = POLICY_TIMELINE_QUERY

    def to_snapshot(self, pr: PullRequestNode) -> PullRequestSnapshot:
        repo = pr.base_repository

        rules: Tuple[BranchProtectionRule, ...] = ()
        rulesets: Tuple[Ruleset, ...] = ()
        default_branch = None
        if repo is not None:
            rules = tuple(
                BranchProtectionRule(
                    pattern=r.pattern,
                    required_status_check_contexts=tuple(
                        c
                        for c in r.required_status_check_contexts or []
                        if c is not None
                    ),
                )
                for r in nodes_of(repo.branch_protection_rules)
                if r.pattern is not None
            )
            rulesets = tuple(ruleset_from_node(n) for n in nodes_of(repo.rulesets))
            if repo.default_branch_ref is not None:
                default_branch = repo.default_branch_ref.name

        rollup = last_commit_rollup(pr)

        return PullRequestSnapshot(
            url=pr.url or "",
            mergeable=pr.mergeable,
            base_branch_name=base_branch_name(pr),
            default_branch_name=default_branch,
            rules=rules,
            rulesets=rulesets,
            last_commit_check_state=rollup.state if rollup is not None else None,
            checks=check_results(rollup),
            review_threads_resolved=review_threads_resolved(pr),
            behind_by=None,
        )


class CompareSnapshotAdapter:
    """Snapshot from the timeline query that compares the head with the base
    ref. It carries only the rollup state, so no check is required beyond
    the rollup itself."""

    name = "compare"
    query = COMPARE_TIMELINE_QUERY

    def to_snapshot(self, pr: PullRequestNode) -> PullRequestSnapshot:
        rollup = last_commit_rollup(pr)
        behind_by = None
        if pr.compare_with_base_ref is not None:
            behind_by = pr.compare_with_base_ref.behind_by

        return PullRequestSnapshot(
            url=pr.url or "",
            mergeable=pr.mergeable,
            base_branch_name=base_branch_name(pr),
            last_commit_check_state=rollup.state if rollup is not None else None,
            review_threads_resolved=review_threads_resolved(pr),
            behind_by=behind_by,
        )


ADAPTERS: Dict[str, SnapshotAdapter] = {
    a.name: a for a in (PolicySnapshotAdapter(), CompareSnapshotAdapter())
}


def get_adapter(name: str) -> SnapshotAdapter:
    try:
        return ADAPTERS[name]
    except KeyError:
        raise KeyError(
            f"Unknown snapshot adapter '{name}', choose from: {', '.join(ADAPTERS)}"
        )
