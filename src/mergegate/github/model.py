from __future__ import annotations

from typing import List, Optional

import pydantic
from pydantic.alias_generators import to_camel


class Model(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(
        extra="ignore", alias_generator=to_camel, populate_by_name=True
    )


class PageInfo(Model):
    end_cursor: Optional[str] = None
    has_next_page: Optional[bool] = None


class RefName(Model):
    name: Optional[str] = None


class BranchProtectionRuleNode(Model):
    pattern: Optional[str] = None
    required_status_check_contexts: Optional[List[Optional[str]]] = None


class BranchProtectionRuleConnection(Model):
    nodes: Optional[List[Optional[BranchProtectionRuleNode]]] = None


class RefNameCondition(Model):
    include: Optional[List[Optional[str]]] = None
    exclude: Optional[List[Optional[str]]] = None


class RulesetConditions(Model):
    ref_name: Optional[RefNameCondition] = None


class RequiredStatusCheck(Model):
    context: Optional[str] = None


class RulesetRuleParameters(Model):
    required_status_checks: Optional[List[Optional[RequiredStatusCheck]]] = None


class RulesetRuleNode(Model):
    type: Optional[str] = None
    parameters: Optional[RulesetRuleParameters] = None


class RulesetRuleConnection(Model):
    nodes: Optional[List[Optional[RulesetRuleNode]]] = None


class RulesetNode(Model):
    name: Optional[str] = None
    enforcement: Optional[str] = None
    conditions: Optional[RulesetConditions] = None
    rules: Optional[RulesetRuleConnection] = None


class RulesetConnection(Model):
    nodes: Optional[List[Optional[RulesetNode]]] = None


class BaseRepository(Model):
    branch_protection_rules: Optional[BranchProtectionRuleConnection] = None
    default_branch_ref: Optional[RefName] = None
    rulesets: Optional[RulesetConnection] = None


class RollupContextNode(Model):
    typename: Optional[str] = pydantic.Field(None, alias="__typename")
    # CheckRun
    name: Optional[str] = None
    conclusion: Optional[str] = None
    # StatusContext
    context: Optional[str] = None
    state: Optional[str] = None


class RollupContextConnection(Model):
    nodes: Optional[List[Optional[RollupContextNode]]] = None


class StatusCheckRollup(Model):
    state: Optional[str] = None
    contexts: Optional[RollupContextConnection] = None


class Commit(Model):
    status_check_rollup: Optional[StatusCheckRollup] = None


class PullRequestCommit(Model):
    commit: Optional[Commit] = None


class PullRequestCommitConnection(Model):
    nodes: Optional[List[Optional[PullRequestCommit]]] = None


class ReviewThread(Model):
    is_resolved: Optional[bool] = None


class ReviewThreadConnection(Model):
    nodes: Optional[List[Optional[ReviewThread]]] = None


class Comparison(Model):
    behind_by: Optional[int] = None


class PullRequestNode(Model):
    typename: Optional[str] = pydantic.Field(None, alias="__typename")
    url: Optional[str] = None
    number: Optional[int] = None
    state: Optional[str] = None
    mergeable: Optional[str] = None
    base_ref_name: Optional[str] = None
    head_ref_name: Optional[str] = None
    base_ref: Optional[RefName] = None
    base_repository: Optional[BaseRepository] = None
    commits: Optional[PullRequestCommitConnection] = None
    review_threads: Optional[ReviewThreadConnection] = None
    compare_with_base_ref: Optional[Comparison] = None

    @property
    def is_pull_request(self) -> bool:
        return self.typename == "PullRequest"

    @property
    def is_open(self) -> bool:
        return self.state == "OPEN"


class TimelineItem(Model):
    typename: Optional[str] = pydantic.Field(None, alias="__typename")
    will_close_target: Optional[bool] = None
    source: Optional[PullRequestNode] = None

    @property
    def is_cross_reference(self) -> bool:
        return self.typename == "CrossReferencedEvent"


class TimelineItemConnection(Model):
    page_info: Optional[PageInfo] = None
    nodes: Optional[List[Optional[TimelineItem]]] = None


class Issue(Model):
    timeline_items: Optional[TimelineItemConnection] = None


class Repository(Model):
    issue: Optional[Issue] = None


class TimelineData(Model):
    repository: Optional[Repository] = None

    @property
    def issue(self) -> Optional[Issue]:
        if self.repository is None:
            return None
        return self.repository.issue


def nodes_of(connection) -> list:
    if connection is None or connection.nodes is None:
        return []
    return [node for node in connection.nodes if node is not None]
