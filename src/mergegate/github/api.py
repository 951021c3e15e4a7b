from __future__ import annotations

import logging
from typing import AsyncIterator

from gidgethub.abc import GitHubAPI

from mergegate import config
from mergegate.github.model import TimelineData, TimelineItemConnection
from mergegate.metric import api_call_count, timeline_page_count

logger = logging.getLogger(__name__)


class IssueNotFound(Exception):
    def __init__(self, owner: str, repo: str, number: int):
        self.owner = owner
        self.repo = repo
        self.number = number
        super().__init__(f"Issue {owner}/{repo}#{number} not found in timeline")


_PULL_REQUEST_POLICY_FIELDS = """
                baseRepository {
                  branchProtectionRules(first: 100) {
                    nodes {
                      pattern
                      requiredStatusCheckContexts
                    }
                  }
                  defaultBranchRef {
                    name
                  }
                  rulesets(first: 100) {
                    nodes {
                      name
                      enforcement
                      conditions {
                        refName {
                          include
                          exclude
                        }
                      }
                      rules(first: 100) {
                        nodes {
                          type
                          parameters {
                            ... on RequiredStatusChecksParameters {
                              requiredStatusChecks {
                                context
                              }
                            }
                          }
                        }
                      }
                    }
                  }
                }
                commits(last: 1) {
                  nodes {
                    commit {
                      statusCheckRollup {
                        state
                        contexts(first: 100) {
                          nodes {
                            __typename
                            ... on CheckRun {
                              name
                              conclusion
                            }
                            ... on StatusContext {
                              context
                              state
                            }
                          }
                        }
                      }
                    }
                  }
                }
                baseRef {
                  name
                }"""

_PULL_REQUEST_COMPARE_FIELDS = """
                headRefName
                commits(last: 1) {
                  nodes {
                    commit {
                      statusCheckRollup {
                        state
                      }
                    }
                  }
                }
                compareWithBaseRef {
                  behindBy
                }"""


def _timeline_query(pull_request_fields: str) -> str:
    return (
        """
query($owner: String!, $repo: String!, $issueNumber: Int!, $after: String) {
  repository(owner: $owner, name: $repo) {
    issue(number: $issueNumber) {
      timelineItems(first: 100, after: $after, itemTypes: [CROSS_REFERENCED_EVENT]) {
        pageInfo {
          endCursor
          hasNextPage
        }
        nodes {
          __typename
          ... on CrossReferencedEvent {
            willCloseTarget
            source {
              __typename
              ... on PullRequest {
                url
                number
                state
                mergeable
                baseRefName"""
        + pull_request_fields
        + """
                reviewThreads(first: 100) {
                  nodes {
                    isResolved
                  }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""
    )


POLICY_TIMELINE_QUERY = _timeline_query(_PULL_REQUEST_POLICY_FIELDS)
COMPARE_TIMELINE_QUERY = _timeline_query(_PULL_REQUEST_COMPARE_FIELDS)


class API:
    gh: GitHubAPI

    call_count: int

    def __init__(self, gh: GitHubAPI, endpoint: str = config.GITHUB_GRAPHQL_URL):
        self.gh = gh
        self.endpoint = endpoint
        self.call_count = 0

    async def get_timeline_page(
        self, owner: str, repo: str, number: int, query: str, after: str | None = None
    ) -> TimelineItemConnection:
        self.call_count += 1
        api_call_count.inc()
        logger.debug(
            "Get timeline page for %s/%s#%d after=%s", owner, repo, number, after
        )
        data = await self.gh.graphql(
            query,
            endpoint=self.endpoint,
            owner=owner,
            repo=repo,
            issueNumber=number,
            after=after,
        )
        timeline = TimelineData.model_validate(data)
        issue = timeline.issue
        if issue is None or issue.timeline_items is None:
            raise IssueNotFound(owner, repo, number)
        timeline_page_count.inc()
        return issue.timeline_items

    async def iter_timeline_pages(
        self, owner: str, repo: str, number: int, query: str
    ) -> AsyncIterator[TimelineItemConnection]:
        after = None
        while True:
            page = await self.get_timeline_page(owner, repo, number, query, after=after)
            yield page
            if page.page_info is None or not page.page_info.has_next_page:
                break
            after = page.page_info.end_cursor
