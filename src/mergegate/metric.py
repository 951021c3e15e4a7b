from prometheus_client import Counter, CollectorRegistry, push_to_gateway

from mergegate import config

push_registry = CollectorRegistry()

api_call_count = Counter(
    "mergegate_num_api_calls",
    "Total number of GitHub GraphQL API calls",
    registry=push_registry,
)

timeline_page_count = Counter(
    "mergegate_num_timeline_pages",
    "Number of issue timeline pages processed",
    registry=push_registry,
)

evaluation_count = Counter(
    "mergegate_num_evaluations",
    "Number of pull request readiness evaluations",
    labelnames=["result"],
    registry=push_registry,
)


def push_metrics(job: str = "mergegate") -> bool:
    if config.PUSH_GATEWAY is None:
        return False
    push_to_gateway(config.PUSH_GATEWAY, job=job, registry=push_registry)
    return True
