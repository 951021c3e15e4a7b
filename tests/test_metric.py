from mergegate import config
from mergegate import metric
from mergegate.github import collect_related_pull_requests, load_timeline_pages
from mergegate.github.snapshot import PolicySnapshotAdapter

from tests.payloads import cross_reference, pull_request_node, timeline_page


def test_collect_counts_evaluations_by_result():
    ready = metric.evaluation_count.labels(result="ready")
    not_ready = metric.evaluation_count.labels(result="not_ready")
    before_ready = ready._value.get()
    before_not_ready = not_ready._value.get()

    pages = load_timeline_pages(
        timeline_page(
            [
                cross_reference(pull_request_node(url="a")),
                cross_reference(pull_request_node(url="b", rollup_state="FAILURE")),
                cross_reference(pull_request_node(url="c", mergeable="UNKNOWN")),
            ]
        )
    )
    collect_related_pull_requests(pages, PolicySnapshotAdapter())

    assert ready._value.get() == before_ready + 1
    assert not_ready._value.get() == before_not_ready + 2


def test_push_metrics_without_gateway(monkeypatch):
    monkeypatch.setattr(config, "PUSH_GATEWAY", None)

    def fail(*args, **kwargs):  # pragma: no cover
        raise AssertionError("push_to_gateway should not be called")

    monkeypatch.setattr(metric, "push_to_gateway", fail)
    assert metric.push_metrics() is False


def test_push_metrics_to_gateway(monkeypatch):
    calls = []
    monkeypatch.setattr(config, "PUSH_GATEWAY", "localhost:9091")
    monkeypatch.setattr(
        metric,
        "push_to_gateway",
        lambda gateway, job, registry: calls.append((gateway, job, registry)),
    )

    assert metric.push_metrics(job="mergegate-test") is True
    assert calls == [("localhost:9091", "mergegate-test", metric.push_registry)]
