from __future__ import annotations

import pytest

from eks_fingerprint_indexer.indexer import lambda_handler
from eks_fingerprint_indexer.indexer.errors import ListError, PartialFailure
from eks_fingerprint_indexer.indexer.reconciler import STATUS_FAILED, STATUS_SKIPPED, ReconcileOutcome
from eks_fingerprint_indexer.indexer.runner import RunResult


def _install(monkeypatch, run):  # type: ignore[no-untyped-def]
    regions: list[str | None] = []

    def _directory(*, region=None):  # type: ignore[no-untyped-def]
        regions.append(region)
        return object()

    monkeypatch.setattr(lambda_handler, "EksClusterDirectory", _directory)
    monkeypatch.setattr(lambda_handler, "SsmParameterStore", lambda *, region=None: object())
    monkeypatch.setattr(lambda_handler, "run_indexer", run)
    return regions


def test_handler_reads_config_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("SSM_KEY_PREFIX", "/lambda/fingerprints/")
    monkeypatch.setenv("SSM_OVERWRITE", "true")
    monkeypatch.delenv("CERT_REVERSE_INDEX", raising=False)
    monkeypatch.delenv("VERIFY_CERT_CHAIN", raising=False)
    seen = []

    def _run(config, clusters, store):  # type: ignore[no-untyped-def]
        seen.append(config)
        outcome = ReconcileOutcome(cluster="a", status=STATUS_SKIPPED, stage="done", key="/lambda/fingerprints/a")
        return RunResult(failure_count=0, outcomes=(outcome,))

    regions = _install(monkeypatch, _run)

    response = lambda_handler.handler({}, None)

    assert response == {"status": "ok", "clusters": 1, "published": 0, "skipped": 1, "failed": 0}
    assert seen[0].key_prefix == "/lambda/fingerprints/"
    assert seen[0].overwrite_existing is True
    assert seen[0].verify_chain is True
    assert regions == ["us-east-1"]


def test_handler_raises_on_partial_failure(monkeypatch) -> None:
    def _run(config, clusters, store):  # type: ignore[no-untyped-def]
        outcome = ReconcileOutcome(cluster="a", status=STATUS_FAILED, stage="publish", key="/p/a", error="denied")
        return RunResult(failure_count=1, outcomes=(outcome,))

    _install(monkeypatch, _run)

    with pytest.raises(PartialFailure):
        lambda_handler.handler({}, None)


def test_handler_raises_on_list_failure(monkeypatch) -> None:
    def _run(config, clusters, store):  # type: ignore[no-untyped-def]
        raise ListError("unable to list EKS clusters")

    _install(monkeypatch, _run)

    with pytest.raises(ListError):
        lambda_handler.handler({}, None)
