"""Run coordinator: reconcile every cluster and account for partial failure."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .config import RunConfig
from .contracts import ClusterDirectory, ParameterStore
from .endpoint import Dial, dial_tls
from .errors import PartialFailure
from .reconciler import STATUS_PUBLISHED, STATUS_SKIPPED, ClusterReconciler, ReconcileOutcome

logger = logging.getLogger("eks_fingerprint_indexer.indexer.runner")


@dataclass(frozen=True)
class RunResult:
    failure_count: int
    outcomes: tuple[ReconcileOutcome, ...]

    @property
    def ok(self) -> bool:
        return self.failure_count == 0

    @property
    def published(self) -> int:
        return sum(1 for item in self.outcomes if item.status == STATUS_PUBLISHED)

    @property
    def skipped(self) -> int:
        return sum(1 for item in self.outcomes if item.status == STATUS_SKIPPED)

    def raise_for_failures(self) -> None:
        if self.failure_count > 0:
            raise PartialFailure(self.failure_count)

    def summary(self) -> dict[str, int | str]:
        return {
            "status": "ok" if self.ok else "partial_failure",
            "clusters": len(self.outcomes),
            "published": self.published,
            "skipped": self.skipped,
            "failed": self.failure_count,
        }


def run_indexer(
    config: RunConfig,
    clusters: ClusterDirectory,
    store: ParameterStore,
    *,
    dial: Dial = dial_tls,
) -> RunResult:
    """Reconcile all clusters sequentially.

    A listing failure (`ListError`) propagates before any cluster is touched.
    Per-cluster failures are counted; the run always visits every cluster.
    """
    names = clusters.list_clusters()
    logger.info("clusters listed count=%s", len(names))
    reconciler = ClusterReconciler(config, clusters, store, dial=dial)
    outcomes: list[ReconcileOutcome] = []
    failure_count = 0
    for name in names:
        outcome = reconciler.reconcile(name)
        if outcome.failed:
            failure_count += 1
        outcomes.append(outcome)
    result = RunResult(failure_count=failure_count, outcomes=tuple(outcomes))
    log = logger.info if result.ok else logger.warning
    log(
        "indexer run complete clusters=%s published=%s skipped=%s failed=%s",
        len(outcomes),
        result.published,
        result.skipped,
        failure_count,
    )
    return result
