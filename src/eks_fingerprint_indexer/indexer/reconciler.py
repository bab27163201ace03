"""Per-cluster reconciliation of OIDC issuer fingerprints."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from .certificates import select_certificate
from .config import RunConfig
from .contracts import ClusterDirectory, ClusterIdentity, ParameterStore
from .endpoint import Dial, dial_tls, read_peer_chain
from .errors import IndexerError

logger = logging.getLogger("eks_fingerprint_indexer.indexer.reconciler")

STATUS_PUBLISHED = "published"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"

STAGE_CHECK_EXISTING = "check_existing"
STAGE_RESOLVE_ISSUER = "resolve_issuer"
STAGE_READ_CHAIN = "read_chain"
STAGE_SELECT_AND_FINGERPRINT = "select_and_fingerprint"
STAGE_PUBLISH = "publish"
STAGE_DONE = "done"


@dataclass(frozen=True)
class ReconcileOutcome:
    cluster: str
    status: str
    stage: str
    key: str
    fingerprint: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAILED


class ClusterReconciler:
    """Drive one cluster through check -> resolve -> read -> fingerprint -> publish.

    Errors from the indexer taxonomy end the cluster in a `failed` outcome and
    are never raised to the caller.
    """

    def __init__(
        self,
        config: RunConfig,
        clusters: ClusterDirectory,
        store: ParameterStore,
        *,
        dial: Dial = dial_tls,
    ) -> None:
        self.config = config
        self.clusters = clusters
        self.store = store
        self.dial = dial

    def reconcile(self, cluster_name: str) -> ReconcileOutcome:
        key = self.config.parameter_key(cluster_name)
        stage = STAGE_CHECK_EXISTING
        try:
            if not self.config.overwrite_existing:
                logger.info("checking for existing SSM parameter cluster=%s key=%s", cluster_name, key)
                if self.store.exists(key):
                    logger.info("SSM parameter already exists cluster=%s key=%s", cluster_name, key)
                    return ReconcileOutcome(cluster=cluster_name, status=STATUS_SKIPPED, stage=STAGE_DONE, key=key)

            stage = STAGE_RESOLVE_ISSUER
            identity = ClusterIdentity(name=cluster_name, issuer_url=self.clusters.describe_issuer(cluster_name))

            stage = STAGE_READ_CHAIN
            chain = read_peer_chain(identity.issuer_url, self.config.verify_chain, dial=self.dial)

            stage = STAGE_SELECT_AND_FINGERPRINT
            certificate = select_certificate(chain, self.config.certificate_reverse_index)
            fingerprint = certificate.fingerprint
            logger.info(
                "fingerprinted certificate cluster=%s depth=%s reverse_index=%s subject=%s fingerprint=%s",
                cluster_name,
                len(chain),
                self.config.certificate_reverse_index,
                certificate.subject,
                fingerprint,
            )

            stage = STAGE_PUBLISH
            logger.info("setting SSM parameter cluster=%s key=%s", cluster_name, key)
            self.store.put(key, fingerprint, overwrite=self.config.overwrite_existing)
        except IndexerError as exc:
            logger.error(
                "cluster reconcile failed cluster=%s stage=%s key=%s error=%s: %s",
                cluster_name,
                stage,
                key,
                exc.__class__.__name__,
                exc,
            )
            return ReconcileOutcome(
                cluster=cluster_name,
                status=STATUS_FAILED,
                stage=stage,
                key=key,
                error=f"{exc.__class__.__name__}: {exc}",
            )
        return ReconcileOutcome(
            cluster=cluster_name,
            status=STATUS_PUBLISHED,
            stage=STAGE_DONE,
            key=key,
            fingerprint=fingerprint,
        )
