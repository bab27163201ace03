"""EKS OIDC issuer fingerprint indexer."""

from .config import RunConfig, build_run_config, run_config_from_env
from .errors import ListError, PartialFailure
from .reconciler import ClusterReconciler, ReconcileOutcome
from .runner import RunResult, run_indexer

__all__ = [
    "ClusterReconciler",
    "ListError",
    "PartialFailure",
    "ReconcileOutcome",
    "RunConfig",
    "RunResult",
    "build_run_config",
    "run_config_from_env",
    "run_indexer",
]
