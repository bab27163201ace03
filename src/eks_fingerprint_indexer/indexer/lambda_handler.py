"""Lambda entry point: configuration from the environment, ambient credentials."""

from __future__ import annotations

import logging
from typing import Any

from eks_fingerprint_indexer.utils.param_store import SsmParameterStore

from .clusters import EksClusterDirectory
from .config import resolve_region, run_config_from_env
from .logging_utils import configure_logging
from .runner import run_indexer

logger = logging.getLogger("eks_fingerprint_indexer.indexer.lambda_handler")


def handler(event: Any, context: Any) -> dict[str, Any]:
    """Run the indexer once; raise on listing failure or any per-cluster failure."""
    configure_logging()
    config = run_config_from_env()
    region = resolve_region(None)
    clusters = EksClusterDirectory(region=region)
    store = SsmParameterStore(region=region)
    result = run_indexer(config, clusters, store)
    result.raise_for_failures()
    return dict(result.summary())
