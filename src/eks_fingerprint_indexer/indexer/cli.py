"""CLI for one-shot fingerprint indexer runs."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from eks_fingerprint_indexer.utils.param_store import SsmParameterStore

from .clusters import EksClusterDirectory
from .config import (
    DEFAULT_CERTIFICATE_REVERSE_INDEX,
    DEFAULT_KEY_PREFIX,
    DEFAULT_OVERWRITE_EXISTING,
    DEFAULT_REGION,
    DEFAULT_VERIFY_CHAIN,
    build_run_config,
    load_run_config_file,
    resolve_region,
)
from .errors import ConfigError, ListError
from .logging_utils import configure_logging
from .runner import run_indexer

logger = logging.getLogger("eks_fingerprint_indexer.indexer.cli")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Index EKS OIDC issuer certificate fingerprints into SSM")
    parser.add_argument("--config", default=None, help="Path to indexer config YAML")
    parser.add_argument(
        "--cert-reverse-index",
        type=int,
        default=None,
        help=f"Reverse index of the certificate to fingerprint within chain (default {DEFAULT_CERTIFICATE_REVERSE_INDEX}, last cert)",
    )
    parser.add_argument("--region", default=None, help=f"AWS region (default {DEFAULT_REGION}; AWS_REGION wins)")
    parser.add_argument("--ssm-key-prefix", default=None, help=f"SSM parameter key prefix (default {DEFAULT_KEY_PREFIX})")
    parser.add_argument(
        "--ssm-overwrite",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=f"Overwrite SSM parameters (default {DEFAULT_OVERWRITE_EXISTING})",
    )
    parser.add_argument(
        "--verify-cert-chain",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=f"Verify TLS certificate chains on read (default {DEFAULT_VERIFY_CHAIN})",
    )
    parser.add_argument("--ssm-endpoint-url", default=None, help="Override SSM endpoint (e.g. LocalStack)")
    parser.add_argument("--eks-endpoint-url", default=None, help="Override EKS endpoint (e.g. LocalStack)")
    parser.add_argument("--log-level", default=None, help="Logging level (default LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    try:
        overrides = load_run_config_file(Path(args.config)) if args.config else {}
        file_region = overrides.pop("region", None)
        flags = {
            "certificate_reverse_index": args.cert_reverse_index,
            "key_prefix": args.ssm_key_prefix,
            "overwrite_existing": args.ssm_overwrite,
            "verify_chain": args.verify_cert_chain,
        }
        overrides.update({key: value for key, value in flags.items() if value is not None})
        config = build_run_config(**overrides)
    except (ConfigError, OSError) as exc:
        logger.error("invalid configuration: %s", exc)
        return EXIT_CONFIG

    region = resolve_region(args.region or file_region)
    clusters = EksClusterDirectory(region=region, endpoint_url=args.eks_endpoint_url)
    store = SsmParameterStore(region=region, endpoint_url=args.ssm_endpoint_url)
    try:
        result = run_indexer(config, clusters, store)
    except ListError as exc:
        logger.error("unable to list EKS clusters: %s", exc)
        return EXIT_FAILED
    print(json.dumps(result.summary(), sort_keys=True))
    return EXIT_OK if result.ok else EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
