from eks_fingerprint_indexer.indexer.lambda_handler import handler  # noqa: F401
