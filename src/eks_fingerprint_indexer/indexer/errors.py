"""Error taxonomy for the fingerprint indexer."""

from __future__ import annotations


class IndexerError(RuntimeError):
    """Base class for indexer failures."""


class ConfigError(ValueError):
    """Raised when indexer configuration is invalid."""


class ListError(IndexerError):
    """Raised when clusters cannot be listed; aborts the whole run."""


class DescribeError(IndexerError):
    """Raised when a cluster's OIDC issuer URL cannot be resolved."""


class UnsupportedScheme(IndexerError):
    """Raised when an endpoint URL is not https."""

    def __init__(self, url: str) -> None:
        super().__init__(f"unsupported URL scheme, supported schemes: [https] url={url}")
        self.url = url


class EndpointConnectionError(IndexerError):
    """Raised when the TLS dial or handshake fails."""


class IndexOutOfRange(IndexerError):
    """Raised when the reverse index exceeds the certificate chain depth."""

    def __init__(self, reverse_index: int, chain_length: int) -> None:
        super().__init__(
            f"certificate reverse index out of range reverse_index={reverse_index} chain_length={chain_length}"
        )
        self.reverse_index = reverse_index
        self.chain_length = chain_length


class StoreError(IndexerError):
    """Raised for any parameter store failure other than a missing key on lookup."""

    def __init__(self, message: str, *, key: str, code: str | None = None) -> None:
        super().__init__(message)
        self.key = key
        self.code = code


class PartialFailure(IndexerError):
    """Raised when one or more clusters failed during a run."""

    def __init__(self, failure_count: int) -> None:
        super().__init__(f"indexer experienced failures during run failure_count={failure_count}")
        self.failure_count = failure_count
