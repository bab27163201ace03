"""
Top-level package for the EKS OIDC fingerprint indexer.

The reconciliation core lives under `eks_fingerprint_indexer.indexer`; the
SSM parameter gateway is shared from `eks_fingerprint_indexer.utils`.
"""

__all__: list[str] = []
