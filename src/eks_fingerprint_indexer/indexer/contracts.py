"""Capability contracts consumed by the reconciliation core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ClusterIdentity:
    name: str
    issuer_url: str


class ClusterDirectory(Protocol):
    def list_clusters(self) -> list[str]: ...

    def describe_issuer(self, cluster_name: str) -> str: ...


class ParameterStore(Protocol):
    def exists(self, key: str) -> bool: ...

    def put(self, key: str, value: str, *, overwrite: bool) -> None: ...
