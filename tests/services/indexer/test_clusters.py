from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from eks_fingerprint_indexer.indexer.clusters import EksClusterDirectory
from eks_fingerprint_indexer.indexer.errors import DescribeError, ListError


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation_name=operation)


class _FakePaginator:
    def __init__(self, pages: list[dict], error: Exception | None = None) -> None:
        self.pages = pages
        self.error = error

    def paginate(self, **kwargs):  # type: ignore[no-untyped-def]
        for page in self.pages:
            yield page
        if self.error is not None:
            raise self.error


class _FakeEksClient:
    def __init__(self, pages: list[dict] | None = None, *, clusters: dict[str, dict] | None = None,
                 list_error: Exception | None = None) -> None:
        self.paginator = _FakePaginator(pages or [], list_error)
        self.clusters = clusters or {}
        self.describe_calls: list[str] = []

    def get_paginator(self, operation_name: str) -> _FakePaginator:
        assert operation_name == "list_clusters"
        return self.paginator

    def describe_cluster(self, *, name: str):  # type: ignore[no-untyped-def]
        self.describe_calls.append(name)
        if name not in self.clusters:
            raise _client_error("ResourceNotFoundException", "DescribeCluster")
        return {"cluster": self.clusters[name]}


def _directory(fake: _FakeEksClient) -> EksClusterDirectory:
    directory = EksClusterDirectory(region="us-west-2")
    directory._client = fake  # type: ignore[attr-defined]
    return directory


def test_list_clusters_collects_all_pages() -> None:
    fake = _FakeEksClient([{"clusters": ["a", "b"], "nextToken": "t"}, {"clusters": ["c"]}])

    assert _directory(fake).list_clusters() == ["a", "b", "c"]


def test_list_clusters_failure_is_list_error() -> None:
    fake = _FakeEksClient([{"clusters": ["a"]}], list_error=_client_error("AccessDeniedException", "ListClusters"))

    with pytest.raises(ListError):
        _directory(fake).list_clusters()


def test_describe_issuer_returns_oidc_issuer() -> None:
    issuer = "https://oidc.eks.us-west-2.amazonaws.com/id/EXAMPLED539D4633E53DE1B71EXAMPLE"
    fake = _FakeEksClient(clusters={"prod": {"name": "prod", "identity": {"oidc": {"issuer": issuer}}}})

    assert _directory(fake).describe_issuer("prod") == issuer


def test_describe_issuer_failure_is_describe_error() -> None:
    with pytest.raises(DescribeError, match="cluster=missing"):
        _directory(_FakeEksClient()).describe_issuer("missing")


def test_describe_issuer_without_oidc_identity_is_describe_error() -> None:
    fake = _FakeEksClient(clusters={"bare": {"name": "bare"}})

    with pytest.raises(DescribeError, match="no OIDC issuer"):
        _directory(fake).describe_issuer("bare")
