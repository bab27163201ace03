"""EKS cluster directory: cluster listing and OIDC issuer discovery."""

from __future__ import annotations

import logging
import os

import boto3  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError

from .errors import DescribeError, ListError

logger = logging.getLogger("eks_fingerprint_indexer.indexer.clusters")


class EksClusterDirectory:
    def __init__(self, *, region: str | None = None, endpoint_url: str | None = None) -> None:
        self.region = region or os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
        self._client = boto3.client("eks", region_name=self.region, endpoint_url=endpoint_url)

    def list_clusters(self) -> list[str]:
        logger.info("listing clusters region=%s", self.region)
        names: list[str] = []
        try:
            paginator = self._client.get_paginator("list_clusters")
            for page in paginator.paginate():
                names.extend(page.get("clusters", []))
        except (ClientError, BotoCoreError) as exc:
            raise ListError(f"unable to list EKS clusters: {exc}") from exc
        return names

    def describe_issuer(self, cluster_name: str) -> str:
        logger.info("describing cluster cluster=%s", cluster_name)
        try:
            response = self._client.describe_cluster(name=cluster_name)
        except (ClientError, BotoCoreError) as exc:
            raise DescribeError(f"unable to describe cluster={cluster_name}: {exc}") from exc
        issuer = (
            response.get("cluster", {})
            .get("identity", {})
            .get("oidc", {})
            .get("issuer")
        )
        if not issuer:
            raise DescribeError(f"cluster has no OIDC issuer cluster={cluster_name}")
        return str(issuer)
