"""
SSM Parameter Store gateway.

Existence check, lookup and conditional put of plain String parameters.
A missing parameter is a normal outcome for `exists`/`get`; every other
failure is surfaced as `StoreError` and never mistaken for "absent".
"""

from __future__ import annotations

import logging
import os

import boto3  # type: ignore
from botocore.exceptions import BotoCoreError, ClientError

from eks_fingerprint_indexer.indexer.errors import StoreError

logger = logging.getLogger("eks_fingerprint_indexer.utils.param_store")

_NOT_FOUND_CODES = {"ParameterNotFound"}
ALREADY_EXISTS_CODE = "ParameterAlreadyExists"


def _error_code(exc: ClientError) -> str | None:
    return exc.response.get("Error", {}).get("Code")


class SsmParameterStore:
    def __init__(self, *, region: str | None = None, endpoint_url: str | None = None) -> None:
        self.region = region or os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
        self._client = boto3.client("ssm", region_name=self.region, endpoint_url=endpoint_url)

    def get(self, key: str) -> str | None:
        """Return the parameter value at `key`, or None when it does not exist."""
        try:
            response = self._client.get_parameter(Name=key, WithDecryption=False)
        except ClientError as exc:
            code = _error_code(exc)
            if code in _NOT_FOUND_CODES:
                return None
            raise StoreError(f"unable to get SSM parameter key={key}: {exc}", key=key, code=code) from exc
        except BotoCoreError as exc:
            raise StoreError(f"unable to get SSM parameter key={key}: {exc}", key=key) from exc
        return response["Parameter"]["Value"]

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def put(self, key: str, value: str, *, overwrite: bool) -> None:
        try:
            self._client.put_parameter(
                Name=key,
                Value=value,
                Type="String",
                Overwrite=overwrite,
            )
        except ClientError as exc:
            code = _error_code(exc)
            raise StoreError(f"unable to set SSM parameter key={key}: {exc}", key=key, code=code) from exc
        except BotoCoreError as exc:
            raise StoreError(f"unable to set SSM parameter key={key}: {exc}", key=key) from exc
        logger.info("SSM parameter set key=%s overwrite=%s", key, overwrite)
