"""Run configuration for the fingerprint indexer."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

logger = logging.getLogger("eks_fingerprint_indexer.indexer.config")

DEFAULT_CERTIFICATE_REVERSE_INDEX = 0
DEFAULT_KEY_PREFIX = "/eks_cluster_oidc_fingerprints/"
DEFAULT_OVERWRITE_EXISTING = False
DEFAULT_VERIFY_CHAIN = True
DEFAULT_REGION = "us-west-2"

KEY_PREFIX_PATTERN = re.compile(r"^/[A-Za-z0-9_/.-]+/$")

ENV_CERTIFICATE_REVERSE_INDEX = "CERT_REVERSE_INDEX"
ENV_KEY_PREFIX = "SSM_KEY_PREFIX"
ENV_OVERWRITE_EXISTING = "SSM_OVERWRITE"
ENV_VERIFY_CHAIN = "VERIFY_CERT_CHAIN"
ENV_REGION = "AWS_REGION"

_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class RunConfig(BaseModel):
    certificate_reverse_index: int = Field(
        DEFAULT_CERTIFICATE_REVERSE_INDEX,
        ge=0,
        description="Reverse index of the certificate to fingerprint; 0 is the last certificate in the chain",
    )
    key_prefix: str = Field(DEFAULT_KEY_PREFIX, description="SSM parameter key prefix")
    overwrite_existing: bool = Field(DEFAULT_OVERWRITE_EXISTING, description="Overwrite existing parameters")
    verify_chain: bool = Field(DEFAULT_VERIFY_CHAIN, description="Verify TLS certificate chains on read")

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("key_prefix")
    @classmethod
    def _key_prefix(cls, value: str) -> str:
        if not KEY_PREFIX_PATTERN.match(value):
            raise ValueError(f"key_prefix must match {KEY_PREFIX_PATTERN.pattern}")
        return value

    def parameter_key(self, cluster_name: str) -> str:
        return f"{self.key_prefix}{cluster_name}"


def build_run_config(**values: Any) -> RunConfig:
    """Construct a RunConfig, reporting validation problems as ConfigError."""
    try:
        return RunConfig(**{key: value for key, value in values.items() if value is not None})
    except ValidationError as exc:
        raise ConfigError(f"invalid indexer configuration: {exc}") from exc


def parse_bool(value: str, *, name: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {value!r}")


def parse_int(value: str, *, name: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def run_config_from_env(environ: Mapping[str, str] | None = None) -> RunConfig:
    """Build a RunConfig from environment variables, falling back to defaults."""
    env = os.environ if environ is None else environ

    def _get(name: str) -> str | None:
        value = env.get(name)
        if value is None or not value.strip():
            return None
        return value

    raw_index = _get(ENV_CERTIFICATE_REVERSE_INDEX)
    raw_overwrite = _get(ENV_OVERWRITE_EXISTING)
    raw_verify = _get(ENV_VERIFY_CHAIN)
    return build_run_config(
        certificate_reverse_index=(
            parse_int(raw_index, name=ENV_CERTIFICATE_REVERSE_INDEX) if raw_index is not None else None
        ),
        key_prefix=_get(ENV_KEY_PREFIX),
        overwrite_existing=(
            parse_bool(raw_overwrite, name=ENV_OVERWRITE_EXISTING) if raw_overwrite is not None else None
        ),
        verify_chain=parse_bool(raw_verify, name=ENV_VERIFY_CHAIN) if raw_verify is not None else None,
    )


def resolve_region(explicit: str | None, environ: Mapping[str, str] | None = None) -> str:
    """AWS_REGION from the environment wins over an explicit setting."""
    env = os.environ if environ is None else environ
    env_region = (env.get(ENV_REGION) or "").strip()
    if env_region:
        logger.info("setting region from env variable region=%s", env_region)
        return env_region
    region = explicit or DEFAULT_REGION
    logger.info("setting region from input region=%s", region)
    return region


def _expand_str(value: str) -> str:
    def replacer(match: re.Match[str]) -> str:
        token = match.group(1)
        if ":-" in token:
            key, default = token.split(":-", 1)
            actual = os.getenv(key, "")
            return actual if actual.strip() else default
        actual = os.getenv(token, "")
        if not actual.strip():
            raise ConfigError(f"missing environment variable: {token}")
        return actual

    return _VAR_PATTERN.sub(replacer, value)


def _expand_payload(value: Any) -> Any:
    if isinstance(value, str):
        return _expand_str(value)
    if isinstance(value, list):
        return [_expand_payload(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _expand_payload(item) for key, item in value.items()}
    return value


def load_run_config_file(path: Path) -> dict[str, Any]:
    """Read a YAML config file into keyword overrides for `build_run_config`.

    Recognised keys are the RunConfig fields plus `region`. String values may
    reference environment variables as ``${VAR}`` or ``${VAR:-default}``.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"indexer config must be a mapping path={path}")
    return _expand_payload(data)
