"""TLS endpoint reader returning the peer certificate chain as presented."""

from __future__ import annotations

import logging
import socket
import ssl
from typing import Callable
from urllib.parse import urlsplit

from .certificates import CertificateChain, PeerCertificate
from .errors import EndpointConnectionError, UnsupportedScheme

logger = logging.getLogger("eks_fingerprint_indexer.indexer.endpoint")

DEFAULT_HTTPS_PORT = 443
DEFAULT_DIAL_TIMEOUT_SECONDS = 10.0

Dial = Callable[[str, int, bool], CertificateChain]


def resolve_endpoint(endpoint_url: str) -> tuple[str, int]:
    """Return (host, port) for an https URL, defaulting the port to 443."""
    try:
        parsed = urlsplit(endpoint_url)
        port = parsed.port
    except ValueError as exc:
        raise UnsupportedScheme(endpoint_url) from exc
    if parsed.scheme != "https" or not parsed.hostname:
        raise UnsupportedScheme(endpoint_url)
    return parsed.hostname, port or DEFAULT_HTTPS_PORT


def _tls_context(verify_chain: bool) -> ssl.SSLContext:
    context = ssl.create_default_context()
    if not verify_chain:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def dial_tls(
    host: str,
    port: int,
    verify_chain: bool,
    *,
    timeout_seconds: float = DEFAULT_DIAL_TIMEOUT_SECONDS,
) -> CertificateChain:
    """Perform one TLS handshake and return the peer chain, leaf first."""
    context = _tls_context(verify_chain)
    try:
        with socket.create_connection((host, port), timeout=timeout_seconds) as sock:
            with context.wrap_socket(sock, server_hostname=host) as tls_sock:
                raw_chain = tls_sock.get_unverified_chain() or []
    except (OSError, ssl.SSLError) as exc:
        raise EndpointConnectionError(f"TLS dial failed host={host} port={port}: {exc}") from exc
    return tuple(PeerCertificate(der=bytes(item)) for item in raw_chain)


def read_peer_chain(
    endpoint_url: str,
    verify_chain: bool,
    *,
    dial: Dial = dial_tls,
) -> CertificateChain:
    host, port = resolve_endpoint(endpoint_url)
    logger.info("reading certificates endpoint=%s verify_chain=%s", endpoint_url, verify_chain)
    chain = dial(host, port, verify_chain)
    if not chain:
        raise EndpointConnectionError(f"peer presented no certificates host={host} port={port}")
    logger.debug("peer chain endpoint=%s depth=%s", endpoint_url, len(chain))
    return chain
