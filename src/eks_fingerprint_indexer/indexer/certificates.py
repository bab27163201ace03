"""Certificate selection and fingerprinting."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
from typing import Sequence

from cryptography import x509

from .errors import IndexOutOfRange


@dataclass(frozen=True)
class PeerCertificate:
    der: bytes

    @property
    def fingerprint(self) -> str:
        return fingerprint_certificate(self.der)

    @property
    def subject(self) -> str:
        # Log context only; a certificate that cannot be parsed is still fingerprinted.
        try:
            return x509.load_der_x509_certificate(self.der).subject.rfc4514_string()
        except ValueError:
            return "<unparseable>"


CertificateChain = tuple[PeerCertificate, ...]


def fingerprint_certificate(der: bytes) -> str:
    """Return the lowercase hex SHA-1 digest of raw DER certificate bytes.

    SHA-1 matches the thumbprint format IAM OIDC identity providers expect, so
    published values stay comparable with provider configuration across runs.
    """
    return hashlib.sha1(der, usedforsecurity=False).hexdigest()


def select_certificate(chain: Sequence[PeerCertificate], reverse_index: int) -> PeerCertificate:
    """Pick the certificate `reverse_index` positions from the end of a leaf-first chain."""
    position = len(chain) - reverse_index - 1
    if reverse_index < 0 or position < 0 or position >= len(chain):
        raise IndexOutOfRange(reverse_index, len(chain))
    return chain[position]
