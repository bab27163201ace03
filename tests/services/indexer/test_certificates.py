from __future__ import annotations

import hashlib

import pytest

from eks_fingerprint_indexer.indexer.certificates import (
    PeerCertificate,
    fingerprint_certificate,
    select_certificate,
)
from eks_fingerprint_indexer.indexer.errors import IndexOutOfRange


def _chain(length: int) -> tuple[PeerCertificate, ...]:
    return tuple(PeerCertificate(der=f"cert-{index}".encode("ascii")) for index in range(length))


@pytest.mark.parametrize("length", [1, 2, 3, 5])
def test_select_certificate_counts_from_end_of_chain(length: int) -> None:
    chain = _chain(length)
    for reverse_index in range(length):
        assert select_certificate(chain, reverse_index) is chain[length - reverse_index - 1]


def test_select_certificate_default_index_picks_last() -> None:
    chain = _chain(3)
    assert select_certificate(chain, 0).der == b"cert-2"


@pytest.mark.parametrize(("length", "reverse_index"), [(1, 1), (3, 3), (3, 10), (0, 0), (2, -1)])
def test_select_certificate_out_of_range(length: int, reverse_index: int) -> None:
    with pytest.raises(IndexOutOfRange) as excinfo:
        select_certificate(_chain(length), reverse_index)
    assert excinfo.value.chain_length == length
    assert excinfo.value.reverse_index == reverse_index


def test_fingerprint_is_lowercase_sha1_hex() -> None:
    der = b"\x30\x82\x01\x0a-not-really-der"
    fingerprint = fingerprint_certificate(der)

    assert fingerprint == hashlib.sha1(der).hexdigest()
    assert len(fingerprint) == 40
    assert fingerprint == fingerprint.lower()
    assert all(ch in "0123456789abcdef" for ch in fingerprint)


def test_fingerprint_is_deterministic_and_distinguishes_inputs() -> None:
    assert fingerprint_certificate(b"same") == fingerprint_certificate(b"same")
    assert fingerprint_certificate(b"same") != fingerprint_certificate(b"other")
    assert PeerCertificate(der=b"same").fingerprint == fingerprint_certificate(b"same")


def test_subject_of_unparseable_certificate_is_placeholder() -> None:
    assert PeerCertificate(der=b"garbage").subject == "<unparseable>"
