"""
Domain-separated hash functions used as the Fiat-Shamir random oracle.

Convention follows BIP-340 tagged hashes:

    H_tag(x) = SHA-256( SHA-256(tag) ‖ SHA-256(tag) ‖ x )

Hash-to-scalar is pinned to one convention: the 32-byte digest is read
as a **big-endian** integer and **fully reduced** mod *n* (no
truncation, no rejection).  For secp256k1 the resulting bias is below
2^-127.  Prover and verifier must agree on this exactly, otherwise
honest proofs fail to verify.
"""

from __future__ import annotations

import hashlib
from typing import Any

from .curve import Scalar, Point, SCALAR_BYTES


# ── domain tags ─────────────────────────────────────────────────────────
_TAG_CHALLENGE = b"dlog-proof/v1/challenge"
_TAG_SCALAR    = b"dlog-proof/v1/hash_to_scalar"


# ── internal helpers ────────────────────────────────────────────────────
def _tagged_hasher(tag: bytes) -> hashlib._Hash:
    """Return a SHA-256 context pre-loaded with the BIP-340 tag prefix."""
    tag_hash = hashlib.sha256(tag).digest()
    h = hashlib.sha256()
    h.update(tag_hash)
    h.update(tag_hash)
    return h


def _encode_item(item: Any) -> bytes:
    """
    Canonical encoding of a transcript element for hashing.

    Points, scalars and ints are fixed-width; ``bytes`` are
    length-prefixed, so the concatenation of items parses one way only.
    """
    if isinstance(item, bytes):
        return len(item).to_bytes(4, "big") + item
    if isinstance(item, bool):
        raise TypeError("cannot hash bool transcript item")
    if isinstance(item, int):
        if not 0 <= item < 2 ** (8 * SCALAR_BYTES):
            raise ValueError("integer out of range for a 32-byte field")
        return item.to_bytes(SCALAR_BYTES, "big")
    if isinstance(item, Scalar):
        return item.to_bytes()
    if isinstance(item, Point):
        return item.to_bytes_compressed()
    raise TypeError(f"cannot hash transcript item of type {type(item).__name__}")


def _tagged_hash(tag: bytes, *args: Any) -> bytes:
    """Compute BIP-340 tagged hash over arbitrary protocol elements."""
    h = _tagged_hasher(tag)
    for a in args:
        h.update(_encode_item(a))
    return h.digest()


def _tagged_scalar(tag: bytes, *args: Any) -> Scalar:
    """Hash to scalar: H_tag(*args) → Z_n."""
    return Scalar.from_bytes_reduce(_tagged_hash(tag, *args))


# ── public hash functions ───────────────────────────────────────────────

def hash_to_scalar(*args: Any) -> Scalar:
    """General-purpose hash to scalar with default domain."""
    return _tagged_scalar(_TAG_SCALAR, *args)


def hash_dlog_challenge(
    base: Point,
    public: Point,
    commitment: Point,
    session_id: bytes = b"",
    party_id: int = 0,
) -> Scalar:
    r"""
    Fiat-Shamir challenge  e = H(sid, pid, G, Y, T) mod n.

    ``session_id`` and ``party_id`` bind the proof to one protocol run
    and one participant, so a proof cannot be replayed from another
    session or claimed by another party.  Leave them at their defaults
    for a context-free proof.
    """
    return _tagged_scalar(
        _TAG_CHALLENGE, session_id, party_id, base, public, commitment,
    )
