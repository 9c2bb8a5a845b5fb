"""
dlog-proof: non-interactive zero-knowledge proof of knowledge of a
discrete logarithm on secp256k1.

Schnorr's sigma protocol, made non-interactive with Fiat-Shamir.  A
prover who knows  x  with  Y = x·G  convinces anyone of that fact
without revealing  x.  Group arithmetic is delegated to libsecp256k1
via ``coincurve``.

Quick start
-----------
::

    from dlog_proof import DLogProof, Point, Scalar

    x = Scalar.random()
    Y = Point.from_scalar(x)

    proof = DLogProof.prove(x, Y, session_id=b"sid", party_id=1)
    blob = proof.to_json()

    received = DLogProof.from_json(blob)
    assert received.verify(Y, session_id=b"sid", party_id=1)
"""

__version__ = "0.1.0"

# ── core types ──────────────────────────────────────────────────────────
from .curve import Scalar, SecretScalar, Point, G, ORDER, zeroized

# ── proof ───────────────────────────────────────────────────────────────
from .proof import DLogProof, Verdict, PROOF_BYTES

# ── collaborators ───────────────────────────────────────────────────────
from .hash import hash_dlog_challenge, hash_to_scalar
from .rng import RandomSource, draw_nonzero_scalar

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    DLogProofError,
    InvalidWitness,
    RandomnessUnavailable,
    DecodeError,
)

__all__ = [
    # version
    "__version__",
    # core
    "Scalar", "SecretScalar", "Point", "G", "ORDER", "zeroized",
    # proof
    "DLogProof", "Verdict", "PROOF_BYTES",
    # collaborators
    "hash_dlog_challenge", "hash_to_scalar",
    "RandomSource", "draw_nonzero_scalar",
    # errors
    "DLogProofError", "InvalidWitness", "RandomnessUnavailable",
    "DecodeError",
]
