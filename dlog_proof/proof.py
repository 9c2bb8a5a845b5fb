"""
Non-interactive zero-knowledge proof of knowledge of a discrete log.

Schnorr's sigma protocol (commit, challenge, response) made
non-interactive with the Fiat-Shamir transform in the Random Oracle
Model.  A prover holding  x  with  Y = x·G  outputs

    T = r·G,    e = H(sid, pid, G, Y, T) mod n,    s = r + e·x mod n

and a verifier accepts iff the stored  e  is the recomputed one and

    s·G  ==  T + e·Y.

The challenge is stored in the proof so that a verifier can reject a
transcript whose challenge was not derived from its own commitment
before doing any group arithmetic.

Wire formats
------------
binary (97 B) :  T (33, compressed)  ‖  e (32, BE)  ‖  s (32, BE)
JSON          :  {"commitment": hex, "challenge": hex, "response": hex}

Decoding is strict: scalars ``>= n`` and points off the curve are
rejected, never reduced or repaired.

References
----------
- Schnorr (1989). "Efficient Identification and Signatures for Smart
  Cards."  CRYPTO 1989.
- Fiat & Shamir (1986). "How to Prove Yourself."  CRYPTO 1986.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, List, Mapping, Tuple

from .curve import (
    Scalar,
    SecretScalar,
    Point,
    G,
    SCALAR_BYTES,
    COMPRESSED_BYTES,
    zeroized,
)
from .errors import DecodeError, InvalidWitness
from .hash import hash_dlog_challenge
from .rng import RandomSource, default_source, draw_nonzero_scalar

logger = logging.getLogger(__name__)

PROOF_BYTES = COMPRESSED_BYTES + 2 * SCALAR_BYTES

_FIELDS = ("commitment", "challenge", "response")
_HEX_RE = re.compile(r"[0-9a-f]*")


class Verdict(Enum):
    """Outcome of checking a proof.  Every member but ACCEPTED is a rejection."""

    ACCEPTED = auto()
    DEGENERATE_STATEMENT = auto()   # Y or base is the identity
    CHALLENGE_MISMATCH = auto()     # e != H(…, T)
    EQUATION_MISMATCH = auto()      # s·G != T + e·Y

    @property
    def accepted(self) -> bool:
        return self is Verdict.ACCEPTED


@dataclass(frozen=True)
class DLogProof:
    """
    Proof of knowledge of  x  such that  Y = x·base.

    Immutable: built once by :meth:`prove`, read by :meth:`verify`.
    Holds no reference to the witness or the ephemeral scalar.
    """

    commitment: Point      # T = r · base
    challenge: Scalar      # e = H(sid, pid, base, Y, T)
    response: Scalar       # s = r + e · x

    def __post_init__(self) -> None:
        # fields hold plain scalars only, never a clearable SecretScalar
        for name in ("challenge", "response"):
            value = getattr(self, name)
            if type(value) is not Scalar:
                object.__setattr__(self, name, Scalar(value.value))

    # ── proving ─────────────────────────────────────────────────────────

    @staticmethod
    def prove(
        secret: Scalar,
        public: Point,
        base: Point = G,
        *,
        session_id: bytes = b"",
        party_id: int = 0,
        rng: RandomSource = default_source,
    ) -> DLogProof:
        """
        Produce a proof for  (secret, public = secret·base).

        Parameters
        ----------
        secret : Scalar
            The witness *x*.  Not modified; a working copy is cleared
            before returning.
        public : Point
            The statement *Y*.  Recomputed from *secret* and checked.
        base : Point
            Generator the discrete log is taken to.  Defaults to *G*.
        session_id, party_id
            Context bound into the challenge; the verifier must pass the
            same values.
        rng
            Source of the ephemeral scalar *r*.  A returned
            ``SecretScalar`` is owned and cleared after use; a plain
            ``Scalar`` is copied and the copy cleared.

        Raises
        ------
        InvalidWitness
            If *secret* is zero or ``secret·base != public``.
        RandomnessUnavailable
            If *rng* cannot produce a nonzero scalar.
        """
        if base.is_inf():
            raise ValueError("base point must not be the identity")
        if secret.is_zero():
            raise InvalidWitness("witness must be nonzero mod n")

        x = SecretScalar.of(secret)
        with zeroized(x):
            if x * base != public:
                raise InvalidWitness("public point does not match witness")
            nonce = draw_nonzero_scalar(rng)
            if isinstance(nonce, SecretScalar):
                r = nonce
            else:
                r = SecretScalar.of(nonce)
            with zeroized(r):
                T = r * base
                e = hash_dlog_challenge(base, public, T, session_id, party_id)
                s = r + e * x

        logger.debug("created DLog proof for %r (party %d)", public, party_id)
        return DLogProof(commitment=T, challenge=e, response=s)

    # ── verification ────────────────────────────────────────────────────

    def check(
        self,
        public: Point,
        base: Point = G,
        *,
        session_id: bytes = b"",
        party_id: int = 0,
    ) -> Verdict:
        """
        Check this proof against statement  Y = public  and say why it fails.

        1. Y (or base) at infinity is rejected: the zero witness is
           public knowledge.
        2. Recompute  e' = H(sid, pid, base, Y, T);  reject if  e' != e.
        3. Accept iff  s·base  ==  T + e'·Y.
        """
        if public.is_inf() or base.is_inf():
            verdict = Verdict.DEGENERATE_STATEMENT
        else:
            e = hash_dlog_challenge(
                base, public, self.commitment, session_id, party_id,
            )
            if e != self.challenge:
                verdict = Verdict.CHALLENGE_MISMATCH
            elif self.response * base == self.commitment + e * public:
                verdict = Verdict.ACCEPTED
            else:
                verdict = Verdict.EQUATION_MISMATCH
        logger.debug("DLog proof for %r: %s", public, verdict.name)
        return verdict

    def verify(
        self,
        public: Point,
        base: Point = G,
        *,
        session_id: bytes = b"",
        party_id: int = 0,
    ) -> bool:
        """True iff :meth:`check` accepts."""
        return self.check(
            public, base, session_id=session_id, party_id=party_id,
        ).accepted

    # ── binary encoding ─────────────────────────────────────────────────

    def to_bytes(self) -> bytes:
        """Serialise to 97 bytes: compressed T (33) + e (32) + s (32)."""
        return (
            self.commitment.to_bytes_compressed()
            + self.challenge.to_bytes()
            + self.response.to_bytes()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> DLogProof:
        if len(data) != PROOF_BYTES:
            raise DecodeError(f"expected {PROOF_BYTES} bytes, got {len(data)}")
        c_end = COMPRESSED_BYTES
        e_end = c_end + SCALAR_BYTES
        return cls(
            commitment=_decode_commitment(data[:c_end]),
            challenge=_decode_scalar("challenge", data[c_end:e_end]),
            response=_decode_scalar("response", data[e_end:]),
        )

    # ── text encoding ───────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, str]:
        return {
            "commitment": self.commitment.to_bytes_compressed().hex(),
            "challenge": self.challenge.to_bytes().hex(),
            "response": self.response.to_bytes().hex(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DLogProof:
        if not isinstance(data, Mapping):
            raise DecodeError(
                f"expected a JSON object, got {type(data).__name__}"
            )
        if set(data) != set(_FIELDS):
            raise DecodeError(
                f"expected fields {list(_FIELDS)}, got {sorted(data)}"
            )
        return cls(
            commitment=_decode_commitment(
                _unhex("commitment", data["commitment"])
            ),
            challenge=_decode_scalar(
                "challenge", _unhex("challenge", data["challenge"])
            ),
            response=_decode_scalar(
                "response", _unhex("response", data["response"])
            ),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> DLogProof:
        try:
            data = json.loads(text, object_pairs_hook=_unique_keys)
        except DecodeError:
            raise
        except (ValueError, RecursionError) as exc:
            raise DecodeError(f"invalid JSON: {exc}") from exc
        return cls.from_dict(data)


# ── decoding helpers ────────────────────────────────────────────────────

def _unique_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    """JSON object hook: a repeated key would give a second text form."""
    obj: Dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise DecodeError(f"duplicate key {key!r}")
        obj[key] = value
    return obj


def _unhex(name: str, value: Any) -> bytes:
    """Lower-case hex only, so each proof has exactly one text form."""
    if not isinstance(value, str):
        raise DecodeError(f"{name}: expected hex string")
    if not _HEX_RE.fullmatch(value) or len(value) % 2:
        raise DecodeError(f"{name}: not canonical lower-case hex")
    return bytes.fromhex(value)


def _decode_commitment(data: bytes) -> Point:
    try:
        T = Point.from_bytes(data)
    except ValueError as exc:
        raise DecodeError(f"commitment: {exc}") from exc
    if T.is_inf():
        raise DecodeError("commitment: point at infinity")
    return T


def _decode_scalar(name: str, data: bytes) -> Scalar:
    try:
        return Scalar.from_bytes(data)
    except ValueError as exc:
        raise DecodeError(f"{name}: {exc}") from exc
