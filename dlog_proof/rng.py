"""
Secure randomness for the prover's ephemeral scalar.

A random source is any zero-argument callable returning a fresh nonzero
``Scalar``.  The default, ``SecretScalar.random``, reads the OS
CSPRNG via ``secrets`` and returns a scalar the prover can wipe.
Tests substitute a fixed source to make proofs deterministic; nothing
else should.
"""

from __future__ import annotations

from typing import Callable

from .curve import Scalar, SecretScalar
from .errors import RandomnessUnavailable

RandomSource = Callable[[], Scalar]

default_source: RandomSource = SecretScalar.random


def draw_nonzero_scalar(rng: RandomSource = default_source) -> Scalar:
    """
    Draw one scalar in [1, n-1] from *rng*.

    Raises
    ------
    RandomnessUnavailable
        If the source fails or returns something other than a nonzero
        scalar.  The caller must not fall back to a weaker source.
    """
    try:
        r = rng()
    except (OSError, NotImplementedError) as exc:
        raise RandomnessUnavailable("secure random source failed") from exc
    if not isinstance(r, Scalar):
        raise RandomnessUnavailable(
            f"random source returned {type(r).__name__}, expected Scalar"
        )
    if r.is_zero():
        raise RandomnessUnavailable("random source returned zero")
    return r
