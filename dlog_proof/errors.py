"""
Exception classes.

A rejected proof is not an exception: see ``Verdict`` in
:mod:`dlog_proof.proof`.
"""


class DLogProofError(Exception):
    """Base class for errors raised by this package."""


class InvalidWitness(DLogProofError, ValueError):
    """Secret is zero or does not match the public point."""


class RandomnessUnavailable(DLogProofError, RuntimeError):
    """Secure random source failed. Fatal: never retry or substitute."""


class DecodeError(DLogProofError, ValueError):
    """Serialized proof is malformed or not in canonical form."""
