"""
secp256k1 group arithmetic for DLog proofs.

Point addition and scalar multiplication are delegated to ``coincurve``,
which wraps Bitcoin Core's libsecp256k1.  Scalars live in pure Python;
reduction mod *n* is cheap next to a scalar-mult.

Encodings are fixed-width and strict:

- scalar : 32-byte big-endian integer, must be ``< ORDER``
- point  : 33-byte SEC 1 compressed form (``0x02``/``0x03`` ‖ x);
           33 zero bytes stand for the identity

Install
-------
    pip install coincurve>=18.0.0

References
----------
- SEC 1 v2 §2.3.3-2.3.4  point encoding / decoding
- SEC 2 v2 §2.4.1         secp256k1 domain parameters
"""

from __future__ import annotations

import secrets
from contextlib import contextmanager
from typing import Iterator, Optional

from coincurve import PrivateKey as _SK, PublicKey as _PK

# ── secp256k1 constants ─────────────────────────────────────────────────
ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SCALAR_BYTES = 32
COMPRESSED_BYTES = 33

_IDENTITY_BYTES = b"\x00" * COMPRESSED_BYTES


# ── Scalar  (Z_n arithmetic) ────────────────────────────────────────────
class Scalar:
    """Element of the scalar field  Z_n  where *n* = ``ORDER``."""

    __slots__ = ("_v",)

    def __init__(self, value: int) -> None:
        self._v = value % ORDER

    # constructors -----------------------------------------------------------
    @classmethod
    def zero(cls) -> Scalar:
        return cls(0)

    @classmethod
    def one(cls) -> Scalar:
        return cls(1)

    @classmethod
    def random(cls) -> Scalar:
        """Uniform in [1, n-1] via rejection sampling."""
        while True:
            c = int.from_bytes(secrets.token_bytes(SCALAR_BYTES), "big")
            if 0 < c < ORDER:
                return cls(c)

    @classmethod
    def from_bytes(cls, data: bytes) -> Scalar:
        """Strict decoding: non-canonical encodings are errors, not reduced."""
        if len(data) != SCALAR_BYTES:
            raise ValueError(f"need {SCALAR_BYTES} bytes, got {len(data)}")
        v = int.from_bytes(data, "big")
        if v >= ORDER:
            raise ValueError("scalar out of range")
        return cls(v)

    @classmethod
    def from_bytes_reduce(cls, data: bytes) -> Scalar:
        """Hash-output mapping: big-endian integer, fully reduced mod *n*."""
        return cls(int.from_bytes(data, "big"))

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        return self._v.to_bytes(SCALAR_BYTES, "big")

    @property
    def value(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    # arithmetic -------------------------------------------------------------
    def __add__(self, o: Scalar) -> Scalar:
        if not isinstance(o, Scalar):
            return NotImplemented
        return Scalar((self._v + o._v) % ORDER)

    def __sub__(self, o: Scalar) -> Scalar:
        if not isinstance(o, Scalar):
            return NotImplemented
        return Scalar((self._v - o._v) % ORDER)

    def __mul__(self, o):
        if isinstance(o, Scalar):
            return Scalar((self._v * o._v) % ORDER)
        if isinstance(o, Point):
            return o._smul(self)
        return NotImplemented

    def __rmul__(self, o):
        if isinstance(o, int):
            return Scalar((o * self._v) % ORDER)
        return NotImplemented

    def __neg__(self) -> Scalar:
        return Scalar((-self._v) % ORDER)

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, Scalar):
            return self._v == o._v
        if isinstance(o, int):
            return self._v == o % ORDER
        return False

    def __hash__(self) -> int:
        return hash(self._v)

    def __bool__(self) -> bool:
        return self._v != 0

    def __repr__(self) -> str:
        h = hex(self._v)
        return f"Scalar(0x{h[2:10]}…)" if len(h) > 14 else f"Scalar({h})"


class SecretScalar(Scalar):
    """
    Prover-owned scalar (witness or nonce) that can be wiped.

    Arithmetic on it returns plain ``Scalar`` values, so nothing derived
    from a secret, and nothing stored in a proof, can be cleared.
    """

    __slots__ = ()

    @classmethod
    def of(cls, s: Scalar) -> SecretScalar:
        """Take a private copy of *s*."""
        return cls(s.value)

    def clear(self) -> None:
        """Overwrite the held value (best-effort in Python)."""
        self._v = 0

    def __repr__(self) -> str:
        return "SecretScalar(<redacted>)"


@contextmanager
def zeroized(*scalars: SecretScalar) -> Iterator[None]:
    """Clear every given scalar when the block exits, however it exits."""
    try:
        yield
    finally:
        for s in scalars:
            s.clear()


# ── Point  (secp256k1 group element via libsecp256k1) ───────────────────
class Point:
    """
    Point on secp256k1.

    The identity (point at infinity) is represented by a flag rather than
    a ``coincurve.PublicKey``, which cannot hold it.
    """

    __slots__ = ("_pk", "_inf")

    def __init__(self, *, pk: Optional[_PK] = None, infinity: bool = False):
        self._pk: Optional[_PK] = pk
        self._inf: bool = infinity

    # constructors -----------------------------------------------------------
    @classmethod
    def generator(cls) -> Point:
        """Standard base point *G*."""
        return cls(pk=_SK(b"\x00" * 31 + b"\x01").public_key)

    @classmethod
    def identity(cls) -> Point:
        """Point at infinity — additive identity."""
        return cls(infinity=True)

    @classmethod
    def from_scalar(cls, s: Scalar) -> Point:
        """Compute *s · G*."""
        if s.is_zero():
            return cls.identity()
        return cls(pk=_SK(s.to_bytes()).public_key)

    @classmethod
    def from_bytes(cls, data: bytes) -> Point:
        """
        Deserialise a 33-byte compressed point.

        Raises ``ValueError`` on a wrong length, an unknown prefix byte or
        an x-coordinate with no point on the curve.
        """
        if len(data) != COMPRESSED_BYTES:
            raise ValueError(
                f"need {COMPRESSED_BYTES} bytes, got {len(data)}"
            )
        if data == _IDENTITY_BYTES:
            return cls.identity()
        if data[0] not in (0x02, 0x03):
            raise ValueError(f"bad point prefix 0x{data[0]:02x}")
        return cls(pk=_PK(bytes(data)))

    # serialisation ----------------------------------------------------------
    def to_bytes_compressed(self) -> bytes:
        if self._inf:
            return _IDENTITY_BYTES
        return self._pk.format(compressed=True)  # type: ignore[union-attr]

    def to_bytes(self) -> bytes:
        return self.to_bytes_compressed()

    @property
    def x(self) -> int:
        if self._inf:
            return 0
        raw = self._pk.format(compressed=False)  # type: ignore[union-attr]
        return int.from_bytes(raw[1:33], "big")

    @property
    def y(self) -> int:
        if self._inf:
            return 0
        raw = self._pk.format(compressed=False)  # type: ignore[union-attr]
        return int.from_bytes(raw[33:65], "big")

    def is_inf(self) -> bool:
        return self._inf

    # group operations -------------------------------------------------------
    def _smul(self, s: Scalar) -> Point:
        """Scalar multiplication  s · self  (C speed)."""
        if self._inf or s.is_zero():
            return Point.identity()
        copy = _PK(self._pk.format())  # type: ignore[union-attr]
        return Point(pk=copy.multiply(s.to_bytes()))

    def __neg__(self) -> Point:
        if self._inf:
            return self
        raw = bytearray(self._pk.format(compressed=True))  # type: ignore
        raw[0] ^= 0x01            # 0x02 ↔ 0x03 flip parity
        return Point(pk=_PK(bytes(raw)))

    def __add__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        if self._inf:
            return o
        if o._inf:
            return self
        # libsecp256k1 refuses to combine P and -P
        if self._pk.format() == (-o)._pk.format():  # type: ignore
            return Point.identity()
        return Point(pk=_PK.combine_keys(
            [self._pk, o._pk]))  # type: ignore[list-item]

    def __sub__(self, o: Point) -> Point:
        return self + (-o)

    def __mul__(self, s) -> Point:
        if isinstance(s, Scalar):
            return self._smul(s)
        if isinstance(s, int):
            return self._smul(Scalar(s))
        return NotImplemented

    def __rmul__(self, s) -> Point:
        return self.__mul__(s)

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        if self._inf and o._inf:
            return True
        if self._inf or o._inf:
            return False
        return self._pk.format() == o._pk.format()  # type: ignore

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        if self._inf:
            return "Point(∞)"
        return f"Point(0x{self.x:064x})"[:42] + "…)"


# ── module-level generator ──────────────────────────────────────────────
G = Point.generator()
