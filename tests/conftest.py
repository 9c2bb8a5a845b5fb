import pytest

from dlog_proof import DLogProof, Point, Scalar


@pytest.fixture
def witness():
    return Scalar.random()


@pytest.fixture
def public(witness):
    return Point.from_scalar(witness)


@pytest.fixture
def proof(witness, public):
    return DLogProof.prove(witness, public)


@pytest.fixture
def fixed_rng():
    """Ephemeral-scalar source that always yields r = 0x5eed."""
    return lambda: Scalar(0x5EED)


@pytest.fixture
def off_curve_x():
    """Smallest x with no secp256k1 point: x^3 + 7 is a non-residue mod p."""
    p = 2 ** 256 - 2 ** 32 - 977
    x = 1
    while True:
        y_sq = (pow(x, 3, p) + 7) % p
        if pow(y_sq, (p - 1) // 2, p) != 1:
            return x
        x += 1
