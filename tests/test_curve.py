import pytest

from dlog_proof.curve import (
    Scalar,
    SecretScalar,
    Point,
    G,
    ORDER,
    SCALAR_BYTES,
    COMPRESSED_BYTES,
    zeroized,
)


def test_scalar_reduces_mod_order():
    assert Scalar(ORDER + 5) == Scalar(5)
    assert Scalar(-1).value == ORDER - 1


def test_scalar_random_in_range():
    for _ in range(20):
        s = Scalar.random()
        assert 0 < s.value < ORDER


def test_scalar_bytes_are_fixed_width_big_endian():
    b = Scalar(1).to_bytes()
    assert len(b) == SCALAR_BYTES
    assert b == b"\x00" * 31 + b"\x01"
    assert Scalar.from_bytes(b) == Scalar(1)


@pytest.mark.parametrize("value", [ORDER, ORDER + 1, 2 ** 256 - 1])
def test_scalar_from_bytes_rejects_non_canonical(value):
    with pytest.raises(ValueError):
        Scalar.from_bytes(value.to_bytes(32, "big"))


@pytest.mark.parametrize("length", [0, 31, 33])
def test_scalar_from_bytes_rejects_wrong_length(length):
    with pytest.raises(ValueError):
        Scalar.from_bytes(b"\x01" * length)


def test_scalar_from_bytes_reduce():
    assert Scalar.from_bytes_reduce(ORDER.to_bytes(32, "big")) == Scalar.zero()
    assert Scalar.from_bytes_reduce((ORDER + 3).to_bytes(33, "big")) == 3


def test_scalar_arithmetic():
    a, b = Scalar(10), Scalar(3)
    assert a + b == 13
    assert a - b == 7
    assert b - a == Scalar(-7)
    assert a * b == 30
    assert -a + a == Scalar.zero()
    assert 2 * a == 20


def test_point_generator_roundtrip():
    data = G.to_bytes()
    assert len(data) == COMPRESSED_BYTES
    assert data[0] in (0x02, 0x03)
    assert Point.from_bytes(data) == G


def test_point_identity_encoding():
    O = Point.identity()
    assert O.to_bytes() == b"\x00" * COMPRESSED_BYTES
    assert Point.from_bytes(O.to_bytes()).is_inf()


def test_point_group_law():
    seven_g = Point.from_scalar(Scalar(7))
    acc = Point.identity()
    for _ in range(7):
        acc = acc + G
    assert acc == seven_g
    assert Scalar(7) * G == seven_g
    assert G * Scalar(7) == seven_g
    assert 7 * G == seven_g
    assert seven_g - seven_g == Point.identity()
    assert G + (-G) == Point.identity()
    assert Scalar.zero() * G == Point.identity()


def test_point_from_bytes_rejects_off_curve(off_curve_x):
    data = b"\x02" + off_curve_x.to_bytes(32, "big")
    with pytest.raises(ValueError):
        Point.from_bytes(data)


def test_point_from_bytes_rejects_x_above_field_prime():
    with pytest.raises(ValueError):
        Point.from_bytes(b"\x02" + b"\xff" * 32)


def test_point_from_bytes_rejects_uncompressed_and_bad_prefix():
    uncompressed = b"\x04" + G.x.to_bytes(32, "big") + G.y.to_bytes(32, "big")
    with pytest.raises(ValueError):
        Point.from_bytes(uncompressed)
    with pytest.raises(ValueError):
        Point.from_bytes(b"\x04" + G.to_bytes()[1:])


def test_zeroized_clears_on_normal_exit():
    a, b = SecretScalar(11), SecretScalar(12)
    with zeroized(a, b):
        assert a == 11
    assert a.is_zero() and b.is_zero()


def test_zeroized_clears_on_exception():
    a = SecretScalar(11)
    with pytest.raises(RuntimeError):
        with zeroized(a):
            raise RuntimeError("boom")
    assert a.is_zero()


def test_public_scalar_cannot_be_cleared():
    s = Scalar(11)
    assert not hasattr(s, "clear")
    with pytest.raises(AttributeError):
        with zeroized(s):
            pass
    assert s == 11


def test_secret_arithmetic_yields_plain_scalars():
    x = SecretScalar(7)
    for derived in (x + Scalar(1), x - Scalar(1), x * Scalar(2), -x, 2 * x):
        assert type(derived) is Scalar
    assert type(SecretScalar.random()) is SecretScalar
    assert SecretScalar.of(Scalar(9)) == 9


def test_secret_repr_hides_value():
    assert "7" not in repr(SecretScalar(7))
