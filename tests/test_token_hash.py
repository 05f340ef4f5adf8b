import pytest

from genart_server.kernel.token_hash import (
    DerivedParameters,
    InvalidHashError,
    byte_pairs,
    hash_digits,
    map_range,
)

ZERO_HASH = "0x" + "00" * 32


def make_hash(**pairs):
    digits = ["00"] * 32
    for k, v in pairs.items():
        digits[int(k[1:])] = v
    return "0x" + "".join(digits)


def test_all_zero_hash():
    p = DerivedParameters.from_hash(ZERO_HASH)
    assert p.seed == 0
    assert p.line_thickness == 0
    assert p.stroke_weight == 0.0
    assert p.fill == (0, 0, 0)
    assert p.byte_pairs == (0,) * 32


def test_thickness_and_colour_pairs():
    h = make_hash(p1="ff", p28="ff", p29="00", p30="80")
    p = DerivedParameters.from_hash(h)
    assert p.line_thickness == 255
    assert p.stroke_weight == 5.0
    assert p.fill == (255, 0, 128)


def test_seed_reads_first_sixteen_characters():
    h = "0x0123456789abcdef" + "11" * 24
    assert DerivedParameters.from_hash(h).seed == 0x0123456789abcd

    bare = h[2:]
    assert DerivedParameters.from_hash(bare).seed == 0x0123456789abcdef


def test_byte_pairs_order():
    h = "0x" + "".join(f"{i:02x}" for i in range(32))
    assert byte_pairs(h) == tuple(range(32))


@pytest.mark.parametrize("bad", [
    "0x1234",
    "0x" + "00" * 31,
    "0x" + "00" * 33,
    "0x" + "zz" + "00" * 31,
    "",
])
def test_rejects_malformed_hash(bad):
    with pytest.raises(InvalidHashError):
        DerivedParameters.from_hash(bad)


def test_rejects_non_string():
    with pytest.raises(InvalidHashError):
        hash_digits(12345)


def test_uppercase_digits_accepted():
    h = "0X" + "AB" * 32
    assert hash_digits(h) == "AB" * 32
    assert DerivedParameters.from_hash(h).fill == (0xAB, 0xAB, 0xAB)


def test_map_range():
    assert map_range(0, 0, 255, 0, 5) == 0
    assert map_range(51, 0, 255, 0, 5) == pytest.approx(1.0)

