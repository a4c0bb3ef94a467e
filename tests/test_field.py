"""
Unit tests for modular arithmetic and scalar encoding.
"""

import random

import pytest
from Crypto.Math.Numbers import Integer

from blindsig.errors import InvalidInput, NotInvertible
from blindsig.field import (
    bytes_to_scalar,
    invert_mod,
    multiply_mod,
    scalar_to_bytes,
)
from blindsig.schemes import ED25519_P


@pytest.fixture
def triples():
    """Random (a, b, modulus) triples, moduli up to 2048 bits."""
    rng = random.Random(1234)
    out = []
    for _ in range(200):
        bits = rng.choice([8, 64, 255, 1024, 2048])
        m = rng.getrandbits(bits) | 2
        out.append((rng.getrandbits(bits + 16), rng.getrandbits(bits), m))
    return out


# ---------------------------------------------------------------------------
# multiply_mod / invert_mod
# ---------------------------------------------------------------------------

class TestMultiplyMod:
    def test_small_values(self):
        assert multiply_mod(7, 3, 11) == 21 % 11

    def test_matches_reference(self, triples):
        for a, b, m in triples:
            assert multiply_mod(a, b, m) == int(Integer(a) * b % m)

    def test_is_deterministic(self, triples):
        for a, b, m in triples:
            assert multiply_mod(a, b, m) == multiply_mod(a, b, m)

    def test_result_in_range(self, triples):
        for a, b, m in triples:
            assert 0 <= multiply_mod(a, b, m) < m

    def test_boundaries(self):
        p = ED25519_P
        assert multiply_mod(0, 12345, p) == 0
        assert multiply_mod(p - 1, p - 1, p) == 1
        assert multiply_mod(p, 5, p) == 0

    @pytest.mark.parametrize("a, b, m", [
        (None, 1, 7),
        (1, None, 7),
        (-1, 1, 7),
        (1, 1, 1),
        (1, 1, None),
        (1.5, 1, 7),
    ])
    def test_invalid_input(self, a, b, m):
        with pytest.raises(InvalidInput):
            multiply_mod(a, b, m)


class TestInvertMod:
    def test_small_values(self):
        assert invert_mod(3, 11) == 4

    def test_matches_reference(self, triples):
        checked = 0
        for a, _, m in triples:
            if Integer(a).gcd(m) != 1:
                continue
            assert invert_mod(a, m) == int(Integer(a).inverse(m))
            checked += 1
        assert checked > 0

    def test_inverse_property(self):
        p = ED25519_P
        for a in (1, 2, 3, 7, p - 1, p + 5, 2 ** 511 + 1):
            assert multiply_mod(a, invert_mod(a, p), p) == 1

    def test_zero_not_invertible(self):
        with pytest.raises(NotInvertible):
            invert_mod(0, ED25519_P)

    def test_multiple_of_modulus_not_invertible(self):
        with pytest.raises(NotInvertible):
            invert_mod(3 * ED25519_P, ED25519_P)

    def test_common_factor_not_invertible(self):
        with pytest.raises(NotInvertible):
            invert_mod(6, 15)

    def test_not_invertible_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            invert_mod(4, 8)


# ---------------------------------------------------------------------------
# Canonical byte form
# ---------------------------------------------------------------------------

class TestScalarBytes:
    def test_minimal_encoding(self):
        assert scalar_to_bytes(0) == b""
        assert scalar_to_bytes(1) == b"\x01"
        assert scalar_to_bytes(256) == b"\x01\x00"

    def test_padded_encoding(self):
        assert scalar_to_bytes(1, 4) == b"\x00\x00\x00\x01"

    def test_value_too_wide(self):
        with pytest.raises(InvalidInput):
            scalar_to_bytes(2 ** 32, 4)

    def test_big_endian(self):
        assert bytes_to_scalar(b"\x01\x02") == 0x0102
        assert bytes_to_scalar(b"") == 0

    def test_none_rejected(self):
        with pytest.raises(InvalidInput):
            bytes_to_scalar(None)
        with pytest.raises(InvalidInput):
            scalar_to_bytes(None)
