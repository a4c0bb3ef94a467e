"""
Modular arithmetic and canonical scalar encoding.

A scalar is a plain non-negative int. When used as a field element it is
reduced modulo the scheme modulus, so results always lie in [0, modulus - 1].
"""

from math import gcd
from typing import Optional

from blindsig.errors import InvalidInput, NotInvertible


def require_scalar(name: str, value) -> None:
    if value is None:
        raise InvalidInput(f"{name} cannot be None")
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidInput(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise InvalidInput(f"{name} must be non-negative")


def require_modulus(modulus) -> None:
    require_scalar("modulus", modulus)
    if modulus < 2:
        raise InvalidInput("modulus must be at least 2")


def multiply_mod(a: int, b: int, modulus: int) -> int:
    """(a * b) mod modulus."""
    require_scalar("a", a)
    require_scalar("b", b)
    require_modulus(modulus)
    return (a * b) % modulus


def invert_mod(a: int, modulus: int) -> int:
    """
    Modular multiplicative inverse of a.

    Raises NotInvertible when gcd(a, modulus) != 1, which includes a ≡ 0.
    """
    require_scalar("a", a)
    require_modulus(modulus)
    if gcd(a, modulus) != 1:
        raise NotInvertible("value shares a common factor with the modulus")
    return pow(a, -1, modulus)


# ---------------------------------------------------------------------------
# Canonical byte form
# ---------------------------------------------------------------------------

def scalar_to_bytes(value: int, length: Optional[int] = None) -> bytes:
    """
    Big-endian encoding of a scalar.

    Without ``length`` the minimal encoding is returned (zero is b"").
    With ``length`` the result is left-padded to exactly that many bytes.
    """
    require_scalar("value", value)
    minimal = (value.bit_length() + 7) // 8
    if length is None:
        length = minimal
    elif minimal > length:
        raise InvalidInput(f"value does not fit in {length} bytes")
    return value.to_bytes(length, "big")


def bytes_to_scalar(data: bytes) -> int:
    if data is None:
        raise InvalidInput("data cannot be None")
    return int.from_bytes(bytes(data), "big")
