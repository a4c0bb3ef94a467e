"""
Blinding factor generation.

The entropy source is passed in rather than read from a global, so tests can
substitute a seeded one. A random source is any callable taking a byte count
and returning that many bytes; os.urandom is the default.

The raw draw is NOT reduced modulo P before its invertibility is tested.
Draws that are not invertible (or that reduce to 0 or 1, which would leave
the message unmasked) are discarded and a fresh value is drawn, so a
NotInvertible error can never reach the unblinding stage.
"""

import os
import random
from dataclasses import dataclass, field
from typing import Callable

from blindsig.errors import NotInvertible, RandomSourceUnavailable
from blindsig.field import invert_mod

RandomSource = Callable[[int], bytes]

# Give up on a source that keeps returning unusable values
MAX_FACTOR_DRAWS = 64


@dataclass(frozen=True)
class BlindingFactor:
    """
    value : the raw random scalar r, used (inverted) when unblinding
    mask  : what the message is multiplied by when blinding
    """
    value: int = field(repr=False)
    mask: int = field(repr=False)


def seeded_source(seed) -> RandomSource:
    """Deterministic random source for tests. Never use it for real keys."""
    rng = random.Random(seed)
    return rng.randbytes


def read_random(size: int, random_source: RandomSource = os.urandom) -> bytes:
    """Read exactly ``size`` bytes from the source."""
    try:
        data = random_source(size)
    except Exception as e:
        raise RandomSourceUnavailable(f"Entropy source failed: {e}") from e
    if not isinstance(data, (bytes, bytearray)):
        raise RandomSourceUnavailable(f"Entropy source returned {type(data).__name__}, not bytes")
    if len(data) != size:
        raise RandomSourceUnavailable(f"Entropy source returned {len(data)} bytes, wanted {size}")
    return bytes(data)


def draw_scalar(size: int, random_source: RandomSource = os.urandom) -> int:
    """Big-endian integer of ``size`` fresh random bytes. Not reduced."""
    return int.from_bytes(read_random(size, random_source), "big")


def generate_blinding_factor(scheme, public_key, random_source: RandomSource = os.urandom) -> BlindingFactor:
    """
    Draw a blinding factor invertible modulo the scheme modulus.

    Parameters
    ----------
    scheme : RsaBlindScheme | Ed25519NaiveScheme
    public_key : PEM str/bytes or key object
        The signer's public key; fixes the modulus and, for RSA, the mask.
    random_source : callable
        ``random_source(n) -> bytes``

    Returns
    -------
    BlindingFactor
    """
    key = scheme.load_public_key(public_key)
    modulus = scheme.modulus(key)
    size = scheme.factor_size(key)

    for _ in range(MAX_FACTOR_DRAWS):
        r = draw_scalar(size, random_source)
        if r % modulus < 2:
            continue
        try:
            invert_mod(r, modulus)
        except NotInvertible:
            continue
        return BlindingFactor(value=r, mask=scheme.mask(r, key))

    raise RandomSourceUnavailable(
        f"No invertible blinding factor after {MAX_FACTOR_DRAWS} draws"
    )
