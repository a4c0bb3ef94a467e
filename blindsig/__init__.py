"""Blind signatures: blind, sign, unblind, verify."""

from blindsig.errors import (
    BlindSignatureError,
    InvalidInput,
    InvalidKey,
    NotInvertible,
    RandomSourceUnavailable,
)
from blindsig.factor import BlindingFactor, generate_blinding_factor, seeded_source
from blindsig.field import bytes_to_scalar, invert_mod, multiply_mod, scalar_to_bytes
from blindsig.protocol import (
    blind,
    generate_message,
    message_to_scalar,
    run_protocol,
    sign,
    sign_directly,
    unblind,
    verify,
)
from blindsig.schemes import ED25519_SCHEME, RSA_SCHEME, get_scheme
