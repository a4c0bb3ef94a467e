"""
Blind Signature Protocol

The pipeline, run once per message:
  1. Requester draws a blinding factor r (invertible modulo P)
  2. Requester blinds the message:   blinded = m * mask(r) mod P
  3. Signer signs the blinded value  (never sees m)
  4. Requester unblinds:             sig = raw * r^-1 mod P
  5. Anyone verifies sig against m with the signer's public key

Each stage is a plain function taking keys and scalars explicitly. Stages
raise BlindSignatureError subclasses; run_protocol() chains them and reports
which stage failed.
"""

import os

from blindsig.errors import BlindSignatureError, InvalidInput
from blindsig.factor import RandomSource, generate_blinding_factor, read_random
from blindsig.field import (
    bytes_to_scalar,
    invert_mod,
    multiply_mod,
    require_scalar,
    scalar_to_bytes,
)
from blindsig.schemes import RSA_SCHEME


MESSAGE_SIZE = 32  # bytes

STAGE_FACTOR = "generate_factor"
STAGE_BLIND = "blind"
STAGE_SIGN = "sign"
STAGE_UNBLIND = "unblind"
STAGE_VERIFY = "verify"


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

def generate_message(random_source: RandomSource = os.urandom) -> bytes:
    """A random 32-byte message."""
    return read_random(MESSAGE_SIZE, random_source)


def message_to_scalar(data: bytes) -> int:
    """Interpret a 32-byte message as a big-endian scalar."""
    if data is None:
        raise InvalidInput("message cannot be None")
    if len(data) != MESSAGE_SIZE:
        raise InvalidInput(f"message must be exactly {MESSAGE_SIZE} bytes, got {len(data)}")
    return bytes_to_scalar(data)


# ---------------------------------------------------------------------------
# Requester side
# ---------------------------------------------------------------------------

def blind(message: int, factor, modulus: int) -> int:
    """blinded = message * factor.mask mod P"""
    if message is None or factor is None:
        raise InvalidInput("message and blinding factor cannot be None")
    return multiply_mod(message, factor.mask, modulus)


def unblind(raw_signature: int, factor, modulus: int) -> int:
    """
    Remove the blinding factor from a raw signature.

    sig = raw * r^-1 mod P
    """
    if raw_signature is None or factor is None:
        raise InvalidInput("blind signature and blinding factor cannot be None")
    return multiply_mod(raw_signature, invert_mod(factor.value, modulus), modulus)


# ---------------------------------------------------------------------------
# Signer side
# ---------------------------------------------------------------------------

def sign(scheme, private_key, blinded: int) -> int:
    """
    Sign a blinded value with the signer's private key.

    The value is serialized to its canonical bytes, signed by the scheme,
    and the signature bytes are read back as a scalar.
    """
    if private_key is None or blinded is None:
        raise InvalidInput("private key and blind message cannot be None")
    require_scalar("blinded", blinded)
    key = scheme.load_private_key(private_key)
    return bytes_to_scalar(scheme.sign_bytes(key, scalar_to_bytes(blinded)))


def sign_directly(scheme, private_key, message: int) -> int:
    """Sign a message without blinding, for comparison with the blind flow."""
    return sign(scheme, private_key, message)


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------

def verify(scheme, public_key, message: int, signature: int) -> bool:
    """
    Check a signature against the original message.

    Returns False on any mismatch. Raises InvalidKey only for a malformed
    public key.
    """
    key = scheme.load_public_key(public_key)
    if message is None or signature is None:
        raise InvalidInput("message and signature cannot be None")
    require_scalar("message", message)
    require_scalar("signature", signature)

    size = scheme.signature_size(key)
    if signature.bit_length() > size * 8:
        return False
    return scheme.verify_bytes(
        key,
        scalar_to_bytes(message),
        scalar_to_bytes(signature, size),
    )


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def run_protocol(
    message,
    private_key,
    public_key,
    scheme=RSA_SCHEME,
    random_source: RandomSource = os.urandom,
) -> dict:
    """
    Run the full pipeline once. No stage is retried.

    Parameters
    ----------
    message : bytes | int
        32-byte message, or its scalar value
    private_key, public_key
        The signer's keypair (PEM or key objects)
    scheme
        RSA_SCHEME (default) or ED25519_SCHEME
    random_source : callable
        Entropy for the blinding factor

    Returns
    -------
    dict with keys:
        success         : bool
        stage           : "verified" / "rejected", or the stage that failed
        verified        : bool (only on success)
        blinding_factor : BlindingFactor (only on success)
        blinded         : int (only on success)
        raw_signature   : int (only on success)
        signature       : int (only on success)
        signature_bytes : bytes (only on success)
        error           : str (only on failure)
    """
    stage = STAGE_FACTOR
    try:
        factor = generate_blinding_factor(scheme, public_key, random_source)
        modulus = scheme.modulus(scheme.load_public_key(public_key))

        stage = STAGE_BLIND
        if isinstance(message, (bytes, bytearray)):
            message = message_to_scalar(message)
        blinded = blind(message, factor, modulus)

        stage = STAGE_SIGN
        raw_signature = sign(scheme, private_key, blinded)

        stage = STAGE_UNBLIND
        signature = unblind(raw_signature, factor, modulus)

        stage = STAGE_VERIFY
        verified = verify(scheme, public_key, message, signature)
    except BlindSignatureError as e:
        if e.stage is None:
            e.stage = stage
        return {"success": False, "stage": e.stage, "error": str(e)}

    return {
        "success": True,
        "stage": "verified" if verified else "rejected",
        "verified": verified,
        "blinding_factor": factor,
        "blinded": blinded,
        "raw_signature": raw_signature,
        "signature": signature,
        "signature_bytes": scalar_to_bytes(signature),
    }
