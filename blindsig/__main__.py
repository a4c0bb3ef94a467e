"""
End-to-end demo: python -m blindsig

Generates a signer keypair and a random 32-byte message, runs the blind
signature pipeline once and prints every intermediate value.

Environment:
  BLINDSIG_SCHEME    rsa (default) or ed25519
  BLINDSIG_KEY_SIZE  RSA modulus size in bits (default 2048)
"""

import os
import sys

from blindsig.protocol import generate_message, message_to_scalar, run_protocol
from blindsig.schemes import KEY_SIZE, get_scheme


def main() -> int:
    try:
        scheme = get_scheme(os.environ.get("BLINDSIG_SCHEME", "rsa"))
        key_size = int(os.environ.get("BLINDSIG_KEY_SIZE", KEY_SIZE))
    except ValueError as e:
        print(f"[demo] Bad configuration: {e}")
        return 2

    print(f"[demo] Generating {scheme.name} keypair...")
    private_key, public_key = scheme.generate_keypair(key_size)

    message = generate_message()
    print("[demo] Message:", message_to_scalar(message))

    result = run_protocol(message, private_key, public_key, scheme=scheme)
    if not result["success"]:
        print(f"[demo] Error at stage '{result['stage']}': {result['error']}")
        return 1

    print("[demo] Blind message:", result["blinded"])
    print("[demo] Blind signature:", result["raw_signature"])
    print("[demo] Unblinded signature:", result["signature"])
    print("[demo] Signature is valid:", result["verified"])
    return 0 if result["verified"] else 1


if __name__ == "__main__":
    sys.exit(main())
