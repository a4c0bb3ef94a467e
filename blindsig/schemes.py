"""
Signature schemes the blinding pipeline can run over.

Multiplicative blinding only survives signing when the signature operation
commutes with multiplication modulo P. Two schemes are provided:

  RsaBlindScheme       Chaum's construction. P is the RSA modulus n, the
                       blinding mask is r^e mod n and signing is x^d mod n,
                       so unblinding with r^-1 yields m^d, a valid signature.

  Ed25519NaiveScheme   Blinding by r over the Ed25519 field prime followed by
                       a regular Ed25519 signature. Ed25519 hashes its input
                       and signs with point multiplication, so the unblinded
                       value is NOT a valid signature on the original message.
                       Kept to show exactly that failure.

Both expose the same interface so the protocol stages stay scheme-agnostic.
Key generation and PEM export belong to whoever supplies keys; the pipeline
stages only load and consume them.
"""

from typing import Optional

from Crypto.PublicKey import ECC, RSA
from Crypto.Signature import eddsa

from blindsig.errors import InvalidInput, InvalidKey


KEY_SIZE = 2048  # bits

# Field prime of Curve25519 / Ed25519
ED25519_P = 2 ** 255 - 19
# Size of an expanded Ed25519 private key (seed || public key)
ED25519_FACTOR_SIZE = 64
ED25519_SIGNATURE_SIZE = 64

_KEY_ERRORS = (ValueError, IndexError, TypeError)


def _byte_length(n: int) -> int:
    return (n.bit_length() + 7) // 8


# ---------------------------------------------------------------------------
# RSA (Chaum)
# ---------------------------------------------------------------------------

class RsaBlindScheme:
    name = "rsa"

    def generate_keypair(self, bits: int = KEY_SIZE) -> tuple:
        """Generate an RSA keypair. Returns (private_pem, public_pem)."""
        key = RSA.generate(bits or KEY_SIZE)
        private_key = key.export_key().decode()
        public_key = key.publickey().export_key().decode()
        return private_key, public_key

    def _import(self, key) -> RSA.RsaKey:
        if key is None:
            raise InvalidInput("key cannot be None")
        if isinstance(key, RSA.RsaKey):
            return key
        try:
            return RSA.import_key(key)
        except _KEY_ERRORS as e:
            raise InvalidKey(f"Malformed RSA key: {e}") from e

    def load_private_key(self, key) -> RSA.RsaKey:
        priv = self._import(key)
        if not priv.has_private():
            raise InvalidKey("RSA key has no private component")
        return priv

    def load_public_key(self, key) -> RSA.RsaKey:
        return self._import(key).publickey()

    def modulus(self, key: RSA.RsaKey) -> int:
        return int(key.n)

    def factor_size(self, key: RSA.RsaKey) -> int:
        return _byte_length(int(key.n))

    def signature_size(self, key: RSA.RsaKey) -> int:
        return _byte_length(int(key.n))

    def mask(self, r: int, key: RSA.RsaKey) -> int:
        """r^e mod n: the value the message is multiplied by when blinding."""
        return pow(r, int(key.e), int(key.n))

    def sign_bytes(self, key: RSA.RsaKey, data: bytes) -> bytes:
        """
        Raw RSA signature: x^d mod n over the integer value of data.

        The signer never sees anything but the blinded value.
        """
        n = int(key.n)
        x = int.from_bytes(data, "big")
        if x >= n:
            raise InvalidInput("value to sign exceeds the RSA modulus")
        s = pow(x, int(key.d), n)
        return s.to_bytes(_byte_length(n), "big")

    def verify_bytes(self, key: RSA.RsaKey, data: bytes, signature: bytes) -> bool:
        """Checks s^e mod n == m."""
        n = int(key.n)
        s = int.from_bytes(signature, "big")
        if s >= n:
            return False
        return pow(s, int(key.e), n) == int.from_bytes(data, "big")


# ---------------------------------------------------------------------------
# Ed25519 (naive multiplicative blinding)
# ---------------------------------------------------------------------------

class Ed25519NaiveScheme:
    name = "ed25519"

    def generate_keypair(self, bits: Optional[int] = None) -> tuple:
        """Generate an Ed25519 keypair. ``bits`` is ignored."""
        key = ECC.generate(curve="ed25519")
        private_key = key.export_key(format="PEM")
        public_key = key.public_key().export_key(format="PEM")
        return private_key, public_key

    def _import(self, key) -> ECC.EccKey:
        if key is None:
            raise InvalidInput("key cannot be None")
        if not isinstance(key, ECC.EccKey):
            try:
                key = ECC.import_key(key)
            except _KEY_ERRORS as e:
                raise InvalidKey(f"Malformed Ed25519 key: {e}") from e
        if key.curve.lower() != "ed25519":
            raise InvalidKey(f"Expected an Ed25519 key, got curve {key.curve}")
        return key

    def load_private_key(self, key) -> ECC.EccKey:
        priv = self._import(key)
        if not priv.has_private():
            raise InvalidKey("Ed25519 key has no private component")
        return priv

    def load_public_key(self, key) -> ECC.EccKey:
        return self._import(key).public_key()

    def modulus(self, key: ECC.EccKey) -> int:
        return ED25519_P

    def factor_size(self, key: ECC.EccKey) -> int:
        return ED25519_FACTOR_SIZE

    def signature_size(self, key: ECC.EccKey) -> int:
        return ED25519_SIGNATURE_SIZE

    def mask(self, r: int, key: ECC.EccKey) -> int:
        return r

    def sign_bytes(self, key: ECC.EccKey, data: bytes) -> bytes:
        return eddsa.new(key, "rfc8032").sign(data)

    def verify_bytes(self, key: ECC.EccKey, data: bytes, signature: bytes) -> bool:
        if len(signature) != ED25519_SIGNATURE_SIZE:
            return False
        try:
            eddsa.new(key, "rfc8032").verify(data, signature)
        except ValueError:
            return False
        return True


RSA_SCHEME = RsaBlindScheme()
ED25519_SCHEME = Ed25519NaiveScheme()

SCHEMES = {
    RSA_SCHEME.name: RSA_SCHEME,
    ED25519_SCHEME.name: ED25519_SCHEME,
}


def get_scheme(name: str):
    """Look up a scheme by name ("rsa" or "ed25519")."""
    try:
        return SCHEMES[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown signature scheme {name!r}. Choose from: {sorted(SCHEMES)}")
