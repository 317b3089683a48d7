import logging
import os
from collections import namedtuple

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ot_errors import DecryptionFailed, EncryptionFailed, KeyGenerationFailed

logger = logging.getLogger(__name__)

DEFAULT_KEY_SIZE = 2048
DEFAULT_PADDING = "pkcs1v15"
DEFAULT_PUBLIC_EXPONENT = 65537
MIN_KEY_SIZE = 1024

# PKCS#1 v1.5 encryption padding is at least 11 bytes
PKCS1V15_OVERHEAD = 11

KeyPair = namedtuple("KeyPair", ["public_key", "private_key"])


class RSAProvider:
    """Asymmetric capability used by the OT roles.

    Wraps RSA key generation, encryption and decryption from ``cryptography``
    behind four calls (``generate_keypair``, ``encrypt``, ``decrypt``,
    ``random_bytes``). Modulus size and padding scheme are fixed per provider
    instance; the protocol code never sees either directly.
    """

    def __init__(self, key_size=DEFAULT_KEY_SIZE, padding=DEFAULT_PADDING,
                 public_exponent=DEFAULT_PUBLIC_EXPONENT):
        if key_size < MIN_KEY_SIZE:
            raise ValueError(f"key_size must be at least {MIN_KEY_SIZE} bits, got {key_size}")
        if padding not in ("pkcs1v15", "oaep"):
            raise ValueError(f"unsupported padding scheme: {padding!r}")
        self.key_size = key_size
        self.padding = padding
        self.public_exponent = public_exponent

    def __repr__(self):
        return f"RSAProvider(key_size={self.key_size}, padding={self.padding!r})"

    def _padding(self):
        if self.padding == "oaep":
            return padding.OAEP(
                mgf=padding.MGF1(algorithm=hashes.SHA256()),
                algorithm=hashes.SHA256(),
                label=None,
            )
        return padding.PKCS1v15()

    def max_plaintext_size(self, bits=None):
        modulus_bytes = ((bits or self.key_size) + 7) // 8
        if self.padding == "oaep":
            return modulus_bytes - 2 * hashes.SHA256.digest_size - 2
        return modulus_bytes - PKCS1V15_OVERHEAD

    def generate_keypair(self, bits=None):
        bits = bits or self.key_size
        try:
            private_key = rsa.generate_private_key(
                public_exponent=self.public_exponent,
                key_size=bits,
            )
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise KeyGenerationFailed(f"RSA key generation ({bits} bits) failed: {exc}") from exc
        logger.debug("generated %d-bit RSA keypair", bits)
        return KeyPair(private_key.public_key(), private_key)

    def encrypt(self, public_key, plaintext):
        try:
            return public_key.encrypt(bytes(plaintext), self._padding())
        except (ValueError, TypeError, AttributeError, UnsupportedAlgorithm) as exc:
            raise EncryptionFailed(f"RSA encryption failed: {exc}") from exc

    def decrypt(self, private_key, ciphertext):
        try:
            return private_key.decrypt(bytes(ciphertext), self._padding())
        except (ValueError, TypeError, AttributeError, UnsupportedAlgorithm) as exc:
            raise DecryptionFailed(f"RSA decryption failed: {exc}") from exc

    def random_bytes(self, length):
        return os.urandom(length)


def public_key_to_bytes(public_key):
    return public_key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def public_key_from_bytes(data):
    public_key = serialization.load_der_public_key(data)
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise TypeError(f"expected an RSA public key, got {type(public_key).__name__}")
    return public_key


def default_provider():
    return RSAProvider()
