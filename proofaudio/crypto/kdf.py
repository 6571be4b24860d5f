# proofaudio/crypto/kdf.py
"""
Password-based key derivation for sealed bundles.

Exports:
 - KEY_LEN (32, an AES-256 key)
 - derive_key(password, salt, iterations) -> PBKDF2-HMAC-SHA256(password, salt, iterations, 32)
"""
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

KEY_LEN = 32


def derive_key(password: str, salt: bytes, iterations: int) -> bytes:
    """Derive the bundle key. The password is encoded as UTF-8."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LEN,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password.encode("utf-8"))
