# proofaudio/common/utils.py
import base64
import binascii
import hashlib

from proofaudio.common.errors import InvalidEncoding


def sha256_bytes(data: bytes) -> bytes:
    """Return the raw 32-byte SHA-256 digest of data."""
    return hashlib.sha256(data).digest()


def sha256_b64(data: bytes) -> str:
    """Return SHA256(data) as a standard base64 string (the manifest audioHash form)."""
    return b64e(sha256_bytes(data))


def b64e(b: bytes) -> str:
    """Base64 encode bytes -> str."""
    return base64.b64encode(b).decode()


def b64d(s: str) -> bytes:
    """
    Strict base64 decode str -> bytes.
    Standard alphabet, padding required; raises InvalidEncoding otherwise.
    """
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(f"Base64 decoding error: {e}") from e
