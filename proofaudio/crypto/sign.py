# proofaudio/crypto/sign.py
"""
P-256 ECDSA verify helpers using cryptography.
Provides:
 - parse_public_key(raw64) -> EllipticCurvePublicKey   # raw x||y, no 0x04 prefix
 - parse_signature(raw64) -> RawSignature              # raw r||s, no DER
 - verify_digest(pub_key, digest: bytes, signature) -> bool
"""
from typing import NamedTuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, encode_dss_signature

from proofaudio.common.errors import SignatureInvalid

RAW_KEY_LEN = 64
RAW_SIG_LEN = 64

# order of the P-256 base point
P256_ORDER = int("FFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551", 16)


class RawSignature(NamedTuple):
    r: int
    s: int

    def to_der(self) -> bytes:
        return encode_dss_signature(self.r, self.s)


def parse_public_key(raw: bytes) -> ec.EllipticCurvePublicKey:
    """
    Load a device public key exported as raw x||y coordinates (64 bytes).
    The uncompressed SEC1 marker 0x04 is prepended before parsing.
    """
    if len(raw) != RAW_KEY_LEN:
        raise SignatureInvalid(f"public key must be {RAW_KEY_LEN} bytes, got {len(raw)}")
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), b"\x04" + raw)
    except ValueError as e:
        raise SignatureInvalid("public key is not a valid P-256 point") from e


def parse_signature(raw: bytes) -> RawSignature:
    """Split a raw r||s signature (32 bytes each, big-endian)."""
    if len(raw) != RAW_SIG_LEN:
        raise SignatureInvalid(f"signature must be {RAW_SIG_LEN} bytes, got {len(raw)}")
    r = int.from_bytes(raw[:32], "big")
    s = int.from_bytes(raw[32:], "big")
    if not (0 < r < P256_ORDER and 0 < s < P256_ORDER):
        raise SignatureInvalid("signature scalar out of range")
    return RawSignature(r, s)


def verify_digest(pub_key: ec.EllipticCurvePublicKey, digest: bytes, signature: RawSignature) -> bool:
    """
    Verify an ECDSA signature over a 32-byte SHA-256 digest.
    The digest is used as-is (not hashed again). Returns True if valid, False otherwise.
    """
    try:
        pub_key.verify(signature.to_der(), digest, ec.ECDSA(Prehashed(hashes.SHA256())))
        return True
    except (InvalidSignature, ValueError):
        return False
