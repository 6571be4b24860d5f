# proofaudio/crypto/aes.py
from Crypto.Cipher import AES

from proofaudio.common.errors import BundleCorrupted, DecryptionFailed

KEY_LEN = 32    # AES-256
NONCE_LEN = 12
TAG_LEN = 16
MIN_COMBINED_LEN = NONCE_LEN + TAG_LEN  # empty plaintext


def decrypt_combined(key: bytes, combined: bytes) -> bytes:
    """
    AES-256-GCM decrypt of the combined layout nonce(12) || ciphertext || tag(16).

    Raises BundleCorrupted when combined is too short to hold nonce and tag,
    DecryptionFailed when the key is unusable or authentication fails.
    """
    if len(combined) < MIN_COMBINED_LEN:
        raise BundleCorrupted(f"encrypted payload too short ({len(combined)} bytes)")
    if len(key) != KEY_LEN:
        raise DecryptionFailed()

    nonce = combined[:NONCE_LEN]
    ciphertext = combined[NONCE_LEN:-TAG_LEN]
    tag = combined[-TAG_LEN:]
    cipher = AES.new(key, AES.MODE_GCM, nonce=nonce)
    try:
        return cipher.decrypt_and_verify(ciphertext, tag)
    except ValueError as e:
        # MAC check failed: wrong password or tampered ciphertext
        raise DecryptionFailed() from e
