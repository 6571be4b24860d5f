# proofaudio/crypto/sealed.py
"""
Sealed bundle (.proofaudio) decryption.

A sealed bundle is JSON carrying a PBKDF2 salt and an AES-256-GCM
encrypted DecryptedPayload. Only the "pbkdf2" KDF is supported; any other
tag is refused outright.
"""
import logging

from proofaudio import config
from proofaudio.common.errors import DecryptionFailed
from proofaudio.common.protocol import DecryptedPayload, SealedProofBundle
from proofaudio.common.utils import b64d
from proofaudio.crypto.aes import decrypt_combined
from proofaudio.crypto.kdf import derive_key

logger = logging.getLogger(__name__)


def decrypt_bundle(bundle: SealedProofBundle, password: str) -> DecryptedPayload:
    """
    Decrypt a parsed sealed bundle with the user's password.

    Raises UnsupportedBundleVersion, DecryptionFailed (wrong password or
    unsupported KDF), BundleCorrupted (truncated payload or non-JSON
    plaintext) or InvalidEncoding (bad base64 in salt or payload).
    """
    bundle.validate_version()

    if bundle.kdf_algorithm != config.SUPPORTED_KDF_ALGORITHM:
        logger.info("refusing bundle with kdf_algorithm=%r", bundle.kdf_algorithm)
        raise DecryptionFailed(f"Unsupported key derivation algorithm: {bundle.kdf_algorithm}")

    salt = b64d(bundle.salt)
    logger.debug("deriving key: version=%d iterations=%d salt_len=%d",
                 bundle.version, bundle.kdf_parameters.iterations, len(salt))
    key = derive_key(password, salt, bundle.kdf_parameters.iterations)

    encrypted = b64d(bundle.encrypted_payload)
    plaintext = decrypt_combined(key, encrypted)
    del key

    return DecryptedPayload.from_json(plaintext)
