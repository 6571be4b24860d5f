# proofaudio/verify.py
"""
Verification pipeline.

verify_audio_and_manifest is the only place an accept/reject decision is
made. Sealed bundles are decrypted first and then go through the same
function. Any failure raises a VerifyError subclass; a result object is
only built when every check passed.
"""
import logging
from dataclasses import dataclass
from typing import Union

from proofaudio.common.errors import HashMismatch, InvalidEncoding, SignatureInvalid
from proofaudio.common.protocol import SealedProofBundle, SignedAudioManifest
from proofaudio.common.utils import b64d, sha256_b64
from proofaudio.crypto.canonical import canonical_hash
from proofaudio.crypto.sealed import decrypt_bundle
from proofaudio.crypto.sign import parse_public_key, parse_signature, verify_digest
from proofaudio.storage import bundle as bundlemod
from proofaudio.trust import TrustLevel, compute_trust_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationResult:
    manifest: SignedAudioManifest
    trust_level: TrustLevel


@dataclass(frozen=True)
class SealedVerificationResult:
    manifest: SignedAudioManifest
    trust_level: TrustLevel
    audio_data: bytes
    audio_filename: str


def _decode_signed_field(value: str, what: str) -> bytes:
    try:
        return b64d(value)
    except InvalidEncoding as e:
        raise SignatureInvalid(f"{what} is not valid base64") from e


def verify_audio_and_manifest(audio_bytes: bytes, manifest_bytes: bytes) -> VerificationResult:
    manifest = SignedAudioManifest.from_json(manifest_bytes)
    manifest.validate_schema()

    computed = sha256_b64(audio_bytes)
    if computed != manifest.audio_hash:
        logger.info("audio hash mismatch: computed=%s manifest=%s", computed, manifest.audio_hash)
        raise HashMismatch()
    logger.debug("audio hash ok (%d bytes)", len(audio_bytes))

    public_key = parse_public_key(_decode_signed_field(manifest.public_key, "publicKey"))

    # hash the received bytes, never a re-serialized manifest
    digest = canonical_hash(manifest_bytes)

    signature = parse_signature(_decode_signed_field(manifest.signature, "signature"))
    if not verify_digest(public_key, digest, signature):
        logger.info("signature rejected for device key %s", manifest.device_key_id)
        raise SignatureInvalid()
    logger.debug("signature ok for device key %s", manifest.device_key_id)

    level = compute_trust_level(manifest.trust_vectors)
    return VerificationResult(manifest=manifest, trust_level=level)


def verify_and_extract_sealed_bundle(bundle: Union[SealedProofBundle, bytes],
                                     password: str) -> SealedVerificationResult:
    """Decrypt a sealed bundle, verify its contents and hand back the audio too."""
    if not isinstance(bundle, SealedProofBundle):
        bundle = SealedProofBundle.from_json(bundle)
    payload = decrypt_bundle(bundle, password)

    audio = payload.audio_bytes()
    manifest_bytes = payload.manifest_bytes()
    verified = verify_audio_and_manifest(audio, manifest_bytes)

    return SealedVerificationResult(
        manifest=verified.manifest,
        trust_level=verified.trust_level,
        audio_data=audio,
        audio_filename=payload.audio_filename,
    )


def verify_sealed_bundle(bundle: Union[SealedProofBundle, bytes], password: str) -> VerificationResult:
    result = verify_and_extract_sealed_bundle(bundle, password)
    return VerificationResult(manifest=result.manifest, trust_level=result.trust_level)


def verify_standard_bundle(path: str) -> VerificationResult:
    """Verify a bundle directory (or a manifest.json with its audio alongside)."""
    audio, manifest = bundlemod.read_standard_bundle(path)
    return verify_audio_and_manifest(audio, manifest)


def verify_sealed_bundle_file(path: str, password: str) -> SealedVerificationResult:
    return verify_and_extract_sealed_bundle(bundlemod.read_sealed_bundle(path), password)
