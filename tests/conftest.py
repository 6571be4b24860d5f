"""Shared fixtures: a simulated capture device that signs and seals bundles."""
from __future__ import annotations

import base64
import hashlib
import json
import os

import pytest
from Crypto.Cipher import AES
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, decode_dss_signature

TEST_PASSWORD = "test-password-123"
TEST_ITERATIONS = 1000

AUDIO = b"\x00\x00\x00\x18ftypM4A fake aac frames " + bytes(range(256))


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


def device_canonical(body: dict) -> bytes:
    """What the device encoder produces: sorted keys, compact, slashes escaped."""
    text = json.dumps(body, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return text.replace("/", "\\/").encode("utf-8")


class DeviceSigner:
    def __init__(self):
        self.private_key = ec.generate_private_key(ec.SECP256R1())
        point = self.private_key.public_key().public_bytes(
            serialization.Encoding.X962, serialization.PublicFormat.UncompressedPoint
        )
        self.raw_public_key = point[1:]

    def sign_digest(self, digest: bytes) -> bytes:
        der = self.private_key.sign(digest, ec.ECDSA(Prehashed(hashes.SHA256())))
        r, s = decode_dss_signature(der)
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")

    def body(self, audio: bytes, trust_vectors: dict | None = None, **overrides) -> dict:
        body = {
            "schemaVersion": 1,
            "audioHash": _b64(hashlib.sha256(audio).digest()),
            "audioFormat": "aac",
            "audioSizeBytes": len(audio),
            "captureStart": "2024-06-01T10:00:00Z",
            "captureEnd": "2024-06-01T10:01:00Z",
            "durationSeconds": 60.5,
            "appVersion": "1.0.0",
            "appBundleId": "com.bestdaylabs.proofaudio",
            "deviceKeyId": "device-key/7F3A9C2E-51B4-4F0D-9E77-0B1C2D3E4F50",
            "publicKey": _b64(self.raw_public_key),
            "trustVectors": trust_vectors if trust_vectors is not None else {},
        }
        body.update(overrides)
        return body

    def sign(self, body: dict) -> dict:
        digest = hashlib.sha256(device_canonical(body)).digest()
        return dict(body, signature=_b64(self.sign_digest(digest)))

    def manifest(self, audio: bytes = AUDIO, trust_vectors: dict | None = None, **overrides) -> bytes:
        """Signed manifest bytes as the device writes them (pretty-printed, unsorted)."""
        signed = self.sign(self.body(audio, trust_vectors, **overrides))
        return json.dumps(signed, indent=2).encode("utf-8")


def seal(audio: bytes, manifest: bytes, password: str = TEST_PASSWORD, *,
         filename: str = "recording.m4a", iterations: int = TEST_ITERATIONS,
         version: int = 1, kdf: str = "pbkdf2", plaintext: bytes | None = None) -> bytes:
    salt = os.urandom(32)
    key = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, iterations, 32)
    if plaintext is None:
        plaintext = json.dumps({
            "audioData": _b64(audio),
            "manifestData": _b64(manifest),
            "audioFilename": filename,
        }).encode()
    nonce = os.urandom(12)
    cipher = AES.new(key, AES.MODE_GCM, nonce=nonce)
    ct, tag = cipher.encrypt_and_digest(plaintext)
    return json.dumps({
        "version": version,
        "salt": _b64(salt),
        "nonce": _b64(nonce),
        "kdfAlgorithm": kdf,
        "kdfParameters": {"iterations": iterations, "memoryCostKB": 0, "parallelism": 1},
        "encryptedPayload": _b64(nonce + ct + tag),
        "createdAt": "2024-06-01T10:02:00Z",
    }).encode()


LOCATION = {
    "start": {"lat": 37.775, "lon": -122.418, "accuracy": 65.0},
    "end": {"lat": 37.7751, "lon": -122.4181, "accuracy": 30.0},
}
MOTION = {"accelerationVariance": 0.001, "rotationVariance": 0.002, "duration": 60.0, "sampleCount": 600}
CLOCK = {
    "wallClockStart": "2024-06-01T10:00:00Z",
    "wallClockEnd": "2024-06-01T10:01:00Z",
    "monotonicDelta": 60.0,
    "timeZone": "America/Los_Angeles",
}


def continuity(uninterrupted: bool) -> dict:
    events = [] if uninterrupted else [{"timestamp": "2024-06-01T10:00:30Z", "reason": "phone_call"}]
    return {"uninterrupted": uninterrupted, "interruptionEvents": events}


FULL_VECTORS = {"location": LOCATION, "motion": MOTION, "continuity": continuity(True), "clock": CLOCK}


@pytest.fixture
def signer():
    return DeviceSigner()


@pytest.fixture
def audio():
    return AUDIO


@pytest.fixture
def minimal_manifest(signer, audio):
    return signer.manifest(audio)


@pytest.fixture
def full_manifest(signer, audio):
    return signer.manifest(audio, FULL_VECTORS)


@pytest.fixture
def sealer():
    return seal


@pytest.fixture
def standard_bundle_dir(tmp_path, audio, minimal_manifest):
    bundle = tmp_path / "recording_bundle"
    bundle.mkdir()
    (bundle / "recording.m4a").write_bytes(audio)
    (bundle / "manifest.json").write_bytes(minimal_manifest)
    return bundle
