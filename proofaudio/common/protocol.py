# proofaudio/common/protocol.py
"""
Wire models for manifests and sealed bundles.

All models are strict (no "1" -> 1 coercion), frozen, and ignore unknown
fields. JSON keys are camelCase; attributes are snake_case.
"""
from typing import Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from proofaudio import config
from proofaudio.common.errors import (
    BundleCorrupted,
    ManifestMalformed,
    SchemaUnsupported,
    UnsupportedBundleVersion,
)
from proofaudio.common.utils import b64d


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        strict=True,
        frozen=True,
        extra="ignore",
        allow_inf_nan=False,
    )


# ---- trust vectors ----

class LocationSnapshot(WireModel):
    lat: float
    lon: float
    accuracy: float


class LocationVector(WireModel):
    start: LocationSnapshot
    end: LocationSnapshot


class MotionVector(WireModel):
    acceleration_variance: float
    rotation_variance: float
    duration: float
    sample_count: int


class InterruptionEvent(WireModel):
    timestamp: str
    reason: str


class ContinuityVector(WireModel):
    uninterrupted: bool
    interruption_events: Tuple[InterruptionEvent, ...]


class ClockVector(WireModel):
    wall_clock_start: str
    wall_clock_end: str
    monotonic_delta: float
    time_zone: str


class TrustVectors(WireModel):
    # absent means "not captured on device"
    location: Optional[LocationVector] = None
    motion: Optional[MotionVector] = None
    continuity: Optional[ContinuityVector] = None
    clock: Optional[ClockVector] = None


# ---- manifest ----

class SignedAudioManifest(WireModel):
    schema_version: int
    audio_hash: str          # base64 SHA-256 of the audio bytes
    audio_format: str
    audio_size_bytes: int
    capture_start: str
    capture_end: str
    duration_seconds: float
    app_version: str
    app_bundle_id: str
    device_key_id: str
    public_key: str          # base64 raw x||y
    trust_vectors: TrustVectors
    signature: str           # base64 raw r||s

    @classmethod
    def from_json(cls, data: bytes) -> "SignedAudioManifest":
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ManifestMalformed(f"Invalid proof file: {e.error_count()} problem(s) in manifest") from e

    def validate_schema(self) -> None:
        if self.schema_version > config.CURRENT_SCHEMA_VERSION:
            raise SchemaUnsupported(self.schema_version)


# ---- sealed bundle ----

class KdfParameters(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True, extra="ignore", populate_by_name=True)

    iterations: int = Field(ge=1)
    memory_cost_kb: int = Field(
        ge=0, validation_alias=AliasChoices("memoryCostKB", "memory_cost_kb")
    )
    parallelism: int = Field(ge=0)


class SealedProofBundle(WireModel):
    version: int
    salt: str                # base64
    nonce: str               # base64, informational; the real nonce leads encrypted_payload
    kdf_algorithm: str
    kdf_parameters: KdfParameters
    encrypted_payload: str   # base64 nonce || ciphertext || tag
    created_at: str

    @classmethod
    def from_json(cls, data: bytes) -> "SealedProofBundle":
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise BundleCorrupted() from e

    def validate_version(self) -> None:
        if self.version > config.CURRENT_BUNDLE_VERSION:
            raise UnsupportedBundleVersion(self.version)


class DecryptedPayload(WireModel):
    audio_data: str          # base64
    manifest_data: str       # base64
    audio_filename: str

    @classmethod
    def from_json(cls, data: bytes) -> "DecryptedPayload":
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise BundleCorrupted("decrypted payload is not a valid bundle") from e

    def audio_bytes(self) -> bytes:
        return b64d(self.audio_data)

    def manifest_bytes(self) -> bytes:
        return b64d(self.manifest_data)
