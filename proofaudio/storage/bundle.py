# proofaudio/storage/bundle.py
"""
Reading proof bundles from disk.

A standard bundle is a directory holding manifest.json next to the
recording (recording.m4a, recording.aac, ...). A sealed bundle is a single
.proofaudio file. Nothing here interprets the bytes it reads.
"""
import logging
import os
from typing import Tuple

from proofaudio import config
from proofaudio.common.errors import AudioFileCorrupt, AudioFileMissing, BundleIOError, ManifestMalformed

logger = logging.getLogger(__name__)


def is_sealed_bundle(path: str) -> bool:
    return path.lower().endswith(config.SEALED_EXTENSION)


def find_audio_file(directory: str) -> str:
    """Prefer recording.<ext>; fall back to the first audio file by name."""
    for ext in config.AUDIO_EXTENSIONS:
        candidate = os.path.join(directory, f"recording.{ext}")
        if os.path.isfile(candidate):
            return candidate

    try:
        names = sorted(os.listdir(directory))
    except OSError:
        names = []
    for name in names:
        ext = os.path.splitext(name)[1].lstrip(".")
        path = os.path.join(directory, name)
        if ext in config.AUDIO_EXTENSIONS and os.path.isfile(path):
            return path

    raise AudioFileMissing(f"Audio file not found in {directory}")


def read_standard_bundle(path: str) -> Tuple[bytes, bytes]:
    """Return (audio_bytes, manifest_bytes) for a bundle directory or a manifest path."""
    if os.path.isdir(path):
        manifest_path = os.path.join(path, config.MANIFEST_FILENAME)
        if not os.path.isfile(manifest_path):
            raise ManifestMalformed(f"{config.MANIFEST_FILENAME} not found in {path}")
        audio_path = find_audio_file(path)
    else:
        manifest_path = path
        audio_path = find_audio_file(os.path.dirname(path) or ".")
    logger.debug("standard bundle: audio=%s manifest=%s", audio_path, manifest_path)

    try:
        with open(audio_path, "rb") as f:
            audio = f.read()
    except FileNotFoundError as e:
        raise AudioFileMissing() from e
    except OSError as e:
        raise AudioFileCorrupt(f"Audio file is corrupted: {e}") from e

    try:
        with open(manifest_path, "rb") as f:
            manifest = f.read()
    except OSError as e:
        raise ManifestMalformed(f"Invalid proof file: {e}") from e
    return audio, manifest


def read_sealed_bundle(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise BundleIOError(f"IO error: {e}") from e


def write_extracted_audio(directory: str, filename: str, data: bytes) -> str:
    """
    Write decrypted audio into directory and return the written path.
    Only the base name of the bundle-supplied filename is used.
    """
    name = os.path.basename(filename.replace("\\", "/")) or "recording"
    if name in (".", ".."):
        name = "recording"
    path = os.path.join(directory, name)
    try:
        os.makedirs(directory, exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise BundleIOError(f"IO error: {e}") from e
    return path
