# proofaudio/config.py
"""
Verifier settings.

Format ceilings are fixed in code; only operator conveniences
(password, log level) are read from the environment.
"""
import os

# highest manifest schemaVersion / sealed bundle version this verifier understands
CURRENT_SCHEMA_VERSION = 1
CURRENT_BUNDLE_VERSION = 1

SUPPORTED_KDF_ALGORITHM = "pbkdf2"

MANIFEST_FILENAME = "manifest.json"
AUDIO_EXTENSIONS = ("m4a", "aac", "mp4", "wav")
SEALED_EXTENSION = ".proofaudio"

PASSWORD_ENV = "PROOFAUDIO_PASSWORD"
LOG_LEVEL = os.environ.get("PROOFAUDIO_LOG_LEVEL", "WARNING")
