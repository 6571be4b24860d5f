# proofaudio/common/errors.py
"""
Verification failures.

Every failure the verifier can report is a subclass of VerifyError.
The class is the discriminant; exit_code is what the CLI returns for it.
"""


class VerifyError(Exception):
    exit_code = 1
    message = "Verification failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class HashMismatch(VerifyError):
    exit_code = 1
    message = "Audio has been modified since capture"


class SignatureInvalid(VerifyError):
    exit_code = 2
    message = "Signature verification failed"


class ManifestMalformed(VerifyError):
    exit_code = 3
    message = "Invalid proof file"


class SchemaUnsupported(VerifyError):
    exit_code = 4

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Proof format version {version} is not supported")


class AudioFileMissing(VerifyError):
    exit_code = 5
    message = "Audio file not found"


class AudioFileCorrupt(VerifyError):
    exit_code = 6
    message = "Audio file is corrupted"


class DecryptionFailed(VerifyError):
    exit_code = 7
    message = "Could not decrypt. Check your password"


class BundleCorrupted(VerifyError):
    exit_code = 8
    message = "This file has been modified and cannot be opened"


class UnsupportedBundleVersion(VerifyError):
    exit_code = 9

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"This sealed proof requires a newer app version (bundle version {version})")


class BundleIOError(VerifyError):
    exit_code = 10
    message = "I/O error"


class InvalidEncoding(VerifyError):
    exit_code = 3
    message = "Base64 decoding error"
