# proofaudio/trust.py
"""
Trust level classification.

Rules (first match wins):
  A  location + motion + continuity with uninterrupted == true
  B  location + motion
  C  anything else
Clock data is informational and never changes the level.
"""
from enum import IntEnum

from proofaudio.common.protocol import TrustVectors


class TrustLevel(IntEnum):
    # ordered: A > B > C
    C = 1
    B = 2
    A = 3

    @property
    def display_name(self) -> str:
        return f"Level {self.name}"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def explanation(self) -> str:
        return _EXPLANATIONS[self]

    @property
    def color_code(self) -> str:
        """ANSI color for terminal output."""
        return _COLORS[self]


_LABELS = {
    TrustLevel.A: "Verified Continuous Capture",
    TrustLevel.B: "Verified Capture + Context",
    TrustLevel.C: "Verified Capture",
}

_EXPLANATIONS = {
    TrustLevel.A: "This recording was captured continuously without interruption, with full context.",
    TrustLevel.B: "This recording was captured by ProofAudio with location and motion context.",
    TrustLevel.C: "This recording was captured by ProofAudio and has not been modified.",
}

_COLORS = {
    TrustLevel.A: "\x1b[32m",  # green
    TrustLevel.B: "\x1b[34m",  # blue
    TrustLevel.C: "\x1b[33m",  # yellow
}


def compute_trust_level(vectors: TrustVectors) -> TrustLevel:
    has_location = vectors.location is not None
    has_motion = vectors.motion is not None
    uninterrupted = vectors.continuity is not None and vectors.continuity.uninterrupted

    if has_location and has_motion and uninterrupted:
        return TrustLevel.A
    if has_location and has_motion:
        return TrustLevel.B
    return TrustLevel.C
