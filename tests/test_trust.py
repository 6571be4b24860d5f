"""Trust level truth table."""
from __future__ import annotations

import itertools
import json

import pytest
from conftest import CLOCK, LOCATION, MOTION, continuity

from proofaudio.common.protocol import TrustVectors
from proofaudio.trust import TrustLevel, compute_trust_level


def _vectors(location, motion, cont, clock):
    d = {}
    if location:
        d["location"] = LOCATION
    if motion:
        d["motion"] = MOTION
    if cont is not None:
        d["continuity"] = continuity(cont)
    if clock:
        d["clock"] = CLOCK
    return TrustVectors.model_validate_json(json.dumps(d))


def _expected(location, motion, cont):
    if location and motion and cont is True:
        return TrustLevel.A
    if location and motion:
        return TrustLevel.B
    return TrustLevel.C


# continuity: None = absent, True = uninterrupted, False = interrupted
@pytest.mark.parametrize(
    "location,motion,cont,clock",
    list(itertools.product([False, True], [False, True], [None, True, False], [False, True])),
)
def test_truth_table(location, motion, cont, clock):
    assert compute_trust_level(_vectors(location, motion, cont, clock)) == _expected(location, motion, cont)


def test_named_cases():
    assert compute_trust_level(_vectors(True, True, True, False)) == TrustLevel.A
    assert compute_trust_level(_vectors(True, True, False, True)) == TrustLevel.B
    assert compute_trust_level(_vectors(True, True, None, False)) == TrustLevel.B
    assert compute_trust_level(_vectors(False, True, True, True)) == TrustLevel.C
    assert compute_trust_level(TrustVectors()) == TrustLevel.C


def test_levels_are_ordered():
    assert TrustLevel.A > TrustLevel.B > TrustLevel.C
    assert max(TrustLevel) == TrustLevel.A


def test_presentation():
    assert TrustLevel.A.display_name == "Level A"
    assert TrustLevel.B.label == "Verified Capture + Context"
    assert TrustLevel.C.label == "Verified Capture"
    assert "without interruption" in TrustLevel.A.explanation
    assert TrustLevel.A.color_code.startswith("\x1b[")
