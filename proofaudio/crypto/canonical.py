# proofaudio/crypto/canonical.py
"""
Canonical JSON for manifest signatures.

The device signs SHA-256 over a compact, key-sorted JSON rendering of the
manifest without its "signature" member. The verifier has to rebuild that
text byte for byte, so the rules follow the device encoder rather than
Python's json.dumps:
 - object keys sorted by code point, no whitespace
 - "/" is escaped as "\\/"
 - \\n, \\r, \\t use short escapes; every other control character is \\u00xx
 - non-ASCII text is written as raw UTF-8
 - numbers keep the text form they get from parsing

Callers must pass the manifest bytes exactly as received (or a tree parsed
from them), never a re-serialization of the typed model.
"""
import json
from typing import Any, Union

from proofaudio.common.errors import ManifestMalformed
from proofaudio.common.utils import sha256_bytes

SIGNATURE_KEY = "signature"

_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def parse_json(source: bytes) -> Any:
    """Parse strict UTF-8 JSON into a plain dict/list tree."""
    try:
        text = source.decode("utf-8")
        return json.loads(text, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError) as e:
        raise ManifestMalformed(f"manifest is not valid JSON: {e}") from e


def _is_control(ch: str) -> bool:
    cp = ord(ch)
    return cp < 0x20 or 0x7F <= cp <= 0x9F


def escape_string(s: str) -> str:
    out = []
    for ch in s:
        if ch in _SHORT_ESCAPES:
            out.append(_SHORT_ESCAPES[ch])
        elif _is_control(ch):
            out.append("\\u%04x" % ord(ch))
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _encode(value: Any) -> str:
    # bool before int: bool is an int subclass
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return escape_string(value)
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_encode(v) for v in value) + "]"
    if isinstance(value, dict):
        items = sorted(value.items(), key=lambda kv: kv[0])
        return "{" + ",".join(escape_string(k) + ":" + _encode(v) for k, v in items) + "}"
    raise ManifestMalformed(f"unsupported JSON value of type {type(value).__name__}")


def strip_signature(tree: Any) -> Any:
    """Return the tree without its top-level signature member; the input is not modified."""
    if isinstance(tree, dict):
        return {k: v for k, v in tree.items() if k != SIGNATURE_KEY}
    return tree


def canonicalize(source: Union[bytes, Any]) -> str:
    """
    Canonical text for raw manifest bytes or an already parsed tree.
    The top-level signature member is left out.
    """
    tree = parse_json(source) if isinstance(source, (bytes, bytearray)) else source
    return _encode(strip_signature(tree))


def canonical_hash(source: Union[bytes, Any]) -> bytes:
    """SHA-256 of the UTF-8 canonical text: the digest the device signed."""
    return sha256_bytes(canonicalize(source).encode("utf-8"))
