# proofaudio/cli.py
"""
proofaudio-verify: check a ProofAudio recording from the command line.

  proofaudio-verify ./recording_bundle/
  proofaudio-verify evidence.proofaudio --password ... --extract ./out
  proofaudio-verify ./recording_bundle/ --format json

Exit status is 0 when verified, otherwise the failure's exit code.
"""
import argparse
import getpass
import json
import logging
import os
import sys

from proofaudio import config
from proofaudio.common.errors import (
    DecryptionFailed,
    HashMismatch,
    SignatureInvalid,
    VerifyError,
)
from proofaudio.storage import bundle as bundlemod
from proofaudio.verify import VerificationResult, verify_sealed_bundle_file, verify_standard_bundle

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
GREEN = "\x1b[32m"
RED = "\x1b[31m"

LIMITATIONS = (
    "This verification proves capture integrity, NOT:",
    "- Who is speaking",
    "- That statements are true",
    "- Legal consent to record",
    "- Absence of AI-generated audio",
)

STATIONARY_VARIANCE = 0.01


def get_password(args) -> str:
    if args.password is not None:
        return args.password
    env_pwd = os.environ.get(config.PASSWORD_ENV)
    if env_pwd is not None:
        return env_pwd
    return getpass.getpass("Password: ").strip()


def run(args) -> VerificationResult:
    if bundlemod.is_sealed_bundle(args.path):
        password = get_password(args)
        result = verify_sealed_bundle_file(args.path, password)
        if args.extract:
            out = bundlemod.write_extracted_audio(args.extract, result.audio_filename, result.audio_data)
            print(f"Audio extracted to: {out}", file=sys.stderr)
        return VerificationResult(manifest=result.manifest, trust_level=result.trust_level)

    if args.extract:
        print("Note: --extract only applies to sealed .proofaudio files.", file=sys.stderr)
        print("      Standard bundles already contain the audio file.", file=sys.stderr)
    return verify_standard_bundle(args.path)


# ---- reports ----

def success_json(result: VerificationResult) -> dict:
    m = result.manifest
    tv = m.trust_vectors
    loc = tv.location
    return {
        "status": "verified",
        "trustLevel": result.trust_level.display_name,
        "trustLevelLabel": result.trust_level.label,
        "recording": {
            "captureStart": m.capture_start,
            "captureEnd": m.capture_end,
            "durationSeconds": m.duration_seconds,
            "audioFormat": m.audio_format,
            "audioSizeBytes": m.audio_size_bytes,
            "audioHash": m.audio_hash,
        },
        "identity": {
            "deviceKeyId": m.device_key_id,
            "appBundleId": m.app_bundle_id,
            "appVersion": m.app_version,
        },
        "trustVectors": {
            "location": None if loc is None else {
                "startLat": loc.start.lat,
                "startLon": loc.start.lon,
                "startAccuracy": loc.start.accuracy,
                "endLat": loc.end.lat,
                "endLon": loc.end.lon,
                "endAccuracy": loc.end.accuracy,
            },
            "motion": None if tv.motion is None else {
                "accelerationVariance": tv.motion.acceleration_variance,
                "sampleCount": tv.motion.sample_count,
            },
            "continuity": None if tv.continuity is None else {
                "uninterrupted": tv.continuity.uninterrupted,
            },
            "clock": None if tv.clock is None else {
                "timeZone": tv.clock.time_zone,
            },
        },
    }


def success_text(result: VerificationResult, verbose: bool = False) -> str:
    m = result.manifest
    tv = m.trust_vectors
    level = result.trust_level
    lines = [
        "",
        f"{BOLD}PROOFAUDIO VERIFICATION SUMMARY{RESET}",
        "===============================",
        f"Status:      {BOLD}{GREEN}VERIFIED{RESET}",
        f"Trust Level: {level.color_code}{level.display_name} ({level.label}){RESET}",
        "",
        f"{BOLD}RECORDING DETAILS{RESET}",
        "-----------------",
        f"Captured:    {m.capture_start}",
        f"Duration:    {m.duration_seconds:.1f}s",
        f"Format:      {m.audio_format.upper()}",
        f"Size:        {m.audio_size_bytes} bytes",
    ]
    if verbose:
        lines.append(f"Audio Hash:  {m.audio_hash}")

    lines += [
        "",
        f"{BOLD}CRYPTOGRAPHIC IDENTITY{RESET}",
        "----------------------",
        f"Device Key:  {m.device_key_id[:20]}...",
        f"App:         {m.app_bundle_id} v{m.app_version}",
        "",
        f"{BOLD}TRUST VECTORS{RESET}",
        "-------------",
    ]

    if tv.location is not None:
        s, e = tv.location.start, tv.location.end
        lines.append(f"Location:    {s.lat:.3f}, {s.lon:.3f} -> {e.lat:.3f}, {e.lon:.3f} (+/- {s.accuracy:.0f}m)")
    else:
        lines.append("Location:    Not captured")

    if tv.motion is not None:
        variance = tv.motion.acceleration_variance
        state = "Stationary" if variance < STATIONARY_VARIANCE else "In motion"
        lines.append(f"Motion:      {state} (variance: {variance:.4f})")
    else:
        lines.append("Motion:      Not captured")

    if tv.continuity is not None:
        status = "Uninterrupted" if tv.continuity.uninterrupted else "Interrupted"
        lines.append(f"Continuity:  {status}")
        if verbose:
            for ev in tv.continuity.interruption_events:
                lines.append(f"             {ev.timestamp} {ev.reason}")
    else:
        lines.append("Continuity:  Not tracked")

    if tv.clock is not None:
        lines.append(f"Clock:       {tv.clock.time_zone}")

    lines += ["", f"{BOLD}LIMITATIONS{RESET}", "-----------", *LIMITATIONS, ""]
    return "\n".join(lines)


def error_text(err: VerifyError) -> str:
    lines = [
        "",
        f"{BOLD}PROOFAUDIO VERIFICATION SUMMARY{RESET}",
        "===============================",
        f"Status:      {BOLD}{RED}FAILED{RESET}",
        f"Error:       {err}",
        "",
    ]
    if isinstance(err, HashMismatch):
        lines += ["The audio file does not match the cryptographic hash",
                  "recorded at capture time. This recording cannot be",
                  "verified as authentic."]
    elif isinstance(err, SignatureInvalid):
        lines += ["The digital signature is invalid. The manifest may have",
                  "been tampered with or was not created by ProofAudio."]
    elif isinstance(err, DecryptionFailed):
        lines += ["Could not decrypt the sealed proof. Please check your",
                  "password and try again."]
    lines.append("")
    return "\n".join(lines)


def error_json(err: VerifyError) -> dict:
    return {"status": "failed", "error": str(err), "exitCode": err.exit_code}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proofaudio-verify",
        description="Verify ProofAudio recordings from the command line",
    )
    parser.add_argument("path", metavar="PATH", help="proof bundle directory, manifest.json or .proofaudio file")
    parser.add_argument("-p", "--password", help="password for sealed bundles (prompted if omitted)")
    parser.add_argument("-f", "--format", choices=["text", "json"], default="text", type=str.lower)
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("-e", "--extract", metavar="DIR", help="write the audio of a sealed bundle to DIR")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    try:
        result = run(args)
    except VerifyError as e:
        if args.format == "json":
            print(json.dumps(error_json(e), indent=2))
        else:
            print(error_text(e), file=sys.stderr)
        return e.exit_code

    if args.format == "json":
        print(json.dumps(success_json(result), indent=2))
    else:
        print(success_text(result, args.verbose))
    return 0


if __name__ == "__main__":
    sys.exit(main())
