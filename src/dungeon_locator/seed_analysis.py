"""World seed input: typed seeds and SeedCrackerX log exports."""

from __future__ import annotations

import re
from pathlib import Path

from .models import InvalidPlacementInput, SeedKnowledge
from .rng import to_int32

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_NUMERIC_SEED = re.compile(r"^[+-]?\d+$")

SEED_PATTERNS = [
    re.compile(r"(?:Cracked\s+seed|World\s+seed|Seed)\s*[:=]\s*(-?\d+)", re.IGNORECASE),
    re.compile(r"seed\s+found\s*[:=]\s*(-?\d+)", re.IGNORECASE),
]
MISSING_PATTERNS = [
    re.compile(r"missing\s*[:=]\s*(.+)", re.IGNORECASE),
    re.compile(r"still\s+need\s*[:=]\s*(.+)", re.IGNORECASE),
]
CANDIDATE_PAT = re.compile(r"(?:candidates?|possible seeds?)\s*[:=]\s*(\d+)", re.IGNORECASE)


def java_string_hash(text: str) -> int:
    """Host string hash over UTF-16 code units, wrapped to 32 bits."""
    value = 0
    encoded = text.encode("utf-16-be")
    for index in range(0, len(encoded), 2):
        value = (31 * value + int.from_bytes(encoded[index : index + 2], "big")) & 0xFFFFFFFF
    return to_int32(value)


def parse_world_seed(text: str) -> int:
    """Turn a typed seed into the numeric world seed the host would use."""
    stripped = text.strip()
    if not stripped:
        raise InvalidPlacementInput("world seed is empty")

    if _NUMERIC_SEED.match(stripped):
        value = int(stripped)
        if _INT64_MIN <= value <= _INT64_MAX:
            return value
    return java_string_hash(stripped)


def _details(text: str) -> dict[str, int]:
    details: dict[str, int] = {}
    if (candidate_match := CANDIDATE_PAT.search(text)):
        details["candidate_count"] = int(candidate_match.group(1))
    return details


def analyze_seedcracker_text(text: str) -> SeedKnowledge:
    for pattern in SEED_PATTERNS:
        seed_match = pattern.search(text)
        if seed_match:
            return SeedKnowledge(
                seed=int(seed_match.group(1)),
                confidence=1.0,
                source="seedcrackerx",
                details=_details(text),
            )

    missing: list[str] = []
    for line in text.splitlines():
        for pattern in MISSING_PATTERNS:
            match = pattern.search(line)
            if match:
                missing.extend(item.strip(" .") for item in match.group(1).split(",") if item.strip())

    return SeedKnowledge(
        seed=None,
        confidence=0.0,
        source="seedcrackerx",
        requirements_missing=sorted(set(missing)) or ["Let SeedCrackerX collect more structure observations"],
        details=_details(text),
    )


def analyze_seedcracker_file(path: str | Path) -> SeedKnowledge:
    log_path = Path(path)
    if not log_path.exists():
        return SeedKnowledge(
            seed=None,
            confidence=0.0,
            source="seedcrackerx",
            requirements_missing=[f"SeedCrackerX log does not exist: {log_path}"],
        )
    return analyze_seedcracker_text(log_path.read_text(encoding="utf-8", errors="ignore"))
