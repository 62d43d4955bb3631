"""Configuration for the clinical validation engine."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent

# Confidence deductions applied by the aggregator, keyed by rule module
DEFAULT_PENALTIES: dict[str, int] = {
    "pregnancy": 40,
    "pediatric": 35,
    "renal": 30,
    "allergy": 50,
    "interaction": 20,
    "resistance": 15,
    "dosing": 10,
}


def env_int(name: str, default: int) -> int:
    """Read an integer setting, falling back to the default on a malformed value."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid {name}={raw!r}, expected an integer; using {default}")
        return default


class Config:
    """Environment-backed settings."""

    REVIEW_THRESHOLD = env_int("CDS_REVIEW_THRESHOLD", 70)

    GUIDELINES_DIR = Path(
        os.environ.get("CDS_GUIDELINES_DIR", str(PACKAGE_DIR / "guidelines" / "data"))
    )

    LOG_LEVEL = os.environ.get("CDS_LOG_LEVEL", "INFO").upper()

    # Defaults used when patient data leaves these unset
    DEFAULT_SEVERITY = "moderate"
    DEFAULT_SETTING = "outpatient"
