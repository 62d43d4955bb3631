"""Guideline repository and scenario matcher.

Loads IDSA / CDC scenario tables and WHO stewardship principles from JSON
under the configured guidelines directory. Data is read once, when the
repository is created, and never mutated afterwards.
"""

import json
import logging
from pathlib import Path

from ..config import Config
from .models import ClinicalScenario
from .taxonomy import normalize_condition

logger = logging.getLogger(__name__)

# Scenario tables, in registration order. Scenarios for the same condition
# from later files are appended after earlier ones.
SCENARIO_FILES = ("idsa_guidelines.json", "cdc_guidelines.json")
STEWARDSHIP_FILE = "who_stewardship.json"


def _normalize(value: str | None) -> str:
    # str-valued enums lower-case to their value
    return value.lower().strip() if value else ""


class GuidelineRepository:
    """Scenario tables keyed by canonical condition."""

    def __init__(self, data_dir: str | Path | None = None):
        """Initialize the repository.

        Args:
            data_dir: Directory holding the guideline JSON files
                (defaults to Config.GUIDELINES_DIR)
        """
        self.data_dir = Path(data_dir) if data_dir else Config.GUIDELINES_DIR

        self.scenarios: dict[str, list[ClinicalScenario]] = {}
        self.stewardship: dict[str, list[str]] = {}

        self._load_scenarios()
        self._load_stewardship()

    def _read_json(self, filename: str) -> dict | None:
        path = self.data_dir / filename
        if not path.exists():
            logger.warning(f"Guideline data not found: {path}")
            return None

        with open(path, "r") as f:
            return json.load(f)

    def _load_scenarios(self) -> None:
        """Load scenario tables from JSON."""
        for filename in SCENARIO_FILES:
            data = self._read_json(filename)
            if data is None:
                continue

            guideline = data.get("guideline")
            count = 0
            for condition_key, entries in data.get("conditions", {}).items():
                scenarios = self.scenarios.setdefault(condition_key, [])
                for entry in entries:
                    scenarios.append(ClinicalScenario.from_dict(entry, guideline))
                    count += 1

            logger.info(f"Loaded {guideline} guidelines: {count} scenarios")

    def _load_stewardship(self) -> None:
        """Load WHO stewardship principles from JSON."""
        data = self._read_json(STEWARDSHIP_FILE)
        if data is None:
            return

        self.stewardship = data.get("antimicrobial_stewardship", {})
        logger.info(
            f"Loaded stewardship principles: "
            f"{len(self.stewardship.get('empiric_therapy_principles', []))} principles"
        )

    @property
    def conditions(self) -> list[str]:
        return list(self.scenarios)

    def get_scenarios(self, condition: str) -> list[ClinicalScenario]:
        """Get every scenario registered for a condition, in registration order."""
        return list(self.scenarios.get(normalize_condition(condition), []))

    def match(
        self,
        condition: str,
        patient_type: str,
        severity: str,
        setting: str,
    ) -> ClinicalScenario | None:
        """Find the best scenario for a clinical situation.

        Tries an exact (patient type, severity, setting) match, then the first
        scenario with the same severity, then the condition's first scenario.

        Args:
            condition: Free-text condition (e.g., "pneumonia", "UTI")
            patient_type: adult, pediatric, elderly, immunocompromised, pregnant
            severity: mild, moderate, severe, critical
            setting: outpatient, inpatient, icu, emergency

        Returns:
            ClinicalScenario, or None if the condition is not recognized
        """
        condition_key = normalize_condition(condition)
        scenarios = self.scenarios.get(condition_key)
        if not scenarios:
            logger.debug(f"No guidelines registered for condition '{condition}'")
            return None

        patient_type = _normalize(patient_type)
        severity = _normalize(severity)
        setting = _normalize(setting)

        for scenario in scenarios:
            if scenario.matches(patient_type, severity, setting):
                return scenario

        for scenario in scenarios:
            if scenario.severity == severity:
                logger.debug(
                    f"No exact scenario for {condition_key} ({patient_type}, {severity}, "
                    f"{setting}); using severity match '{scenario.condition}'"
                )
                return scenario

        logger.debug(f"Falling back to first {condition_key} scenario '{scenarios[0].condition}'")
        return scenarios[0]


# Module-level instance for convenience
_repository: GuidelineRepository | None = None


def get_guideline_repository() -> GuidelineRepository:
    """Get or create the module-level guideline repository."""
    global _repository
    if _repository is None:
        _repository = GuidelineRepository()
    return _repository


def get_evidence_based_recommendation(
    condition: str,
    patient_type: str,
    severity: str,
    setting: str,
) -> ClinicalScenario | None:
    """Retrieve the guideline scenario for a clinical situation."""
    return get_guideline_repository().match(condition, patient_type, severity, setting)


def get_stewardship_principles() -> dict[str, list[str]]:
    """Get WHO empiric-therapy principles and reserve antibiotics."""
    stewardship = get_guideline_repository().stewardship
    return {key: list(values) for key, values in stewardship.items()}
