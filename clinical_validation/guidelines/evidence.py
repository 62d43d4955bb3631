"""Evidence grading and combined guideline recommendations."""

import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import Config
from ..models import PatientContext
from .models import ClinicalEvidence, ClinicalScenario, PatientType
from .repository import get_evidence_based_recommendation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendationStrength:
    """Graded strength of one guideline recommendation."""
    strength: str                         # Strong, Moderate, Weak, Unknown
    description: str
    confidence: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "strength": self.strength,
            "description": self.description,
            "confidence": self.confidence,
        }


EVIDENCE_STRENGTH: dict[str, RecommendationStrength] = {
    "A-I": RecommendationStrength("Strong", "Strong recommendation based on high-quality evidence", 95),
    "A-II": RecommendationStrength("Strong", "Strong recommendation based on moderate-quality evidence", 90),
    "A-III": RecommendationStrength("Strong", "Strong recommendation based on expert opinion", 85),
    "B-I": RecommendationStrength("Moderate", "Moderate recommendation based on high-quality evidence", 80),
    "B-II": RecommendationStrength("Moderate", "Moderate recommendation based on moderate-quality evidence", 75),
    "B-III": RecommendationStrength("Moderate", "Moderate recommendation based on expert opinion", 70),
    "C-I": RecommendationStrength("Weak", "Weak recommendation based on high-quality evidence", 65),
    "C-II": RecommendationStrength("Weak", "Weak recommendation based on moderate-quality evidence", 60),
    "C-III": RecommendationStrength("Weak", "Weak recommendation based on expert opinion", 55),
}

UNKNOWN_STRENGTH = RecommendationStrength("Unknown", "Evidence strength not determined", 50)

NO_GUIDELINES_SUMMARY = "No specific guidelines found for this clinical scenario"

# Drug-specific monitoring added on top of what the guideline evidence lists
DRUG_MONITORING: list[tuple[tuple[str, ...], list[str]]] = [
    (("vancomycin",), [
        "Vancomycin trough levels (goal 10-20 mg/L)",
        "Renal function monitoring",
        "Audiometry if prolonged use",
    ]),
    (("gentamicin", "tobramycin"), [
        "Peak and trough levels",
        "Daily creatinine",
        "Baseline audiometry",
    ]),
    (("levofloxacin", "ciprofloxacin"), [
        "Tendon pain assessment",
        "CNS effects monitoring",
        "QT interval if risk factors",
    ]),
]


@dataclass
class CombinedRecommendation:
    """First-line and alternative therapy for a condition and patient."""
    primary: list[ClinicalEvidence] = field(default_factory=list)
    alternative: list[ClinicalEvidence] = field(default_factory=list)
    evidence_summary: str = NO_GUIDELINES_SUMMARY
    guideline_consensus: bool = False
    scenario: ClinicalScenario | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary": [e.to_dict() for e in self.primary],
            "alternative": [e.to_dict() for e in self.alternative],
            "evidence_summary": self.evidence_summary,
            "guideline_consensus": self.guideline_consensus,
            "scenario": self.scenario.condition if self.scenario else None,
        }


def get_recommendation_strength(evidence: ClinicalEvidence) -> RecommendationStrength:
    """Grade a recommendation by its evidence level."""
    return EVIDENCE_STRENGTH.get(evidence.strength_of_evidence, UNKNOWN_STRENGTH)


def determine_patient_type(patient: PatientContext | dict) -> PatientType:
    """Classify the patient for scenario matching.

    Priority: pregnant > immunocompromised > pediatric (< 18) > elderly (>= 65) > adult.
    An unknown age classifies as adult.
    """
    context = patient if isinstance(patient, PatientContext) else PatientContext.from_dict(patient)

    if context.is_pregnant:
        return PatientType.PREGNANT
    if context.immunosuppressed:
        return PatientType.IMMUNOCOMPROMISED
    if context.age is not None and context.age < 18:
        return PatientType.PEDIATRIC
    if context.age is not None and context.age >= 65:
        return PatientType.ELDERLY
    return PatientType.ADULT


def generate_evidence_summary(
    primary: list[ClinicalEvidence],
    alternative: list[ClinicalEvidence],
) -> str:
    """Summarize guideline sources and graded strengths, in first-seen order."""
    all_evidence = primary + alternative

    guidelines: list[str] = []
    strength_counts: dict[str, int] = {}
    for evidence in all_evidence:
        if evidence.guideline not in guidelines:
            guidelines.append(evidence.guideline)
        strength = get_recommendation_strength(evidence).strength
        strength_counts[strength] = strength_counts.get(strength, 0) + 1

    counts = ", ".join(f"{count} {strength.lower()}" for strength, count in strength_counts.items())
    return (
        f"Recommendations based on {', '.join(guidelines)} guidelines. "
        f"Evidence strength: {counts} recommendations."
    )


def check_guideline_consensus(evidence: list[ClinicalEvidence]) -> bool:
    """Check whether first-line recommendations agree.

    Deliberately weak: true when there are fewer than two items, or when any
    later recommendation mentions the leading word of the first one.
    """
    if len(evidence) < 2:
        return True

    lead = evidence[0].recommendation.split(" ")[0].lower()
    return any(lead in e.recommendation.lower() for e in evidence[1:])


def get_combined_guideline_recommendations(
    condition: str,
    patient_data: PatientContext | dict,
) -> CombinedRecommendation:
    """Assemble primary and alternative therapy for a condition.

    Args:
        condition: Free-text condition (e.g., "pneumonia")
        patient_data: PatientContext or raw patient dict; severity and setting
            default to Config.DEFAULT_SEVERITY / Config.DEFAULT_SETTING

    Returns:
        CombinedRecommendation (empty with a "no guidelines" summary when the
        condition is not recognized)

    Raises:
        InvalidPatientDataError: if a raw patient dict has malformed fields
    """
    context = (
        patient_data if isinstance(patient_data, PatientContext)
        else PatientContext.from_dict(patient_data)
    )
    patient_type = determine_patient_type(context)
    severity = context.severity or Config.DEFAULT_SEVERITY
    setting = context.setting or Config.DEFAULT_SETTING

    scenario = get_evidence_based_recommendation(condition, patient_type, severity, setting)
    if scenario is None:
        return CombinedRecommendation()

    primary = list(scenario.first_line)
    alternative = list(scenario.second_line) + list(scenario.alternatives)

    logger.debug(
        f"Matched '{condition}' ({patient_type.value}, {severity}, {setting}) "
        f"to '{scenario.condition}'"
    )

    return CombinedRecommendation(
        primary=primary,
        alternative=alternative,
        evidence_summary=generate_evidence_summary(primary, alternative),
        guideline_consensus=check_guideline_consensus(primary),
        scenario=scenario,
    )


def get_monitoring_requirements(
    antibiotic: str,
    evidence: list[ClinicalEvidence],
) -> list[str]:
    """Collect monitoring items for an antibiotic, de-duplicated in first-seen order."""
    monitoring: list[str] = []

    def add(item: str) -> None:
        if item not in monitoring:
            monitoring.append(item)

    for e in evidence:
        for item in e.monitoring:
            add(item)

    drug = (antibiotic or "").lower()
    for names, items in DRUG_MONITORING:
        if any(name in drug for name in names):
            for item in items:
                add(item)

    return monitoring
