"""Evidence-based guideline recommendations (IDSA, CDC, WHO)."""

from .evidence import (
    CombinedRecommendation,
    RecommendationStrength,
    determine_patient_type,
    get_combined_guideline_recommendations,
    get_monitoring_requirements,
    get_recommendation_strength,
)
from .models import CareSetting, ClinicalEvidence, ClinicalScenario, DosingGuidance, PatientType, Severity
from .repository import (
    GuidelineRepository,
    get_evidence_based_recommendation,
    get_guideline_repository,
    get_stewardship_principles,
)
from .taxonomy import CONDITION_TAXONOMY, normalize_condition

__all__ = [
    "CONDITION_TAXONOMY",
    "CareSetting",
    "ClinicalEvidence",
    "ClinicalScenario",
    "CombinedRecommendation",
    "DosingGuidance",
    "GuidelineRepository",
    "PatientType",
    "RecommendationStrength",
    "Severity",
    "determine_patient_type",
    "get_combined_guideline_recommendations",
    "get_evidence_based_recommendation",
    "get_guideline_repository",
    "get_monitoring_requirements",
    "get_recommendation_strength",
    "get_stewardship_principles",
    "normalize_condition",
]
