"""Clinical decision validation and evidence-based antibiotic recommendations.

Validates a proposed antibiotic against patient safety rules (pregnancy,
pediatric age, renal function, allergy cross-reactivity, drug interactions,
resistance, weight-based dosing) and assembles IDSA / CDC guideline
recommendations for a condition.
"""

from .guidelines import (
    ClinicalEvidence,
    ClinicalScenario,
    CombinedRecommendation,
    RecommendationStrength,
    determine_patient_type,
    get_combined_guideline_recommendations,
    get_evidence_based_recommendation,
    get_monitoring_requirements,
    get_recommendation_strength,
    get_stewardship_principles,
)
from .models import (
    AlertCategory,
    AlertSource,
    AlertType,
    ClinicalAlert,
    InvalidPatientDataError,
    PatientContext,
    ValidationResult,
)
from .renal import calculate_creatinine_clearance, calculate_egfr
from .rules_engine import (
    ClinicalValidationEngine,
    generate_clinical_alerts,
    requires_clinical_override,
    validate_clinical_recommendation,
)

__all__ = [
    "AlertCategory",
    "AlertSource",
    "AlertType",
    "ClinicalAlert",
    "ClinicalEvidence",
    "ClinicalScenario",
    "ClinicalValidationEngine",
    "CombinedRecommendation",
    "InvalidPatientDataError",
    "PatientContext",
    "RecommendationStrength",
    "ValidationResult",
    "calculate_creatinine_clearance",
    "calculate_egfr",
    "determine_patient_type",
    "generate_clinical_alerts",
    "get_combined_guideline_recommendations",
    "get_evidence_based_recommendation",
    "get_monitoring_requirements",
    "get_recommendation_strength",
    "get_stewardship_principles",
    "requires_clinical_override",
    "validate_clinical_recommendation",
]
