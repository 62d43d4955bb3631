"""Core rules engine for antibiotic safety validation."""

import logging
import uuid
from typing import Any, Iterable

from .config import DEFAULT_PENALTIES, Config
from .drug_taxonomy import DrugProfile
from .models import AlertCategory, ClinicalAlert, PatientContext, ValidationResult

logger = logging.getLogger(__name__)

REVIEW_CATEGORIES = (AlertCategory.CRITICAL, AlertCategory.MAJOR)


def generate_alert_id(key: str) -> str:
    """Generate a unique alert ID with a stable, readable prefix."""
    return f"{key}_{uuid.uuid4().hex[:12]}"


class BaseRuleModule:
    """Base class for rule modules.

    ``name`` keys the module's confidence penalty. ``penalized_categories``
    lists which alert categories incur it; None means every alert does.
    """

    name: str = ""
    penalized_categories: frozenset[AlertCategory] | None = frozenset({AlertCategory.CRITICAL})

    def evaluate(
        self,
        drug: DrugProfile,
        context: PatientContext,
        current_medications: list[str],
    ) -> list[ClinicalAlert]:
        """Return alerts for the proposed antibiotic.

        Args:
            drug: Resolved proposed antibiotic
            context: Validated patient context
            current_medications: Concomitant medication names

        Returns:
            List of ClinicalAlert objects
        """
        raise NotImplementedError

    def penalizes(self, alert: ClinicalAlert) -> bool:
        if self.penalized_categories is None:
            return True
        return alert.category in self.penalized_categories

    def _alert(self, key: str, **fields: Any) -> ClinicalAlert:
        return ClinicalAlert(id=generate_alert_id(key), **fields)


class ClinicalValidationEngine:
    """Evaluates a proposed antibiotic against the safety rules."""

    def __init__(self, config: dict | None = None):
        """Initialize rules engine.

        Args:
            config: Optional overrides: {"penalties": {...}, "review_threshold": int}
        """
        self.config = config or {}
        self.penalties = {**DEFAULT_PENALTIES, **self.config.get("penalties", {})}
        self.review_threshold = self.config.get("review_threshold", Config.REVIEW_THRESHOLD)
        self.rules: list[BaseRuleModule] = []

        self._register_rules()

    def _register_rules(self) -> None:
        """Register all rule modules in evaluation order."""
        from .rules.pregnancy_rules import PregnancyRules
        from .rules.pediatric_rules import PediatricRules
        from .rules.renal_rules import RenalRules
        from .rules.allergy_rules import AllergyRules
        from .rules.interaction_rules import DrugInteractionRules
        from .rules.resistance_rules import ResistanceRules
        from .rules.dosing_rules import DosingRules

        # Order is part of the contract: alerts are reported in this sequence
        self.rules = [
            PregnancyRules(),
            PediatricRules(),
            RenalRules(),
            AllergyRules(),
            DrugInteractionRules(),
            ResistanceRules(),
            DosingRules(),
        ]

    def evaluate(
        self,
        antibiotic: str,
        patient: PatientContext | dict,
        current_medications: Iterable[str] | None = None,
    ) -> ValidationResult:
        """Run all rules for one antibiotic, return the aggregated verdict.

        Args:
            antibiotic: Proposed antibiotic name
            patient: PatientContext or raw patient dict
            current_medications: Concomitant medication names

        Returns:
            ValidationResult with alerts, blocking issues and confidence score

        Raises:
            InvalidPatientDataError: if a raw patient dict has malformed fields
        """
        context = patient if isinstance(patient, PatientContext) else PatientContext.from_dict(patient)
        drug = DrugProfile.resolve(antibiotic)
        medications = [m for m in (current_medications or []) if m]

        alerts: list[ClinicalAlert] = []
        blocking_issues: list[ClinicalAlert] = []
        confidence_score = 100

        for rule_module in self.rules:
            try:
                module_alerts = rule_module.evaluate(drug, context, medications)
            except Exception as e:
                logger.error(
                    f"Error in {rule_module.__class__.__name__}: {e}", exc_info=True
                )
                # Continue with other rules even if one fails
                continue

            for alert in module_alerts:
                alerts.append(alert)
                # Blocking follows category alone, even for overridable alerts
                if alert.is_blocking:
                    blocking_issues.append(alert)
                if rule_module.penalizes(alert):
                    confidence_score -= self.penalties.get(rule_module.name, 0)

        confidence_score = min(100, max(0, confidence_score))
        requires_review = (
            confidence_score < self.review_threshold
            or any(a.category in REVIEW_CATEGORIES for a in alerts)
        )

        logger.debug(
            f"Validated {drug.display_name}: {len(alerts)} alerts, "
            f"{len(blocking_issues)} blocking, confidence {confidence_score}"
        )

        return ValidationResult(
            is_valid=len(blocking_issues) == 0,
            alerts=alerts,
            confidence_score=confidence_score,
            requires_review=requires_review,
            blocking_issues=blocking_issues,
        )


# Module-level instance for convenience
_engine: ClinicalValidationEngine | None = None


def get_validation_engine() -> ClinicalValidationEngine:
    """Get or create the module-level validation engine instance."""
    global _engine
    if _engine is None:
        _engine = ClinicalValidationEngine()
    return _engine


def validate_clinical_recommendation(
    antibiotic: str,
    patient_data: PatientContext | dict,
    current_medications: Iterable[str] | None = None,
) -> ValidationResult:
    """Validate an antibiotic choice for a patient."""
    return get_validation_engine().evaluate(antibiotic, patient_data, current_medications)


def generate_clinical_alerts(
    antibiotic: str,
    patient_data: PatientContext | dict,
    current_medications: Iterable[str] | None = None,
) -> list[ClinicalAlert]:
    """Return only the alerts of a validation run."""
    return validate_clinical_recommendation(antibiotic, patient_data, current_medications).alerts


def requires_clinical_override(
    antibiotic: str,
    patient_data: PatientContext | dict,
    current_medications: Iterable[str] | None = None,
) -> bool:
    """Check whether the choice has blocking issues needing an override."""
    result = validate_clinical_recommendation(antibiotic, patient_data, current_medications)
    return len(result.blocking_issues) > 0 or not result.is_valid
