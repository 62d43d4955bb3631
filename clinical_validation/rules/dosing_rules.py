"""Dosing appropriateness rules.

Vancomycin and daptomycin in patients over 100 kg should be dosed on actual
body weight with therapeutic monitoring.
"""

import logging

from ..contraindications import WEIGHT_BASED_DOSING
from ..drug_taxonomy import DrugProfile
from ..models import AlertCategory, AlertSource, AlertType, ClinicalAlert, PatientContext
from ..rules_engine import BaseRuleModule

logger = logging.getLogger(__name__)


class DosingRules(BaseRuleModule):
    """Check weight-sensitive dosing."""

    name = "dosing"
    penalized_categories = None

    def evaluate(
        self,
        drug: DrugProfile,
        context: PatientContext,
        current_medications: list[str],
    ) -> list[ClinicalAlert]:
        weight = context.weight_kg
        if weight is None or weight <= WEIGHT_BASED_DOSING["weight_threshold_kg"]:
            return []
        if not drug.matches_any(WEIGHT_BASED_DOSING["drugs"]):
            return []

        logger.debug(f"{drug.display_name}: weight-based dosing at {weight} kg")
        return [
            self._alert(
                "dosing_weight",
                category=AlertCategory.MODERATE,
                type=AlertType.DOSING,
                title="Weight-Based Dosing Required",
                message=f"Patient weight >{WEIGHT_BASED_DOSING['weight_threshold_kg']}kg requires adjusted dosing",
                recommendation="Calculate dose based on actual body weight, consider therapeutic monitoring",
                evidence="Pharmacokinetic studies in obese patients",
                source=AlertSource.PHARMACOKINETICS,
                is_overridable=False,
                requires_justification=False,
            )
        ]
