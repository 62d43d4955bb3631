"""Pregnancy safety rules.

Absolute contraindications (FDA Category D/X) block the recommendation.
Relative contraindications raise a major, overridable caution. Only the
absolute tier carries a confidence deduction; relative alerts still force
review through their category.
"""

import logging

from ..contraindications import CLINICAL_CONTRAINDICATIONS
from ..drug_taxonomy import DrugProfile
from ..models import AlertCategory, AlertSource, AlertType, ClinicalAlert, PatientContext
from ..rules_engine import BaseRuleModule

logger = logging.getLogger(__name__)


class PregnancyRules(BaseRuleModule):
    """Check antibiotic safety in pregnancy."""

    name = "pregnancy"

    def evaluate(
        self,
        drug: DrugProfile,
        context: PatientContext,
        current_medications: list[str],
    ) -> list[ClinicalAlert]:
        if not context.is_pregnant:
            return []

        table = CLINICAL_CONTRAINDICATIONS["pregnancy"]

        if drug.matches_any(table["absolute"]):
            logger.debug(f"{drug.display_name}: absolute pregnancy contraindication")
            return [
                self._alert(
                    "pregnancy_absolute",
                    category=AlertCategory.CRITICAL,
                    type=AlertType.CONTRAINDICATION,
                    title="Absolute Pregnancy Contraindication",
                    message=f"{drug.display_name} is contraindicated in pregnancy due to proven teratogenic effects",
                    recommendation="Use pregnancy-safe alternatives: amoxicillin, azithromycin, or cephalexin",
                    evidence="FDA Category D - Human studies show risk to fetus",
                    source=AlertSource.FDA,
                    is_overridable=False,
                    requires_justification=True,
                )
            ]

        if drug.matches_any(table["relative"]):
            logger.debug(f"{drug.display_name}: relative pregnancy contraindication")
            return [
                self._alert(
                    "pregnancy_relative",
                    category=AlertCategory.MAJOR,
                    type=AlertType.CONTRAINDICATION,
                    title="Pregnancy Caution Required",
                    message=f"{drug.display_name} should be used with caution in pregnancy",
                    recommendation="Consider safer alternatives unless benefit clearly outweighs risk",
                    evidence="Limited human data or animal studies suggest potential risk",
                    source=AlertSource.FDA,
                    is_overridable=True,
                    requires_justification=True,
                )
            ]

        return []
