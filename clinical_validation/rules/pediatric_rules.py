"""Pediatric age rules.

- Tetracyclines under 8 years: dental staining, enamel hypoplasia (critical)
- Fluoroquinolones and chloramphenicol under 18 years (major, overridable)
"""

import logging

from ..contraindications import CLINICAL_CONTRAINDICATIONS
from ..drug_taxonomy import DrugProfile
from ..models import AlertCategory, AlertSource, AlertType, ClinicalAlert, PatientContext
from ..rules_engine import BaseRuleModule

logger = logging.getLogger(__name__)


class PediatricRules(BaseRuleModule):
    """Check age-based contraindications in children."""

    name = "pediatric"

    def evaluate(
        self,
        drug: DrugProfile,
        context: PatientContext,
        current_medications: list[str],
    ) -> list[ClinicalAlert]:
        age = context.age
        if age is None:
            logger.debug("Age unknown, skipping pediatric rules")
            return []
        if age >= 18:
            return []

        table = CLINICAL_CONTRAINDICATIONS["pediatric"]

        if age < 8 and drug.matches_any(table["under_8"]):
            return [
                self._alert(
                    "pediatric_under8",
                    category=AlertCategory.CRITICAL,
                    type=AlertType.CONTRAINDICATION,
                    title="Pediatric Age Contraindication",
                    message=f"{drug.display_name} contraindicated in children under 8 years",
                    recommendation="Use amoxicillin, azithromycin, or appropriate cephalosporin",
                    evidence="Risk of permanent tooth discoloration and enamel hypoplasia",
                    source=AlertSource.FDA,
                    is_overridable=False,
                    requires_justification=True,
                )
            ]

        if drug.matches_any(table["under_18"]):
            return [
                self._alert(
                    "pediatric_under18",
                    category=AlertCategory.MAJOR,
                    type=AlertType.CONTRAINDICATION,
                    title="Pediatric Fluoroquinolone Warning",
                    message=f"{drug.display_name} not recommended in patients under 18",
                    recommendation="Use only if benefits outweigh risks and no alternatives available",
                    evidence="Risk of cartilage damage and tendinopathy",
                    source=AlertSource.FDA,
                    is_overridable=True,
                    requires_justification=True,
                )
            ]

        return []
