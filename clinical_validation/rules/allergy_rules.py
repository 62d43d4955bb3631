"""Allergy cross-reactivity rules.

Each declared allergy class (penicillin, cephalosporin, sulfa) is checked
independently, so one antibiotic can raise several allergy alerts.
"""

import logging

from ..contraindications import ALLERGY_CROSS_REACTIVITY
from ..drug_taxonomy import DrugProfile
from ..models import AlertCategory, AlertSource, AlertType, ClinicalAlert, PatientContext
from ..rules_engine import BaseRuleModule

logger = logging.getLogger(__name__)


class AllergyRules(BaseRuleModule):
    """Check the antibiotic against declared allergy classes."""

    name = "allergy"

    def evaluate(
        self,
        drug: DrugProfile,
        context: PatientContext,
        current_medications: list[str],
    ) -> list[ClinicalAlert]:
        alerts = []

        if not context.allergies:
            return alerts

        for allergy_class, rule in ALLERGY_CROSS_REACTIVITY.items():
            if not context.has_allergy(allergy_class):
                continue

            matched = drug.first_match(rule["cross_reactive"])
            if not matched:
                continue

            logger.debug(f"{drug.display_name}: cross-reactive with {allergy_class} allergy ({matched})")
            alternatives = ", ".join(rule["alternatives"])
            alerts.append(
                self._alert(
                    f"allergy_{allergy_class}",
                    category=AlertCategory.CRITICAL,
                    type=AlertType.ALLERGY,
                    title=rule["title"],
                    message=rule["message"].format(antibiotic=drug.display_name),
                    recommendation=rule["recommendation"].format(alternatives=alternatives),
                    evidence=rule["evidence"],
                    source=AlertSource.CLINICAL_TRIAL,
                    is_overridable=False,
                    requires_justification=True,
                )
            )

        return alerts
