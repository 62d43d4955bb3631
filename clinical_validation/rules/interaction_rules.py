"""Drug-drug interaction rules.

Looks up each concomitant medication in the interaction table. A record
matches in either direction: the medication equals one drug and the
antibiotic name contains the other.
"""

import logging

from ..contraindications import DRUG_INTERACTIONS
from ..drug_taxonomy import DrugProfile
from ..models import AlertCategory, AlertSource, AlertType, ClinicalAlert, PatientContext
from ..rules_engine import BaseRuleModule

logger = logging.getLogger(__name__)


def find_interaction(antibiotic: str, medication: str) -> dict | None:
    """Find the interaction record for an antibiotic/medication pair.

    Args:
        antibiotic: Proposed antibiotic name
        medication: Concomitant medication name

    Returns:
        Interaction record, or None if the pair is not listed
    """
    drug = antibiotic.lower()
    med = medication.lower().strip()

    for interaction in DRUG_INTERACTIONS:
        if interaction["drug1"] == med and interaction["drug2"] in drug:
            return interaction
        if interaction["drug2"] == med and interaction["drug1"] in drug:
            return interaction

    return None


class DrugInteractionRules(BaseRuleModule):
    """Check for interactions between the antibiotic and current medications."""

    name = "interaction"
    penalized_categories = frozenset({AlertCategory.MAJOR})

    def evaluate(
        self,
        drug: DrugProfile,
        context: PatientContext,
        current_medications: list[str],
    ) -> list[ClinicalAlert]:
        alerts = []

        for medication in current_medications:
            interaction = find_interaction(drug.name, medication)
            if not interaction:
                continue

            category = (
                AlertCategory.MAJOR if interaction["severity"] == "major" else AlertCategory.MODERATE
            )
            logger.debug(
                f"Interaction {drug.display_name} + {medication}: {interaction['severity']}"
            )
            alerts.append(
                self._alert(
                    f"interaction_{medication.lower().strip().replace(' ', '_')}",
                    category=category,
                    type=AlertType.INTERACTION,
                    title=f"Drug Interaction: {drug.display_name} + {medication}",
                    message=f"{interaction['clinical_effect']} ({interaction['mechanism']})",
                    recommendation=interaction["management"],
                    evidence=interaction["evidence"],
                    source=AlertSource.CLINICAL_TRIAL,
                    is_overridable=True,
                    requires_justification=True,
                )
            )

        return alerts
