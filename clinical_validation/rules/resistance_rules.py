"""Resistance pattern rules."""

import logging

from ..contraindications import RESISTANCE_PATTERNS
from ..drug_taxonomy import DrugProfile
from ..models import AlertCategory, AlertType, ClinicalAlert, PatientContext
from ..rules_engine import BaseRuleModule

logger = logging.getLogger(__name__)


class ResistanceRules(BaseRuleModule):
    """Flag antibiotics a declared resistant organism renders ineffective."""

    name = "resistance"
    penalized_categories = None

    def evaluate(
        self,
        drug: DrugProfile,
        context: PatientContext,
        current_medications: list[str],
    ) -> list[ClinicalAlert]:
        if not context.resistances:
            return []

        for pattern in RESISTANCE_PATTERNS:
            if not context.has_resistance(pattern["pattern"]):
                continue
            if not drug.matches_any(pattern["ineffective"]):
                continue

            logger.debug(f"{drug.display_name}: ineffective against {pattern['pattern']}")
            # At most one resistance alert per validation
            return [
                self._alert(
                    f"resistance_{pattern['pattern']}",
                    category=AlertCategory.MAJOR,
                    type=AlertType.RESISTANCE,
                    title=pattern["title"],
                    message=pattern["message"],
                    recommendation=pattern["recommendation"],
                    evidence=pattern["evidence"],
                    source=pattern["source"],
                    is_overridable=True,
                    requires_justification=True,
                )
            ]

        return []
