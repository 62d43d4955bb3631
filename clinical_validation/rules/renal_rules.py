"""Renal function rules.

Flags antibiotics that accumulate when renal clearance falls:
- eGFR < 30: contraindicated agents (critical)
- eGFR < 60: level-monitored nephrotoxic agents need dose adjustment (major)

The severe tier is critical yet overridable. It still blocks, because the
aggregator blocks on category alone.

With age unknown the tiers run against the age-0 eGFR, an upper bound on the
patient's true value.
"""

import logging

from ..contraindications import CLINICAL_CONTRAINDICATIONS
from ..drug_taxonomy import DrugProfile
from ..models import AlertCategory, AlertSource, AlertType, ClinicalAlert, PatientContext
from ..rules_engine import BaseRuleModule

logger = logging.getLogger(__name__)


class RenalRules(BaseRuleModule):
    """Check the antibiotic against estimated renal function."""

    name = "renal"

    def evaluate(
        self,
        drug: DrugProfile,
        context: PatientContext,
        current_medications: list[str],
    ) -> list[ClinicalAlert]:
        egfr = context.renal_screening_gfr
        if context.age is None:
            logger.debug(f"Age unknown, using upper-bound eGFR {egfr:.1f}")

        table = CLINICAL_CONTRAINDICATIONS["renal"]

        if egfr < 30 and drug.matches_any(table["egfr_under_30"]):
            logger.debug(f"{drug.display_name}: contraindicated at eGFR {egfr:.1f}")
            return [
                self._alert(
                    "renal_severe",
                    category=AlertCategory.CRITICAL,
                    type=AlertType.CONTRAINDICATION,
                    title="Severe Renal Impairment Contraindication",
                    message=f"{drug.display_name} contraindicated with eGFR < 30 mL/min",
                    recommendation="Choose renally-safe alternative or adjust dose significantly",
                    evidence="Risk of drug accumulation and toxicity",
                    source=AlertSource.PHARMACOKINETICS,
                    is_overridable=True,
                    requires_justification=True,
                )
            ]

        if egfr < 60 and drug.matches_any(table["monitoring_under_60"]):
            logger.debug(f"{drug.display_name}: dose adjustment needed at eGFR {egfr:.1f}")
            return [
                self._alert(
                    "renal_moderate",
                    category=AlertCategory.MAJOR,
                    type=AlertType.DOSING,
                    title="Renal Dose Adjustment Required",
                    message=f"{drug.display_name} requires dose adjustment for eGFR < 60 mL/min",
                    recommendation="Adjust dose based on creatinine clearance and monitor levels",
                    evidence="Standard pharmacokinetic principles",
                    source=AlertSource.PHARMACOKINETICS,
                    is_overridable=False,
                    requires_justification=False,
                )
            ]

        return []
