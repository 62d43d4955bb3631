"""Safety rule modules, one per validator."""

from .allergy_rules import AllergyRules
from .dosing_rules import DosingRules
from .interaction_rules import DrugInteractionRules
from .pediatric_rules import PediatricRules
from .pregnancy_rules import PregnancyRules
from .renal_rules import RenalRules
from .resistance_rules import ResistanceRules

__all__ = [
    "AllergyRules",
    "DosingRules",
    "DrugInteractionRules",
    "PediatricRules",
    "PregnancyRules",
    "RenalRules",
    "ResistanceRules",
]
