"""Condition taxonomy for guideline lookup.

Maps the free-text condition a clinician (or an upstream form) supplies to the
canonical key scenarios are registered under. Lookup is an exact,
case-insensitive match on the key, display name, or a synonym; terms that are
not listed pass through lower-cased, so a caller may also use a canonical key
directly.
"""

from dataclasses import dataclass, field


@dataclass
class ConditionMapping:
    """Maps clinical terms to a guideline condition key."""
    condition_key: str                    # Key in the guideline data (e.g., "sepsis")
    display_name: str
    synonyms: list[str] = field(default_factory=list)


CONDITION_TAXONOMY: dict[str, ConditionMapping] = {

    # === RESPIRATORY ===
    "community_acquired_pneumonia": ConditionMapping(
        condition_key="community_acquired_pneumonia",
        display_name="Community-Acquired Pneumonia",
        synonyms=[
            "respiratory", "pneumonia", "lung",
            "community acquired pneumonia", "community-acquired pneumonia", "cap",
        ],
    ),

    # === GENITOURINARY ===
    "urinary_tract_infection": ConditionMapping(
        condition_key="urinary_tract_infection",
        display_name="Urinary Tract Infection",
        synonyms=["urinary", "uti", "bladder", "cystitis"],
    ),

    # === SKIN / SOFT TISSUE ===
    "skin_soft_tissue_infection": ConditionMapping(
        condition_key="skin_soft_tissue_infection",
        display_name="Skin and Soft Tissue Infection",
        synonyms=["skin", "cellulitis", "soft tissue", "ssti"],
    ),

    # === BLOODSTREAM ===
    "sepsis": ConditionMapping(
        condition_key="sepsis",
        display_name="Sepsis",
        synonyms=["bacteremia", "bloodstream", "septic shock"],
    ),

    # === HEALTHCARE-ASSOCIATED ===
    "clostridioides_difficile": ConditionMapping(
        condition_key="clostridioides_difficile",
        display_name="C. difficile Infection",
        synonyms=[
            "c. diff", "c diff", "cdiff", "cdi",
            "clostridium difficile", "clostridioides difficile",
        ],
    ),
}


def get_condition_by_synonym(term: str) -> ConditionMapping | None:
    """Look up a condition by key, display name, or synonym (case-insensitive).

    Args:
        term: Clinical term (e.g., "pneumonia", "UTI")

    Returns:
        ConditionMapping if found, None otherwise
    """
    term_lower = term.lower().strip()

    for mapping in CONDITION_TAXONOMY.values():
        if term_lower == mapping.condition_key:
            return mapping
        if term_lower == mapping.display_name.lower():
            return mapping
        for syn in mapping.synonyms:
            if term_lower == syn.lower():
                return mapping

    return None


def normalize_condition(condition: str) -> str:
    """Return the canonical condition key for a free-text condition."""
    mapping = get_condition_by_synonym(condition or "")
    if mapping:
        return mapping.condition_key
    return (condition or "").lower().strip()
