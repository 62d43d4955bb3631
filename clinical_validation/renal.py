"""Renal function estimation.

eGFR uses the CKD-EPI creatinine equation:

    eGFR = 141 * min(Scr/k, 1)^a * max(Scr/k, 1)^-1.209 * 0.993^age * (1.018 if female)

with k = 0.7 (female) / 0.9 (male) and a = -0.329 (female) / -0.411 (male).
Creatinine clearance helpers use Cockcroft-Gault or a timed urine collection.
"""

import logging

logger = logging.getLogger(__name__)


def calculate_egfr(creatinine: float, age: float, is_female: bool) -> float:
    """Estimate GFR (mL/min/1.73m2) from serum creatinine.

    Args:
        creatinine: Serum creatinine in mg/dL
        age: Age in years
        is_female: Selects the female constants

    Returns:
        Estimated GFR

    Raises:
        ValueError: if creatinine is not positive
    """
    if creatinine <= 0:
        raise ValueError(f"Serum creatinine must be positive, got {creatinine}")

    kappa = 0.7 if is_female else 0.9
    alpha = -0.329 if is_female else -0.411
    sex_factor = 1.018 if is_female else 1.0

    ratio = creatinine / kappa
    egfr = (
        141
        * min(ratio, 1) ** alpha
        * max(ratio, 1) ** -1.209
        * 0.993 ** age
        * sex_factor
    )

    logger.debug(f"eGFR {egfr:.1f} (Scr {creatinine}, age {age}, female={is_female})")
    return egfr


def calculate_creatinine_clearance(
    age: float,
    weight: float,
    creatinine: float,
    is_female: bool,
) -> float:
    """Cockcroft-Gault creatinine clearance in mL/min, rounded to 0.1.

    CrCl = [(140 - age) * weight] / (72 * Scr), times 0.85 if female.
    Returns 0 when any input is not positive.
    """
    if age <= 0 or weight <= 0 or creatinine <= 0:
        return 0

    crcl = ((140 - age) * weight) / (72 * creatinine)
    if is_female:
        crcl *= 0.85

    return round(crcl, 1)


def calculate_direct_creatinine_clearance(
    urine_creatinine: float,
    urine_volume: float,
    serum_creatinine: float,
) -> float:
    """Measured creatinine clearance from a timed urine collection.

    Args:
        urine_creatinine: Urine creatinine in mg/dL
        urine_volume: Urine flow in mL/min
        serum_creatinine: Serum creatinine in mg/dL

    Returns:
        CrCl in mL/min rounded to 0.1, or 0 when any input is not positive
    """
    if urine_creatinine <= 0 or urine_volume <= 0 or serum_creatinine <= 0:
        return 0

    return round((urine_creatinine * urine_volume) / serum_creatinine, 1)


def interpret_creatinine_clearance(crcl: float) -> str:
    """Describe renal function for a creatinine clearance value."""
    if crcl >= 90:
        return "Normal kidney function"
    if crcl >= 60:
        return "Mild kidney impairment"
    if crcl >= 30:
        return "Moderate kidney impairment"
    if crcl >= 15:
        return "Severe kidney impairment"
    return "Kidney failure"


def get_dosing_adjustment_guideline(crcl: float) -> str:
    """General renal dose adjustment for a creatinine clearance value."""
    if crcl >= 60:
        return "Normal dosing"
    if crcl >= 30:
        return "Reduce dose by 25-50%"
    if crcl >= 15:
        return "Reduce dose by 50-75%"
    return "Consider alternative therapy or consult nephrology"
