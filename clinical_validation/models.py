"""Data models for the clinical validation engine."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .renal import calculate_egfr


class InvalidPatientDataError(ValueError):
    """Raised when a patient field cannot be parsed into a usable value."""

    def __init__(self, field_name: str, value: Any, reason: str):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field_name} {value!r}: {reason}")


class AlertCategory(str, Enum):
    """Alert severity. Only CRITICAL alerts block a recommendation."""
    CRITICAL = "critical"
    MAJOR = "major"
    MODERATE = "moderate"
    MINOR = "minor"


class AlertType(str, Enum):
    """Kind of safety issue raised by a rule."""
    CONTRAINDICATION = "contraindication"
    ALLERGY = "allergy"
    INTERACTION = "interaction"
    DOSING = "dosing"
    MONITORING = "monitoring"
    RESISTANCE = "resistance"


class AlertSource(str, Enum):
    """Body of evidence an alert is grounded on."""
    IDSA = "IDSA"
    CDC = "CDC"
    WHO = "WHO"
    FDA = "FDA"
    CLINICAL_TRIAL = "Clinical_Trial"
    PHARMACOKINETICS = "Pharmacokinetics"


@dataclass(frozen=True)
class ClinicalAlert:
    """A single safety finding for the proposed antibiotic."""
    id: str
    category: AlertCategory
    type: AlertType
    title: str
    message: str
    recommendation: str
    evidence: str
    source: AlertSource
    is_overridable: bool
    requires_justification: bool

    @property
    def is_blocking(self) -> bool:
        return self.category == AlertCategory.CRITICAL

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "category": self.category.value,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "recommendation": self.recommendation,
            "evidence": self.evidence,
            "source": self.source.value,
            "is_overridable": self.is_overridable,
            "requires_justification": self.requires_justification,
        }


@dataclass
class ValidationResult:
    """Verdict for one antibiotic against one patient."""
    is_valid: bool
    alerts: list[ClinicalAlert]
    confidence_score: int
    requires_review: bool
    blocking_issues: list[ClinicalAlert] = field(default_factory=list)

    @property
    def max_category(self) -> AlertCategory | None:
        """Most severe alert category, or None when there are no alerts."""
        order = list(AlertCategory)
        if not self.alerts:
            return None
        return min((a.category for a in self.alerts), key=order.index)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_valid": self.is_valid,
            "alerts": [a.to_dict() for a in self.alerts],
            "confidence_score": self.confidence_score,
            "requires_review": self.requires_review,
            "blocking_issues": [a.to_dict() for a in self.blocking_issues],
        }


def _parse_number(
    field_name: str,
    value: Any,
    allow_zero: bool = True,
    default: float | None = None,
) -> float | None:
    """Parse a loosely typed numeric field.

    Blank values fall back to ``default``. Anything else must be a finite,
    non-negative number (strictly positive when ``allow_zero`` is False).
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise InvalidPatientDataError(field_name, value, "expected a number")

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidPatientDataError(field_name, value, "expected a number") from None

    if math.isnan(number) or math.isinf(number):
        raise InvalidPatientDataError(field_name, value, "must be a finite number")
    if number < 0:
        raise InvalidPatientDataError(field_name, value, "must not be negative")
    if number == 0 and not allow_zero:
        raise InvalidPatientDataError(field_name, value, "must be greater than zero")

    return number


def _parse_flag_map(field_name: str, value: Any) -> dict[str, Any]:
    """Normalize allergy/resistance input to a lowercase-keyed map."""
    if not value:
        return {}
    if isinstance(value, dict):
        return {str(k).lower().strip(): v for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return {str(item).lower().strip(): True for item in value if item}
    raise InvalidPatientDataError(field_name, value, "expected a mapping or list of names")


def _parse_label(value: Any) -> str | None:
    if value is None:
        return None
    label = str(value).lower().strip()
    return label or None


def _parse_pregnancy(value: Any) -> bool:
    if value is True:
        return True
    if isinstance(value, str):
        return value.strip().lower() in ("yes", "true")
    return False


@dataclass(frozen=True)
class PatientContext:
    """Patient attributes consumed by the validators and the guideline matcher.

    Built once at the boundary; numeric fields are already validated, so the
    rules can compare them without guarding against malformed input.
    """
    age: float | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    gender: str | None = None
    is_pregnant: bool = False
    creatinine: float = 1.0              # mg/dL
    immunosuppressed: bool = False
    allergies: dict[str, Any] = field(default_factory=dict)
    resistances: dict[str, Any] = field(default_factory=dict)
    severity: str | None = None
    setting: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PatientContext":
        """Build a context from caller-supplied patient data.

        Raises:
            InvalidPatientDataError: if a numeric field is malformed
        """
        data = data or {}
        gender = data.get("gender")

        return cls(
            age=_parse_number("age", data.get("age")),
            weight_kg=_parse_number("weight", data.get("weight"), allow_zero=False),
            height_cm=_parse_number("height", data.get("height"), allow_zero=False),
            gender=str(gender).lower().strip() if gender else None,
            is_pregnant=_parse_pregnancy(data.get("pregnancy")),
            creatinine=_parse_number(
                "creatinine", data.get("creatinine"), allow_zero=False, default=1.0
            ),
            immunosuppressed=bool(data.get("immunosuppressed")),
            allergies=_parse_flag_map("allergies", data.get("allergies")),
            resistances=_parse_flag_map("resistances", data.get("resistances")),
            severity=_parse_label(data.get("severity")),
            setting=_parse_label(data.get("setting")),
        )

    @property
    def is_female(self) -> bool:
        return self.gender == "female"

    @property
    def estimated_gfr(self) -> float | None:
        """CKD-EPI eGFR, or None when age is unknown."""
        if self.age is None:
            return None
        return calculate_egfr(self.creatinine, self.age, self.is_female)

    @property
    def renal_screening_gfr(self) -> float:
        """eGFR for renal dose checks.

        With age unknown this is the age-0 value, the highest eGFR any age can
        give for this creatinine. A threshold crossed here is crossed at every age.
        """
        if self.age is None:
            return calculate_egfr(self.creatinine, 0, self.is_female)
        return calculate_egfr(self.creatinine, self.age, self.is_female)

    def has_allergy(self, allergy_class: str) -> bool:
        return bool(self.allergies.get(allergy_class))

    def has_resistance(self, pattern: str) -> bool:
        return bool(self.resistances.get(pattern))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "age": self.age,
            "weight_kg": self.weight_kg,
            "height_cm": self.height_cm,
            "gender": self.gender,
            "is_pregnant": self.is_pregnant,
            "creatinine": self.creatinine,
            "immunosuppressed": self.immunosuppressed,
            "allergies": self.allergies,
            "resistances": self.resistances,
            "severity": self.severity,
            "setting": self.setting,
        }
