"""Data models for guideline scenarios and graded evidence."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PatientType(str, Enum):
    """Patient population a scenario is written for."""
    ADULT = "adult"
    PEDIATRIC = "pediatric"
    ELDERLY = "elderly"
    IMMUNOCOMPROMISED = "immunocompromised"
    PREGNANT = "pregnant"


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    CRITICAL = "critical"


class CareSetting(str, Enum):
    OUTPATIENT = "outpatient"
    INPATIENT = "inpatient"
    ICU = "icu"
    EMERGENCY = "emergency"


# Letter = strength of recommendation, numeral = quality of supporting evidence
EVIDENCE_GRADES = ("A-I", "A-II", "A-III", "B-I", "B-II", "B-III", "C-I", "C-II", "C-III")


@dataclass(frozen=True)
class DosingGuidance:
    """Dosing text for one recommended regimen."""
    adult: str
    renal_adjustment: str
    pediatric: str | None = None
    hepatic_adjustment: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DosingGuidance":
        return cls(
            adult=data.get("adult", ""),
            renal_adjustment=data.get("renal_adjustment", ""),
            pediatric=data.get("pediatric"),
            hepatic_adjustment=data.get("hepatic_adjustment"),
        )

    def to_dict(self) -> dict[str, Any]:
        result = {"adult": self.adult, "renal_adjustment": self.renal_adjustment}
        if self.pediatric:
            result["pediatric"] = self.pediatric
        if self.hepatic_adjustment:
            result["hepatic_adjustment"] = self.hepatic_adjustment
        return result


@dataclass(frozen=True)
class ClinicalEvidence:
    """A single guideline recommendation with its evidence grade."""
    guideline: str                        # IDSA, CDC, WHO, ...
    recommendation: str
    strength_of_evidence: str             # One of EVIDENCE_GRADES
    quality_of_evidence: str              # High, Moderate, Low, Very Low
    last_updated: str
    source: str
    dosing: DosingGuidance
    duration: str
    monitoring: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], guideline: str | None = None) -> "ClinicalEvidence":
        """Build from a guideline JSON entry.

        Args:
            data: Evidence entry
            guideline: Issuing body to use when the entry does not name one
        """
        return cls(
            guideline=data.get("guideline") or guideline or "Local",
            recommendation=data["recommendation"],
            strength_of_evidence=data.get("strength_of_evidence", ""),
            quality_of_evidence=data.get("quality_of_evidence", ""),
            last_updated=data.get("last_updated", ""),
            source=data.get("source", ""),
            dosing=DosingGuidance.from_dict(data.get("dosing", {})),
            duration=data.get("duration", ""),
            monitoring=list(data.get("monitoring", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "guideline": self.guideline,
            "recommendation": self.recommendation,
            "strength_of_evidence": self.strength_of_evidence,
            "quality_of_evidence": self.quality_of_evidence,
            "last_updated": self.last_updated,
            "source": self.source,
            "dosing": self.dosing.to_dict(),
            "duration": self.duration,
            "monitoring": self.monitoring,
        }


@dataclass(frozen=True)
class ClinicalScenario:
    """Guideline bundle for one condition x patient type x severity x setting."""
    condition: str
    patient_type: PatientType
    severity: Severity
    setting: CareSetting
    first_line: list[ClinicalEvidence] = field(default_factory=list)
    second_line: list[ClinicalEvidence] = field(default_factory=list)
    alternatives: list[ClinicalEvidence] = field(default_factory=list)
    contraindications: list[str] = field(default_factory=list)
    special_considerations: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], guideline: str | None = None) -> "ClinicalScenario":
        def evidence_list(key: str) -> list[ClinicalEvidence]:
            return [ClinicalEvidence.from_dict(e, guideline) for e in data.get(key, [])]

        return cls(
            condition=data["condition"],
            patient_type=PatientType(data.get("patient_type", "adult")),
            severity=Severity(data.get("severity", "moderate")),
            setting=CareSetting(data.get("setting", "outpatient")),
            first_line=evidence_list("first_line"),
            second_line=evidence_list("second_line"),
            alternatives=evidence_list("alternatives"),
            contraindications=list(data.get("contraindications", [])),
            special_considerations=list(data.get("special_considerations", [])),
        )

    def matches(self, patient_type: str, severity: str, setting: str) -> bool:
        return (
            self.patient_type == patient_type
            and self.severity == severity
            and self.setting == setting
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "condition": self.condition,
            "patient_type": self.patient_type.value,
            "severity": self.severity.value,
            "setting": self.setting.value,
            "first_line": [e.to_dict() for e in self.first_line],
            "second_line": [e.to_dict() for e in self.second_line],
            "alternatives": [e.to_dict() for e in self.alternatives],
            "contraindications": self.contraindications,
            "special_considerations": self.special_considerations,
        }
