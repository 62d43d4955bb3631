"""Tests for the individual safety rule modules."""

from clinical_validation.drug_taxonomy import DrugProfile
from clinical_validation.models import AlertCategory, AlertSource, AlertType, PatientContext
from clinical_validation.rules import (
    AllergyRules,
    DosingRules,
    DrugInteractionRules,
    PediatricRules,
    PregnancyRules,
    RenalRules,
    ResistanceRules,
)
from clinical_validation.rules.interaction_rules import find_interaction


def run_rule(rule, antibiotic, patient, medications=None):
    return rule.evaluate(DrugProfile.resolve(antibiotic), PatientContext.from_dict(patient), medications or [])


def test_pregnancy_rules():
    """Test pregnancy absolute and relative contraindications."""
    print("\n=== Pregnancy Rules ===")
    rule = PregnancyRules()

    alerts = run_rule(rule, "Doxycycline", {"pregnancy": True, "age": "28"})
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.category == AlertCategory.CRITICAL
    assert alert.type == AlertType.CONTRAINDICATION
    assert alert.source == AlertSource.FDA
    assert not alert.is_overridable
    assert alert.requires_justification
    assert alert.message.startswith("Doxycycline is contraindicated in pregnancy")
    assert alert.id.startswith("pregnancy_absolute_")
    print("  ✓ Doxycycline absolute contraindication")

    # Relative list names the fluoroquinolone class
    alerts = run_rule(rule, "ciprofloxacin", {"pregnancy": "yes"})
    assert len(alerts) == 1
    assert alerts[0].category == AlertCategory.MAJOR
    assert alerts[0].is_overridable
    assert alerts[0].title == "Pregnancy Caution Required"
    print("  ✓ Ciprofloxacin relative contraindication")

    assert run_rule(rule, "metronidazole", {"pregnancy": True})[0].category == AlertCategory.MAJOR
    assert run_rule(rule, "Bactrim", {"pregnancy": True})[0].category == AlertCategory.MAJOR

    assert run_rule(rule, "doxycycline", {"pregnancy": False}) == []
    assert run_rule(rule, "amoxicillin", {"pregnancy": True}) == []
    print("  ✓ No alert when not pregnant or drug is safe")


def test_pediatric_rules():
    """Test age-based contraindications."""
    print("\n=== Pediatric Rules ===")
    rule = PediatricRules()

    alerts = run_rule(rule, "doxycycline", {"age": "6"})
    assert len(alerts) == 1
    assert alerts[0].category == AlertCategory.CRITICAL
    assert not alerts[0].is_overridable
    assert "under 8" in alerts[0].message
    print("  ✓ Tetracycline under 8 is critical")

    # Doxycycline is not on the under-18 list
    assert run_rule(rule, "doxycycline", {"age": "10"}) == []

    for age in ("6", "12", "17"):
        alerts = run_rule(rule, "ciprofloxacin", {"age": age})
        assert len(alerts) == 1, f"Expected fluoroquinolone warning at age {age}"
        assert alerts[0].category == AlertCategory.MAJOR
        assert alerts[0].is_overridable
        assert alerts[0].title == "Pediatric Fluoroquinolone Warning"
    print("  ✓ Fluoroquinolone under 18 is major")

    assert run_rule(rule, "levofloxacin", {"age": "18"}) == []
    assert run_rule(rule, "chloramphenicol", {"age": "15"})[0].category == AlertCategory.MAJOR
    assert run_rule(rule, "ciprofloxacin", {}) == []
    print("  ✓ Adults and unknown age skipped")


def test_renal_rules():
    """Test eGFR-gated rules."""
    print("\n=== Renal Rules ===")
    rule = RenalRules()
    severe = {"age": "70", "creatinine": "3.0"}      # eGFR ~20
    moderate = {"age": "60", "creatinine": "1.5"}    # eGFR ~50

    alerts = run_rule(rule, "nitrofurantoin", severe)
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.category == AlertCategory.CRITICAL
    assert alert.source == AlertSource.PHARMACOKINETICS
    # Known inconsistency: critical (and so blocking) yet overridable
    assert alert.is_overridable
    assert alert.is_blocking
    print("  ✓ Nitrofurantoin at eGFR < 30 is critical but overridable")

    assert run_rule(rule, "Colistin", severe)[0].category == AlertCategory.CRITICAL
    assert run_rule(rule, "nitrofurantoin", moderate) == []

    for drug in ("vancomycin", "gentamicin", "tobramycin"):
        alerts = run_rule(rule, drug, moderate)
        assert len(alerts) == 1, f"Expected dose adjustment alert for {drug}"
        assert alerts[0].category == AlertCategory.MAJOR
        assert alerts[0].type == AlertType.DOSING
        assert not alerts[0].is_overridable
        assert not alerts[0].requires_justification
    print("  ✓ Nephrotoxic agents at eGFR < 60 need adjustment")

    # Below 30, monitored agents still get the adjustment alert
    assert run_rule(rule, "vancomycin", severe)[0].title == "Renal Dose Adjustment Required"

    assert run_rule(rule, "vancomycin", {"age": "40"}) == []
    print("  ✓ Normal function passes")

    # Unknown age: age-0 eGFR is the best case, ~17.7 at creatinine 5.0
    alerts = run_rule(rule, "nitrofurantoin", {"creatinine": "5.0"})
    assert len(alerts) == 1
    assert alerts[0].category == AlertCategory.CRITICAL
    assert alerts[0].is_blocking
    assert run_rule(rule, "gentamicin", {"creatinine": "2.0"})[0].category == AlertCategory.MAJOR
    assert run_rule(rule, "vancomycin", {}) == []
    print("  ✓ Unknown age uses the upper-bound eGFR")


def test_allergy_rules():
    """Test allergy cross-reactivity."""
    print("\n=== Allergy Rules ===")
    rule = AllergyRules()

    alerts = run_rule(rule, "amoxicillin", {"allergies": {"penicillin": True}})
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.category == AlertCategory.CRITICAL
    assert alert.type == AlertType.ALLERGY
    assert alert.source == AlertSource.CLINICAL_TRIAL
    assert not alert.is_overridable
    assert alert.requires_justification
    assert "azithromycin, cephalexin, vancomycin" in alert.recommendation
    assert "amoxicillin is cross-reactive" in alert.message
    print("  ✓ Amoxicillin with penicillin allergy")

    # Class fragment catches penicillins not listed by name
    assert len(run_rule(rule, "Nafcillin", {"allergies": ["penicillin"]})) == 1
    assert len(run_rule(rule, "cefepime", {"allergies": {"cephalosporin": True}})) == 1
    assert len(run_rule(rule, "Bactrim", {"allergies": {"sulfa": True}})) == 1

    # A combination product can cross-react with several declared allergies
    alerts = run_rule(rule, "amoxicillin/sulfamethoxazole", {"allergies": {"penicillin": True, "sulfa": True}})
    assert [a.title for a in alerts] == [
        "Penicillin Allergy Contraindication",
        "Sulfonamide Allergy Contraindication",
    ]
    print("  ✓ Independent alerts per allergy class")

    assert run_rule(rule, "azithromycin", {"allergies": {"penicillin": True}}) == []
    assert run_rule(rule, "cephalexin", {"allergies": {"penicillin": True}}) == []
    assert run_rule(rule, "amoxicillin", {"allergies": {"penicillin": False}}) == []
    assert run_rule(rule, "amoxicillin", {}) == []


def test_interaction_rules():
    """Test drug-drug interactions."""
    print("\n=== Interaction Rules ===")
    rule = DrugInteractionRules()

    alerts = run_rule(rule, "ciprofloxacin", {"age": "60"}, ["warfarin"])
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.category == AlertCategory.MAJOR
    assert alert.type == AlertType.INTERACTION
    assert "Bleeding risk" in alert.message
    assert "INR" in alert.recommendation
    assert alert.title == "Drug Interaction: ciprofloxacin + warfarin"
    assert alert.is_overridable and alert.requires_justification
    print("  ✓ Ciprofloxacin + warfarin")

    alerts = run_rule(rule, "fluconazole", {"age": "50"}, ["warfarin"])
    assert len(alerts) == 1
    assert alerts[0].category == AlertCategory.MAJOR
    assert "INR" in alerts[0].recommendation
    assert find_interaction("warfarin", "fluconazole")["severity"] == "major"
    print("  ✓ Fluconazole + warfarin, both directions")

    for ssri in ("sertraline", "fluoxetine", "paroxetine", "Citalopram", "escitalopram", "fluvoxamine"):
        alerts = run_rule(rule, "linezolid", {}, [ssri])
        assert len(alerts) == 1, f"Expected serotonin syndrome alert for {ssri}"
        assert "Serotonin syndrome" in alerts[0].message
    assert find_interaction("fluoxetine", "linezolid") is not None
    print("  ✓ Linezolid + SSRIs")

    # Either side of the record may be the antibiotic
    assert find_interaction("warfarin", "Ciprofloxacin ") is not None
    assert find_interaction("clarithromycin", "digoxin")["severity"] == "major"
    assert find_interaction("amoxicillin", "warfarin") is None

    alerts = run_rule(rule, "ciprofloxacin", {}, ["theophylline"])
    assert alerts[0].category == AlertCategory.MODERATE
    print("  ✓ Moderate records raise moderate alerts")

    alerts = run_rule(rule, "Clarithromycin", {}, ["digoxin", "simvastatin", "lisinopril"])
    assert [a.category for a in alerts] == [AlertCategory.MAJOR, AlertCategory.MODERATE]

    assert run_rule(rule, "ciprofloxacin", {}, []) == []


def test_resistance_rules():
    """Test resistance patterns."""
    print("\n=== Resistance Rules ===")
    rule = ResistanceRules()

    alerts = run_rule(rule, "oxacillin", {"resistances": {"mrsa": True}})
    assert len(alerts) == 1
    assert alerts[0].category == AlertCategory.MAJOR
    assert alerts[0].type == AlertType.RESISTANCE
    assert alerts[0].is_overridable
    assert "vancomycin, linezolid, or daptomycin" in alerts[0].recommendation
    print("  ✓ MRSA with oxacillin")

    assert run_rule(rule, "vancomycin", {"resistances": {"vre": True}})[0].title == "VRE Resistance Pattern"
    assert run_rule(rule, "ceftriaxone", {"resistances": ["ESBL"]})[0].source == AlertSource.IDSA
    assert run_rule(rule, "vancomycin", {"resistances": {"mrsa": True}}) == []
    assert run_rule(rule, "oxacillin", {}) == []

    # One alert at most, first matching pattern wins
    alerts = run_rule(rule, "vancomycin", {"resistances": {"mrsa": True, "vre": True, "esbl": True}})
    assert len(alerts) == 1
    print("  ✓ VRE and ESBL patterns")


def test_dosing_rules():
    """Test weight-based dosing."""
    print("\n=== Dosing Rules ===")
    rule = DosingRules()

    alerts = run_rule(rule, "vancomycin", {"weight": "120"})
    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.category == AlertCategory.MODERATE
    assert alert.type == AlertType.DOSING
    assert not alert.is_overridable
    assert not alert.requires_justification
    assert "actual body weight" in alert.recommendation
    print("  ✓ Vancomycin over 100 kg")

    assert len(run_rule(rule, "Daptomycin", {"weight": 150})) == 1
    assert run_rule(rule, "vancomycin", {"weight": "100"}) == []
    assert run_rule(rule, "cefazolin", {"weight": "150"}) == []
    assert run_rule(rule, "vancomycin", {}) == []
