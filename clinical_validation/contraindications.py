"""Static reference tables for the safety rules.

Loaded once at import and never mutated. Drug entries are name fragments
matched through DrugProfile.matches (see drug_taxonomy).

Clinical references:
- Tetracyclines: FDA Category D, dental staining and enamel hypoplasia < 8 years
- Fluoroquinolones: cartilage and tendon toxicity in children
- Nitrofurantoin: inadequate urinary levels and toxicity with CrCl < 30
- Penicillin/cephalosporin cross-reactivity depends on shared R1 side chains
"""

from .drug_taxonomy import DrugProfile
from .models import AlertSource


# =============================================================================
# Contraindications
# =============================================================================

CLINICAL_CONTRAINDICATIONS: dict[str, dict] = {
    # Pregnancy (FDA Categories D/X)
    "pregnancy": {
        "absolute": ["tetracycline", "doxycycline", "minocycline", "streptomycin"],
        "relative": ["fluoroquinolones", "metronidazole_first_trimester", "cotrimoxazole"],
        "evidence": "Teratogenic effects documented in human studies (FDA Category D/X)",
    },

    # Pediatric age thresholds
    "pediatric": {
        "under_8": ["tetracycline", "doxycycline", "minocycline"],
        "under_18": ["fluoroquinolones", "chloramphenicol"],
        "evidence": "Risk of permanent tooth discoloration, cartilage damage",
    },

    # Renal function by eGFR
    "renal": {
        "egfr_under_30": ["nitrofurantoin", "colistin_high_dose"],
        # Level-monitored nephrotoxic agents needing adjustment below eGFR 60
        "monitoring_under_60": ["vancomycin", "gentamicin", "tobramycin"],
        "evidence": "Inadequate clearance leads to accumulation and toxicity",
    },

    # Hepatic impairment
    "hepatic": {
        "severe_impairment": ["isoniazid", "pyrazinamide", "ketoconazole"],
        "moderate_impairment": ["fluconazole_high_dose"],
        "evidence": "Hepatotoxicity risk significantly increased",
    },
}


# =============================================================================
# Drug-Drug Interactions
# =============================================================================

# Matched in both directions: either drug may be the proposed antibiotic.
DRUG_INTERACTIONS: list[dict] = [
    {
        "drug1": "warfarin",
        "drug2": "ciprofloxacin",
        "severity": "major",
        "mechanism": "CYP1A2 inhibition increases warfarin levels",
        "clinical_effect": "Bleeding risk increased 2-3 fold",
        "management": "Monitor INR every 2 days, reduce warfarin by 25-50%",
        "evidence": "Multiple RCTs, meta-analysis available",
        "onset": "2-5 days",
        "duration": "7-14 days after discontinuation",
    },
    {
        "drug1": "digoxin",
        "drug2": "clarithromycin",
        "severity": "major",
        "mechanism": "P-glycoprotein inhibition",
        "clinical_effect": "Digoxin toxicity (nausea, arrhythmias)",
        "management": "Reduce digoxin dose by 50%, monitor levels",
        "evidence": "FDA black box warning, case series",
        "onset": "1-3 days",
        "duration": "5-7 days",
    },
    {
        "drug1": "phenytoin",
        "drug2": "fluconazole",
        "severity": "major",
        "mechanism": "CYP2C9 inhibition",
        "clinical_effect": "Phenytoin toxicity (ataxia, nystagmus)",
        "management": "Monitor phenytoin levels, reduce dose",
        "evidence": "Well-documented interaction studies",
        "onset": "2-7 days",
        "duration": "2-3 weeks",
    },
    {
        "drug1": "warfarin",
        "drug2": "fluconazole",
        "severity": "major",
        "mechanism": "CYP2C9 inhibition reduces S-warfarin clearance",
        "clinical_effect": "INR rises 2-fold or more, bleeding risk",
        "management": "Monitor INR every 2-3 days, consider reducing warfarin by 25-50%",
        "evidence": "CHEST Antithrombotic Guidelines, pharmacokinetic studies",
        "onset": "2-5 days",
        "duration": "Up to 2 weeks after discontinuation",
    },
    {
        "drug1": "warfarin",
        "drug2": "metronidazole",
        "severity": "major",
        "mechanism": "CYP2C9 inhibition reduces warfarin metabolism",
        "clinical_effect": "Increased INR and bleeding risk",
        "management": "Monitor INR closely, consider reducing warfarin dose by 25-35%",
        "evidence": "CHEST Antithrombotic Guidelines",
        "onset": "3-5 days",
        "duration": "Up to 1 week after discontinuation",
    },
    {
        "drug1": "warfarin",
        "drug2": "rifampin",
        "severity": "major",
        "mechanism": "CYP2C9 induction increases warfarin metabolism",
        "clinical_effect": "Loss of anticoagulant effect",
        "management": "Monitor INR closely, warfarin dose may need to increase 2-3x",
        "evidence": "CHEST Antithrombotic Guidelines",
        "onset": "5-7 days",
        "duration": "2-5 weeks after discontinuation",
    },
    {
        "drug1": "valproic acid",
        "drug2": "meropenem",
        "severity": "major",
        "mechanism": "Carbapenems deplete valproate through glucuronide hydrolysis inhibition",
        "clinical_effect": "Valproate levels fall 50-100%, breakthrough seizures",
        "management": "Avoid combination; use an alternative antibiotic or antiepileptic",
        "evidence": "Clin Infect Dis 2005;41:1197-1204",
        "onset": "Within 24 hours",
        "duration": "Up to 2 weeks after discontinuation",
    },
    {
        "drug1": "theophylline",
        "drug2": "ciprofloxacin",
        "severity": "moderate",
        "mechanism": "CYP1A2 inhibition reduces theophylline clearance",
        "clinical_effect": "Theophylline toxicity (nausea, tachycardia, seizures)",
        "management": "Monitor theophylline levels, consider 50% dose reduction",
        "evidence": "Package insert, pharmacokinetic studies",
        "onset": "2-3 days",
        "duration": "2-3 days after discontinuation",
    },
    {
        "drug1": "simvastatin",
        "drug2": "clarithromycin",
        "severity": "moderate",
        "mechanism": "CYP3A4 inhibition raises statin exposure",
        "clinical_effect": "Myopathy and rhabdomyolysis risk",
        "management": "Hold simvastatin during clarithromycin course or use azithromycin",
        "evidence": "FDA labeling",
        "onset": "3-7 days",
        "duration": "3-5 days after discontinuation",
    },
]

# Linezolid is a reversible MAO inhibitor; every SSRI carries the same serotonin syndrome risk
SSRIS = ("sertraline", "fluoxetine", "paroxetine", "citalopram", "escitalopram", "fluvoxamine")

DRUG_INTERACTIONS.extend(
    {
        "drug1": ssri,
        "drug2": "linezolid",
        "severity": "major",
        "mechanism": "Linezolid MAO inhibition with serotonin reuptake blockade",
        "clinical_effect": "Serotonin syndrome (hyperthermia, confusion, rigidity)",
        "management": "Avoid combination or monitor closely for serotonin toxicity",
        "evidence": "FDA Drug Safety Communication 2011",
        "onset": "Hours to days",
        "duration": "2 weeks after discontinuation",
    }
    for ssri in SSRIS
)


# =============================================================================
# Allergy Cross-Reactivity
# =============================================================================

ALLERGY_CROSS_REACTIVITY: dict[str, dict] = {
    "penicillin": {
        "cross_reactive": ["penicillin", "amoxicillin", "ampicillin", "piperacillin", "penicillins"],
        "alternatives": ["azithromycin", "cephalexin", "vancomycin"],
        "title": "Penicillin Allergy Contraindication",
        "message": "Patient allergic to penicillin - {antibiotic} is cross-reactive",
        "recommendation": "Use non-beta-lactam alternatives: {alternatives}",
        "evidence": "High cross-reactivity documented in literature",
    },
    "cephalosporin": {
        "cross_reactive": ["cefazolin", "cephalexin", "ceftriaxone", "cephalosporins"],
        "alternatives": ["azithromycin", "vancomycin", "linezolid"],
        "title": "Cephalosporin Allergy Contraindication",
        "message": "Patient allergic to cephalosporins - {antibiotic} is contraindicated",
        "recommendation": "Use alternatives: {alternatives}",
        "evidence": "Direct class allergy",
    },
    "sulfa": {
        "cross_reactive": ["sulfamethoxazole", "sulfadiazine", "sulfonamides"],
        "alternatives": ["doxycycline", "ciprofloxacin", "azithromycin"],
        "title": "Sulfonamide Allergy Contraindication",
        "message": "Patient allergic to sulfonamides - {antibiotic} is contraindicated",
        "recommendation": "Use alternatives: {alternatives}",
        "evidence": "Direct class allergy",
    },
}


# =============================================================================
# Resistance Patterns
# =============================================================================

# Checked in order; the first declared pattern that matches produces the alert
RESISTANCE_PATTERNS: list[dict] = [
    {
        "pattern": "mrsa",
        "ineffective": ["oxacillin", "methicillin", "nafcillin", "dicloxacillin"],
        "title": "MRSA Resistance Pattern",
        "message": "Patient has MRSA - beta-lactams will be ineffective",
        "recommendation": "Use vancomycin, linezolid, or daptomycin for MRSA coverage",
        "evidence": "Documented MRSA resistance to beta-lactam antibiotics",
        "source": AlertSource.CDC,
    },
    {
        "pattern": "vre",
        "ineffective": ["vancomycin"],
        "title": "VRE Resistance Pattern",
        "message": "Patient has vancomycin-resistant Enterococcus - vancomycin will be ineffective",
        "recommendation": "Use linezolid or daptomycin for VRE coverage",
        "evidence": "Documented vanA/vanB-mediated glycopeptide resistance",
        "source": AlertSource.CDC,
    },
    {
        "pattern": "esbl",
        "ineffective": ["ceftriaxone", "cefotaxime", "ceftazidime", "cefpodoxime"],
        "title": "ESBL Resistance Pattern",
        "message": "Patient has an ESBL-producing organism - third-generation cephalosporins will be ineffective",
        "recommendation": "Use a carbapenem (meropenem or ertapenem) for ESBL coverage",
        "evidence": "IDSA Guidance on Treatment of Antimicrobial-Resistant Gram-Negative Infections",
        "source": AlertSource.IDSA,
    },
]


# =============================================================================
# Dosing
# =============================================================================

WEIGHT_BASED_DOSING: dict = {
    "weight_threshold_kg": 100,
    "drugs": ["vancomycin", "daptomycin"],
}


def get_hepatic_contraindications(antibiotic: str) -> dict[str, bool]:
    """Report which hepatic impairment tiers list the antibiotic.

    Returns:
        Dict with 'severe_impairment' and 'moderate_impairment' flags
    """
    drug = DrugProfile.resolve(antibiotic)
    hepatic = CLINICAL_CONTRAINDICATIONS["hepatic"]
    return {
        "severe_impairment": drug.matches_any(hepatic["severe_impairment"]),
        "moderate_impairment": drug.matches_any(hepatic["moderate_impairment"]),
    }
