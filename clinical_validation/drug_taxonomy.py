"""Antibiotic class taxonomy used by the safety rules.

Rule tables list short drug-name fragments (e.g. ``"colistin_high_dose"``) and,
in a few places, whole classes (e.g. ``"fluoroquinolones"``). The proposed
antibiotic is resolved once per validation into a DrugProfile; a fragment
matches when its first ``_`` token occurs in the drug name or when it names
the drug's class.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class AntibioticClass(Enum):
    """Major antibiotic drug classes."""
    PENICILLIN = "penicillin"
    CEPHALOSPORIN = "cephalosporin"
    CARBAPENEM = "carbapenem"
    MONOBACTAM = "monobactam"
    FLUOROQUINOLONE = "fluoroquinolone"
    AMINOGLYCOSIDE = "aminoglycoside"
    GLYCOPEPTIDE = "glycopeptide"  # Vancomycin, telavancin
    LIPOPEPTIDE = "lipopeptide"  # Daptomycin
    OXAZOLIDINONE = "oxazolidinone"  # Linezolid
    MACROLIDE = "macrolide"
    TETRACYCLINE = "tetracycline"
    SULFONAMIDE = "sulfonamide"
    NITROIMIDAZOLE = "nitroimidazole"  # Metronidazole
    NITROFURAN = "nitrofuran"
    POLYMYXIN = "polymyxin"
    AMPHENICOL = "amphenicol"
    ANTIFUNGAL_AZOLE = "antifungal_azole"
    OTHER = "other"


ANTIBIOTIC_CLASSES: dict[str, AntibioticClass] = {
    # Penicillins
    "penicillin": AntibioticClass.PENICILLIN,
    "amoxicillin": AntibioticClass.PENICILLIN,
    "ampicillin": AntibioticClass.PENICILLIN,
    "piperacillin": AntibioticClass.PENICILLIN,
    "nafcillin": AntibioticClass.PENICILLIN,
    "oxacillin": AntibioticClass.PENICILLIN,
    "methicillin": AntibioticClass.PENICILLIN,
    "dicloxacillin": AntibioticClass.PENICILLIN,
    "augmentin": AntibioticClass.PENICILLIN,
    "zosyn": AntibioticClass.PENICILLIN,
    "unasyn": AntibioticClass.PENICILLIN,

    # Cephalosporins
    "cefazolin": AntibioticClass.CEPHALOSPORIN,
    "cephalexin": AntibioticClass.CEPHALOSPORIN,
    "keflex": AntibioticClass.CEPHALOSPORIN,
    "cefadroxil": AntibioticClass.CEPHALOSPORIN,
    "cefuroxime": AntibioticClass.CEPHALOSPORIN,
    "cefoxitin": AntibioticClass.CEPHALOSPORIN,
    "ceftriaxone": AntibioticClass.CEPHALOSPORIN,
    "rocephin": AntibioticClass.CEPHALOSPORIN,
    "cefotaxime": AntibioticClass.CEPHALOSPORIN,
    "ceftazidime": AntibioticClass.CEPHALOSPORIN,
    "cefpodoxime": AntibioticClass.CEPHALOSPORIN,
    "cefdinir": AntibioticClass.CEPHALOSPORIN,
    "cefepime": AntibioticClass.CEPHALOSPORIN,
    "ceftaroline": AntibioticClass.CEPHALOSPORIN,

    # Carbapenems
    "meropenem": AntibioticClass.CARBAPENEM,
    "imipenem": AntibioticClass.CARBAPENEM,
    "ertapenem": AntibioticClass.CARBAPENEM,
    "doripenem": AntibioticClass.CARBAPENEM,

    # Monobactams
    "aztreonam": AntibioticClass.MONOBACTAM,

    # Fluoroquinolones
    "ciprofloxacin": AntibioticClass.FLUOROQUINOLONE,
    "cipro": AntibioticClass.FLUOROQUINOLONE,
    "levofloxacin": AntibioticClass.FLUOROQUINOLONE,
    "levaquin": AntibioticClass.FLUOROQUINOLONE,
    "moxifloxacin": AntibioticClass.FLUOROQUINOLONE,
    "ofloxacin": AntibioticClass.FLUOROQUINOLONE,
    "delafloxacin": AntibioticClass.FLUOROQUINOLONE,

    # Aminoglycosides
    "gentamicin": AntibioticClass.AMINOGLYCOSIDE,
    "tobramycin": AntibioticClass.AMINOGLYCOSIDE,
    "amikacin": AntibioticClass.AMINOGLYCOSIDE,
    "streptomycin": AntibioticClass.AMINOGLYCOSIDE,

    # Glycopeptides / lipopeptides / oxazolidinones
    "vancomycin": AntibioticClass.GLYCOPEPTIDE,
    "telavancin": AntibioticClass.GLYCOPEPTIDE,
    "dalbavancin": AntibioticClass.GLYCOPEPTIDE,
    "daptomycin": AntibioticClass.LIPOPEPTIDE,
    "linezolid": AntibioticClass.OXAZOLIDINONE,
    "tedizolid": AntibioticClass.OXAZOLIDINONE,

    # Macrolides
    "azithromycin": AntibioticClass.MACROLIDE,
    "clarithromycin": AntibioticClass.MACROLIDE,
    "erythromycin": AntibioticClass.MACROLIDE,
    "fidaxomicin": AntibioticClass.MACROLIDE,

    # Tetracyclines
    "doxycycline": AntibioticClass.TETRACYCLINE,
    "minocycline": AntibioticClass.TETRACYCLINE,
    "tetracycline": AntibioticClass.TETRACYCLINE,
    "tigecycline": AntibioticClass.TETRACYCLINE,

    # Sulfonamides
    "sulfamethoxazole": AntibioticClass.SULFONAMIDE,
    "sulfadiazine": AntibioticClass.SULFONAMIDE,
    "cotrimoxazole": AntibioticClass.SULFONAMIDE,
    "tmp-smx": AntibioticClass.SULFONAMIDE,
    "bactrim": AntibioticClass.SULFONAMIDE,
    "septra": AntibioticClass.SULFONAMIDE,

    # Other
    "metronidazole": AntibioticClass.NITROIMIDAZOLE,
    "flagyl": AntibioticClass.NITROIMIDAZOLE,
    "nitrofurantoin": AntibioticClass.NITROFURAN,
    "macrobid": AntibioticClass.NITROFURAN,
    "colistin": AntibioticClass.POLYMYXIN,
    "polymyxin": AntibioticClass.POLYMYXIN,
    "chloramphenicol": AntibioticClass.AMPHENICOL,
    "fluconazole": AntibioticClass.ANTIFUNGAL_AZOLE,
    "voriconazole": AntibioticClass.ANTIFUNGAL_AZOLE,
    "ketoconazole": AntibioticClass.ANTIFUNGAL_AZOLE,
}


# Table fragments that stand for a whole class rather than one drug
CLASS_FRAGMENTS: dict[str, AntibioticClass] = {
    "penicillins": AntibioticClass.PENICILLIN,
    "cephalosporins": AntibioticClass.CEPHALOSPORIN,
    "carbapenems": AntibioticClass.CARBAPENEM,
    "fluoroquinolones": AntibioticClass.FLUOROQUINOLONE,
    "aminoglycosides": AntibioticClass.AMINOGLYCOSIDE,
    "macrolides": AntibioticClass.MACROLIDE,
    "tetracyclines": AntibioticClass.TETRACYCLINE,
    "sulfonamides": AntibioticClass.SULFONAMIDE,
    "cotrimoxazole": AntibioticClass.SULFONAMIDE,
}


def get_antibiotic_class(antibiotic_name: str) -> AntibioticClass:
    """Get the drug class for an antibiotic by name."""
    name_lower = antibiotic_name.lower().strip()
    if not name_lower:
        return AntibioticClass.OTHER

    # Direct lookup
    if name_lower in ANTIBIOTIC_CLASSES:
        return ANTIBIOTIC_CLASSES[name_lower]

    # Partial matching ("Vancomycin IV", "piperacillin-tazobactam")
    for known_name, drug_class in ANTIBIOTIC_CLASSES.items():
        if known_name in name_lower:
            return drug_class

    return AntibioticClass.OTHER


@dataclass(frozen=True)
class DrugProfile:
    """The proposed antibiotic, resolved once per validation."""
    display_name: str
    name: str
    drug_class: AntibioticClass

    @classmethod
    def resolve(cls, antibiotic: str) -> "DrugProfile":
        antibiotic = antibiotic or ""
        return cls(
            display_name=antibiotic,
            name=antibiotic.lower().strip(),
            drug_class=get_antibiotic_class(antibiotic),
        )

    def matches(self, fragment: str) -> bool:
        """Check a rule-table fragment against this drug."""
        base = fragment.lower().split("_")[0]
        if not base or not self.name:
            return False
        if base in self.name:
            return True
        return CLASS_FRAGMENTS.get(base) == self.drug_class

    def matches_any(self, fragments: Iterable[str]) -> bool:
        return any(self.matches(f) for f in fragments)

    def first_match(self, fragments: Iterable[str]) -> str | None:
        for fragment in fragments:
            if self.matches(fragment):
                return fragment
        return None
