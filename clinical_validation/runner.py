#!/usr/bin/env python3
"""CLI entry point for clinical validation and guideline lookup.

Usage:
    # Validate an antibiotic choice for a patient
    clinical-validation validate doxycycline --patient patient.json

    # Include concomitant medications
    clinical-validation validate ciprofloxacin --patient patient.json --med warfarin --med digoxin

    # Guideline-based recommendations for a condition
    clinical-validation recommend pneumonia --patient patient.json

    # Add drug-specific monitoring for a chosen antibiotic
    clinical-validation recommend sepsis --patient patient.json --antibiotic vancomycin

    # WHO stewardship principles
    clinical-validation stewardship

Patient files are JSON objects, e.g. {"age": "28", "pregnancy": true,
"allergies": {"penicillin": true}}. Use "-" to read the patient from stdin.
"""

import argparse
import json
import logging
import sys

from .config import Config
from .guidelines import (
    get_combined_guideline_recommendations,
    get_monitoring_requirements,
    get_stewardship_principles,
)
from .models import InvalidPatientDataError, PatientContext
from .rules_engine import validate_clinical_recommendation

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_INPUT = 2


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else getattr(logging, Config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def load_patient(path: str | None) -> PatientContext:
    """Read a patient JSON file ("-" for stdin) into a validated context.

    Raises:
        OSError: if the file cannot be read
        json.JSONDecodeError: if the file is not valid JSON
        InvalidPatientDataError: if a patient field is malformed
    """
    if not path:
        return PatientContext()

    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, "r") as f:
            data = json.load(f)

    if not isinstance(data, dict):
        raise InvalidPatientDataError("patient", data, "expected a JSON object")

    return PatientContext.from_dict(data)


def print_json(payload: dict) -> None:
    print(json.dumps(payload, indent=2))


def cmd_validate(args) -> int:
    patient = load_patient(args.patient)
    logger.info(f"Validating {args.antibiotic} ({len(args.med)} concomitant medications)")

    result = validate_clinical_recommendation(args.antibiotic, patient, args.med)
    print_json(result.to_dict())
    return EXIT_OK


def cmd_recommend(args) -> int:
    patient = load_patient(args.patient)
    logger.info(f"Looking up guidelines for '{args.condition}'")

    combined = get_combined_guideline_recommendations(args.condition, patient)
    payload = combined.to_dict()
    if args.antibiotic:
        payload["monitoring"] = get_monitoring_requirements(
            args.antibiotic, combined.primary + combined.alternative
        )
    print_json(payload)
    return EXIT_OK


def cmd_stewardship(args) -> int:
    print_json(get_stewardship_principles())
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="clinical-validation",
        description="Clinical decision validation and evidence-based recommendations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Validate an antibiotic for a patient")
    validate_parser.add_argument("antibiotic", help="Proposed antibiotic name")
    validate_parser.add_argument("--patient", metavar="FILE", help="Patient JSON file ('-' for stdin)")
    validate_parser.add_argument(
        "--med", action="append", default=[], metavar="NAME",
        help="Concomitant medication (repeatable)",
    )
    validate_parser.set_defaults(func=cmd_validate)

    recommend_parser = subparsers.add_parser("recommend", help="Guideline recommendations for a condition")
    recommend_parser.add_argument("condition", help="Condition (e.g., pneumonia, uti, cellulitis)")
    recommend_parser.add_argument("--patient", metavar="FILE", help="Patient JSON file ('-' for stdin)")
    recommend_parser.add_argument("--antibiotic", help="Add monitoring requirements for this antibiotic")
    recommend_parser.set_defaults(func=cmd_recommend)

    stewardship_parser = subparsers.add_parser("stewardship", help="WHO stewardship principles")
    stewardship_parser.set_defaults(func=cmd_stewardship)

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        return args.func(args)
    except InvalidPatientDataError as e:
        logger.error(f"Invalid patient data: {e}")
        return EXIT_INVALID_INPUT
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read patient file: {e}")
        return EXIT_INVALID_INPUT
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
