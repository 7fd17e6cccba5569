from datetime import date

import pytest

from document_compliance_app.compliance import ComplianceEvaluator, RequirementsCatalog
from document_compliance_app.core.schemas import DocumentMetadata

NOW = date(2026, 1, 15)

# has a date, a signature reference and an official mark; no apostille wording
CLEAN_TEXT = (
    "UNIVERSITY OF DELHI\n"
    "This is to certify that Test Student has been awarded the degree of "
    "Bachelor of Technology on 15 May 2020.\n"
    "Signed: Registrar. Official seal of the University."
)

RECORDS = [
    {
        "target_country": "US",
        "country_name": "United States",
        "accepted_document_types": ["degree", "transcript"],
        "apostille_required": True,
        "translation_required": False,
        "additional_requirements": [],
        "processing_time_estimate_days": 15,
    },
    {
        "country_code": "gb",
        "country_name": "United Kingdom",
        "document_types": ["degree", "transcript", "birth_certificate"],
        "apostille_required": False,
        "translation_required": False,
        "additional_requirements": ["NYSC certificate"],
    },
    {
        "target_country": "FR",
        "accepted_document_types": ["birth_certificate", "degree"],
        "apostille_required": True,
        "translation_required": True,
        "validity_period_months": 6,
    },
    {
        "target_country": "AE",
        "accepted_document_types": ["degree"],
        "apostille_required": False,
        "translation_required": False,
        "additional_requirements": ["UAE embassy attestation", "MOFAIC attestation"],
        "mandatory_requirements": ["UAE embassy attestation"],
    },
    {
        "target_country": "DE",
        "accepted_document_types": ["degree"],
        "apostille_required": False,
        "translation_required": False,
        "notarization_required": True,
    },
]


@pytest.fixture(autouse=True)
def _test_env(monkeypatch):
    for var in (
        "COMPLIANCE_CONFIG",
        "COMPLIANCE_CATALOG_PATH",
        "COMPLIANCE_MIN_SCAN_DPI",
        "COMPLIANCE_ILLEGIBLE_RATIO",
        "COMPLIANCE_WARNING_PENALTY",
        "COMPLIANCE_BATCH_WORKERS",
        "COMPLIANCE_DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture()
def records():
    return [dict(r) for r in RECORDS]


@pytest.fixture()
def catalog(records):
    return RequirementsCatalog(records)


@pytest.fixture()
def evaluator(catalog):
    return ComplianceEvaluator(catalog, clock=lambda: NOW)


@pytest.fixture()
def clean_text():
    return CLEAN_TEXT


@pytest.fixture()
def degree_to_us():
    def _make(**overrides):
        data = {
            "document_type": "degree",
            "source_country": "IN",
            "target_country": "US",
            "certifications": ["hrd_attestation", "university_verification", "apostille"],
        }
        data.update(overrides)
        return DocumentMetadata(**data)

    return _make
