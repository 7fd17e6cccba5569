import json

import pytest
import yaml

from document_compliance_app.compliance import ConfigurationError, RequirementsCatalog
from document_compliance_app.compliance.catalog import read_records
from document_compliance_app.config import DEFAULT_CATALOG_PATH


def test_lookup_is_case_insensitive(catalog):
    assert catalog.get("us").target_country == "US"
    assert catalog.get(" Gb ").country_name == "United Kingdom"
    assert "fr" in catalog
    assert len(catalog) == 5


@pytest.mark.parametrize("code", [None, "", "   ", "ZZ", 42, "USA"])
def test_unknown_or_malformed_codes_return_none(catalog, code):
    assert catalog.get(code) is None


def test_aliases_are_normalised(catalog):
    gb = catalog.get("GB")
    assert gb.accepted_document_types == frozenset({"degree", "transcript", "birth_certificate"})
    assert gb.additional_requirements == ("NYSC certificate",)


def test_new_catalog_is_not_loaded():
    catalog = RequirementsCatalog()
    assert catalog.is_loaded is False
    assert len(catalog) == 0


def test_empty_country_code_rejects_whole_batch(catalog):
    before = catalog.snapshot()
    with pytest.raises(ConfigurationError):
        catalog.load(
            [
                {"target_country": "PL", "accepted_document_types": ["degree"]},
                {"target_country": "  ", "accepted_document_types": ["degree"]},
            ]
        )
    assert catalog.snapshot() is before
    assert catalog.get("PL") is None


def test_non_mapping_record_is_rejected():
    with pytest.raises(ConfigurationError, match="must be a mapping"):
        RequirementsCatalog(["US"])


def test_none_records_are_rejected():
    with pytest.raises(ConfigurationError):
        RequirementsCatalog().load(None)


def test_mandatory_must_be_listed_as_additional():
    with pytest.raises(ConfigurationError, match="mandatory_requirements"):
        RequirementsCatalog(
            [
                {
                    "target_country": "SA",
                    "additional_requirements": ["Saudi cultural mission attestation"],
                    "mandatory_requirements": ["MOFA attestation"],
                }
            ]
        )


def test_last_write_wins(catalog):
    applied = catalog.load(
        [
            {"target_country": "us", "accepted_document_types": ["degree"], "apostille_required": False},
            {"target_country": "US", "accepted_document_types": ["transcript"]},
        ]
    )
    assert applied == 2
    us = catalog.get("US")
    assert us.accepted_document_types == frozenset({"transcript"})
    assert us.apostille_required is False
    # other countries survive a merge
    assert catalog.get("FR") is not None


def test_replace_drops_previous_records(catalog):
    catalog.load([{"target_country": "PL", "accepted_document_types": ["degree"]}], replace=True)
    assert catalog.country_codes() == frozenset({"PL"})


def test_reload_does_not_touch_old_snapshot(catalog):
    old = catalog.snapshot()
    catalog.load([{"target_country": "US", "accepted_document_types": []}])
    assert old["US"].accepted_document_types == frozenset({"degree", "transcript"})
    assert catalog.get("US").accepted_document_types == frozenset()


def test_snapshot_is_read_only(catalog):
    with pytest.raises(TypeError):
        catalog.snapshot()["XX"] = None


def test_records_are_immutable(catalog):
    with pytest.raises(Exception):
        catalog.get("US").apostille_required = False


@pytest.mark.parametrize(
    "raw, expected",
    [
        (6, 6),
        ("6", 6),
        ("6 months", 6),
        ("1 year", 12),
        ("No expiry for educational documents", None),
        (None, None),
        (0, None),
    ],
)
def test_validity_period_parsing(raw, expected):
    catalog = RequirementsCatalog([{"target_country": "PT", "validity_period_months": raw}])
    assert catalog.get("PT").validity_period_months == expected


@pytest.mark.parametrize(
    "raw, expected",
    [(10, 10), ("15", 15), ("2 weeks", 14), ("10-15 days", 15), ("unknown", None)],
)
def test_processing_time_parsing(raw, expected):
    catalog = RequirementsCatalog([{"target_country": "PT", "processing_time": raw}])
    assert catalog.get("PT").processing_time_estimate_days == expected


def test_load_path_json(tmp_path, records):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(records), encoding="utf-8")

    catalog = RequirementsCatalog.from_path(path)
    assert catalog.is_loaded
    assert catalog.country_codes() == frozenset({"US", "GB", "FR", "AE", "DE"})


def test_load_path_yaml_with_section(tmp_path, records):
    path = tmp_path / "catalog.yaml"
    path.write_text(yaml.safe_dump({"jurisdictions": records}), encoding="utf-8")

    assert len(read_records(path)) == 5
    catalog = RequirementsCatalog([{"target_country": "PL"}])
    catalog.load_path(path)
    assert "PL" not in catalog
    assert "AE" in catalog


@pytest.mark.parametrize(
    "name, content",
    [
        ("catalog.txt", "[]"),
        ("catalog.json", "{not json"),
        ("catalog.yaml", "jurisdictions: 3"),
        ("catalog.yml", "just a string"),
    ],
)
def test_bad_catalog_files(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        RequirementsCatalog.from_path(path)


def test_missing_catalog_file(tmp_path):
    with pytest.raises(ConfigurationError, match="cannot read"):
        RequirementsCatalog.from_path(tmp_path / "absent.yaml")


def test_bundled_catalog_loads():
    catalog = RequirementsCatalog.from_path(DEFAULT_CATALOG_PATH)
    assert {"US", "GB", "AE"} <= catalog.country_codes()
    for code in catalog.country_codes():
        rec = catalog.get(code)
        assert rec.mandatory_requirements <= set(rec.additional_requirements)


def test_requirement_serialises_sets_sorted(catalog):
    data = catalog.get("AE").model_dump(mode="json")
    assert data["accepted_document_types"] == ["degree"]
    assert data["mandatory_requirements"] == ["UAE embassy attestation"]
    assert data["additional_requirements"] == ["UAE embassy attestation", "MOFAIC attestation"]


def test_bundled_catalog_keeps_norway_as_a_country():
    catalog = RequirementsCatalog.from_path(DEFAULT_CATALOG_PATH)
    assert catalog.get("no").country_name == "Norway"


def test_unquoted_norway_code_is_rejected(tmp_path):
    path = tmp_path / "catalog.yaml"
    path.write_text("- target_country: NO\n  accepted_document_types: [degree]\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="target_country"):
        RequirementsCatalog.from_path(path)

    path.write_text('- target_country: "NO"\n  accepted_document_types: [degree]\n', encoding="utf-8")
    assert "NO" in RequirementsCatalog.from_path(path)
