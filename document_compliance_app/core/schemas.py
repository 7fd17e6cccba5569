# document_compliance_app/core/schemas.py
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, List, Literal, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

# ============================================================================
# Public exports control (clean imports across project)
# ============================================================================
__all__ = [
    # constants
    "SCHEMA_VERSION",
    # enums/literals
    "Severity",
    "CheckStatus",
    # catalog
    "JurisdictionRequirement",
    # inputs
    "DocumentMetadata",
    # building blocks
    "RequirementCheck",
    "ValidationError",
    "ValidationWarning",
    "CertificationRequirement",
    # output
    "ComplianceReport",
    # helpers
    "normalize_country",
    "normalize_tag",
    "parse_months",
    "parse_days",
]

# ============================================================================
# Single Source Of Truth (schema version)
# ============================================================================
SCHEMA_VERSION: str = "1.0"


# ============================================================================
# Base config (tolerant to extras)
# ============================================================================
class AppBaseModel(BaseModel):
    """
    Base model with tolerant config so older catalog producers and API
    callers with extra keys keep working.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        str_max_length=500_000,  # full OCR output of multi-page scans
    )


class FrozenModel(AppBaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# ============================================================================
# Enums / Literals
# ============================================================================
Severity = Literal["critical", "high", "medium"]
CheckStatus = Literal["passed", "failed", "warning", "not_applicable"]


# ============================================================================
# Normalisation helpers
# ============================================================================
_PERIOD_RE = re.compile(r"(\d+)\s*(day|week|month|year)s?", re.IGNORECASE)


def normalize_country(code: Any) -> str:
    """Upper-cased, stripped country code; '' for anything unusable."""
    if not isinstance(code, str):
        return ""
    return code.strip().upper()


def normalize_tag(tag: Any) -> str:
    """
    'NYSC certificate' / 'nysc-certificate' / ' NYSC_Certificate ' ->
    'nysc_certificate'.
    """
    if tag is None:
        return ""
    return re.sub(r"[\s\-]+", "_", str(tag).strip()).lower()


def parse_months(value: Any) -> Optional[int]:
    """
    Accept int | '6' | '6 months' | '1 year'. Anything without a usable
    number ('No expiry for educational documents') means no limit.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float):
        return int(value) if value > 0 else None
    s = str(value).strip()
    if s.isdigit():
        return int(s) or None
    m = _PERIOD_RE.search(s)
    if not m or not m.group(2).lower().startswith(("month", "year")):
        return None
    n = int(m.group(1))
    months = n * 12 if m.group(2).lower().startswith("year") else n
    return months or None


def parse_days(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if value >= 0 else None
    s = str(value).strip()
    if s.isdigit():
        return int(s)
    m = _PERIOD_RE.search(s)
    if not m:
        return None
    n = int(m.group(1))
    unit = m.group(2).lower()
    if unit.startswith("week"):
        return n * 7
    if unit.startswith("month"):
        return n * 30
    if unit.startswith("year"):
        return n * 365
    return n


def _lenient_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def _lenient_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"true", "yes", "1", "y"}:
            return True
        if v in {"false", "no", "0", "n"}:
            return False
    return None


def _str_items(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    try:
        items = list(value)
    except TypeError:
        return []
    return [str(x).strip() for x in items if x is not None and str(x).strip()]


# ============================================================================
# Catalog record
# ============================================================================
class JurisdictionRequirement(FrozenModel):
    """
    Acceptance rules of one target country. Immutable once loaded; the
    catalog keys records by ``target_country``.
    """

    target_country: str = Field(
        validation_alias=AliasChoices("target_country", "country_code", "country")
    )
    country_name: Optional[str] = None
    accepted_document_types: FrozenSet[str] = Field(
        default_factory=frozenset,
        validation_alias=AliasChoices(
            "accepted_document_types", "document_types", "documentTypes"
        ),
    )
    apostille_required: bool = False
    translation_required: bool = False
    notarization_required: bool = False
    additional_requirements: Tuple[str, ...] = ()
    mandatory_requirements: FrozenSet[str] = Field(default_factory=frozenset)
    validity_period_months: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices(
            "validity_period_months", "validity_period", "validityPeriod"
        ),
    )
    processing_time_estimate_days: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices(
            "processing_time_estimate_days",
            "processing_time",
            "typical_processing_days",
        ),
    )
    paper_size: Optional[str] = None

    @field_validator("target_country", mode="before")
    @classmethod
    def _country_code(cls, v: Any) -> str:
        code = normalize_country(v)
        if not code:
            raise ValueError("target_country must be a non-empty string")
        return code

    @field_validator("accepted_document_types", mode="before")
    @classmethod
    def _doc_types(cls, v: Any) -> FrozenSet[str]:
        return frozenset(normalize_tag(x) for x in _str_items(v))

    @field_validator("additional_requirements", mode="before")
    @classmethod
    def _additional(cls, v: Any) -> Tuple[str, ...]:
        # keep catalog order, drop repeats
        return tuple(dict.fromkeys(_str_items(v)))

    @field_validator("mandatory_requirements", mode="before")
    @classmethod
    def _mandatory(cls, v: Any) -> FrozenSet[str]:
        return frozenset(_str_items(v))

    @field_validator("validity_period_months", mode="before")
    @classmethod
    def _validity(cls, v: Any) -> Optional[int]:
        return parse_months(v)

    @field_validator("processing_time_estimate_days", mode="before")
    @classmethod
    def _processing(cls, v: Any) -> Optional[int]:
        return parse_days(v)

    @model_validator(mode="after")
    def _mandatory_subset(self):
        unknown = self.mandatory_requirements - set(self.additional_requirements)
        if unknown:
            raise ValueError(
                "mandatory_requirements not listed in additional_requirements: "
                + ", ".join(sorted(unknown))
            )
        return self

    @field_serializer("accepted_document_types", "mandatory_requirements")
    def _sorted(self, v: FrozenSet[str]) -> List[str]:
        return sorted(v)

    def accepts(self, document_type: str) -> bool:
        return normalize_tag(document_type) in self.accepted_document_types

    def is_mandatory(self, requirement: str) -> bool:
        return requirement in self.mandatory_requirements


# ============================================================================
# Inputs
# ============================================================================
class DocumentMetadata(AppBaseModel):
    """
    Per-call description of the document under validation.

    Optional fields are parsed leniently: a malformed value is treated as
    absent. ``has_signature``/``has_seal`` are tri-state; ``None`` means the
    upstream extractor did not evaluate them.
    """

    document_type: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("document_type", "type")
    )
    source_country: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("source_country", "issue_country"),
    )
    target_country: Optional[str] = None
    issue_date: Optional[date] = None
    expiry_date: Optional[date] = None
    certifications: FrozenSet[str] = Field(default_factory=frozenset)
    scan_quality_dpi: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("scan_quality_dpi", "scan_quality"),
    )
    paper_size: Optional[str] = None
    has_signature: Optional[bool] = None
    has_seal: Optional[bool] = None

    @field_validator("document_type", "source_country", "target_country", "paper_size", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        s = str(v).strip()
        return s or None

    @field_validator("issue_date", "expiry_date", mode="before")
    @classmethod
    def _dates(cls, v: Any) -> Optional[date]:
        return _lenient_date(v)

    @field_validator("certifications", mode="before")
    @classmethod
    def _certs(cls, v: Any) -> FrozenSet[str]:
        return frozenset(normalize_tag(x) for x in _str_items(v))

    @field_validator("scan_quality_dpi", mode="before")
    @classmethod
    def _dpi(cls, v: Any) -> Optional[int]:
        if v is None or isinstance(v, bool):
            return None
        try:
            dpi = int(float(v))
        except (TypeError, ValueError, OverflowError):
            return None
        return dpi if dpi > 0 else None

    @field_validator("has_signature", "has_seal", mode="before")
    @classmethod
    def _tri_state(cls, v: Any) -> Optional[bool]:
        return _lenient_bool(v)


# ============================================================================
# Building blocks
# ============================================================================
class RequirementCheck(FrozenModel):
    requirement_name: str
    status: CheckStatus
    detail: str = ""


class ValidationError(FrozenModel):
    """A rule the document fails. Returned as data, never raised."""

    field: str
    message: str
    severity: Severity


class ValidationWarning(FrozenModel):
    field: str
    message: str


class CertificationRequirement(FrozenModel):
    type: str
    required: bool = True
    description: str
    processing_days: Optional[int] = None


# ============================================================================
# Output
# ============================================================================
class ComplianceReport(FrozenModel):
    """
    Outcome of one ``validate_document`` call.

    ``is_compliant`` is authoritative for gating; ``compliance_score`` is
    informational.
    """

    schema_version: str = SCHEMA_VERSION
    is_compliant: bool
    compliance_score: int = Field(ge=0, le=100)
    errors: Tuple[ValidationError, ...] = ()
    warnings: Tuple[ValidationWarning, ...] = ()
    checks: Tuple[RequirementCheck, ...] = ()
    target_country: str = ""
    document_type: str = ""
    jurisdiction_found: bool = False
    recommendations: Tuple[str, ...] = ()
    certification_requirements: Tuple[CertificationRequirement, ...] = ()
    evaluated_at: Optional[date] = None

    @property
    def is_valid(self) -> bool:
        return self.is_compliant

    def check(self, requirement_name: str) -> Optional[RequirementCheck]:
        for c in self.checks:
            if c.requirement_name == requirement_name:
                return c
        return None

    def errors_for(self, field: str) -> List[ValidationError]:
        return [e for e in self.errors if e.field == field]

    def warnings_for(self, field: str) -> List[ValidationWarning]:
        return [w for w in self.warnings if w.field == field]

    def display_data(self) -> Dict[str, Any]:
        """Plain dict for report/PDF renderers."""
        return self.model_dump(mode="json")
