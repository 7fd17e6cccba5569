# document_compliance_app/compliance/checks.py
"""Check functions of the compliance pipeline.

Every check receives the shared :class:`CheckContext` and appends to the
:class:`Findings` accumulator. The order of the tuples at the bottom of
this module is the order checks appear in a report.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Tuple

from document_compliance_app.core.schemas import (
    DocumentMetadata,
    JurisdictionRequirement,
    RequirementCheck,
    ValidationError,
    ValidationWarning,
    normalize_tag,
)

from . import heuristics as h

MIN_SCAN_DPI = 300
ILLEGIBLE_RATIO_THRESHOLD = 0.2


@dataclass(frozen=True)
class CheckContext:
    text: str
    metadata: DocumentMetadata
    target_country: str
    requirement: Optional[JurisdictionRequirement]
    today: date
    min_scan_dpi: int = MIN_SCAN_DPI
    illegible_ratio_threshold: float = ILLEGIBLE_RATIO_THRESHOLD


@dataclass
class Findings:
    checks: List[RequirementCheck] = field(default_factory=list)
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)

    def passed(self, name: str, detail: str = "") -> None:
        self.checks.append(RequirementCheck(requirement_name=name, status="passed", detail=detail))

    def not_applicable(self, name: str, detail: str = "") -> None:
        self.checks.append(
            RequirementCheck(requirement_name=name, status="not_applicable", detail=detail)
        )

    def failed(self, name: str, detail: str, *, field: str, message: str, severity: str) -> None:
        self.checks.append(RequirementCheck(requirement_name=name, status="failed", detail=detail))
        self.errors.append(ValidationError(field=field, message=message, severity=severity))

    def warn(self, name: str, detail: str, *, field: str, message: str) -> None:
        self.checks.append(RequirementCheck(requirement_name=name, status="warning", detail=detail))
        self.warnings.append(ValidationWarning(field=field, message=message))


Check = Callable[[CheckContext, Findings], None]


def add_months(d: date, months: int) -> date:
    """Calendar month arithmetic; the day is clamped to the target month."""
    total = d.month - 1 + months
    year = d.year + total // 12
    month = total % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


# ---------------------------------------------------------------------------
# Jurisdiction checks (need a catalog record)
# ---------------------------------------------------------------------------


def check_document_type(ctx: CheckContext, out: Findings) -> None:
    req = ctx.requirement
    doc_type = ctx.metadata.document_type or ""
    if req.accepts(doc_type):
        out.passed("Document Type", f"{doc_type} is accepted")
        return
    accepted = ", ".join(sorted(req.accepted_document_types)) or "none"
    out.failed(
        "Document Type",
        f"{doc_type} is not accepted. Accepted types: {accepted}",
        field="documentType",
        message=f"Document type {doc_type} is not accepted for {ctx.target_country}",
        severity="critical",
    )


def check_apostille(ctx: CheckContext, out: Findings) -> None:
    if not ctx.requirement.apostille_required:
        out.not_applicable("Apostille", f"Apostille not required for {ctx.target_country}")
        return
    certs = ctx.metadata.certifications & h.APOSTILLE_CERTIFICATIONS
    if certs:
        out.passed("Apostille", f"Apostille certification on record ({sorted(certs)[0]})")
        return
    keyword = h.find_keyword(ctx.text, h.APOSTILLE_KEYWORDS)
    if keyword:
        out.passed("Apostille", f"Apostille detected in document ('{keyword}')")
        return
    out.failed(
        "Apostille",
        "Apostille required but not found",
        field="apostille",
        message=f"Apostille required for {ctx.metadata.document_type} documents to {ctx.target_country}",
        severity="critical",
    )


def check_translation(ctx: CheckContext, out: Findings) -> None:
    if not ctx.requirement.translation_required:
        out.not_applicable("Translation", f"Translation not required for {ctx.target_country}")
        return
    out.warn(
        "Translation",
        "Document requires certified translation",
        field="translation",
        message="Document must be translated by a certified translator",
    )


def check_expiry(ctx: CheckContext, out: Findings) -> None:
    expiry = ctx.metadata.expiry_date
    if expiry is None:
        out.not_applicable("Document Validity", "No expiry date provided")
        return
    if ctx.today > expiry:
        out.failed(
            "Document Validity",
            f"Document expired on {expiry.isoformat()}",
            field="expiryDate",
            message="Document has expired",
            severity="critical",
        )
        return
    out.passed("Document Validity", f"Document valid until {expiry.isoformat()}")


def check_validity_period(ctx: CheckContext, out: Findings) -> None:
    months = ctx.requirement.validity_period_months
    issued = ctx.metadata.issue_date
    if not months:
        out.not_applicable("Validity Period", f"No validity period enforced by {ctx.target_country}")
        return
    if issued is None:
        out.not_applicable("Validity Period", "No issue date provided")
        return
    try:
        limit = add_months(issued, months)
    except ValueError:
        # window ends past date.max
        out.passed("Validity Period", f"Document is within {months}-month validity period")
        return
    if ctx.today > limit:
        out.failed(
            "Validity Period",
            f"Document exceeds {months}-month validity period (ended {limit.isoformat()})",
            field="validityPeriod",
            message=f"Document exceeds {months}-month validity period",
            severity="high",
        )
        return
    out.passed(
        "Validity Period",
        f"Document is within {months}-month validity period (until {limit.isoformat()})",
    )


def check_additional_requirements(ctx: CheckContext, out: Findings) -> None:
    certs = ctx.metadata.certifications
    for item in ctx.requirement.additional_requirements:
        if not ctx.requirement.is_mandatory(item):
            out.warn(
                item,
                "Manual verification required",
                field="additionalRequirement",
                message=f"{item} required for {ctx.target_country}; manual verification required",
            )
            continue
        if normalize_tag(item) in certs:
            out.passed(item, "Provided")
            continue
        out.failed(
            item,
            "Required document not provided",
            field="additionalRequirement",
            message=f"{item} required for {ctx.target_country}",
            severity="high",
        )


# ---------------------------------------------------------------------------
# Common-issue heuristics (always run)
# ---------------------------------------------------------------------------


def check_scan_legibility(ctx: CheckContext, out: Findings) -> None:
    ratio = h.illegible_ratio(ctx.text)
    if ratio > ctx.illegible_ratio_threshold:
        out.warn(
            "Scan Legibility",
            f"{ratio:.0%} of characters look like OCR noise",
            field="quality",
            message="Document may have poor scan quality. Consider re-scanning.",
        )
        return
    out.passed("Scan Legibility", "Text is legible")


def check_date_presence(ctx: CheckContext, out: Findings) -> None:
    if h.contains_date(ctx.text):
        out.passed("Date Presence", "Date found in document")
        return
    out.warn("Date Presence", "No date detected", field="date", message="No date found in document")


def check_signature(ctx: CheckContext, out: Findings) -> None:
    flag = ctx.metadata.has_signature
    if flag is False:
        out.failed(
            "Signature",
            "Signature reported missing",
            field="signature",
            message="Document appears to be missing official signature",
            severity="high",
        )
        return
    if flag is True:
        out.passed("Signature", "Signature confirmed")
        return
    if h.contains_any(ctx.text, h.SIGNATURE_KEYWORDS):
        out.passed("Signature", "Signature reference found in text")
        return
    out.warn(
        "Signature",
        "No signature reference found in text",
        field="signature",
        message="No signature detected in document",
    )


def check_seal(ctx: CheckContext, out: Findings) -> None:
    flag = ctx.metadata.has_seal
    if flag is False:
        out.failed(
            "Official Seal",
            "Seal reported missing",
            field="authentication",
            message="Document appears to be missing official seal",
            severity="high",
        )
        return
    if flag is True:
        out.passed("Official Seal", "Seal confirmed")
        return
    if h.contains_any(ctx.text, h.SEAL_KEYWORDS):
        out.passed("Official Seal", "Official mark found in text")
        return
    out.warn(
        "Official Seal",
        "No official stamp or seal reference found in text",
        field="authentication",
        message="No official stamps or seals detected",
    )


def check_scan_resolution(ctx: CheckContext, out: Findings) -> None:
    dpi = ctx.metadata.scan_quality_dpi
    if dpi is None:
        out.not_applicable("Scan Resolution", "Scan resolution not provided")
        return
    if dpi < ctx.min_scan_dpi:
        out.warn(
            "Scan Resolution",
            f"{dpi} DPI",
            field="scanQuality",
            message=f"Document scan quality is below recommended {ctx.min_scan_dpi} DPI",
        )
        return
    out.passed("Scan Resolution", f"{dpi} DPI")


def check_paper_size(ctx: CheckContext, out: Findings) -> None:
    size = ctx.metadata.paper_size
    if size is None:
        out.not_applicable("Paper Size", "Paper size not provided")
        return
    override = ctx.requirement.paper_size if ctx.requirement else None
    expected = h.expected_paper_size(ctx.target_country, override)
    if h.same_paper_size(size, expected):
        out.passed("Paper Size", f"{size} matches expected {expected}")
        return
    out.warn(
        "Paper Size",
        f"{size} does not match expected {expected}",
        field="paperSize",
        message=f"Document paper size is {size}, {expected} recommended for {ctx.target_country}",
    )


JURISDICTION_CHECKS: Tuple[Tuple[str, Check], ...] = (
    ("document_type", check_document_type),
    ("apostille", check_apostille),
    ("translation", check_translation),
    ("expiry", check_expiry),
    ("validity_period", check_validity_period),
    ("additional_requirements", check_additional_requirements),
)

COMMON_CHECKS: Tuple[Tuple[str, Check], ...] = (
    ("scan_legibility", check_scan_legibility),
    ("date_presence", check_date_presence),
    ("signature", check_signature),
    ("seal", check_seal),
    ("scan_resolution", check_scan_resolution),
    ("paper_size", check_paper_size),
)


__all__ = [
    "CheckContext",
    "Findings",
    "JURISDICTION_CHECKS",
    "COMMON_CHECKS",
    "MIN_SCAN_DPI",
    "ILLEGIBLE_RATIO_THRESHOLD",
    "add_months",
]
