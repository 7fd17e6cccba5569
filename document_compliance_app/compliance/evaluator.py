# document_compliance_app/compliance/evaluator.py
"""Compliance evaluation of a document against its target jurisdiction."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from document_compliance_app.config import Settings
from document_compliance_app.core.schemas import (
    CertificationRequirement,
    ComplianceReport,
    DocumentMetadata,
    JurisdictionRequirement,
    normalize_country,
)

from . import heuristics as h
from .catalog import RequirementsCatalog
from .checks import COMMON_CHECKS, JURISDICTION_CHECKS, CheckContext, Findings
from .errors import ConfigurationError
from .scoring import compliance_score

MetadataLike = Union[DocumentMetadata, Mapping[str, Any]]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _today(now: Union[date, datetime, None], clock: Clock) -> date:
    if now is None:
        now = clock()
    if isinstance(now, datetime):
        return now.date()
    if isinstance(now, date):
        return now
    raise ConfigurationError(f"now must be a date or datetime, got {type(now).__name__}")


def _coerce_metadata(metadata: Any) -> DocumentMetadata:
    if isinstance(metadata, DocumentMetadata):
        return metadata
    if isinstance(metadata, Mapping):
        try:
            return DocumentMetadata.model_validate(dict(metadata))
        except PydanticValidationError as exc:
            raise ConfigurationError(f"invalid document metadata: {exc.errors()[0]['msg']}") from exc
    raise ConfigurationError(
        f"metadata must be DocumentMetadata or a mapping, got {type(metadata).__name__}"
    )


def _certification_requirements(
    req: Optional[JurisdictionRequirement],
) -> Tuple[CertificationRequirement, ...]:
    if req is None:
        return ()
    out: List[CertificationRequirement] = []
    if req.apostille_required:
        out.append(
            CertificationRequirement(
                type="Apostille",
                description="Document must be apostilled by the competent authority of the issuing country",
                processing_days=3,
            )
        )
    if req.notarization_required:
        out.append(
            CertificationRequirement(
                type="Notarization",
                description="Document must be notarized by a licensed notary",
                processing_days=1,
            )
        )
    if req.translation_required:
        out.append(
            CertificationRequirement(
                type="Translation Certification",
                description="Translation must be certified by a qualified translator",
                processing_days=2,
            )
        )
    return tuple(out)


def _recommendations(
    ctx: CheckContext, findings: Findings
) -> Tuple[str, ...]:
    recs: List[str] = []
    req = ctx.requirement
    if any(e.severity == "critical" for e in findings.errors):
        recs.append("Fix all critical issues before submitting the document")
    if req is None:
        recs.append(f"Confirm document acceptance requirements with the {ctx.target_country} authorities")
        return tuple(recs)

    issuer = ctx.metadata.source_country or "the issuing country"
    if any(e.field == "apostille" for e in findings.errors):
        recs.append(f"Obtain apostille certification from the competent authority in {issuer}")
    if req.notarization_required:
        notarized = bool(ctx.metadata.certifications & h.NOTARIZATION_CERTIFICATIONS) or h.contains_any(
            ctx.text, h.NOTARIZATION_KEYWORDS
        )
        if not notarized:
            recs.append("Have the document notarized by a licensed notary public")
    if req.translation_required:
        recs.append("Ensure the translation is certified by a qualified translator")
    if req.processing_time_estimate_days:
        recs.append(f"Allow {req.processing_time_estimate_days} business days for processing")
    return tuple(recs)


class ComplianceEvaluator:
    """Runs the fixed check pipeline against one catalog.

    Holds no per-call state; a single instance can serve concurrent calls.
    """

    def __init__(
        self,
        catalog: RequirementsCatalog,
        *,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ):
        self.catalog = catalog
        self.settings = settings or Settings()
        self._clock = clock or _utc_now

    def validate_document(
        self,
        document_text: Optional[str],
        metadata: MetadataLike,
        *,
        now: Union[date, datetime, None] = None,
    ) -> ComplianceReport:
        if self.catalog is None or not self.catalog.is_loaded:
            raise ConfigurationError("requirements catalog has not been loaded")
        meta = _coerce_metadata(metadata)
        if not meta.document_type:
            raise ConfigurationError("document_type is required")
        target = normalize_country(meta.target_country)
        if not target:
            raise ConfigurationError("target_country is required")

        text = document_text if isinstance(document_text, str) else str(document_text or "")
        ctx = CheckContext(
            text=text,
            metadata=meta,
            target_country=target,
            requirement=self.catalog.get(target),
            today=_today(now, self._clock),
            min_scan_dpi=self.settings.min_scan_dpi,
            illegible_ratio_threshold=self.settings.illegible_ratio_threshold,
        )

        findings = Findings()
        if ctx.requirement is None:
            findings.warn(
                "Jurisdiction",
                "No curated requirements; generic validation only",
                field="targetCountry",
                message=f"Requirements not found for {target}; using generic validation",
            )
        else:
            findings.passed("Jurisdiction", f"Requirements loaded for {target}")
            for _name, check in JURISDICTION_CHECKS:
                check(ctx, findings)
        for _name, check in COMMON_CHECKS:
            check(ctx, findings)

        score = compliance_score(
            findings.errors, findings.warnings, warning_penalty=self.settings.warning_penalty
        )
        report = ComplianceReport(
            is_compliant=not findings.errors,
            compliance_score=score,
            errors=tuple(findings.errors),
            warnings=tuple(findings.warnings),
            checks=tuple(findings.checks),
            target_country=target,
            document_type=meta.document_type,
            jurisdiction_found=ctx.requirement is not None,
            recommendations=_recommendations(ctx, findings),
            certification_requirements=_certification_requirements(ctx.requirement),
            evaluated_at=ctx.today,
        )
        logger.debug(
            "validated {} -> {} ({}): score={} compliant={} errors={} warnings={}",
            meta.source_country or "?",
            target,
            meta.document_type,
            report.compliance_score,
            report.is_compliant,
            len(report.errors),
            len(report.warnings),
        )
        return report

    def validate_batch(
        self,
        items: Iterable[Tuple[Optional[str], MetadataLike]],
        *,
        max_workers: Optional[int] = None,
        now: Union[date, datetime, None] = None,
    ) -> List[ComplianceReport]:
        """Validate independent documents on a thread pool, keeping input order."""
        pairs: Sequence[Tuple[Optional[str], MetadataLike]] = list(items)
        if not pairs:
            return []
        workers = max_workers or self.settings.batch_max_workers
        with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
            futures = [
                pool.submit(self.validate_document, text, meta, now=now) for text, meta in pairs
            ]
            return [f.result() for f in futures]


__all__ = ["ComplianceEvaluator"]
