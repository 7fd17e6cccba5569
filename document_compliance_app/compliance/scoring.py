from __future__ import annotations

from typing import Iterable, Optional

from document_compliance_app.core.schemas import ValidationError, ValidationWarning

# ---- Severity -> weights for score ------------------------------------------

SEVERITY_WEIGHTS = {
    "critical": -20,
    "high": -15,
    "medium": -10,
}
WARNING_WEIGHT = -5


def _weight(err: ValidationError) -> int:
    return SEVERITY_WEIGHTS.get((err.severity or "").lower(), 0)


def compliance_score(
    errors: Iterable[ValidationError],
    warnings: Iterable[ValidationWarning],
    *,
    warning_penalty: Optional[int] = None,
) -> int:
    """100 minus severity weights of errors and a flat penalty per warning."""
    per_warning = WARNING_WEIGHT if warning_penalty is None else -abs(warning_penalty)
    score = 100
    for e in errors or []:
        score += _weight(e)
    for _ in warnings or []:
        score += per_warning
    # clamp
    if score < 0:
        return 0
    if score > 100:
        return 100
    return score


def is_compliant(errors: Iterable[ValidationError]) -> bool:
    return not list(errors or [])


__all__ = ["SEVERITY_WEIGHTS", "WARNING_WEIGHT", "compliance_score", "is_compliant"]
