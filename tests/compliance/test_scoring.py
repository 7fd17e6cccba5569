from document_compliance_app.compliance.scoring import (
    SEVERITY_WEIGHTS,
    compliance_score,
    is_compliant,
)
from document_compliance_app.core.schemas import ValidationError, ValidationWarning


def _err(severity):
    return ValidationError(field="x", message="m", severity=severity)


def _warn():
    return ValidationWarning(field="x", message="m")


def test_perfect_score():
    assert compliance_score([], []) == 100
    assert is_compliant([])


def test_weights_per_severity():
    assert compliance_score([_err("critical")], []) == 80
    assert compliance_score([_err("high")], []) == 85
    assert compliance_score([_err("medium")], []) == 90
    assert SEVERITY_WEIGHTS["critical"] < SEVERITY_WEIGHTS["high"] < SEVERITY_WEIGHTS["medium"] < 0


def test_warnings_deduct_five_by_default():
    assert compliance_score([], [_warn(), _warn()]) == 90


def test_custom_warning_penalty():
    assert compliance_score([], [_warn()], warning_penalty=0) == 100
    assert compliance_score([], [_warn()], warning_penalty=10) == 90


def test_score_is_clamped_at_zero():
    assert compliance_score([_err("critical")] * 6, [_warn()] * 10) == 0


def test_any_error_blocks_compliance():
    assert not is_compliant([_err("medium")])
