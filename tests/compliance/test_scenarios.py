"""Reference scenarios for degree certificates crossing borders."""


def test_india_to_us_without_apostille(evaluator, clean_text, degree_to_us):
    meta = degree_to_us(certifications=["hrd_attestation", "university_verification"])
    report = evaluator.validate_document(clean_text, meta)

    assert report.is_compliant is False
    assert len(report.errors) == 1
    err = report.errors[0]
    assert err.field == "apostille"
    assert err.severity in {"critical", "high"}
    assert err.message.startswith("Apostille required")
    assert report.warnings == ()
    assert report.compliance_score == 80
    assert report.check("Apostille").status == "failed"


def test_india_to_us_with_apostille(evaluator, clean_text, degree_to_us):
    report = evaluator.validate_document(clean_text, degree_to_us())

    assert report.errors == ()
    assert report.warnings == ()
    assert report.is_compliant is True
    assert report.compliance_score == 100
    assert report.check("Apostille").status == "passed"


def test_nigeria_to_uk_missing_nysc_certificate(evaluator, clean_text):
    meta = {
        "document_type": "degree",
        "source_country": "NG",
        "target_country": "GB",
        "certifications": ["embassy_authentication"],
    }
    report = evaluator.validate_document(clean_text, meta)

    nysc = [w for w in report.warnings if "NYSC certificate" in w.message]
    assert len(nysc) == 1
    assert nysc[0].field == "additionalRequirement"
    assert report.check("NYSC certificate").status == "warning"
    assert report.errors == ()
    assert report.is_compliant is True
    assert report.compliance_score == 95


def test_low_dpi_scan(evaluator, clean_text, degree_to_us):
    report = evaluator.validate_document(clean_text, degree_to_us(scan_quality_dpi=150))

    assert len(report.warnings) == 1
    assert report.warnings[0].field == "scanQuality"
    assert "300 DPI" in report.warnings[0].message
    assert report.compliance_score == 95
    assert report.is_compliant is True


def test_explicit_missing_signature_is_an_error(evaluator, clean_text, degree_to_us):
    # the text mentions "Signed", but the structured flag wins
    report = evaluator.validate_document(clean_text, degree_to_us(has_signature=False))

    assert len(report.errors) == 1
    assert report.errors[0].field == "signature"
    assert report.errors[0].severity == "high"
    assert "missing official signature" in report.errors[0].message
    assert report.is_compliant is False
    assert report.compliance_score == 85


def test_explicit_missing_seal_is_an_error(evaluator, clean_text, degree_to_us):
    report = evaluator.validate_document(clean_text, degree_to_us(has_seal=False))

    assert [e.field for e in report.errors] == ["authentication"]
    assert "missing official seal" in report.errors[0].message
    assert report.compliance_score == 85
    assert report.is_compliant is False


def test_letter_paper_to_a4_country(evaluator, clean_text):
    meta = {
        "document_type": "degree",
        "source_country": "US",
        "target_country": "GB",
        "paper_size": "Letter",
    }
    report = evaluator.validate_document(clean_text, meta)

    paper = report.warnings_for("paperSize")
    assert len(paper) == 1
    assert "A4" in paper[0].message
    assert report.check("Paper Size").status == "warning"


def test_letter_paper_to_letter_country(evaluator, clean_text, degree_to_us):
    report = evaluator.validate_document(clean_text, degree_to_us(paper_size="US Letter"))

    assert report.check("Paper Size").status == "passed"
    assert report.compliance_score == 100
