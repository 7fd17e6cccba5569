import argparse
import json
import sys
from pathlib import Path

from document_compliance_app.compliance import (
    ComplianceEvaluator,
    ConfigurationError,
    RequirementsCatalog,
)
from document_compliance_app.config import load_settings
from document_compliance_app.utils.logging import init_logging


def _build_parser() -> argparse.ArgumentParser:
    # accepted before or after the sub-command; SUPPRESS keeps a sub-parser
    # from resetting a value given up front
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--catalog", default=argparse.SUPPRESS, help="Path to a JSON/YAML jurisdiction catalog"
    )
    common.add_argument(
        "--debug", action="store_true", default=argparse.SUPPRESS, help="Verbose logging"
    )

    parser = argparse.ArgumentParser(prog="doc-compliance", parents=[common])
    sub = parser.add_subparsers(dest="command")

    v = sub.add_parser("validate", parents=[common], help="Validate a document's extracted text")
    v.add_argument("path", help="Path to the extracted text (UTF-8)")
    v.add_argument("--type", dest="document_type", required=True)
    v.add_argument("--target", dest="target_country", required=True)
    v.add_argument("--source", dest="source_country")
    v.add_argument("--cert", dest="certifications", action="append", default=[])
    v.add_argument("--issue-date")
    v.add_argument("--expiry-date")
    v.add_argument("--dpi", dest="scan_quality_dpi", type=int)
    v.add_argument("--paper-size")
    v.add_argument("--has-signature", dest="has_signature", action="store_true", default=None)
    v.add_argument("--no-signature", dest="has_signature", action="store_false")
    v.add_argument("--has-seal", dest="has_seal", action="store_true", default=None)
    v.add_argument("--no-seal", dest="has_seal", action="store_false")

    sub.add_parser("countries", parents=[common], help="List countries with curated requirements")
    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    settings = load_settings()
    init_logging(getattr(args, "debug", False) or settings.debug)

    try:
        catalog = RequirementsCatalog.from_path(getattr(args, "catalog", None) or settings.catalog_path)
        if args.command == "countries":
            print(json.dumps(sorted(catalog.country_codes())))
            return 0

        text = Path(args.path).read_text(encoding="utf-8")
        metadata = {
            "document_type": args.document_type,
            "target_country": args.target_country,
            "source_country": args.source_country,
            "certifications": args.certifications,
            "issue_date": args.issue_date,
            "expiry_date": args.expiry_date,
            "scan_quality_dpi": args.scan_quality_dpi,
            "paper_size": args.paper_size,
            "has_signature": args.has_signature,
            "has_seal": args.has_seal,
        }
        report = ComplianceEvaluator(catalog, settings=settings).validate_document(text, metadata)
    except (ConfigurationError, OSError) as exc:
        print(json.dumps({"error": str(exc)}))
        return 1

    print(json.dumps(report.model_dump(mode="json"), ensure_ascii=False))
    return 0 if report.is_compliant else 2


if __name__ == "__main__":
    sys.exit(main())
