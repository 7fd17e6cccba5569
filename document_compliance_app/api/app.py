# document_compliance_app/api/app.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request

from document_compliance_app.compliance import (
    ComplianceEvaluator,
    ConfigurationError,
    RequirementsCatalog,
)
from document_compliance_app.config import Settings, load_settings
from document_compliance_app.core.schemas import SCHEMA_VERSION, JurisdictionRequirement
from document_compliance_app.utils.logging import init_logging

from .error_handlers import register_error_handlers
from .models import (
    CountriesResponse,
    CountrySummary,
    ValidateRequest,
    ValidateResponse,
)


log = logging.getLogger("document_compliance")

router = APIRouter()


def _evaluator(request: Request) -> ComplianceEvaluator:
    evaluator = getattr(request.app.state, "evaluator", None)
    if evaluator is None:
        raise ConfigurationError("evaluator not initialised")
    return evaluator


@router.get("/health")
async def health(request: Request) -> dict:
    evaluator = _evaluator(request)
    return {
        "status": "ok",
        "schema": SCHEMA_VERSION,
        "countries": len(evaluator.catalog),
    }


@router.post("/api/validate", response_model=ValidateResponse)
def api_validate(req: ValidateRequest, request: Request) -> ValidateResponse:
    evaluator = _evaluator(request)
    report = evaluator.validate_document(req.text, req.metadata())
    return ValidateResponse(
        report=report,
        requirements=evaluator.catalog.get(req.target_country),
    )


@router.get("/api/requirements", response_model=CountriesResponse)
def api_countries(request: Request) -> CountriesResponse:
    snapshot = _evaluator(request).catalog.snapshot()
    return CountriesResponse(
        countries=[
            CountrySummary(
                code=code,
                name=rec.country_name,
                apostille_required=rec.apostille_required,
                translation_required=rec.translation_required,
            )
            for code, rec in sorted(snapshot.items())
        ]
    )


@router.get("/api/requirements/{country}", response_model=JurisdictionRequirement)
def api_country(country: str, request: Request) -> JurisdictionRequirement:
    rec = _evaluator(request).catalog.get(country)
    if rec is None:
        raise HTTPException(status_code=404, detail="country requirements not found")
    return rec


@router.post("/api/requirements/reload")
def api_reload(request: Request) -> dict:
    settings: Settings = request.app.state.settings
    catalog = _evaluator(request).catalog
    catalog.load_path(settings.catalog_path, replace=True)
    log.info("catalog reloaded from %s", settings.catalog_path)
    return {"status": "ok", "countries": len(catalog)}


def create_app(
    catalog: Optional[RequirementsCatalog] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the application around one catalog/evaluator pair.

    Without an explicit ``catalog`` the one at ``settings.catalog_path`` is
    loaded up front, so a broken catalog fails at startup.
    """
    settings = settings or load_settings()
    init_logging(settings.debug)
    if catalog is None:
        catalog = RequirementsCatalog.from_path(settings.catalog_path)

    app = FastAPI(title="Document Compliance API", version="1.0")
    app.state.settings = settings
    app.state.evaluator = ComplianceEvaluator(catalog, settings=settings)
    register_error_handlers(app)
    app.include_router(router)
    return app

