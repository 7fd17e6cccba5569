from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from document_compliance_app.core.schemas import (
    SCHEMA_VERSION,
    ComplianceReport,
    JurisdictionRequirement,
)


class _DTOBase(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ValidateRequest(_DTOBase):
    """Public request model for ``/api/validate``.

    ``text`` is the extracted (or translated) document text; metadata
    fields mirror :class:`DocumentMetadata`. Optional fields are passed
    through untouched and parsed leniently by the evaluator.
    """

    text: str = ""
    document_type: str = Field(
        min_length=1, validation_alias=AliasChoices("document_type", "documentType")
    )
    target_country: str = Field(
        min_length=1, validation_alias=AliasChoices("target_country", "targetCountry")
    )
    source_country: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("source_country", "sourceCountry", "issueCountry"),
    )
    issue_date: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("issue_date", "issueDate")
    )
    expiry_date: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("expiry_date", "expiryDate")
    )
    certifications: List[str] = Field(default_factory=list)
    scan_quality_dpi: Optional[Any] = Field(
        default=None,
        validation_alias=AliasChoices("scan_quality_dpi", "scanQualityDpi", "scanQuality"),
    )
    paper_size: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("paper_size", "paperSize")
    )
    has_signature: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("has_signature", "hasSignature")
    )
    has_seal: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("has_seal", "hasSeal")
    )

    @field_validator("document_type", "target_country", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    def metadata(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"text"})


class ValidateResponse(BaseModel):
    schema_version: str = SCHEMA_VERSION
    report: ComplianceReport
    requirements: Optional[JurisdictionRequirement] = None


class CountrySummary(BaseModel):
    code: str
    name: Optional[str] = None
    apostille_required: bool
    translation_required: bool


class CountriesResponse(BaseModel):
    countries: List[CountrySummary]
