"""Document compliance validation: jurisdiction catalog and evaluator."""
from .compliance import (
    ComplianceEvaluator,
    ConfigurationError,
    RequirementsCatalog,
)
from .core.schemas import (
    ComplianceReport,
    DocumentMetadata,
    JurisdictionRequirement,
    RequirementCheck,
    ValidationError,
    ValidationWarning,
)

__all__ = [
    "ComplianceEvaluator",
    "ComplianceReport",
    "ConfigurationError",
    "DocumentMetadata",
    "JurisdictionRequirement",
    "RequirementCheck",
    "RequirementsCatalog",
    "ValidationError",
    "ValidationWarning",
]
