# document_compliance_app/compliance/__init__.py
"""Requirements catalog, check pipeline and evaluator."""
from .catalog import RequirementsCatalog
from .errors import ConfigurationError
from .evaluator import ComplianceEvaluator

__all__ = ["ComplianceEvaluator", "ConfigurationError", "RequirementsCatalog"]
