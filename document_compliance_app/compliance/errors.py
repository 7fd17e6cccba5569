"""Exceptions raised by the compliance core."""


class ConfigurationError(Exception):
    """Raised when the catalog is unusable or a caller omits required metadata.

    Document-level failures are never raised; they are reported as
    ``ValidationError`` entries inside the ``ComplianceReport``.
    """

    pass
