"""Translation validation.

Python 3.13+.
"""

from .message import CatalogValidationReport, validate_catalog, validate_translation

__all__ = ["CatalogValidationReport", "validate_catalog", "validate_translation"]
