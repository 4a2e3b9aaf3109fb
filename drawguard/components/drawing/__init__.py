"""
Drawing component - sanitization of untrusted drawing documents.
"""

from ._impl import (
    DEFAULT_CONFIG,
    MAX_ELEMENTS,
    DrawingConfig,
    DrawingSanitizer,
    build_config,
    check_import_structure,
    create_drawing_sanitizer,
    has_script_marker,
    is_image_payload,
    sanitize_drawing_data,
    sanitize_file_field,
    sanitize_files,
    validate_imported_drawing,
)
from .component import run, run_sanitize, run_validate_import
from .models import (
    CountMismatchError,
    DrawingError,
    DrawingValidationError,
    LimitExceededError,
    SanitizationError,
    SanitizedDocument,
    SanitizeDrawingInput,
    SanitizeDrawingOutput,
    StructuralError,
    ValidateImportInput,
    ValidateImportOutput,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_sanitize",
    "run_validate_import",
    # Input models
    "SanitizeDrawingInput",
    "ValidateImportInput",
    # Output models
    "SanitizeDrawingOutput",
    "SanitizedDocument",
    "ValidateImportOutput",
    "DrawingValidationError",
    # Errors
    "CountMismatchError",
    "DrawingError",
    "LimitExceededError",
    "SanitizationError",
    "StructuralError",
    # Ports
    "RulesPort",
    # Service
    "DEFAULT_CONFIG",
    "MAX_ELEMENTS",
    "DrawingConfig",
    "DrawingSanitizer",
    "build_config",
    "check_import_structure",
    "create_drawing_sanitizer",
    "has_script_marker",
    "is_image_payload",
    "sanitize_drawing_data",
    "sanitize_file_field",
    "sanitize_files",
    "validate_imported_drawing",
]
