"""
Drawing component - sanitization of untrusted drawing documents.

Validates elements and app state, filters the SVG preview and attached
file metadata, and pre-flights imported drawing files.

Invariants:
- I1: Output element count equals input element count
- I2: No partial result on failure
- I3: Caller input is never mutated
- I4: Imports above the element ceiling are rejected before sanitizing
- I5: Rejection reasons are logged, never returned
"""

from __future__ import annotations

from ._impl import build_config, sanitize_drawing_data, validate_imported_drawing
from .models import (
    DrawingValidationError,
    SanitizationError,
    SanitizeDrawingInput,
    SanitizeDrawingOutput,
    ValidateImportInput,
    ValidateImportOutput,
)
from .ports import RulesPort

# --- Component Entry Points ---


def run_sanitize(
    inp: SanitizeDrawingInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeDrawingOutput:
    """
    Sanitize a drawing before persistence.

    Args:
        inp: Input containing the drawing document.
        rules: Optional rules port for configuration.

    Returns:
        SanitizeDrawingOutput with the sanitized document, or a single
        opaque error.
    """
    config = build_config(rules)
    try:
        document = sanitize_drawing_data(inp.document, config)
    except SanitizationError as e:
        return SanitizeDrawingOutput(
            document=None,
            errors=[DrawingValidationError(code=e.code, message=str(e))],
            success=False,
        )

    return SanitizeDrawingOutput(document=document)


def run_validate_import(
    inp: ValidateImportInput,
    *,
    rules: RulesPort | None = None,
) -> ValidateImportOutput:
    """Check an imported drawing file."""
    config = build_config(rules)
    return ValidateImportOutput(is_valid=validate_imported_drawing(inp.document, config))


def run(
    inp: SanitizeDrawingInput | ValidateImportInput,
    *,
    rules: RulesPort | None = None,
) -> SanitizeDrawingOutput | ValidateImportOutput:
    """
    Main entry point for the drawing component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, SanitizeDrawingInput):
        return run_sanitize(inp, rules=rules)
    elif isinstance(inp, ValidateImportInput):
        return run_validate_import(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
