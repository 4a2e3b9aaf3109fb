"""
Drawings API routes.

Sanitizes drawings before persistence and pre-flights imported files.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from drawguard.api.deps import get_drawing_sanitizer
from drawguard.components.drawing import DrawingSanitizer, SanitizationError

router = APIRouter()


@router.post("/sanitize")
def sanitize_drawing(
    document: Any = Body(...),
    sanitizer: DrawingSanitizer = Depends(get_drawing_sanitizer),
) -> dict[str, Any]:
    """Return the sanitized drawing, or 400 without further detail."""
    try:
        return sanitizer.sanitize(document).to_dict()
    except SanitizationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.post("/validate-import")
def validate_import(
    document: Any = Body(...),
    sanitizer: DrawingSanitizer = Depends(get_drawing_sanitizer),
) -> dict[str, bool]:
    """Check an imported drawing file."""
    return {"valid": sanitizer.validate_import(document)}
