"""
Drawing component models and error taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# --- Errors ---


class DrawingError(Exception):
    """Base class for drawing rejections."""

    code = "drawing_error"


class StructuralError(DrawingError):
    """Document has the wrong shape (not an object, elements not a list, ...)."""

    code = "invalid_structure"


class LimitExceededError(DrawingError):
    """Document exceeds a resource ceiling."""

    code = "limit_exceeded"


class CountMismatchError(DrawingError):
    """Sanitized element count differs from the input count."""

    code = "element_count_mismatch"


class SanitizationError(DrawingError):
    """
    Opaque failure of the whole sanitization call.

    Raised whatever stage failed; the detail is only logged.
    """

    code = "sanitization_failed"

    def __init__(self, message: str = "Invalid or malicious drawing data detected") -> None:
        super().__init__(message)


# --- Sanitized Output ---


@dataclass(frozen=True)
class SanitizedDocument:
    """A fully validated and filtered drawing."""

    elements: list[dict[str, Any]]
    app_state: dict[str, Any]
    files: dict[str, Any] | None = None
    preview: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "elements": self.elements,
            "appState": self.app_state,
            "files": self.files,
            "preview": self.preview,
        }


# --- Validation Error ---


@dataclass(frozen=True)
class DrawingValidationError:
    """Drawing rejection as reported by component entry points."""

    code: str
    message: str
    path: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SanitizeDrawingInput:
    """Input for sanitizing a drawing before persistence."""

    document: Any


@dataclass(frozen=True)
class ValidateImportInput:
    """Input for checking an imported drawing file."""

    document: Any


# --- Output Models ---


@dataclass(frozen=True)
class SanitizeDrawingOutput:
    """Output for drawing sanitization."""

    document: SanitizedDocument | None
    errors: list[DrawingValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ValidateImportOutput:
    """Output for import validation. The rejection reason is only logged."""

    is_valid: bool
    success: bool = True
