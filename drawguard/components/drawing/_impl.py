"""
Drawing sanitizer - validates and filters whole drawing documents.

Handles persistence-time sanitization and pre-flight checks of imported
drawing files.

Key behaviors:
- Elements and app state go through the document schema
- The SVG preview goes through the vector-markup filter
- Attached file metadata is normalized; image payloads are kept verbatim
  unless they carry a script marker, in which case they are zeroed
- The files map is deep-copied, caller input is never mutated
- Any stage failure aborts the whole call with one opaque error
- Imports are bounded to a maximum element count before sanitizing
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from drawguard.components.sanitize import sanitize_svg, sanitize_text
from drawguard.components.sanitize.component import build_config as build_sanitizer_config
from drawguard.components.schema import (
    DEFAULT_SCHEMA_CONFIG,
    DocumentSchemaError,
    SchemaConfig,
    validate_app_state,
    validate_elements,
)

from .models import (
    CountMismatchError,
    DrawingError,
    LimitExceededError,
    SanitizationError,
    SanitizedDocument,
    StructuralError,
)
from .ports import RulesPort

logger = logging.getLogger(__name__)

MAX_ELEMENTS = 10_000

# --- Configuration ---


@dataclass(frozen=True)
class DrawingConfig:
    """Drawing sanitization configuration."""

    schema: SchemaConfig = field(default_factory=lambda: DEFAULT_SCHEMA_CONFIG)
    max_elements: int = MAX_ELEMENTS
    payload_field: str = "dataURL"
    payload_prefix: str = "data:image/"
    payload_markers: tuple[str, ...] = ("<script", "javascript:")


DEFAULT_CONFIG = DrawingConfig()


def build_config(rules: RulesPort | None) -> DrawingConfig:
    """Build drawing config from rules port."""
    if rules is None:
        return DEFAULT_CONFIG

    limits = rules.get_limits()
    files = rules.get_files_rules()
    schema = SchemaConfig(sanitizer=build_sanitizer_config(rules))
    if limits is not None:
        schema = SchemaConfig(
            sanitizer=schema.sanitizer,
            element_text_max=limits.element_text_max,
            text_max=limits.text_max,
        )

    markers = list(DEFAULT_CONFIG.payload_markers)
    if files is not None:
        markers.extend(m for m in files.payload_markers if m not in markers)

    return DrawingConfig(
        schema=schema,
        max_elements=limits.max_elements if limits else MAX_ELEMENTS,
        payload_field=files.payload_field if files else DEFAULT_CONFIG.payload_field,
        payload_prefix=files.payload_prefix if files else DEFAULT_CONFIG.payload_prefix,
        payload_markers=tuple(markers),
    )


# --- Attached Files ---


def is_image_payload(key: str, value: Any, config: DrawingConfig = DEFAULT_CONFIG) -> bool:
    """Check whether a file field holds an image data URL."""
    return (
        key == config.payload_field
        and isinstance(value, str)
        and value.startswith(config.payload_prefix)
    )


def has_script_marker(value: str, config: DrawingConfig = DEFAULT_CONFIG) -> bool:
    """Check a payload for script markers (case-insensitive)."""
    lowered = value.lower()
    return any(marker.lower() in lowered for marker in config.payload_markers)


def sanitize_file_field(
    key: str,
    value: Any,
    config: DrawingConfig = DEFAULT_CONFIG,
) -> Any:
    """
    Sanitize one field of an attached file.

    Image payloads are exempt from the text bound; everything else that is
    a string is normalized. Non-string values are returned unchanged.
    """
    if not isinstance(value, str):
        return value

    if is_image_payload(key, value, config):
        if has_script_marker(value, config):
            return ""
        return value

    return sanitize_text(value, config.schema.text_max, config.schema.sanitizer.text)


def sanitize_files(
    files: Mapping[str, Any],
    config: DrawingConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    """
    Sanitize the attached files map.

    Works on a deep copy; the caller's map is left untouched.

    Raises:
        StructuralError: If a file entry is not an object.
    """
    sanitized: dict[str, Any] = copy.deepcopy(dict(files))

    for file_id, entry in sanitized.items():
        if not isinstance(entry, dict):
            raise StructuralError(f"File entry '{file_id}' is not an object")

        for key, value in entry.items():
            cleaned = sanitize_file_field(key, value, config)
            if cleaned == "" and value and is_image_payload(key, value, config):
                logger.warning("Zeroed %s of file %s: script marker in payload", key, file_id)
            entry[key] = cleaned

    return sanitized


# --- Document Sanitization ---


def _sanitize_stages(data: Any, config: DrawingConfig) -> SanitizedDocument:
    if not isinstance(data, Mapping):
        raise StructuralError("Drawing is not an object")

    elements = data.get("elements")
    if not isinstance(elements, list):
        raise StructuralError("elements is not a list")

    sanitized_elements = validate_elements(elements, config.schema)
    sanitized_state = validate_app_state(data.get("appState"), config.schema)

    preview = data.get("preview")
    if preview is not None:
        if not isinstance(preview, str):
            raise StructuralError("preview is not a string")
        preview = sanitize_svg(preview, config.schema.sanitizer.svg)

    files = data.get("files")
    if files is not None:
        if not isinstance(files, Mapping):
            raise StructuralError("files is not an object")
        files = sanitize_files(files, config)

    return SanitizedDocument(
        elements=sanitized_elements,
        app_state=sanitized_state,
        files=files,
        preview=preview,
    )


def sanitize_drawing_data(
    data: Any,
    config: DrawingConfig = DEFAULT_CONFIG,
) -> SanitizedDocument:
    """
    Sanitize a drawing before persistence.

    Either the whole document is returned or nothing is.

    Raises:
        SanitizationError: If any stage fails. The cause is logged only.
    """
    try:
        return _sanitize_stages(data, config)
    except DocumentSchemaError as e:
        logger.warning("Drawing failed schema validation: %s", e)
    except DrawingError as e:
        logger.warning("Drawing rejected (%s): %s", e.code, e)
    except Exception:
        logger.exception("Unexpected failure while sanitizing drawing")
    raise SanitizationError()


# --- Import Validation ---


def check_import_structure(data: Any, config: DrawingConfig = DEFAULT_CONFIG) -> None:
    """
    Pre-flight shape and size checks for an imported drawing.

    Raises:
        StructuralError: If the document shape is wrong.
        LimitExceededError: If there are too many elements.
    """
    if not isinstance(data, Mapping):
        raise StructuralError("Drawing is not an object")
    if not isinstance(data.get("elements"), list):
        raise StructuralError("elements is not a list")
    if not isinstance(data.get("appState"), Mapping):
        raise StructuralError("appState is not an object")

    count = len(data["elements"])
    if count > config.max_elements:
        raise LimitExceededError(
            f"Drawing contains too many elements ({count}, max {config.max_elements:,})"
        )


def validate_imported_drawing(data: Any, config: DrawingConfig = DEFAULT_CONFIG) -> bool:
    """
    Validate an imported drawing file.

    Never raises; every rejection is logged and reported as False.
    """
    try:
        check_import_structure(data, config)
        sanitized = sanitize_drawing_data(data, config)
        if len(sanitized.elements) != len(data["elements"]):
            raise CountMismatchError("Element count mismatch after sanitization")
        return True
    except DrawingError as e:
        logger.warning("Imported drawing rejected (%s): %s", e.code, e)
        return False
    except Exception:
        logger.exception("Imported drawing validation failed")
        return False


# --- Service Class ---


class DrawingSanitizer:
    """
    Drawing sanitizer service.

    Provides sanitization and import validation for drawing documents.
    """

    def __init__(self, config: DrawingConfig | None = None) -> None:
        """Initialize with optional configuration."""
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> DrawingConfig:
        """Get configuration."""
        return self._config

    def sanitize(self, data: Any) -> SanitizedDocument:
        """Sanitize a whole drawing."""
        return sanitize_drawing_data(data, self._config)

    def sanitize_files(self, files: Mapping[str, Any]) -> dict[str, Any]:
        """Sanitize an attached files map."""
        return sanitize_files(files, self._config)

    def validate_import(self, data: Any) -> bool:
        """Check an imported drawing."""
        return validate_imported_drawing(data, self._config)


# --- Factory ---


def create_drawing_sanitizer(rules: RulesPort | None = None) -> DrawingSanitizer:
    """Create a DrawingSanitizer configured from an optional rules port."""
    return DrawingSanitizer(config=build_config(rules))
