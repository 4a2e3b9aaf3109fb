"""
Document schema validation.

Validates drawing elements and app state against the wire schema and
returns plain dicts with unknown fields preserved.

Key behaviors:
- Every violated constraint of one object is reported, not just the first
- Declared fields that were absent stay absent in the output
- Element text and link fields are filtered during validation
- Undeclared app state strings that filter down to nothing are rejected
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from drawguard.components.sanitize import sanitize_text

from .models import (
    DEFAULT_SCHEMA_CONFIG,
    AppState,
    DocumentSchemaError,
    DrawingElement,
    SchemaConfig,
    SchemaViolation,
)


def format_path(prefix: str, loc: tuple[int | str, ...]) -> str:
    """Build a dotted path such as elements[2].x from a pydantic location."""
    path = prefix
    for part in loc:
        if isinstance(part, int):
            path = f"{path}[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def violations_from(error: ValidationError, prefix: str) -> list[SchemaViolation]:
    """Convert a pydantic ValidationError into schema violations."""
    return [
        SchemaViolation(
            code=detail["type"],
            message=detail["msg"],
            path=format_path(prefix, tuple(detail["loc"])),
        )
        for detail in error.errors(include_url=False)
    ]


def _declared_keys(model: type[BaseModel]) -> set[str]:
    return {info.alias or name for name, info in model.model_fields.items()}


def _not_an_object(prefix: str) -> DocumentSchemaError:
    return DocumentSchemaError(
        [SchemaViolation(code="dict_type", message="Input should be an object", path=prefix)]
    )


def _validate(
    model: type[BaseModel],
    data: Any,
    prefix: str,
    config: SchemaConfig,
    extra_violations: list[SchemaViolation],
) -> dict[str, Any]:
    try:
        validated = model.model_validate(data, context={"config": config})
    except ValidationError as e:
        raise DocumentSchemaError(violations_from(e, prefix) + extra_violations) from e

    if extra_violations:
        raise DocumentSchemaError(extra_violations)

    return validated.model_dump(by_alias=True, exclude_unset=True)


# --- Elements ---


def validate_element(
    data: Any,
    config: SchemaConfig = DEFAULT_SCHEMA_CONFIG,
    path: str = "element",
) -> dict[str, Any]:
    """
    Validate and filter one drawing element.

    Raises:
        DocumentSchemaError: listing every violated constraint.
    """
    if not isinstance(data, dict):
        raise _not_an_object(path)
    return _validate(DrawingElement, data, path, config, [])


def validate_elements(
    elements: list[Any],
    config: SchemaConfig = DEFAULT_SCHEMA_CONFIG,
) -> list[dict[str, Any]]:
    """
    Validate every element, preserving order and length.

    Violations of all elements are collected into one error.
    """
    validated: list[dict[str, Any]] = []
    violations: list[SchemaViolation] = []

    for index, element in enumerate(elements):
        try:
            validated.append(validate_element(element, config, f"elements[{index}]"))
        except DocumentSchemaError as e:
            violations.extend(e.violations)

    if violations:
        raise DocumentSchemaError(violations)
    return validated


# --- App State ---


def check_state_extras(
    data: dict[str, Any],
    config: SchemaConfig = DEFAULT_SCHEMA_CONFIG,
    path: str = "appState",
) -> list[SchemaViolation]:
    """
    Check undeclared app state strings.

    A non-empty string that filters down to an empty one is markup only,
    which is rejected rather than silently blanked.
    """
    declared = _declared_keys(AppState)
    violations: list[SchemaViolation] = []

    for key, value in data.items():
        if key in declared or not isinstance(value, str) or not value:
            continue
        if not sanitize_text(value, config.text_max, config.sanitizer.text):
            violations.append(
                SchemaViolation(
                    code="unsafe_text",
                    message="Value contains no safe text",
                    path=f"{path}.{key}",
                )
            )

    return violations


def validate_app_state(
    data: Any,
    config: SchemaConfig = DEFAULT_SCHEMA_CONFIG,
    path: str = "appState",
) -> dict[str, Any]:
    """
    Validate and filter the app state.

    Raises:
        DocumentSchemaError: listing every violated constraint.
    """
    if not isinstance(data, dict):
        raise _not_an_object(path)
    return _validate(AppState, data, path, config, check_state_extras(data, config, path))
