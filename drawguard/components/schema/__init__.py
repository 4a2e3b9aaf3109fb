"""
Schema component - structural contract for drawing elements and app state.
"""

from ._impl import (
    check_state_extras,
    format_path,
    validate_app_state,
    validate_element,
    validate_elements,
    violations_from,
)
from .component import run, run_validate_app_state, run_validate_element
from .models import (
    DEFAULT_SCHEMA_CONFIG,
    ELEMENT_TEXT_MAX,
    SCROLL_LIMIT,
    STATE_TEXT_MAX,
    AppState,
    DocumentSchemaError,
    DrawingElement,
    SchemaConfig,
    SchemaOutput,
    SchemaViolation,
    ValidateAppStateInput,
    ValidateElementInput,
)

__all__ = [
    # Entry points
    "run",
    "run_validate_app_state",
    "run_validate_element",
    # Models
    "AppState",
    "DrawingElement",
    "SchemaConfig",
    "SchemaOutput",
    "SchemaViolation",
    "ValidateAppStateInput",
    "ValidateElementInput",
    "DocumentSchemaError",
    # Validation
    "check_state_extras",
    "format_path",
    "validate_app_state",
    "validate_element",
    "validate_elements",
    "violations_from",
    # Limits
    "DEFAULT_SCHEMA_CONFIG",
    "ELEMENT_TEXT_MAX",
    "SCROLL_LIMIT",
    "STATE_TEXT_MAX",
]
