"""
Schema component - structural contract for drawing elements and app state.

Invariants:
- I1: Every declared field is optional and nullable
- I2: Numeric ranges are finite and inclusive
- I3: Enumerated fields match their literal set exactly
- I4: Unknown fields pass through, string values filtered
- I5: All violations of one object are reported together
"""

from __future__ import annotations

from ._impl import validate_app_state, validate_element
from .models import (
    DEFAULT_SCHEMA_CONFIG,
    DocumentSchemaError,
    SchemaConfig,
    SchemaOutput,
    ValidateAppStateInput,
    ValidateElementInput,
)


def run_validate_element(
    inp: ValidateElementInput,
    *,
    config: SchemaConfig = DEFAULT_SCHEMA_CONFIG,
) -> SchemaOutput:
    """Validate and filter one drawing element."""
    try:
        value = validate_element(inp.element, config)
    except DocumentSchemaError as e:
        return SchemaOutput(value=None, errors=e.violations, success=False)
    return SchemaOutput(value=value)


def run_validate_app_state(
    inp: ValidateAppStateInput,
    *,
    config: SchemaConfig = DEFAULT_SCHEMA_CONFIG,
) -> SchemaOutput:
    """Validate and filter the app state."""
    try:
        value = validate_app_state(inp.app_state, config)
    except DocumentSchemaError as e:
        return SchemaOutput(value=None, errors=e.violations, success=False)
    return SchemaOutput(value=value)


def run(
    inp: ValidateElementInput | ValidateAppStateInput,
    *,
    config: SchemaConfig = DEFAULT_SCHEMA_CONFIG,
) -> SchemaOutput:
    """Main entry point for the schema component."""
    if isinstance(inp, ValidateElementInput):
        return run_validate_element(inp, config=config)
    elif isinstance(inp, ValidateAppStateInput):
        return run_validate_app_state(inp, config=config)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
