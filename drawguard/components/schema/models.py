"""
Schema component models.

DrawingElement and AppState mirror the drawing wire format (camelCase keys
through aliases). Every declared field is optional and nullable; undeclared
fields are kept as extras.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainValidator,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from drawguard.components.sanitize import DEFAULT_CONFIG as DEFAULT_SANITIZER_CONFIG
from drawguard.components.sanitize import SanitizerConfig, sanitize_text, sanitize_url

# --- Limits ---

ELEMENT_TEXT_MAX = 5000
STATE_TEXT_MAX = 1000
SCROLL_LIMIT = 10_000_000


@dataclass(frozen=True)
class SchemaConfig:
    """Filters and bounds applied while validating."""

    sanitizer: SanitizerConfig = field(default_factory=lambda: DEFAULT_SANITIZER_CONFIG)
    element_text_max: int = ELEMENT_TEXT_MAX
    text_max: int = STATE_TEXT_MAX


DEFAULT_SCHEMA_CONFIG = SchemaConfig()


def config_from(info: ValidationInfo) -> SchemaConfig:
    """Schema config passed through the validation context, or the default."""
    context = info.context or {}
    config = context.get("config")
    return config if isinstance(config, SchemaConfig) else DEFAULT_SCHEMA_CONFIG


# --- Validation Errors ---


@dataclass(frozen=True)
class SchemaViolation:
    """One violated constraint."""

    code: str
    message: str
    path: str


class DocumentSchemaError(ValueError):
    """All constraint violations found in one object."""

    def __init__(self, violations: list[SchemaViolation]) -> None:
        self.violations = violations
        summary = "; ".join(f"{v.path}: {v.message}" for v in violations)
        super().__init__(f"{len(violations)} schema violation(s): {summary}")


# --- Numeric Types ---


def _finite_number(value: Any) -> int | float:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PydanticCustomError("number_type", "Input should be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise PydanticCustomError("finite_number", "Input should be a finite number")
    return value


def _between(low: float, high: float) -> Callable[[int | float], int | float]:
    def check(value: int | float) -> int | float:
        if value < low or value > high:
            raise PydanticCustomError(
                "out_of_range",
                "Input should be between {low} and {high}",
                {"low": low, "high": high},
            )
        return value

    return check


# Numbers keep their JSON type: ints stay ints, floats stay floats
Number = Annotated[Any, PlainValidator(_finite_number)]


def bounded(low: float, high: float) -> Any:
    """A finite number within [low, high]."""
    return Annotated[Number, AfterValidator(_between(low, high))]


GridSize = bounded(0, 1000)
GridStep = bounded(1, 1000)
StrokeWidth = bounded(0, 50)
FontSize = bounded(1, 500)
FontFamily = bounded(1, 10)
Scroll = bounded(-SCROLL_LIMIT, SCROLL_LIMIT)
ZoomValue = bounded(0.01, 100)
RoundnessValue = bounded(0, 1)

FillStyle = Literal["solid", "hachure", "cross-hatch", "dots"]
StrokeStyle = Literal["solid", "dashed", "dotted"]
TextAlign = Literal["left", "center", "right"]
VerticalAlign = Literal["top", "middle", "bottom"]
RoundnessType = Literal["round", "sharp"]


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, strict=True)


# --- Drawing Element ---


class DrawingElement(_WireModel):
    """
    One visual object on the canvas.

    The type vocabulary is open so new shape kinds validate. Free text is
    normalized, links are sanitized, and undeclared string fields are
    normalized with the element text bound.
    """

    model_config = ConfigDict(alias_generator=to_camel, strict=True, extra="allow")

    id: Annotated[str, Field(min_length=1, max_length=200)] | None = None
    type: str | None = None
    x: Number | None = None
    y: Number | None = None
    width: Number | None = None
    height: Number | None = None
    angle: Number | None = None
    stroke_color: str | None = None
    background_color: str | None = None
    fill_style: str | None = None
    stroke_width: Number | None = None
    stroke_style: str | None = None
    roundness: Any = None
    bound_elements: list[Any] | None = None
    group_ids: list[str] | None = None
    frame_id: str | None = None
    seed: Number | None = None
    version: Number | None = None
    version_nonce: Number | None = None
    is_deleted: bool | None = None
    opacity: Number | None = None
    link: str | None = None
    locked: bool | None = None
    text: str | None = None
    font_size: Number | None = None
    font_family: Number | None = None
    text_align: str | None = None
    vertical_align: str | None = None
    custom_data: dict[str, Any] | None = None

    @field_validator("text")
    @classmethod
    def _normalize_text(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return value
        config = config_from(info)
        return sanitize_text(value, config.element_text_max, config.sanitizer.text)

    @field_validator("link")
    @classmethod
    def _sanitize_link(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return value
        return sanitize_url(value, config_from(info).sanitizer.urls)

    @model_validator(mode="after")
    def _normalize_extras(self, info: ValidationInfo) -> DrawingElement:
        config = config_from(info)
        extras = self.__pydantic_extra__ or {}
        for key, value in extras.items():
            if isinstance(value, str):
                extras[key] = sanitize_text(value, config.element_text_max, config.sanitizer.text)
        return self


# --- Application State ---


class Roundness(_WireModel):
    type: RoundnessType
    value: RoundnessValue


class Zoom(_WireModel):
    value: ZoomValue


class ActiveEmbeddable(_WireModel):
    element_id: str
    state: str


class ActiveTool(_WireModel):
    type: str
    custom_type: str | None = None


class AppState(_WireModel):
    """
    View and tool configuration of one drawing.

    Enumerated fields must match their literal set exactly. Undeclared
    fields are accepted; string values among them are normalized.
    """

    model_config = ConfigDict(alias_generator=to_camel, strict=True, extra="allow")

    grid_size: GridSize | None = None
    grid_step: GridStep | None = None
    view_background_color: str | None = None
    current_item_stroke_color: str | None = None
    current_item_background_color: str | None = None
    current_item_fill_style: FillStyle | None = None
    current_item_stroke_width: StrokeWidth | None = None
    current_item_stroke_style: StrokeStyle | None = None
    current_item_roundness: Roundness | None = None
    current_item_font_size: FontSize | None = None
    current_item_font_family: FontFamily | None = None
    current_item_text_align: TextAlign | None = None
    current_item_vertical_align: VerticalAlign | None = None
    scroll_x: Scroll | None = None
    scroll_y: Scroll | None = None
    zoom: Zoom | None = None
    selection: list[str] | None = None
    selected_element_ids: dict[str, bool] | None = None
    selected_group_ids: dict[str, bool] | None = None
    active_embeddable: ActiveEmbeddable | None = None
    active_tool: ActiveTool | None = None
    cursor_x: Number | None = None
    cursor_y: Number | None = None
    collaborators: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _normalize_extras(self, info: ValidationInfo) -> AppState:
        config = config_from(info)
        extras = self.__pydantic_extra__ or {}
        for key, value in extras.items():
            if isinstance(value, str):
                extras[key] = sanitize_text(value, config.text_max, config.sanitizer.text)
        return self


# --- Component Input/Output ---


@dataclass(frozen=True)
class ValidateElementInput:
    """Input for validating one drawing element."""

    element: Any


@dataclass(frozen=True)
class ValidateAppStateInput:
    """Input for validating the app state."""

    app_state: Any


@dataclass(frozen=True)
class SchemaOutput:
    """Validated object, or the violations that prevented it."""

    value: dict[str, Any] | None
    errors: list[SchemaViolation] = field(default_factory=list)
    success: bool = True
