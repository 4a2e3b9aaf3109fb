from pydantic import BaseModel, ConfigDict, Field, field_validator

IMAGE_PAYLOAD_PREFIX = "data:image/"


class LimitsRules(BaseModel):
    max_elements: int = Field(default=10_000, ge=1, le=10_000)
    element_text_max: int = Field(default=5000, ge=1, le=5000)
    text_max: int = Field(default=1000, ge=1, le=1000)


class FilterRules(BaseModel):
    allowed_tags: list[str]
    allowed_attrs: list[str] = []
    forbidden_tags: list[str] = []
    forbidden_attrs: list[str] = []


class UrlRules(BaseModel):
    blocked_schemes: list[str]
    allowed_prefixes: list[str]


class FilesRules(BaseModel):
    payload_field: str = "dataURL"
    payload_prefix: str = "data:image/"
    payload_markers: list[str] = ["<script", "javascript:"]

    @field_validator("payload_prefix")
    @classmethod
    def prefix_is_image(cls, value: str) -> str:
        # Only image data URLs skip text normalization
        if not value.startswith(IMAGE_PAYLOAD_PREFIX):
            raise ValueError(f"payload_prefix must start with {IMAGE_PAYLOAD_PREFIX!r}")
        return value


class Rules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    limits: LimitsRules = LimitsRules()
    html: FilterRules
    text: FilterRules
    svg: FilterRules
    urls: UrlRules
    files: FilesRules = FilesRules()
