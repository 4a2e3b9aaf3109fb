"""
Tests for the drawing sanitizer and import validator.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import replace
from typing import Any

import pytest

from drawguard.components.drawing import (
    DEFAULT_CONFIG,
    DrawingConfig,
    DrawingSanitizer,
    LimitExceededError,
    SanitizationError,
    StructuralError,
    _impl,
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
from drawguard.rules.models import Rules
from drawguard.rules.provider import StaticRulesProvider

# --- Attached Files ---


class TestFilePayloads:
    """Test image payload detection."""

    def test_image_payload_detected(self, image_payload: str) -> None:
        """Only the payload field with an image data URL qualifies."""
        assert is_image_payload("dataURL", image_payload)
        assert not is_image_payload("id", image_payload)
        assert not is_image_payload("dataURL", "data:text/html,hi")
        assert not is_image_payload("dataURL", None)

    @pytest.mark.parametrize("marker", ["<script", "<SCRIPT", "javascript:", "JavaScript:"])
    def test_script_marker_detected(self, marker: str) -> None:
        """Markers are matched case-insensitively."""
        assert has_script_marker(f"data:image/png;base64,AAAA{marker}alert(1)")

    def test_clean_payload_has_no_marker(self, image_payload: str) -> None:
        """Base64 payloads carry no marker."""
        assert not has_script_marker(image_payload)


class TestSanitizeFileField:
    """Test per-field file sanitization."""

    def test_payload_kept_verbatim(self, image_payload: str) -> None:
        """Image payloads skip the text bound."""
        assert sanitize_file_field("dataURL", image_payload) == image_payload
        assert len(image_payload) > 1000

    def test_payload_with_marker_zeroed(self) -> None:
        """Payloads with a script marker are blanked."""
        assert sanitize_file_field("dataURL", "data:image/svg+xml,<script>alert(1)</script>") == ""

    def test_non_image_data_url_normalized(self) -> None:
        """A non-image data URL is treated as text."""
        assert sanitize_file_field("dataURL", "data:text/html,<script>x</script>") == "data:text/html,"

    def test_metadata_normalized(self) -> None:
        """Other string fields go through the text normalizer."""
        assert sanitize_file_field("mimeType", "image/png\x00<script>x</script>") == "image/png"

    def test_metadata_bounded(self) -> None:
        """Other string fields are bounded to the app state text limit."""
        assert len(sanitize_file_field("name", "n" * 5000)) == 1000

    @pytest.mark.parametrize("value", [1700000000000, None, True, {"a": 1}])
    def test_non_string_unchanged(self, value: Any) -> None:
        """Non-string values are kept as they are."""
        assert sanitize_file_field("created", value) == value


class TestSanitizeFiles:
    """Test attached files map sanitization."""

    def test_clean_files_unchanged(self, drawing: dict[str, Any]) -> None:
        """A clean files map comes back equal."""
        assert sanitize_files(drawing["files"]) == drawing["files"]

    def test_input_not_mutated(self) -> None:
        """The caller's map is deep-copied."""
        files = {"f": {"dataURL": "data:image/png,<script>", "name": "<b>x</b><script>y</script>"}}
        before = copy.deepcopy(files)

        result = sanitize_files(files)

        assert files == before
        assert result == {"f": {"dataURL": "", "name": "<b>x</b>"}}

    def test_zeroed_payload_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Zeroing a payload leaves a warning."""
        with caplog.at_level(logging.WARNING):
            sanitize_files({"f": {"dataURL": "data:image/png,javascript:alert(1)"}})

        assert "script marker" in caplog.text

    @pytest.mark.parametrize("entry", ["data:image/png;base64,AAAA", None, 1, ["dataURL"]])
    def test_non_object_entry_rejected(self, entry: Any) -> None:
        """Every file entry must be an object, null included."""
        with pytest.raises(StructuralError):
            sanitize_files({"f": entry})

    def test_empty_map(self) -> None:
        """An empty map is valid."""
        assert sanitize_files({}) == {}


# --- Document Sanitization ---


class TestSanitizeDrawingData:
    """Test whole-document sanitization."""

    def test_clean_drawing_unchanged(self, drawing: dict[str, Any]) -> None:
        """A clean drawing comes back equal."""
        result = sanitize_drawing_data(drawing)

        assert result.to_dict() == drawing

    def test_element_count_preserved(self, drawing: dict[str, Any]) -> None:
        """The output has as many elements as the input."""
        result = sanitize_drawing_data(drawing)

        assert len(result.elements) == len(drawing["elements"])

    def test_minimal_drawing(self) -> None:
        """Only elements and appState are required."""
        result = sanitize_drawing_data({"elements": [], "appState": {}})

        assert result.to_dict() == {"elements": [], "appState": {}, "files": None, "preview": None}

    def test_text_filtered(self, drawing: dict[str, Any]) -> None:
        """Element text is filtered."""
        drawing["elements"][1]["text"] = "<script>alert(1)</script>Hi"

        result = sanitize_drawing_data(drawing)

        assert result.elements[1]["text"] == "Hi"

    def test_link_filtered(self, drawing: dict[str, Any]) -> None:
        """Element links are filtered."""
        drawing["elements"][1]["link"] = "javascript:alert(1)"

        assert sanitize_drawing_data(drawing).elements[1]["link"] == ""

    def test_preview_filtered(self, drawing: dict[str, Any]) -> None:
        """The SVG preview goes through the vector-markup filter."""
        drawing["preview"] = '<svg onload="alert(1)"><image href="x"/><rect x="1"/></svg>'

        assert sanitize_drawing_data(drawing).preview == '<svg><rect x="1"></rect></svg>'

    def test_files_filtered(self, drawing: dict[str, Any]) -> None:
        """Attached files are filtered."""
        drawing["files"]["file-1"]["dataURL"] = "data:image/png;base64,AAAA<script>"

        assert sanitize_drawing_data(drawing).files == {
            "file-1": {"id": "file-1", "mimeType": "image/png", "dataURL": "", "created": 1700000000000}
        }

    def test_input_not_mutated(self, drawing: dict[str, Any]) -> None:
        """The caller's document is left untouched."""
        drawing["files"]["file-1"]["dataURL"] = "data:image/png,<script>"
        drawing["elements"][1]["text"] = "<script>x</script>"
        before = copy.deepcopy(drawing)

        sanitize_drawing_data(drawing)

        assert drawing == before

    @pytest.mark.parametrize(
        "document",
        [
            None,
            [],
            "drawing",
            {"appState": {}},
            {"elements": {}, "appState": {}},
            {"elements": [], "appState": None},
            {"elements": [], "appState": {}, "preview": 42},
            {"elements": [], "appState": {}, "files": []},
            {"elements": [], "appState": {}, "files": {"f": "x"}},
            {"elements": [], "appState": {}, "files": {"f": None}},
            {"elements": [{"x": "1"}], "appState": {}},
            {"elements": [], "appState": {"currentItemFillStyle": "glitter"}},
        ],
    )
    def test_rejections_are_opaque(self, document: Any) -> None:
        """Every failure surfaces as the same error."""
        with pytest.raises(SanitizationError) as exc_info:
            sanitize_drawing_data(document)

        assert str(exc_info.value) == "Invalid or malicious drawing data detected"
        assert exc_info.value.code == "sanitization_failed"

    def test_cause_not_exposed(self) -> None:
        """The underlying failure is not chained."""
        with pytest.raises(SanitizationError) as exc_info:
            sanitize_drawing_data({"elements": [{"x": "1"}], "appState": {}})

        assert exc_info.value.__cause__ is None
        assert exc_info.value.__context__ is None

    def test_cause_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """The underlying failure is logged."""
        with caplog.at_level(logging.WARNING):
            with pytest.raises(SanitizationError):
                sanitize_drawing_data({"elements": [{"x": "1"}], "appState": {}})

        assert "elements[0].x" in caplog.text


# --- Import Validation ---


class TestCheckImportStructure:
    """Test import pre-flight checks."""

    def test_valid_structure(self, drawing: dict[str, Any]) -> None:
        """A well-formed drawing passes."""
        check_import_structure(drawing)

    @pytest.mark.parametrize(
        "document",
        [None, [], {"appState": {}}, {"elements": "x", "appState": {}}, {"elements": []}],
    )
    def test_bad_structure(self, document: Any) -> None:
        """Wrong shapes raise StructuralError."""
        with pytest.raises(StructuralError):
            check_import_structure(document)

    def test_element_ceiling(self) -> None:
        """More than 10,000 elements are rejected."""
        with pytest.raises(LimitExceededError):
            check_import_structure({"elements": [{}] * 10_001, "appState": {}})

    def test_element_ceiling_inclusive(self) -> None:
        """Exactly 10,000 elements are allowed."""
        check_import_structure({"elements": [{}] * 10_000, "appState": {}})


class TestValidateImportedDrawing:
    """Test import validation."""

    def test_valid_drawing(self, drawing: dict[str, Any]) -> None:
        """A well-formed drawing is accepted."""
        assert validate_imported_drawing(drawing) is True

    def test_filterable_content_accepted(self, drawing: dict[str, Any]) -> None:
        """Content that is only filtered, not rejected, still imports."""
        drawing["elements"][1]["text"] = "<script>x</script>Hello"

        assert validate_imported_drawing(drawing) is True

    def test_too_many_elements(self) -> None:
        """The element ceiling is enforced before sanitizing."""
        assert validate_imported_drawing({"elements": [{}] * 10_001, "appState": {}}) is False

    def test_schema_violation(self) -> None:
        """Schema violations make the import invalid."""
        assert validate_imported_drawing({"elements": [], "appState": {"zoom": {"value": 0}}}) is False

    @pytest.mark.parametrize("document", [None, 1, "x", [], {"elements": []}])
    def test_never_raises(self, document: Any) -> None:
        """Bad input returns False instead of raising."""
        assert validate_imported_drawing(document) is False

    def test_count_mismatch_rejected(
        self,
        drawing: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """A sanitized result with fewer elements than the input is rejected."""
        sanitize = _impl.sanitize_drawing_data

        def drop_last(data: Any, config: DrawingConfig = DEFAULT_CONFIG) -> Any:
            result = sanitize(data, config)
            return replace(result, elements=result.elements[:-1])

        monkeypatch.setattr(_impl, "sanitize_drawing_data", drop_last)

        with caplog.at_level(logging.WARNING):
            assert validate_imported_drawing(drawing) is False

        assert "element_count_mismatch" in caplog.text

    def test_rejection_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """The rejection reason is logged."""
        with caplog.at_level(logging.WARNING):
            validate_imported_drawing({"elements": [{}] * 10_001, "appState": {}})

        assert "too many elements" in caplog.text


# --- Configuration ---


class TestBuildConfig:
    """Test drawing configuration from rules."""

    def test_no_rules_gives_default(self) -> None:
        """Without rules the defaults apply."""
        assert build_config(None) is DEFAULT_CONFIG

    def test_shipped_rules(self, rules: Rules) -> None:
        """rules.yaml restates the defaults."""
        config = build_config(StaticRulesProvider(rules))

        assert config.max_elements == 10_000
        assert config.schema.element_text_max == 5000
        assert config.schema.text_max == 1000
        assert config.payload_markers == DEFAULT_CONFIG.payload_markers

    def test_lower_ceiling(self, rules: Rules) -> None:
        """A lower element ceiling is honored."""
        narrowed = rules.model_copy(update={"limits": rules.limits.model_copy(update={"max_elements": 2})})
        sanitizer = create_drawing_sanitizer(StaticRulesProvider(narrowed))

        assert sanitizer.validate_import({"elements": [{}, {}, {}], "appState": {}}) is False
        assert sanitizer.validate_import({"elements": [{}, {}], "appState": {}}) is True

    def test_extra_markers_added(self, rules: Rules) -> None:
        """Configured markers extend the built-in ones."""
        files = rules.files.model_copy(update={"payload_markers": ["<iframe"]})
        config = build_config(StaticRulesProvider(rules.model_copy(update={"files": files})))

        assert config.payload_markers == ("<script", "javascript:", "<iframe")


# --- Service Class ---


class TestDrawingSanitizer:
    """Test the service class."""

    def test_default_config(self) -> None:
        """The service falls back to the default config."""
        assert DrawingSanitizer().config is DEFAULT_CONFIG

    def test_custom_config(self) -> None:
        """The service uses the config it is given."""
        sanitizer = DrawingSanitizer(DrawingConfig(max_elements=1))

        assert sanitizer.validate_import({"elements": [{}, {}], "appState": {}}) is False

    def test_sanitize(self, drawing: dict[str, Any]) -> None:
        """sanitize delegates to whole-document sanitization."""
        assert create_drawing_sanitizer().sanitize(drawing).to_dict() == drawing

    def test_sanitize_files(self) -> None:
        """sanitize_files delegates to files sanitization."""
        assert create_drawing_sanitizer().sanitize_files({"f": {"name": " a "}}) == {"f": {"name": "a"}}
