from pathlib import Path
from typing import Any

import pytest

from drawguard.rules.loader import load_rules
from drawguard.rules.models import Rules


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def rules(project_root: Path) -> Rules:
    """The real rules.yaml shipped at the project root."""
    return load_rules(project_root / "rules.yaml")


@pytest.fixture
def rectangle() -> dict[str, Any]:
    return {
        "id": "rect-1",
        "type": "rectangle",
        "x": 10,
        "y": 20.5,
        "width": 100,
        "height": 50,
        "angle": 0,
        "strokeColor": "#1e1e1e",
        "backgroundColor": "transparent",
        "fillStyle": "solid",
        "strokeWidth": 2,
        "strokeStyle": "solid",
        "roundness": {"type": 3},
        "boundElements": None,
        "groupIds": [],
        "frameId": None,
        "seed": 1968410350,
        "version": 3,
        "versionNonce": 361174001,
        "isDeleted": False,
        "opacity": 100,
        "link": None,
        "locked": False,
        "updated": 1700000000000,
    }


@pytest.fixture
def text_element() -> dict[str, Any]:
    return {
        "id": "text-1",
        "type": "text",
        "x": 0,
        "y": 0,
        "text": "Hello <b>world</b>",
        "originalText": "Hello <b>world</b>",
        "fontSize": 20,
        "fontFamily": 1,
        "textAlign": "left",
        "verticalAlign": "top",
        "containerId": None,
        "link": "https://example.com/docs",
    }


@pytest.fixture
def app_state() -> dict[str, Any]:
    return {
        "gridSize": 20,
        "viewBackgroundColor": "#ffffff",
        "currentItemFillStyle": "hachure",
        "currentItemStrokeStyle": "dashed",
        "currentItemFontSize": 20,
        "currentItemTextAlign": "center",
        "scrollX": -120.5,
        "scrollY": 40,
        "zoom": {"value": 1.5},
        "selectedElementIds": {"rect-1": True},
        "theme": "light",
        "name": "Untitled drawing",
        "openMenu": None,
    }


@pytest.fixture
def image_payload() -> str:
    return "data:image/png;base64," + "iVBORw0KGgo" * 200


@pytest.fixture
def drawing(
    rectangle: dict[str, Any],
    text_element: dict[str, Any],
    app_state: dict[str, Any],
    image_payload: str,
) -> dict[str, Any]:
    """A well-formed drawing document."""
    return {
        "elements": [rectangle, text_element],
        "appState": app_state,
        "files": {
            "file-1": {
                "id": "file-1",
                "mimeType": "image/png",
                "dataURL": image_payload,
                "created": 1700000000000,
            }
        },
        "preview": '<svg width="100" height="50"><rect x="10" y="20" width="100" height="50"></rect></svg>',
    }
