from pathlib import Path
from typing import Any

import pytest

from billboard_reporter.storage.json_store import JsonFileStore

# PNG signature plus filler; nothing in the pipeline decodes the pixels.
_PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


@pytest.fixture()
def image_file(tmp_path: Path) -> Path:
    """A tiny PNG on disk standing in for a billboard photo."""
    path = tmp_path / "billboard.png"
    path.write_bytes(_PNG_BYTES)
    return path


@pytest.fixture()
def store(tmp_path: Path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "data")


@pytest.fixture()
def billboard_response() -> dict[str, Any]:
    """A vision response with a large billboard, a brand and no permit text."""
    return {
        "responses": [
            {
                "textAnnotations": [
                    {"description": "MEGA CASINO\nWin big tonight"},
                    {"description": "MEGA"},
                ],
                "localizedObjectAnnotations": [
                    {
                        "name": "Billboard",
                        "score": 0.93,
                        "boundingPoly": {
                            "normalizedVertices": [
                                {"x": 0.1, "y": 0.1},
                                {"x": 0.8, "y": 0.1},
                                {"x": 0.8, "y": 0.7},
                                {"x": 0.1, "y": 0.7},
                            ]
                        },
                    },
                    {"name": "Car", "score": 0.88},
                ],
                "logoAnnotations": [{"description": "Mega Casino", "score": 0.81}],
            }
        ]
    }
