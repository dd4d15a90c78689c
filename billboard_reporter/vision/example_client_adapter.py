"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in VisionClientFactory.
"""

import copy
from typing import Any, ClassVar

from billboard_reporter.vision.base import BaseVisionClient


class ExampleClientAdapter(BaseVisionClient):
    """Example adapter that returns a fixed billboard annotation.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, Any]] = {
        "responses": [
            {
                "textAnnotations": [
                    {"description": "SUNNY COLA\nTaste the summer\nPermit #4471"},
                ],
                "localizedObjectAnnotations": [
                    {
                        "name": "Billboard",
                        "score": 0.91,
                        "boundingPoly": {
                            "normalizedVertices": [
                                {"x": 0.1, "y": 0.2},
                                {"x": 0.7, "y": 0.2},
                                {"x": 0.7, "y": 0.6},
                                {"x": 0.1, "y": 0.6},
                            ]
                        },
                    },
                ],
                "logoAnnotations": [
                    {"description": "Sunny Cola", "score": 0.77},
                ],
            }
        ]
    }

    def __init__(self, response: dict[str, Any] | None = None) -> None:
        self._response = response if response is not None else self.DEFAULT_RESPONSE

    def annotate(self, image_bytes: bytes) -> dict[str, Any]:
        _ = image_bytes
        return copy.deepcopy(self._response)
