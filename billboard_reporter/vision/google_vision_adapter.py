import base64
from typing import Any

import httpx

from billboard_reporter.vision.base import BaseVisionClient
from billboard_reporter.vision.exceptions import VisionNetworkError, VisionResponseError


class GoogleVisionClientAdapter(BaseVisionClient):
    """Annotation client for the Google Cloud Vision ``images:annotate`` REST API."""

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str,
        timeout_seconds: int,
        text_max_results: int = 50,
        object_max_results: int = 20,
        logo_max_results: int = 10,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint
        self._features = [
            {"type": "TEXT_DETECTION", "maxResults": text_max_results},
            {"type": "OBJECT_LOCALIZATION", "maxResults": object_max_results},
            {"type": "LOGO_DETECTION", "maxResults": logo_max_results},
        ]
        self._client = httpx.Client(timeout=timeout_seconds)

    def annotate(self, image_bytes: bytes) -> dict[str, Any]:
        try:
            response = self._client.post(
                self._endpoint,
                params={"key": self._api_key},
                json=self._build_request(image_bytes),
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise VisionNetworkError(f"Vision service network error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise VisionNetworkError(f"Vision service HTTP error: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise VisionResponseError(
                f"Vision service returned invalid JSON (HTTP {response.status_code})"
            ) from exc

        if not isinstance(body, dict):
            raise VisionResponseError("Vision service response must be an object")
        error = body.get("error")
        if error:
            message = error.get("message", "") if isinstance(error, dict) else str(error)
            raise VisionResponseError(f"Vision service API error: {message}")
        return body

    def close(self) -> None:
        self._client.close()

    def _build_request(self, image_bytes: bytes) -> dict[str, object]:
        content = base64.b64encode(image_bytes).decode("ascii")
        return {
            "requests": [
                {
                    "image": {"content": content},
                    "features": self._features,
                }
            ]
        }
