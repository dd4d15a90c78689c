"""Normalizes a raw vision-service response into an Analysis."""

from typing import Any

from billboard_reporter.vision.models import (
    Analysis,
    BillboardInfo,
    BillboardSize,
    BoundingBox,
    DetectedLogo,
    DetectedObject,
    Vertex,
)

_BILLBOARD_KEYWORDS = ("sign", "billboard", "advertisement")
_BRAND_MIN_CONFIDENCE = 0.5
_LARGE_MIN_AREA = 0.3
_MEDIUM_MIN_AREA = 0.1


class VisionResultParser:
    """Pure transform from annotation JSON to an Analysis.

    Missing or malformed sections produce empty defaults, never errors.
    """

    def parse(self, raw_response: Any) -> Analysis:
        response = _first_response(raw_response)
        if response is None:
            return Analysis()

        extracted_text = ""
        advertisement_text = ""
        text_annotations = response.get("textAnnotations")
        if text_annotations is not None:
            extracted_text = _first_description(text_annotations)
            advertisement_text = extracted_text

        has_billboard = False
        estimated_size: BillboardSize | None = None
        detected_objects: list[DetectedObject] = []
        for raw in _as_list(response.get("localizedObjectAnnotations")):
            obj = _build_object(raw)
            detected_objects.append(obj)
            if _looks_like_billboard(obj.name):
                has_billboard = True
                estimated_size = estimate_size(obj.bounding_box)

        brand_name = ""
        logos: list[DetectedLogo] = []
        for raw in _as_list(response.get("logoAnnotations")):
            logo = _build_logo(raw)
            logos.append(logo)
            if logo.confidence > _BRAND_MIN_CONFIDENCE:
                brand_name = logo.description

        return Analysis(
            extracted_text=extracted_text,
            detected_objects=detected_objects,
            logos=logos,
            billboard_info=BillboardInfo(
                has_billboard=has_billboard,
                estimated_size=estimated_size,
                advertisement_text=advertisement_text,
                brand_name=brand_name,
            ),
        )


def estimate_size(box: BoundingBox | None) -> BillboardSize | None:
    """Classify a box by the share of the frame it covers.

    Uses the first three corners only: width from corners 0-1, height
    from corners 0-2.
    """
    if box is None or len(box.vertices) < 3:
        return None
    first, second, third = box.vertices[:3]
    width = abs(second.x - first.x)
    height = abs(third.y - first.y)
    area = width * height
    if area > _LARGE_MIN_AREA:
        return BillboardSize.LARGE
    if area > _MEDIUM_MIN_AREA:
        return BillboardSize.MEDIUM
    return BillboardSize.SMALL


def _first_response(raw_response: Any) -> dict[str, Any] | None:
    if not isinstance(raw_response, dict):
        return None
    responses = raw_response.get("responses")
    if not isinstance(responses, list) or not responses:
        return None
    first = responses[0]
    return first if isinstance(first, dict) else None


def _as_list(raw: Any) -> list[Any]:
    return raw if isinstance(raw, list) else []


def _first_description(annotations: Any) -> str:
    items = _as_list(annotations)
    if not items or not isinstance(items[0], dict):
        return ""
    description = items[0].get("description")
    return description if isinstance(description, str) else ""


def _looks_like_billboard(name: str) -> bool:
    lowered = name.lower()
    return any(keyword in lowered for keyword in _BILLBOARD_KEYWORDS)


def _build_object(raw: Any) -> DetectedObject:
    if not isinstance(raw, dict):
        return DetectedObject(name="", confidence=0.0)
    return DetectedObject(
        name=_as_str(raw.get("name")),
        confidence=_as_float(raw.get("score")),
        bounding_box=_build_bounding_box(raw.get("boundingPoly")),
    )


def _build_logo(raw: Any) -> DetectedLogo:
    if not isinstance(raw, dict):
        return DetectedLogo(description="", confidence=0.0)
    return DetectedLogo(
        description=_as_str(raw.get("description")),
        confidence=_as_float(raw.get("score")),
    )


def _build_bounding_box(raw: Any) -> BoundingBox | None:
    if not isinstance(raw, dict):
        return None
    vertices = raw.get("normalizedVertices")
    if not isinstance(vertices, list):
        return None
    # The API drops zero-valued coordinates from its JSON.
    return BoundingBox(
        vertices=[
            Vertex(x=_as_float(v.get("x")), y=_as_float(v.get("y")))
            for v in vertices
            if isinstance(v, dict)
        ]
    )


def _as_str(raw: Any) -> str:
    return raw if isinstance(raw, str) else ""


def _as_float(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return 0.0
    return float(raw)
