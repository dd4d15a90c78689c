"""Converts reports and settings to and from their persisted JSON shape.

Keys are camelCase so that documents written by the mobile app remain
readable.
"""

from datetime import datetime, timezone
from typing import Any

from billboard_reporter.compliance.models import AuthorizationStatus, Coordinates
from billboard_reporter.reports.exceptions import ReportSerializationError
from billboard_reporter.reports.models import AppSettings, Report, ReportCategory
from billboard_reporter.vision.models import (
    Analysis,
    BillboardInfo,
    BillboardSize,
    BoundingBox,
    DetectedLogo,
    DetectedObject,
    Vertex,
)


def format_timestamp_iso(value: datetime) -> str:
    """Render an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp_iso(raw: str) -> datetime:
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def report_to_dict(report: Report) -> dict[str, Any]:
    return {
        "id": report.id,
        "title": report.title,
        "location": report.location,
        "description": report.description,
        "category": report.category.value,
        "image": report.image,
        "coordinates": _coordinates_to_dict(report.coordinates),
        "timestamp": format_timestamp_iso(report.timestamp),
        "status": report.status,
        "aiAnalysis": analysis_to_dict(report.ai_analysis) if report.ai_analysis else None,
        "violations": list(report.violations),
        "aiConfidence": report.ai_confidence,
    }


def report_from_dict(data: Any) -> Report:
    """Build a Report from a stored record.

    Raises:
        ReportSerializationError: if a required field is missing or mistyped.
    """
    if not isinstance(data, dict):
        raise ReportSerializationError("Report record must be an object")
    report_id = _require_str(data, "id")
    raw_timestamp = _require_str(data, "timestamp")
    try:
        timestamp = parse_timestamp_iso(raw_timestamp)
    except ValueError as exc:
        raise ReportSerializationError(
            f"Report {report_id}: invalid timestamp {raw_timestamp!r}"
        ) from exc
    raw_category = data.get("category", ReportCategory.OTHER.value)
    try:
        category = ReportCategory(raw_category)
    except ValueError as exc:
        raise ReportSerializationError(
            f"Report {report_id}: unknown category {raw_category!r}"
        ) from exc
    raw_analysis = data.get("aiAnalysis")
    return Report(
        id=report_id,
        title=_require_str(data, "title"),
        location=_require_str(data, "location"),
        category=category,
        description=_optional_str(data.get("description")) or "",
        timestamp=timestamp,
        status=_require_str(data, "status"),
        image=_optional_str(data.get("image")),
        coordinates=_coordinates_from_dict(data.get("coordinates")),
        ai_analysis=analysis_from_dict(raw_analysis) if raw_analysis else None,
        violations=_str_list(data.get("violations")),
        ai_confidence=_optional_float(data.get("aiConfidence")),
    )


def analysis_to_dict(analysis: Analysis) -> dict[str, Any]:
    info = analysis.billboard_info
    status = analysis.authorization_status
    return {
        "extractedText": analysis.extracted_text,
        "detectedObjects": [
            {
                "name": obj.name,
                "confidence": obj.confidence,
                "boundingBox": _bounding_box_to_dict(obj.bounding_box),
            }
            for obj in analysis.detected_objects
        ],
        "logos": [
            {"description": logo.description, "confidence": logo.confidence}
            for logo in analysis.logos
        ],
        "billboardInfo": {
            "hasBillboard": info.has_billboard,
            "estimatedSize": info.estimated_size.label if info.estimated_size else None,
            "advertisementText": info.advertisement_text,
            "brandName": info.brand_name,
        },
        "authorizationStatus": (
            {
                "isAuthorized": status.is_authorized,
                "confidence": status.confidence,
                "violations": list(status.violations),
                "recommendations": list(status.recommendations),
            }
            if status is not None
            else None
        ),
    }


def analysis_from_dict(data: Any) -> Analysis:
    if not isinstance(data, dict):
        raise ReportSerializationError("'aiAnalysis' must be an object")
    info = data.get("billboardInfo") or {}
    if not isinstance(info, dict):
        raise ReportSerializationError("'billboardInfo' must be an object")
    raw_size = info.get("estimatedSize")
    try:
        estimated_size = BillboardSize.from_text(raw_size) if raw_size else None
    except ValueError as exc:
        raise ReportSerializationError(str(exc)) from exc
    return Analysis(
        extracted_text=_optional_str(data.get("extractedText")) or "",
        detected_objects=[
            DetectedObject(
                name=_optional_str(obj.get("name")) or "",
                confidence=_optional_float(obj.get("confidence")) or 0.0,
                bounding_box=_bounding_box_from_dict(obj.get("boundingBox")),
            )
            for obj in _dict_list(data.get("detectedObjects"))
        ],
        logos=[
            DetectedLogo(
                description=_optional_str(logo.get("description")) or "",
                confidence=_optional_float(logo.get("confidence")) or 0.0,
            )
            for logo in _dict_list(data.get("logos"))
        ],
        billboard_info=BillboardInfo(
            has_billboard=bool(info.get("hasBillboard", False)),
            estimated_size=estimated_size,
            advertisement_text=_optional_str(info.get("advertisementText")) or "",
            brand_name=_optional_str(info.get("brandName")) or "",
        ),
        authorization_status=_status_from_dict(data.get("authorizationStatus")),
    )


def settings_to_dict(settings: AppSettings) -> dict[str, bool]:
    return {
        "notifications": settings.notifications,
        "locationServices": settings.location_services,
        "autoLocation": settings.auto_location,
    }


def settings_from_dict(data: Any) -> AppSettings:
    """Build AppSettings, falling back to defaults for absent flags."""
    if not isinstance(data, dict):
        raise ReportSerializationError("Settings record must be an object")
    defaults = AppSettings()
    return AppSettings(
        notifications=bool(data.get("notifications", defaults.notifications)),
        location_services=bool(data.get("locationServices", defaults.location_services)),
        auto_location=bool(data.get("autoLocation", defaults.auto_location)),
    )


def _status_from_dict(raw: Any) -> AuthorizationStatus | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ReportSerializationError("'authorizationStatus' must be an object or null")
    return AuthorizationStatus(
        is_authorized=bool(raw.get("isAuthorized", False)),
        confidence=_optional_float(raw.get("confidence")) or 0.0,
        violations=_str_list(raw.get("violations")),
        recommendations=_str_list(raw.get("recommendations")),
    )


def _coordinates_to_dict(coordinates: Coordinates | None) -> dict[str, float] | None:
    if coordinates is None:
        return None
    return {"latitude": coordinates.latitude, "longitude": coordinates.longitude}


def _coordinates_from_dict(raw: Any) -> Coordinates | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ReportSerializationError("'coordinates' must be an object or null")
    latitude = _optional_float(raw.get("latitude"))
    longitude = _optional_float(raw.get("longitude"))
    if latitude is None or longitude is None:
        raise ReportSerializationError("'coordinates' needs numeric latitude and longitude")
    return Coordinates(latitude=latitude, longitude=longitude)


def _bounding_box_to_dict(box: BoundingBox | None) -> dict[str, Any] | None:
    if box is None:
        return None
    return {"normalizedVertices": [{"x": v.x, "y": v.y} for v in box.vertices]}


def _bounding_box_from_dict(raw: Any) -> BoundingBox | None:
    if not isinstance(raw, dict):
        return None
    return BoundingBox(
        vertices=[
            Vertex(
                x=_optional_float(v.get("x")) or 0.0,
                y=_optional_float(v.get("y")) or 0.0,
            )
            for v in _dict_list(raw.get("normalizedVertices"))
        ]
    )


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ReportSerializationError(f"'{key}' must be a string")
    return value


def _optional_str(raw: Any) -> str | None:
    return raw if isinstance(raw, str) else None


def _optional_float(raw: Any) -> float | None:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    return float(raw)


def _str_list(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, str)]


def _dict_list(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, dict)]
