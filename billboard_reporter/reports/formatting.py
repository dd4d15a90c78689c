"""Human-readable renderings of analyses and reports."""

import dataclasses
from datetime import datetime
from urllib.parse import quote

from billboard_reporter.compliance.models import Coordinates
from billboard_reporter.reports.models import Report, ReportDraft
from billboard_reporter.vision.models import Analysis

_DETAIL_TEXT_LIMIT = 200
_DRAFT_TEXT_LIMIT = 100
_TITLE_LIMIT = 30
_MAPS_SCHEMES = {"ios": "maps", "android": "geo"}


def format_timestamp(timestamp: datetime, now: datetime) -> str:
    """Relative age such as "Just now" or "3 hours ago"."""
    minutes = int((now - timestamp).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} minutes ago"
    if minutes < 1440:
        return f"{minutes // 60} hours ago"
    return f"{minutes // 1440} days ago"


def format_percent(value: float) -> str:
    return f"{value * 100:.1f}%"


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _size_label(analysis: Analysis) -> str:
    size = analysis.billboard_info.estimated_size
    return size.label if size is not None else "Unknown"


def analysis_summary(analysis: Analysis) -> str:
    """Short result shown right after a photo has been analyzed."""
    info = analysis.billboard_info
    status = analysis.authorization_status
    lines = [
        "AI Analysis Complete!",
        "",
        f"Billboard Detected: {'Yes' if info.has_billboard else 'No'}",
        f"Estimated Size: {_size_label(analysis)}",
        f"Brand: {info.brand_name or 'Not detected'}",
    ]
    if status is None:
        lines.append("Status: Not evaluated")
        return "\n".join(lines)

    lines.append(
        f"Status: {'Likely Authorized' if status.is_authorized else 'Potential Issues Found'}"
    )
    lines.append(f"Confidence: {format_percent(status.confidence)}")
    if status.violations:
        lines.extend(["", "Potential Issues Found:"])
        lines.extend(f"{i}. {v}" for i, v in enumerate(status.violations, start=1))
    return "\n".join(lines)


def analysis_details(analysis: Analysis) -> str:
    objects = ", ".join(
        f"{obj.name} ({format_percent(obj.confidence)})" for obj in analysis.detected_objects
    )
    logos = ", ".join(
        f"{logo.description} ({format_percent(logo.confidence)})" for logo in analysis.logos
    )
    status = analysis.authorization_status
    if status is not None and status.violations:
        authorization = "\n".join(f"- {v}" for v in status.violations)
    else:
        authorization = "No violations detected based on current checks"
    return "\n".join(
        [
            "Extracted Text:",
            _truncate(analysis.extracted_text, _DETAIL_TEXT_LIMIT),
            "",
            "Detected Objects:",
            objects or "None detected",
            "",
            "Logos Found:",
            logos or "None detected",
            "",
            "Authorization Details:",
            authorization,
        ]
    )


def apply_analysis_to_draft(draft: ReportDraft, analysis: Analysis) -> ReportDraft:
    """Pre-fill a draft from an analysis.

    The title becomes the detected brand, or else the first line of the
    extracted text; an existing title is kept when neither is available.
    A summary block is appended to the description.
    """
    first_line = analysis.extracted_text.split("\n")[0][:_TITLE_LIMIT]
    title = analysis.billboard_info.brand_name or first_line or draft.title

    status = analysis.authorization_status
    block = [
        "AI Analysis Results:",
        f"- Detected Text: {_truncate(analysis.extracted_text, _DRAFT_TEXT_LIMIT)}",
        f"- Estimated Size: {_size_label(analysis)}",
    ]
    if status is not None:
        block.append(
            "- Authorization Status: "
            f"{'Likely Authorized' if status.is_authorized else 'Potential Violations'}"
        )
        block.append(f"- AI Confidence: {format_percent(status.confidence)}")
    separator = "\n\n" if draft.description else ""
    description = draft.description + separator + "\n".join(block)

    return dataclasses.replace(
        draft,
        title=title,
        description=description,
        ai_analysis=analysis,
    )


def submission_message(report: Report) -> str:
    if report.ai_analysis is None:
        return "Report submitted successfully!"
    if report.violations:
        outcome = f"{len(report.violations)} potential violation(s) detected"
    else:
        outcome = "No compliance issues found"
    return f"Report submitted successfully!\n\nAI Analysis: {outcome}"


def maps_url(
    coordinates: Coordinates | None,
    location: str,
    platform: str = "android",
) -> str:
    """Build a map-app query URI for a report's position."""
    scheme = _MAPS_SCHEMES.get(platform.lower())
    if scheme is None:
        raise ValueError(f"Unknown platform '{platform}'. Choose from: {list(_MAPS_SCHEMES)}")
    if coordinates is not None:
        query = f"{coordinates.latitude},{coordinates.longitude}"
    else:
        query = quote(location, safe="")
    return f"{scheme}:0,0?q={query}"
