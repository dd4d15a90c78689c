from datetime import datetime, timedelta, timezone

import pytest

from billboard_reporter.compliance.models import AuthorizationStatus, Coordinates
from billboard_reporter.reports.formatting import (
    analysis_details,
    analysis_summary,
    apply_analysis_to_draft,
    format_timestamp,
    maps_url,
    submission_message,
)
from billboard_reporter.reports.models import Report, ReportCategory, ReportDraft
from billboard_reporter.vision.models import (
    Analysis,
    BillboardInfo,
    BillboardSize,
    DetectedLogo,
    DetectedObject,
)

_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _make_analysis(
    text: str = "SUNNY COLA\nPermit 12",
    brand: str = "Sunny Cola",
    violations: list[str] | None = None,
) -> Analysis:
    violations = violations or []
    return Analysis(
        extracted_text=text,
        detected_objects=[DetectedObject(name="Billboard", confidence=0.912)],
        logos=[DetectedLogo(description="Sunny Cola", confidence=0.5)],
        billboard_info=BillboardInfo(
            has_billboard=True,
            estimated_size=BillboardSize.LARGE,
            advertisement_text=text,
            brand_name=brand,
        ),
        authorization_status=AuthorizationStatus(
            is_authorized=not violations,
            confidence=0.8 if not violations else 0.65,
            violations=violations,
        ),
    )


def _make_report(analysis: Analysis | None, violations: list[str]) -> Report:
    return Report(
        id="1",
        title="t",
        location="l",
        category=ReportCategory.ADVERTISEMENT,
        description="",
        timestamp=_NOW,
        status="Needs Review",
        ai_analysis=analysis,
        violations=violations,
    )


class TestFormatTimestamp:
    @pytest.mark.parametrize(
        ("age", "expected"),
        [
            (timedelta(seconds=30), "Just now"),
            (timedelta(minutes=5), "5 minutes ago"),
            (timedelta(minutes=59, seconds=59), "59 minutes ago"),
            (timedelta(hours=2, minutes=10), "2 hours ago"),
            (timedelta(hours=23, minutes=59), "23 hours ago"),
            (timedelta(days=3, hours=1), "3 days ago"),
        ],
    )
    def test_relative_age(self, age: timedelta, expected: str) -> None:
        assert format_timestamp(_NOW - age, _NOW) == expected


class TestAnalysisSummary:
    def test_clean_analysis(self) -> None:
        summary = analysis_summary(_make_analysis())
        assert "Billboard Detected: Yes" in summary
        assert "Estimated Size: Large (>300 sq ft)" in summary
        assert "Brand: Sunny Cola" in summary
        assert "Status: Likely Authorized" in summary
        assert "Confidence: 80.0%" in summary
        assert "Potential Issues Found:" not in summary

    def test_lists_numbered_violations(self) -> None:
        summary = analysis_summary(_make_analysis(violations=["First", "Second"]))
        assert "Status: Potential Issues Found" in summary
        assert "1. First\n2. Second" in summary

    def test_unknown_brand_and_size(self) -> None:
        summary = analysis_summary(Analysis())
        assert "Brand: Not detected" in summary
        assert "Estimated Size: Unknown" in summary
        assert "Status: Not evaluated" in summary


class TestAnalysisDetails:
    def test_lists_objects_and_logos(self) -> None:
        details = analysis_details(_make_analysis())
        assert "Billboard (91.2%)" in details
        assert "Sunny Cola (50.0%)" in details
        assert "No violations detected based on current checks" in details

    def test_truncates_long_text(self) -> None:
        details = analysis_details(_make_analysis(text="x" * 250))
        assert "x" * 200 + "..." in details
        assert "x" * 201 not in details

    def test_empty_sections(self) -> None:
        details = analysis_details(Analysis())
        assert details.count("None detected") == 2

    def test_lists_violations(self) -> None:
        details = analysis_details(_make_analysis(violations=["Too big", "Too close"]))
        assert "- Too big\n- Too close" in details


class TestApplyAnalysisToDraft:
    def test_title_from_brand(self) -> None:
        draft = apply_analysis_to_draft(ReportDraft(title="Old"), _make_analysis())
        assert draft.title == "Sunny Cola"

    def test_title_from_first_text_line(self) -> None:
        text = "A very long headline that keeps on going\nsecond line"
        draft = apply_analysis_to_draft(ReportDraft(), _make_analysis(text=text, brand=""))
        assert draft.title == "A very long headline that keep"

    def test_keeps_title_when_nothing_detected(self) -> None:
        draft = apply_analysis_to_draft(ReportDraft(title="Mine"), _make_analysis(text="", brand=""))
        assert draft.title == "Mine"

    def test_appends_results_block(self) -> None:
        draft = apply_analysis_to_draft(ReportDraft(description="Seen at dusk"), _make_analysis())
        assert draft.description.startswith("Seen at dusk\n\nAI Analysis Results:")
        assert "- Estimated Size: Large (>300 sq ft)" in draft.description
        assert "- Authorization Status: Likely Authorized" in draft.description
        assert "- AI Confidence: 80.0%" in draft.description

    def test_empty_description_has_no_separator(self) -> None:
        draft = apply_analysis_to_draft(ReportDraft(), _make_analysis())
        assert draft.description.startswith("AI Analysis Results:")

    def test_stores_analysis(self) -> None:
        analysis = _make_analysis()
        assert apply_analysis_to_draft(ReportDraft(), analysis).ai_analysis == analysis


class TestSubmissionMessage:
    def test_without_analysis(self) -> None:
        assert submission_message(_make_report(None, [])) == "Report submitted successfully!"

    def test_with_violations(self) -> None:
        message = submission_message(_make_report(_make_analysis(), ["a", "b"]))
        assert message.endswith("AI Analysis: 2 potential violation(s) detected")

    def test_without_violations(self) -> None:
        message = submission_message(_make_report(_make_analysis(), []))
        assert message.endswith("AI Analysis: No compliance issues found")


class TestMapsUrl:
    def test_android_coordinates(self) -> None:
        url = maps_url(Coordinates(latitude=40.5, longitude=-73.25), "ignored")
        assert url == "geo:0,0?q=40.5,-73.25"

    def test_ios_location_text_is_encoded(self) -> None:
        assert maps_url(None, "Main St & 5th", "ios") == "maps:0,0?q=Main%20St%20%26%205th"

    def test_unknown_platform(self) -> None:
        with pytest.raises(ValueError, match="windows"):
            maps_url(None, "x", "windows")
