from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from billboard_reporter.compliance.evaluator import ComplianceEvaluator
from billboard_reporter.compliance.lookups import FixedProtectedSiteLookup, FixedZoneSizeLookup
from billboard_reporter.compliance.models import AuthorizationStatus, Coordinates
from billboard_reporter.config.settings import Settings
from billboard_reporter.processor.exceptions import (
    AnalysisInProgressError,
    UnsupportedImageTypeError,
)
from billboard_reporter.processor.image_loader import ImageLoader
from billboard_reporter.processor.processor import AnalysisProcessor, build_processor
from billboard_reporter.vision.exceptions import VisionNetworkError, VisionResponseError
from billboard_reporter.vision.parser import VisionResultParser


def _make_processor(
    vision_client: MagicMock | None = None,
    image_loader: MagicMock | None = None,
    near: bool = False,
) -> tuple[AnalysisProcessor, MagicMock, MagicMock]:
    loader = image_loader or MagicMock(spec=ImageLoader)
    loader.load.return_value = b"jpeg"
    client = vision_client or MagicMock()
    processor = AnalysisProcessor(
        image_loader=loader,
        vision_client=client,
        parser=VisionResultParser(),
        evaluator=ComplianceEvaluator(FixedZoneSizeLookup(), FixedProtectedSiteLookup(near)),
    )
    return processor, loader, client


class TestAnalyzeSuccess:
    def test_returns_evaluated_analysis(self, billboard_response: dict[str, Any]) -> None:
        processor, _loader, client = _make_processor()
        client.annotate.return_value = billboard_response

        analysis = processor.analyze(Path("photo.jpg"))

        assert analysis is not None
        assert analysis.billboard_info.brand_name == "Mega Casino"
        status = analysis.authorization_status
        assert status is not None
        assert status.is_authorized is False
        assert status.confidence == pytest.approx(0.35)
        assert status.violations == [
            "Billboard appears larger than permitted size for this zone",
            "Contains potentially prohibited content: casino",
            "No visible permit information detected",
        ]

    def test_sends_loaded_bytes_to_client(self) -> None:
        processor, loader, client = _make_processor()
        client.annotate.return_value = {}

        processor.analyze(Path("photo.jpg"))

        loader.load.assert_called_once_with(Path("photo.jpg"))
        client.annotate.assert_called_once_with(b"jpeg")

    def test_passes_coordinates_to_evaluator(self) -> None:
        evaluator = MagicMock()
        evaluator.evaluate.return_value = AuthorizationStatus()
        client = MagicMock()
        client.annotate.return_value = {}
        loader = MagicMock()
        loader.load.return_value = b""
        processor = AnalysisProcessor(loader, client, VisionResultParser(), evaluator)
        coordinates = Coordinates(latitude=1.0, longitude=2.0)

        processor.analyze(Path("photo.jpg"), coordinates)

        assert evaluator.evaluate.call_args.args[1] == coordinates

    def test_not_busy_after_completion(self) -> None:
        processor, _loader, client = _make_processor()
        client.annotate.return_value = {}
        processor.analyze(Path("photo.jpg"))
        assert processor.busy is False


class TestAnalyzeFailures:
    @pytest.mark.parametrize(
        "error",
        [VisionNetworkError("down"), VisionResponseError("API key not valid")],
    )
    def test_vision_errors_yield_none(self, error: Exception) -> None:
        processor, _loader, client = _make_processor()
        client.annotate.side_effect = error
        assert processor.analyze(Path("photo.jpg")) is None

    def test_image_errors_yield_none(self) -> None:
        loader = MagicMock(spec=ImageLoader)
        processor, loader, client = _make_processor(image_loader=loader)
        loader.load.side_effect = UnsupportedImageTypeError("'.txt' is not supported")
        assert processor.analyze(Path("notes.txt")) is None
        client.annotate.assert_not_called()

    def test_missing_file_yields_none(self) -> None:
        loader = MagicMock(spec=ImageLoader)
        processor, loader, _client = _make_processor(image_loader=loader)
        loader.load.side_effect = FileNotFoundError("Image not found")
        assert processor.analyze(Path("gone.jpg")) is None

    def test_failure_is_logged(self) -> None:
        processor, _loader, client = _make_processor()
        client.annotate.side_effect = VisionNetworkError("down")
        with patch("billboard_reporter.processor.processor.Log") as mock_log:
            processor.analyze(Path("photo.jpg"))
        assert "Could not analyze image" in mock_log.error.call_args.args[0]

    def test_flag_released_after_failure(self) -> None:
        processor, _loader, client = _make_processor()
        client.annotate.side_effect = VisionNetworkError("down")
        processor.analyze(Path("photo.jpg"))
        assert processor.busy is False

    def test_unexpected_errors_propagate(self) -> None:
        processor, _loader, client = _make_processor()
        client.annotate.side_effect = RuntimeError("bug")
        with pytest.raises(RuntimeError, match="bug"):
            processor.analyze(Path("photo.jpg"))
        assert processor.busy is False


class TestBusyFlag:
    def test_second_analysis_while_running_is_rejected(self) -> None:
        processor, _loader, client = _make_processor()
        rejected: list[Exception] = []

        def annotate(_image: bytes) -> dict[str, Any]:
            assert processor.busy is True
            try:
                processor.analyze(Path("other.jpg"))
            except AnalysisInProgressError as exc:
                rejected.append(exc)
            return {}

        client.annotate.side_effect = annotate

        assert processor.analyze(Path("photo.jpg")) is not None
        assert len(rejected) == 1


class TestBuildProcessor:
    def test_builds_with_example_provider(self) -> None:
        processor = build_processor(Settings(vision_provider="example"))
        assert isinstance(processor, AnalysisProcessor)
        assert processor.busy is False

    def test_rejects_unknown_zone_size(self) -> None:
        with pytest.raises(ValueError, match="Gigantic"):
            build_processor(Settings(vision_provider="example", zone_max_allowed_size="Gigantic"))


class TestClose:
    def test_closes_vision_client(self) -> None:
        processor, _loader, client = _make_processor()
        processor.close()
        client.close.assert_called_once_with()
