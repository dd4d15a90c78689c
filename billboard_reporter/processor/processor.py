import dataclasses
import threading
from pathlib import Path

from billboard_reporter.compliance.evaluator import ComplianceEvaluator
from billboard_reporter.compliance.lookups import FixedZoneSizeLookup, RandomProtectedSiteLookup
from billboard_reporter.compliance.models import Coordinates
from billboard_reporter.config.settings import Settings
from billboard_reporter.logging.logger import Log
from billboard_reporter.processor.exceptions import (
    AnalysisInProgressError,
    UnsupportedImageTypeError,
)
from billboard_reporter.processor.image_loader import ImageLoader
from billboard_reporter.vision.base import BaseVisionClient
from billboard_reporter.vision.exceptions import VisionError
from billboard_reporter.vision.factory import VisionClientFactory
from billboard_reporter.vision.models import Analysis, BillboardSize
from billboard_reporter.vision.parser import VisionResultParser


class AnalysisProcessor:
    """Runs one photo through the analysis pipeline.

    Pipeline: load -> annotate -> parse -> evaluate.
    Only one analysis may be in flight at a time; there is no queue.
    """

    def __init__(
        self,
        image_loader: ImageLoader,
        vision_client: BaseVisionClient,
        parser: VisionResultParser,
        evaluator: ComplianceEvaluator,
    ) -> None:
        self._image_loader = image_loader
        self._vision_client = vision_client
        self._parser = parser
        self._evaluator = evaluator
        self._busy = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    def analyze(
        self,
        image_path: Path,
        coordinates: Coordinates | None = None,
    ) -> Analysis | None:
        """Analyze a billboard photo.

        Returns None when the image cannot be read or the vision service
        fails; the caller continues without AI data.

        Raises:
            AnalysisInProgressError: if another analysis is still running.
        """
        if not self._busy.acquire(blocking=False):
            raise AnalysisInProgressError("An image is already being analyzed")
        try:
            return self._run(image_path, coordinates)
        except (VisionError, UnsupportedImageTypeError, OSError) as exc:
            Log.error(f"Could not analyze image {image_path}: {exc}")
            return None
        finally:
            self._busy.release()

    def close(self) -> None:
        self._vision_client.close()

    def _run(self, image_path: Path, coordinates: Coordinates | None) -> Analysis:
        Log.info(f"Analyzing image {image_path}")

        # Step 1: Load image
        image_bytes = self._image_loader.load(image_path)
        Log.debug(f"Loaded {len(image_bytes)} bytes from {image_path}")

        # Step 2: Annotate
        raw_response = self._vision_client.annotate(image_bytes)

        # Step 3: Parse
        analysis = self._parser.parse(raw_response)
        Log.info(
            f"Parsed analysis: {len(analysis.detected_objects)} objects, "
            f"{len(analysis.logos)} logos, "
            f"billboard={'yes' if analysis.billboard_info.has_billboard else 'no'}"
        )

        # Step 4: Evaluate
        status = self._evaluator.evaluate(analysis, coordinates)
        return dataclasses.replace(analysis, authorization_status=status)


def build_processor(settings: Settings) -> AnalysisProcessor:
    """Build an AnalysisProcessor with all required adapters."""
    evaluator = ComplianceEvaluator(
        zone_size_lookup=FixedZoneSizeLookup(
            BillboardSize.from_text(settings.zone_max_allowed_size)
        ),
        proximity_lookup=RandomProtectedSiteLookup(settings.protected_site_threshold),
    )
    return AnalysisProcessor(
        image_loader=ImageLoader(),
        vision_client=VisionClientFactory.create(settings),
        parser=VisionResultParser(),
        evaluator=evaluator,
    )
