from billboard_reporter.vision.base import BaseVisionClient
from billboard_reporter.vision.factory import VisionClientFactory
from billboard_reporter.vision.parser import VisionResultParser

__all__ = ["BaseVisionClient", "VisionClientFactory", "VisionResultParser"]
