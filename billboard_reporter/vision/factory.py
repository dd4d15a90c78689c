from typing import ClassVar

from billboard_reporter.config.settings import Settings
from billboard_reporter.vision.base import BaseVisionClient
from billboard_reporter.vision.example_client_adapter import ExampleClientAdapter
from billboard_reporter.vision.google_vision_adapter import GoogleVisionClientAdapter


class VisionClientFactory:
    """Creates the configured vision client adapter."""

    PROVIDERS: ClassVar[tuple[str, ...]] = ("example", "google")

    @classmethod
    def create(cls, settings: Settings) -> BaseVisionClient:
        provider = settings.vision_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "google":
            if not settings.google_vision_api_key:
                raise ValueError(
                    "google_vision_api_key is required for vision_provider=google"
                )
            return GoogleVisionClientAdapter(
                api_key=settings.google_vision_api_key,
                endpoint=settings.google_vision_endpoint,
                timeout_seconds=settings.vision_timeout_seconds,
                text_max_results=settings.vision_text_max_results,
                object_max_results=settings.vision_object_max_results,
                logo_max_results=settings.vision_logo_max_results,
            )
        raise ValueError(
            f"Unknown vision provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
