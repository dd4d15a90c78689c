from dataclasses import dataclass, field
from enum import Enum

from billboard_reporter.compliance.models import AuthorizationStatus


class BillboardSize(str, Enum):
    """Rough billboard size class derived from its share of the photo."""

    LARGE = "Large"
    MEDIUM = "Medium"
    SMALL = "Small"

    @property
    def label(self) -> str:
        return _SIZE_LABELS[self]

    @classmethod
    def from_text(cls, text: str) -> "BillboardSize":
        """Accept either the bare value ("Large") or the display label."""
        for size in cls:
            if text == size.value or text == size.label:
                return size
        raise ValueError(f"Unknown billboard size: {text!r}")


_SIZE_LABELS = {
    BillboardSize.LARGE: "Large (>300 sq ft)",
    BillboardSize.MEDIUM: "Medium (100-300 sq ft)",
    BillboardSize.SMALL: "Small (<100 sq ft)",
}


@dataclass(frozen=True)
class Vertex:
    """Normalized image coordinate, both axes in [0, 1]."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class BoundingBox:
    vertices: list[Vertex] = field(default_factory=list)


@dataclass(frozen=True)
class DetectedObject:
    """A localized object reported by the vision service."""

    name: str
    confidence: float
    bounding_box: BoundingBox | None = None


@dataclass(frozen=True)
class DetectedLogo:
    description: str
    confidence: float


@dataclass(frozen=True)
class BillboardInfo:
    """Billboard summary derived from detected objects and logos."""

    has_billboard: bool = False
    estimated_size: BillboardSize | None = None
    advertisement_text: str = ""
    brand_name: str = ""


@dataclass(frozen=True)
class Analysis:
    """Output of parsing one vision response.

    ``authorization_status`` stays None until the compliance checks have run.
    """

    extracted_text: str = ""
    detected_objects: list[DetectedObject] = field(default_factory=list)
    logos: list[DetectedLogo] = field(default_factory=list)
    billboard_info: BillboardInfo = field(default_factory=BillboardInfo)
    authorization_status: AuthorizationStatus | None = None
