from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from billboard_reporter.compliance.models import Coordinates
from billboard_reporter.vision.models import Analysis

STATUS_LIKELY_AUTHORIZED = "Likely Authorized"
STATUS_NEEDS_REVIEW = "Needs Review"


class ReportCategory(str, Enum):
    ADVERTISEMENT = "advertisement"
    DAMAGED = "damaged"
    ILLEGAL = "illegal"
    INAPPROPRIATE = "inappropriate"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    ReportCategory.ADVERTISEMENT: "Advertisement",
    ReportCategory.DAMAGED: "Damaged Billboard",
    ReportCategory.ILLEGAL: "Illegal Placement",
    ReportCategory.INAPPROPRIATE: "Inappropriate Content",
    ReportCategory.OTHER: "Other",
}


@dataclass(frozen=True)
class ReportDraft:
    """Form state of a report that has not been submitted yet."""

    title: str = ""
    location: str = ""
    description: str = ""
    category: ReportCategory = ReportCategory.ADVERTISEMENT
    image: str | None = None
    coordinates: Coordinates | None = None
    ai_analysis: Analysis | None = None


@dataclass(frozen=True)
class Report:
    """A submitted billboard report.

    ``violations`` and ``ai_confidence`` duplicate the analysis status so
    that records without a stored analysis can still carry them.
    """

    id: str
    title: str
    location: str
    category: ReportCategory
    description: str
    timestamp: datetime
    status: str
    image: str | None = None
    coordinates: Coordinates | None = None
    ai_analysis: Analysis | None = None
    violations: list[str] = field(default_factory=list)
    ai_confidence: float | None = None


@dataclass(frozen=True)
class AppSettings:
    notifications: bool = True
    location_services: bool = True
    auto_location: bool = False
