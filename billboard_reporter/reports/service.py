import dataclasses
import threading
import uuid
from collections.abc import Callable
from datetime import datetime

from billboard_reporter.logging.logger import Log
from billboard_reporter.reports.exceptions import ReportValidationError
from billboard_reporter.reports.models import (
    STATUS_LIKELY_AUTHORIZED,
    STATUS_NEEDS_REVIEW,
    AppSettings,
    Report,
    ReportDraft,
)
from billboard_reporter.reports.repository import ReportRepository, SettingsRepository, utc_now
from billboard_reporter.vision.models import Analysis


def _new_report_id() -> str:
    return str(uuid.uuid4())


def derive_status(analysis: Analysis | None) -> str:
    """Status label shown for a report with the given analysis."""
    if analysis is not None and analysis.authorization_status is not None:
        if analysis.authorization_status.is_authorized:
            return STATUS_LIKELY_AUTHORIZED
    return STATUS_NEEDS_REVIEW


class ReportService:
    """Owns the report list and the user's settings.

    Every mutation rewrites the whole stored list while holding one lock, so
    concurrent submit/delete calls cannot lose each other's updates.
    """

    def __init__(
        self,
        report_repo: ReportRepository,
        settings_repo: SettingsRepository,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_report_id,
    ) -> None:
        self._report_repo = report_repo
        self._settings_repo = settings_repo
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.Lock()
        self._reports = report_repo.load()
        self._settings = settings_repo.load()

    def reports(self) -> list[Report]:
        with self._lock:
            return list(self._reports)

    def find(self, report_id: str) -> Report | None:
        with self._lock:
            return next((r for r in self._reports if r.id == report_id), None)

    def submit(self, draft: ReportDraft) -> Report:
        """Create a report from a draft and store it first in the list.

        Raises:
            ReportValidationError: if title or location is blank.
        """
        if not draft.title.strip() or not draft.location.strip():
            raise ReportValidationError("Please fill in title and location fields.")

        status = draft.ai_analysis.authorization_status if draft.ai_analysis else None
        report = Report(
            id=self._id_factory(),
            title=draft.title,
            location=draft.location,
            category=draft.category,
            description=draft.description,
            timestamp=self._clock(),
            status=derive_status(draft.ai_analysis),
            image=draft.image,
            coordinates=draft.coordinates,
            ai_analysis=draft.ai_analysis,
            violations=list(status.violations) if status else [],
            ai_confidence=status.confidence if status else None,
        )
        with self._lock:
            self._reports = [report, *self._reports]
            self._report_repo.save(self._reports)
        Log.info(f"Report {report.id} submitted with status '{report.status}'")
        return report

    def delete(self, report_id: str) -> bool:
        """Remove one report. Returns False if no report has that id."""
        with self._lock:
            remaining = [r for r in self._reports if r.id != report_id]
            if len(remaining) == len(self._reports):
                return False
            self._reports = remaining
            self._report_repo.save(self._reports)
        Log.info(f"Report {report_id} deleted")
        return True

    def settings(self) -> AppSettings:
        with self._lock:
            return self._settings

    def update_settings(self, **changes: bool) -> AppSettings:
        """Apply flag changes; memory is only updated if the write succeeds."""
        with self._lock:
            updated = dataclasses.replace(self._settings, **changes)
            if self._settings_repo.save(updated):
                self._settings = updated
            return self._settings
