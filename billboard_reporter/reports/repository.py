from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from billboard_reporter.logging.logger import Log
from billboard_reporter.reports.exceptions import ReportSerializationError
from billboard_reporter.reports.models import (
    STATUS_LIKELY_AUTHORIZED,
    STATUS_NEEDS_REVIEW,
    AppSettings,
    Report,
    ReportCategory,
)
from billboard_reporter.reports.serialization import (
    report_from_dict,
    report_to_dict,
    settings_from_dict,
    settings_to_dict,
)
from billboard_reporter.storage.exceptions import StorageError
from billboard_reporter.storage.json_store import JsonFileStore

REPORTS_KEY = "billboardReports"
SETTINGS_KEY = "appSettings"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def sample_reports(now: datetime) -> list[Report]:
    """Example reports stored on first run."""
    return [
        Report(
            id="1",
            title="Coca-Cola Billboard",
            location="Highway 101, Mile 23",
            category=ReportCategory.ADVERTISEMENT,
            description="Large red billboard advertising Coca-Cola",
            timestamp=now - timedelta(hours=2),
            status=STATUS_LIKELY_AUTHORIZED,
            violations=[],
            ai_confidence=0.85,
        ),
        Report(
            id="2",
            title="McDonald's Ad",
            location="Downtown Main St",
            category=ReportCategory.ADVERTISEMENT,
            description="Yellow arches billboard for McDonald's",
            timestamp=now - timedelta(hours=24),
            status=STATUS_NEEDS_REVIEW,
            violations=["Billboard appears larger than permitted size for this zone"],
            ai_confidence=0.45,
        ),
    ]


class ReportRepository:
    """Reads and writes the whole report list as one stored document.

    Persistence is best effort: failures are logged and never raised.
    Records that cannot be parsed are skipped on load and written back
    unchanged on save. If the document itself cannot be read, saving is
    refused until a later load succeeds.
    """

    def __init__(
        self,
        store: JsonFileStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._unreadable_records: list[Any] = []
        self._document_unreadable = False

    def load(self) -> list[Report]:
        """Return all stored reports, seeding the samples on first run."""
        self._unreadable_records = []
        self._document_unreadable = False
        try:
            raw = self._store.get_item(REPORTS_KEY)
        except StorageError as exc:
            Log.error(f"Error loading stored reports: {exc}")
            self._document_unreadable = True
            return []

        if raw is None:
            reports = sample_reports(self._clock())
            Log.info(f"No stored reports found, seeding {len(reports)} samples")
            self.save(reports)
            return reports

        if not isinstance(raw, list):
            Log.error("Error loading stored reports: document is not a list")
            self._document_unreadable = True
            return []

        reports = []
        for index, item in enumerate(raw):
            try:
                reports.append(report_from_dict(item))
            except ReportSerializationError as exc:
                Log.warning(f"Skipping stored report at index {index}: {exc}")
                self._unreadable_records.append(item)
        Log.debug(f"Loaded {len(reports)} reports")
        return reports

    def save(self, reports: list[Report]) -> bool:
        """Replace the stored list. Returns False if the write failed."""
        if self._document_unreadable:
            Log.error("Error saving reports: stored document is unreadable, not overwriting")
            return False
        records = [report_to_dict(r) for r in reports] + self._unreadable_records
        try:
            self._store.set_item(REPORTS_KEY, records)
        except StorageError as exc:
            Log.error(f"Error saving reports: {exc}")
            return False
        return True


class SettingsRepository:
    def __init__(self, store: JsonFileStore) -> None:
        self._store = store

    def load(self) -> AppSettings:
        """Return stored settings, or defaults when absent or unreadable."""
        try:
            raw = self._store.get_item(SETTINGS_KEY)
        except StorageError as exc:
            Log.error(f"Error loading settings: {exc}")
            return AppSettings()
        if raw is None:
            return AppSettings()
        try:
            return settings_from_dict(raw)
        except ReportSerializationError as exc:
            Log.error(f"Error loading settings: {exc}")
            return AppSettings()

    def save(self, settings: AppSettings) -> bool:
        try:
            self._store.set_item(SETTINGS_KEY, settings_to_dict(settings))
        except StorageError as exc:
            Log.error(f"Error saving settings: {exc}")
            return False
        return True
