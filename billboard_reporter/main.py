import argparse
import dataclasses
import sys
from pathlib import Path

from billboard_reporter.compliance.models import Coordinates
from billboard_reporter.config.settings import Settings
from billboard_reporter.logging.logger import Log
from billboard_reporter.processor.processor import build_processor
from billboard_reporter.reports.exceptions import ReportValidationError
from billboard_reporter.reports.formatting import (
    analysis_details,
    analysis_summary,
    apply_analysis_to_draft,
    format_percent,
    format_timestamp,
    maps_url,
    submission_message,
)
from billboard_reporter.reports.models import ReportCategory, ReportDraft
from billboard_reporter.reports.repository import ReportRepository, SettingsRepository, utc_now
from billboard_reporter.reports.service import ReportService
from billboard_reporter.storage.json_store import JsonFileStore
from billboard_reporter.vision.models import Analysis

_SWITCH = {"on": True, "off": False}


def build_service(settings: Settings) -> ReportService:
    """Build a ReportService backed by the configured data directory."""
    store = JsonFileStore(Path(settings.data_dir))
    return ReportService(ReportRepository(store), SettingsRepository(store))


def _coordinates(args: argparse.Namespace) -> Coordinates | None:
    if args.lat is None or args.lon is None:
        return None
    return Coordinates(latitude=args.lat, longitude=args.lon)


def _analyze_image(
    settings: Settings,
    image: str,
    coordinates: Coordinates | None,
) -> Analysis | None:
    """Run one analysis; None if the vision client is misconfigured or fails."""
    try:
        processor = build_processor(settings)
    except ValueError as exc:
        print(f"Vision service is not configured: {exc}", file=sys.stderr)
        return None
    try:
        return processor.analyze(Path(image), coordinates)
    finally:
        processor.close()


def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    analysis = _analyze_image(settings, args.image, _coordinates(args))
    if analysis is None:
        print("Could not analyze image. Please try again.", file=sys.stderr)
        return 1
    print(analysis_summary(analysis))
    if args.details:
        print()
        print(analysis_details(analysis))
    return 0


def _cmd_submit(args: argparse.Namespace, settings: Settings) -> int:
    service = build_service(settings)
    draft = ReportDraft(
        title=args.title or "",
        location=args.location or "",
        description=args.description or "",
        category=ReportCategory(args.category),
        image=args.image,
        coordinates=_coordinates(args),
    )
    if args.analyze:
        if args.image is None:
            print("--analyze requires --image", file=sys.stderr)
            return 1
        analysis = _analyze_image(settings, args.image, draft.coordinates)
        if analysis is None:
            print("Could not analyze image. Continuing without AI data.", file=sys.stderr)
        else:
            print(analysis_summary(analysis))
            print()
            draft = apply_analysis_to_draft(draft, analysis)
            if args.title:
                draft = dataclasses.replace(draft, title=args.title)

    try:
        report = service.submit(draft)
    except ReportValidationError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(submission_message(report))
    print(f"Report id: {report.id}")
    return 0


def _cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    _ = args
    service = build_service(settings)
    now = utc_now()
    for report in service.reports():
        print(
            f"{report.id}\t{report.title}\t{report.location}\t"
            f"{report.status}\t{format_timestamp(report.timestamp, now)}"
        )
    return 0


def _cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    service = build_service(settings)
    report = service.find(args.report_id)
    if report is None:
        print(f"Report {args.report_id} not found", file=sys.stderr)
        return 1
    print(f"{report.title} ({report.category.label})")
    print(f"Location: {report.location}")
    print(f"Map: {maps_url(report.coordinates, report.location, args.platform)}")
    print(f"Status: {report.status}")
    print(f"Submitted: {format_timestamp(report.timestamp, utc_now())}")
    if report.ai_confidence is not None:
        print(f"AI Confidence: {format_percent(report.ai_confidence)}")
    if report.description:
        print()
        print(report.description)
    if report.violations:
        print()
        print("Potential Violations:")
        for violation in report.violations:
            print(f"- {violation}")
    if report.ai_analysis is not None:
        print()
        print(analysis_details(report.ai_analysis))
    return 0


def _cmd_delete(args: argparse.Namespace, settings: Settings) -> int:
    service = build_service(settings)
    if not service.delete(args.report_id):
        print(f"Report {args.report_id} not found", file=sys.stderr)
        return 1
    print(f"Deleted report {args.report_id}")
    return 0


def _cmd_settings(args: argparse.Namespace, settings: Settings) -> int:
    service = build_service(settings)
    changes = {
        name: _SWITCH[value]
        for name, value in (
            ("notifications", args.notifications),
            ("location_services", args.location_services),
            ("auto_location", args.auto_location),
        )
        if value is not None
    }
    current = service.update_settings(**changes) if changes else service.settings()
    for field in dataclasses.fields(current):
        print(f"{field.name}: {'on' if getattr(current, field.name) else 'off'}")
    return 0


def _add_coordinate_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", type=float, help="Billboard latitude")
    parser.add_argument("--lon", type=float, help="Billboard longitude")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="billboard-reporter",
        description="Report billboards and check them for possible permit violations.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a billboard photo")
    analyze.add_argument("image")
    analyze.add_argument("--details", action="store_true", help="Show detected text and objects")
    _add_coordinate_args(analyze)
    analyze.set_defaults(handler=_cmd_analyze)

    submit = sub.add_parser("submit", help="Submit a new report")
    submit.add_argument("--title")
    submit.add_argument("--location")
    submit.add_argument("--description")
    submit.add_argument(
        "--category",
        choices=[c.value for c in ReportCategory],
        default=ReportCategory.ADVERTISEMENT.value,
    )
    submit.add_argument("--image")
    submit.add_argument("--analyze", action="store_true", help="Analyze --image before submitting")
    _add_coordinate_args(submit)
    submit.set_defaults(handler=_cmd_submit)

    list_cmd = sub.add_parser("list", help="List stored reports")
    list_cmd.set_defaults(handler=_cmd_list)

    show = sub.add_parser("show", help="Show one report")
    show.add_argument("report_id")
    show.add_argument("--platform", choices=["android", "ios"], default="android")
    show.set_defaults(handler=_cmd_show)

    delete = sub.add_parser("delete", help="Delete a report")
    delete.add_argument("report_id")
    delete.set_defaults(handler=_cmd_delete)

    settings_cmd = sub.add_parser("settings", help="Show or change settings")
    settings_cmd.add_argument("--notifications", choices=list(_SWITCH))
    settings_cmd.add_argument("--location-services", choices=list(_SWITCH))
    settings_cmd.add_argument("--auto-location", choices=list(_SWITCH))
    settings_cmd.set_defaults(handler=_cmd_settings)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> dispatch command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
