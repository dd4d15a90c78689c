"""Heuristic permit-compliance checks over a parsed vision analysis."""

from billboard_reporter.compliance.base import ProtectedSiteLookup, ZoneSizeLookup
from billboard_reporter.compliance.models import AuthorizationStatus, Coordinates
from billboard_reporter.logging.logger import Log
from billboard_reporter.vision.models import Analysis, BillboardSize

PROHIBITED_TERMS = ("tobacco", "alcohol", "gambling", "casino")
PERMIT_TERMS = ("permit", "license")

OVERSIZED_VIOLATION = "Billboard appears larger than permitted size for this zone"
PROHIBITED_VIOLATION = "Contains potentially prohibited content: {term}"
PROXIMITY_VIOLATION = "Billboard may be too close to school/religious institution"
NO_PERMIT_VIOLATION = "No visible permit information detected"

_INITIAL_CONFIDENCE = 0.5
_PROXIMITY_CONFIDENCE = 0.3
_NO_PERMIT_PENALTY = 0.2
_MIN_CONFIDENCE = 0.1
_CLEAN_CONFIDENCE = 0.8
_PER_VIOLATION_PENALTY = 0.15


def evaluate(
    analysis: Analysis,
    coordinates: Coordinates | None,
    zone_size_lookup: ZoneSizeLookup,
    proximity_lookup: ProtectedSiteLookup,
) -> AuthorizationStatus:
    """Run the four compliance checks in order and score the result.

    Checks: size against the zone limit, prohibited terms in the text,
    proximity to a protected site, visible permit text. Violations are
    listed in check order. The final confidence depends only on how many
    violations fired; the per-check adjustments are superseded by it.
    """
    violations: list[str] = []
    is_authorized = True
    confidence = _INITIAL_CONFIDENCE
    text = analysis.extracted_text.lower()

    max_allowed = zone_size_lookup.max_allowed_size(coordinates)
    if (
        analysis.billboard_info.estimated_size == BillboardSize.LARGE
        and max_allowed == BillboardSize.MEDIUM
    ):
        violations.append(OVERSIZED_VIOLATION)
        is_authorized = False

    for term in PROHIBITED_TERMS:
        if term in text:
            violations.append(PROHIBITED_VIOLATION.format(term=term))
            is_authorized = False

    if proximity_lookup.is_near_protected_site(coordinates):
        violations.append(PROXIMITY_VIOLATION)
        confidence = _PROXIMITY_CONFIDENCE

    if not any(term in text for term in PERMIT_TERMS):
        violations.append(NO_PERMIT_VIOLATION)
        confidence = max(confidence - _NO_PERMIT_PENALTY, _MIN_CONFIDENCE)

    if violations:
        confidence = max(_MIN_CONFIDENCE, _CLEAN_CONFIDENCE - len(violations) * _PER_VIOLATION_PENALTY)
    else:
        confidence = _CLEAN_CONFIDENCE

    return AuthorizationStatus(
        is_authorized=is_authorized,
        confidence=confidence,
        violations=violations,
        recommendations=[],
    )


class ComplianceEvaluator:
    """Binds the zoning and proximity lookups to ``evaluate``."""

    def __init__(
        self,
        zone_size_lookup: ZoneSizeLookup,
        proximity_lookup: ProtectedSiteLookup,
    ) -> None:
        self._zone_size_lookup = zone_size_lookup
        self._proximity_lookup = proximity_lookup

    def evaluate(
        self,
        analysis: Analysis,
        coordinates: Coordinates | None = None,
    ) -> AuthorizationStatus:
        status = evaluate(
            analysis,
            coordinates,
            self._zone_size_lookup,
            self._proximity_lookup,
        )
        Log.info(
            f"Compliance checks complete: {len(status.violations)} violations, "
            f"confidence {status.confidence:.2f}"
        )
        return status
