"""Placeholder lookups used until real zoning and geofencing data exist."""

import random

from billboard_reporter.compliance.base import ProtectedSiteLookup, ZoneSizeLookup
from billboard_reporter.compliance.models import Coordinates
from billboard_reporter.vision.models import BillboardSize


class FixedZoneSizeLookup(ZoneSizeLookup):
    """Answers the same permitted size for every location."""

    def __init__(self, size: BillboardSize | None = BillboardSize.MEDIUM) -> None:
        self._size = size

    def max_allowed_size(self, coordinates: Coordinates | None) -> BillboardSize | None:
        _ = coordinates
        return self._size


class FixedProtectedSiteLookup(ProtectedSiteLookup):
    def __init__(self, near: bool = False) -> None:
        self._near = near

    def is_near_protected_site(self, coordinates: Coordinates | None) -> bool:
        _ = coordinates
        return self._near


class RandomProtectedSiteLookup(ProtectedSiteLookup):
    """Reports proximity when a random draw exceeds ``threshold``.

    With the default threshold of 0.7, roughly three locations in ten are
    flagged.
    """

    def __init__(self, threshold: float = 0.7, rng: random.Random | None = None) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self._threshold = threshold
        self._rng = rng if rng is not None else random.Random()

    def is_near_protected_site(self, coordinates: Coordinates | None) -> bool:
        _ = coordinates
        return self._rng.random() > self._threshold
