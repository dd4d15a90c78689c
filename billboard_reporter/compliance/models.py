from dataclasses import dataclass, field


@dataclass(frozen=True)
class Coordinates:
    """Geographic position of a reported billboard."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class AuthorizationStatus:
    """Outcome of the compliance checks.

    ``violations`` keeps the order in which the checks fired.
    ``recommendations`` is reserved and currently always empty.
    """

    is_authorized: bool = True
    confidence: float = 0.8
    violations: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
