"""Coverage strategy parameter bundles.

AIDEV-NOTE: A strategy only controls three things: the score threshold
below which a run stops, how strongly an accepted line marks coverage, and
an optional bonus for long segments. Bounded runs (finite target) scale
these with progress = iteration / target; unbounded runs use constants.
"""

from dataclasses import dataclass

from models import CoverageStrategy

BASE_SCORE_THRESHOLD = 0.01


@dataclass(frozen=True)
class CoveragePolicy:
    """Pure parameters derived from a CoverageStrategy."""

    strategy: CoverageStrategy
    strength_start: float  # bounded strength at progress 0
    strength_slope: float  # change in bounded strength per unit progress
    unbounded_strength: float
    threshold_slope: float = 0.0
    distance_bonus_weight: float = 0.0

    def score_threshold(self, iteration: int, target: int) -> float:
        """Minimum best score needed to keep going."""
        if target > 0 and self.threshold_slope:
            return BASE_SCORE_THRESHOLD + self.threshold_slope * (iteration / target)
        return BASE_SCORE_THRESHOLD

    def coverage_strength(self, iteration: int, target: int) -> float:
        """Marking strength for the line accepted at this iteration."""
        if target > 0:
            return self.strength_start + self.strength_slope * (iteration / target)
        return self.unbounded_strength

    def distance_bonus(self, lengths, radius: float):
        """Bonus rewarding longer segments, ``weight * length / (2 * radius)``.

        Works on scalars and numpy arrays alike.
        """
        if not self.distance_bonus_weight or radius <= 0:
            return lengths * 0.0
        return self.distance_bonus_weight * (lengths / (2.0 * radius))


POLICIES = {
    CoverageStrategy.DEFAULT: CoveragePolicy(
        CoverageStrategy.DEFAULT,
        strength_start=1.0,
        strength_slope=-0.5,
        unbounded_strength=0.6,
    ),
    CoverageStrategy.ADAPTIVE: CoveragePolicy(
        CoverageStrategy.ADAPTIVE,
        strength_start=1.0,
        strength_slope=-0.3,
        unbounded_strength=0.8,
    ),
    CoverageStrategy.DYNAMIC_THRESHOLD: CoveragePolicy(
        CoverageStrategy.DYNAMIC_THRESHOLD,
        strength_start=0.9,
        strength_slope=0.0,
        unbounded_strength=0.9,
        threshold_slope=0.02,
    ),
    CoverageStrategy.EXPLORATION_BOOST: CoveragePolicy(
        CoverageStrategy.EXPLORATION_BOOST,
        strength_start=0.5,
        strength_slope=0.4,
        unbounded_strength=0.7,
        distance_bonus_weight=0.1,
    ),
}


def get_policy(strategy) -> CoveragePolicy:
    """Look up the policy for a strategy (enum member or its integer value)."""
    try:
        return POLICIES[CoverageStrategy(strategy)]
    except ValueError:
        raise ValueError(f"Coverage strategy must be 0-3, got {strategy!r}") from None


def resolve_strategy(requested, max_strings: int) -> CoverageStrategy:
    """Apply the caller-side strategy remapping.

    Unbounded runs always use DEFAULT. Bounded runs that asked for DEFAULT
    get ADAPTIVE instead. Any other combination is used as requested.
    """
    requested = CoverageStrategy(requested)
    if max_strings <= 0:
        return CoverageStrategy.DEFAULT
    if requested is CoverageStrategy.DEFAULT:
        return CoverageStrategy.ADAPTIVE
    return requested
