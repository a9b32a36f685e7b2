"""Greedy, coverage-aware path builder.

AIDEV-NOTE: This is the core of the generator. Starting at nail 0 it
repeatedly scores every allowed next nail, takes the best one, and marks
the chosen segment in a run-local coverage field so later lines avoid
piling onto the same pixels. Stagnation and oscillation rules keep the
greedy walk from getting stuck, and an absolute iteration cap bounds the
worst-case run time.

The tuned constants below change the produced art. Keep them as they are.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from models import BuildResult, CoverageStrategy, LayoutKind, NailLayout, StopReason

from .fields import DEFAULT_CONTRAST, CoverageField, LineScorer, as_darkness_field
from .strategy import get_policy

logger = logging.getLogger(__name__)

UNBOUNDED_ITERATION_LIMIT = 10000
SCORE_EPSILON = 1e-6


@dataclass(frozen=True)
class VariantParams:
    """Tuned heuristics for one layout kind."""

    recency_window: int
    progress_interval: int

    # Circular variant: oscillation stop and forced exploration jumps
    detect_oscillation: bool = False
    oscillation_after: int = 100
    oscillation_limit: int = 20
    force_exploration: bool = False
    stagnation_tolerance: float = 0.0005
    stagnation_limit: int = 30

    # Rectangular variant: stop on a long plateau of identical scores
    plateau_after: int = 0
    plateau_limit: int = 0

    # Overrides the strategy's marking strength when set
    fixed_strength: Optional[float] = None
    use_distance_bonus: bool = True


CIRCULAR_PARAMS = VariantParams(
    recency_window=7,
    progress_interval=100,
    detect_oscillation=True,
    force_exploration=True,
)

RECTANGULAR_PARAMS = VariantParams(
    recency_window=5,
    progress_interval=50,
    plateau_after=2000,
    plateau_limit=1500,
    fixed_strength=1.0,
    use_distance_bonus=False,
)

VARIANTS = {
    LayoutKind.CIRCULAR: CIRCULAR_PARAMS,
    LayoutKind.RECTANGULAR: RECTANGULAR_PARAMS,
}

StepCallback = Callable[[int, int, CoverageField], None]


def exploration_jump(current: int, iteration: int, num_nails: int) -> int:
    """Deterministic nail to jump to when the walk has stagnated."""
    offset = 1 + (iteration % 11) + (iteration // 100)
    target = (current + offset) % num_nails
    while target == current:
        target = (target + 1) % num_nails
    return target


class PathBuilder:
    """Builds one nail sequence for one darkness field.

    Each call to :meth:`build` owns a fresh CoverageField for its whole
    lifetime, so a builder can be reused and runs never share state.
    """

    def __init__(
        self,
        darkness,
        layout: NailLayout,
        contrast_factor: float = DEFAULT_CONTRAST,
        strategy: CoverageStrategy = CoverageStrategy.DEFAULT,
    ):
        self.darkness = as_darkness_field(darkness)
        if len(layout) == 0:
            raise ValueError("Nail layout has no nails")
        if self.darkness.shape != (layout.height, layout.width):
            raise ValueError(
                f"Darkness field shape {self.darkness.shape} does not match "
                f"layout size {layout.width}x{layout.height}"
            )
        self.layout = layout
        self.contrast_factor = contrast_factor
        self.policy = get_policy(strategy)
        self.params = VARIANTS[layout.kind]

    def build(
        self,
        max_strings: int = 0,
        on_step: Optional[StepCallback] = None,
    ) -> BuildResult:
        """Run the greedy walk.

        Args:
            max_strings: Target sequence length, 0 for unbounded
            on_step: Optional callback invoked after every accepted segment
                with (iteration, chosen nail, coverage field)

        Returns:
            BuildResult with the sequence and the reason the run stopped
        """
        params = self.params
        policy = self.policy
        layout = self.layout
        height, width = self.darkness.shape

        target = max(0, max_strings)
        internal_limit = target if target > 0 else UNBOUNDED_ITERATION_LIMIT

        if target > 0:
            logger.info("Target strings: %d", target)
        else:
            logger.info("Target strings: unlimited (will stop when no improvement)")
        logger.info(
            "Building %s path over %d nails, strategy %s, contrast %.2f",
            layout.kind.value,
            len(layout),
            policy.strategy.label,
            self.contrast_factor,
        )

        coverage = CoverageField(width, height)
        scorer = LineScorer(self.darkness, coverage, self.contrast_factor)
        points = layout.as_array()
        num_nails = len(points)
        with_bonus = params.use_distance_bonus and policy.distance_bonus_weight > 0

        sequence = [0]
        current = 0

        last_best_score = 1.0
        last_score = -1.0
        second_last_score = -1.0
        stagnant_count = 0
        alternating_count = 0
        plateau_count = 0
        best_score = 0.0

        stop_reason = StopReason.ITERATION_LIMIT
        passes = 0

        for iteration in range(internal_limit - 1):
            passes += 1
            scores = scorer.score_fan(layout[current], points)

            if with_bonus:
                offsets = points - points[current]
                lengths = np.sqrt((offsets * offsets).sum(axis=1))
                scores = scores + policy.distance_bonus(lengths, layout.radius)

            # Never connect a nail to itself or to a recently visited nail
            scores[current] = -np.inf
            scores[sequence[-params.recency_window:]] = -np.inf

            best_nail = int(np.argmax(scores))
            best_score = float(scores[best_nail])

            if best_score == -np.inf:
                stop_reason = StopReason.NO_CANDIDATE
                logger.info("Stopping: no candidate nail left after recency filter")
                break

            threshold = policy.score_threshold(iteration, target)
            if best_score < threshold:
                stop_reason = StopReason.SCORE_THRESHOLD
                logger.info(
                    "Stopping: Score too low (%.6f), no more meaningful connections",
                    best_score,
                )
                break

            if params.detect_oscillation and iteration > params.oscillation_after:
                if (
                    abs(best_score - second_last_score) < SCORE_EPSILON
                    and abs(best_score - last_score) > SCORE_EPSILON
                ):
                    alternating_count += 1
                    if alternating_count >= params.oscillation_limit:
                        stop_reason = StopReason.OSCILLATION
                        logger.info(
                            "Stopping: Detected alternating pattern between scores %.6f and %.6f",
                            best_score,
                            last_score,
                        )
                        break
                else:
                    alternating_count = 0

            if params.force_exploration:
                if best_score >= last_best_score - params.stagnation_tolerance:
                    stagnant_count += 1
                else:
                    stagnant_count = 0

                if stagnant_count > params.stagnation_limit:
                    best_nail = exploration_jump(current, iteration, num_nails)
                    stagnant_count = 0

            if params.plateau_limit and iteration >= params.plateau_after:
                if abs(best_score - last_score) < SCORE_EPSILON:
                    plateau_count += 1
                    if plateau_count >= params.plateau_limit:
                        stop_reason = StopReason.STAGNATION
                        logger.info(
                            "Stopping: Score has not changed for %d iterations (score: %.6f)",
                            params.plateau_limit,
                            best_score,
                        )
                        break
                else:
                    plateau_count = 0

            if params.fixed_strength is not None:
                strength = params.fixed_strength
            else:
                strength = policy.coverage_strength(iteration, target)
            coverage.mark_line(layout[current], layout[best_nail], strength)

            sequence.append(best_nail)
            current = best_nail
            second_last_score = last_score
            last_score = best_score
            last_best_score = best_score

            if on_step is not None:
                on_step(iteration, best_nail, coverage)

            if (iteration + 1) % params.progress_interval == 0:
                logger.info(
                    "Generated %d strings, last score: %.6f", iteration + 1, best_score
                )
        else:
            logger.debug("Reached iteration limit of %d", internal_limit)

        logger.info("Generated %d total strings", len(sequence))
        return BuildResult(
            sequence=sequence,
            stop_reason=stop_reason,
            iterations=passes,
            last_score=best_score,
        )


def generate_sequence(
    darkness,
    layout: NailLayout,
    max_strings: int = 0,
    contrast_factor: float = DEFAULT_CONTRAST,
    strategy: CoverageStrategy = CoverageStrategy.DEFAULT,
) -> "list[int]":
    """Convenience wrapper returning only the nail sequence."""
    builder = PathBuilder(darkness, layout, contrast_factor, strategy)
    return builder.build(max_strings).sequence
