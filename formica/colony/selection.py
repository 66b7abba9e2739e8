"""Roulette-wheel selection shared by both colony variants.

Each candidate gets a desirability score::

    w(c) = tau(c) ** alpha * (1 / d(c)) ** beta * (1 + richness(c) * k)

and one candidate is drawn with probability proportional to its score.
``richness`` is 0 for pure tour construction, so the last factor drops
out.  The draw itself is isolated in ``roulette_select`` which takes the
uniform value as an argument: fixed weights plus a fixed draw always give
the same answer.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

EXPONENT_MIN = 0.0
EXPONENT_MAX = 10.0
RICHNESS_WEIGHT = 2.0


def desirability(
    pheromone: float,
    distance: float,
    alpha: float,
    beta: float,
    richness: float = 0.0,
    richness_weight: float = RICHNESS_WEIGHT,
) -> float:
    """Score one candidate.

    ``alpha`` and ``beta`` are clamped into ``[0, 10]``.  A zero (or
    negative) distance counts as attractiveness 1.0.  Non-finite results
    come back as 0.0 so the caller can treat them as non-viable.

    Args:
        pheromone: Trail strength toward the candidate.
        distance: Distance to the candidate.
        alpha: Pheromone exponent.
        beta: Heuristic (inverse distance) exponent.
        richness: Resource fraction at the candidate (0 for tours).
        richness_weight: Multiplier applied to ``richness``.

    Returns:
        The candidate weight, or 0.0 when it is not finite.
    """
    alpha = min(max(alpha, EXPONENT_MIN), EXPONENT_MAX)
    beta = min(max(beta, EXPONENT_MIN), EXPONENT_MAX)
    attractiveness = 1.0 / distance if distance > 0.0 else 1.0
    try:
        weight = (
            pheromone**alpha
            * attractiveness**beta
            * (1.0 + richness * richness_weight)
        )
    except (OverflowError, ValueError, ZeroDivisionError):
        return 0.0
    if isinstance(weight, complex) or not math.isfinite(weight):
        return 0.0
    return weight


def roulette_select(
    candidates: Sequence[int],
    weights: Sequence[float],
    draw: float,
) -> int | None:
    """Pick a candidate proportionally to its weight.

    Non-finite and non-positive weights are excluded.  ``draw`` is a
    uniform value in ``[0, 1)`` scaled by the total weight; the first
    candidate whose cumulative weight reaches it wins.  If rounding keeps
    the scan from matching, the first viable candidate is returned.

    Args:
        candidates: Candidate identifiers, parallel to ``weights``.
        weights: Desirability scores.
        draw: Uniform value in ``[0, 1)``.

    Returns:
        The chosen candidate, or None if nothing is viable.
    """
    viable = [
        (c, w)
        for c, w in zip(candidates, weights)
        if math.isfinite(w) and w > 0.0
    ]
    total = sum(w for _, w in viable)
    if not viable or total <= 0.0 or not math.isfinite(total):
        return None

    target = draw * total
    cumulative = 0.0
    for candidate, weight in viable:
        cumulative += weight
        if cumulative >= target:
            return candidate
    return viable[0][0]


def has_viable(weights: Sequence[float]) -> bool:
    """Return True if at least one weight can be selected."""
    return any(math.isfinite(w) and w > 0.0 for w in weights)


def select(
    candidates: Sequence[int],
    weights: Sequence[float],
    rng: Generator,
) -> int | None:
    """Roulette selection drawing from ``rng``.

    A value is only drawn when something is viable, so the number of
    draws per tick depends only on the weights.
    """
    if not has_viable(weights):
        return None
    return roulette_select(candidates, weights, float(rng.random()))
