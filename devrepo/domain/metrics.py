"""Derived repository metrics.

All three indicators divide by ``count + 1`` so that zero stars or zero forks
never divide by zero. Results are rounded half up and left unclamped: a
repository with far more open issues than stars gets a negative health score.
"""
import math
from datetime import datetime, timezone
from typing import Optional, Tuple
from devrepo.domain.models import RawMetricsSnapshot, DerivedMetrics


UNKNOWN_ACTIVITY = "Unknown"
SECONDS_PER_DAY = 60 * 60 * 24


def round_half_up(value: float) -> int:
    """Round to the nearest integer, resolving .5 toward positive infinity."""
    return int(math.floor(value + 0.5))


def health_score(stars: int, issues: int) -> int:
    return round_half_up((1 - issues / (stars + 1)) * 100)


def trending_factor(stars: int, forks: int) -> int:
    return round_half_up((stars / (forks + 1)) * 10)


def activity_level(pushed_at: Optional[datetime], now: datetime) -> str:
    """Days since the last push as ``"<N> days"``, or ``"Unknown"``."""
    if pushed_at is None:
        return UNKNOWN_ACTIVITY
    elapsed = (now - pushed_at).total_seconds() / SECONDS_PER_DAY
    return f"{round_half_up(elapsed)} days"


def split_activity_level(level: str) -> Tuple[str, str]:
    """Split an activity label into its value and unit tokens.

    ``"12 days"`` gives ``("12", "days")``; ``"Unknown"`` gives ``("Unknown", "")``.
    """
    value, _, unit = level.partition(" ")
    return value, unit


def derive_metrics(
    snapshot: RawMetricsSnapshot,
    now: Optional[datetime] = None
) -> DerivedMetrics:
    """Compute health score, activity level and trending factor.

    Args:
        snapshot: Metrics fetched from the provider
        now: Reference time for the activity level (defaults to current UTC time)

    Returns:
        DerivedMetrics for the snapshot
    """
    if now is None:
        now = datetime.now(timezone.utc)

    return DerivedMetrics(
        health_score=health_score(snapshot.stars, snapshot.issues),
        activity_level=activity_level(snapshot.pushed_at, now),
        trending_factor=trending_factor(snapshot.stars, snapshot.forks)
    )
