"""
Timeline Module

Builds the chronological view of political events inside a lookback window,
with a running cumulative market impact.
"""

from datetime import datetime, date
from typing import Dict, List, Optional, Any, Sequence
from dataclasses import dataclass

import pandas as pd
from loguru import logger

from ..data.political_events import (
    PoliticalEvent,
    PoliticalAlignment,
    ExpectedImpact,
    coerce_enum,
)


# Timeframe selector token -> lookback months
TIMEFRAME_MONTHS = {
    '1Y': 12,
    '3M': 3,
    '1M': 1,
}
DEFAULT_WINDOW_MONTHS = 48

ALL_ALIGNMENTS = 'all'

EXPECTED_IMPACT_SCORES = {
    ExpectedImpact.POSITIVE: 5,
    ExpectedImpact.NEGATIVE: -5,
    ExpectedImpact.NEUTRAL: 0,
}


@dataclass
class TimelinePoint:
    """One event on the timeline. Impacts are in percentage points."""
    date: date
    title: str
    expected_impact_score: int
    actual_impact: float
    alignment: str
    severity: str
    cumulative_impact: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date.isoformat(),
            'title': self.title,
            'expected_impact_score': self.expected_impact_score,
            'actual_impact': self.actual_impact,
            'alignment': self.alignment,
            'severity': self.severity,
            'cumulative_impact': self.cumulative_impact,
        }


def resolve_window_months(timeframe: str) -> int:
    """Map a timeframe selector token onto a lookback window in months.

    Tokens without a mapping (1D and 1W included) fall back to 48 months.
    """
    if timeframe in TIMEFRAME_MONTHS:
        return TIMEFRAME_MONTHS[timeframe]

    logger.warning(
        f"Timeframe {timeframe!r} has no window mapping, "
        f"using default of {DEFAULT_WINDOW_MONTHS} months"
    )
    return DEFAULT_WINDOW_MONTHS


def build_timeline(
    events: Sequence[PoliticalEvent],
    window_months: int,
    alignment_filter: str = ALL_ALIGNMENTS,
    now: Optional[datetime] = None
) -> List[TimelinePoint]:
    """Build the event timeline for a lookback window.

    Args:
        events: Event catalog
        window_months: Lookback window in months
        alignment_filter: 'all' or one of the political alignments
        now: Reference time, defaults to the current time

    Returns:
        Points in ascending date order. cumulative_impact restarts at 0 for
        every call and includes the point it is reported on.

    Raises:
        InvalidArgument: if alignment_filter is not 'all' or an alignment
    """
    alignment = None
    if alignment_filter != ALL_ALIGNMENTS:
        alignment = coerce_enum(PoliticalAlignment, alignment_filter, 'alignment filter')

    if now is None:
        now = datetime.now()
    reference = pd.Timestamp(now)
    # Event dates are naive calendar dates
    if reference.tzinfo is not None:
        reference = reference.tz_localize(None)
    cutoff = reference - pd.DateOffset(months=window_months)

    filtered = [
        e for e in events
        if pd.Timestamp(e.date) >= cutoff and (alignment is None or e.alignment is alignment)
    ]

    cumulative_impact = 0.0
    points = []
    for event in sorted(filtered, key=lambda e: e.date):
        actual_impact = (event.actual_impact or 0.0) * 100
        cumulative_impact += actual_impact

        points.append(TimelinePoint(
            date=event.date,
            title=event.title,
            expected_impact_score=EXPECTED_IMPACT_SCORES[event.expected_impact],
            actual_impact=actual_impact,
            alignment=event.alignment.value,
            severity=event.severity.value,
            cumulative_impact=cumulative_impact,
        ))

    logger.debug(
        f"Timeline: {len(points)} events since {cutoff.date()} "
        f"(alignment={alignment_filter})"
    )
    return points


def timeline_for_timeframe(
    events: Sequence[PoliticalEvent],
    timeframe: str,
    alignment_filter: str = ALL_ALIGNMENTS,
    now: Optional[datetime] = None
) -> List[TimelinePoint]:
    """Build the timeline for a selector token such as '1Y' or '3M'."""
    return build_timeline(events, resolve_window_months(timeframe), alignment_filter, now)


def timeline_to_dataframe(points: Sequence[TimelinePoint]) -> pd.DataFrame:
    """Convert timeline points to a date-indexed DataFrame."""
    if not points:
        return pd.DataFrame(columns=[
            'title', 'expected_impact_score', 'actual_impact',
            'alignment', 'severity', 'cumulative_impact',
        ])

    df = pd.DataFrame([p.to_dict() for p in points])
    df['date'] = pd.to_datetime(df['date'])
    return df.set_index('date')
