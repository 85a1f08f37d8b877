"""
Correlation Analyzer Module

Measures how political events have historically moved each sector:
average impact by political alignment, how often the analyst's expected
direction was right, and how dispersed the realized moves were.
"""

from typing import Dict, List, Optional, Any, Sequence, Tuple
from dataclasses import dataclass

import pandas as pd
import numpy as np
from loguru import logger

from ..data.political_events import (
    PoliticalEvent,
    PoliticalAlignment,
    ExpectedImpact,
    MarketSector,
)
from ..exceptions import InvalidArgument


# Sectors covered by correlation analysis, in output tie-break order
CORRELATION_SECTORS: Tuple[str, ...] = (
    'healthcare', 'energy', 'defense', 'financial', 'tech',
    'infrastructure', 'renewable', 'crypto', 'commodities',
)


@dataclass
class SectorCorrelation:
    """Alignment impact and prediction accuracy for one sector.

    Impacts are in percentage points; accuracy and confidence are percentages.
    """
    sector: str
    left_wing_avg_impact: float
    right_wing_avg_impact: float
    directional_accuracy: float
    sample_size: int
    confidence_level: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sector': self.sector,
            'left_wing_avg_impact': self.left_wing_avg_impact,
            'right_wing_avg_impact': self.right_wing_avg_impact,
            'directional_accuracy': self.directional_accuracy,
            'sample_size': self.sample_size,
            'confidence_level': self.confidence_level,
        }


@dataclass
class SectorPerformance:
    """Size and dispersion of realized event impacts for one sector."""
    sector: str
    avg_abs_impact: float
    positive_event_count: int
    negative_event_count: int
    volatility: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sector': self.sector,
            'avg_abs_impact': self.avg_abs_impact,
            'positive_event_count': self.positive_event_count,
            'negative_event_count': self.negative_event_count,
            'volatility': self.volatility,
        }


def _mean(values: Sequence[float]) -> float:
    """Mean that returns 0.0 for an empty sequence instead of NaN."""
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))


def _sign(value: float) -> int:
    return int(np.sign(value))


class CorrelationAnalyzer:
    """Computes per-sector correlation and performance statistics."""

    EXPECTED_SIGN = {
        ExpectedImpact.POSITIVE: 1,
        ExpectedImpact.NEGATIVE: -1,
        ExpectedImpact.NEUTRAL: 0,
    }

    BASE_CONFIDENCE = 60
    CONFIDENCE_PER_EVENT = 3
    MAX_CONFIDENCE = 95

    def analyze(
        self,
        events: Sequence[PoliticalEvent],
        sectors: Optional[Sequence[str]] = None
    ) -> Tuple[List[SectorCorrelation], List[SectorPerformance]]:
        """Analyze each sector against the event catalog.

        Sectors with no matching events are left out of both results.

        Args:
            events: Event catalog
            sectors: Sector names to analyze. Defaults to CORRELATION_SECTORS.

        Returns:
            (correlations sorted by directional accuracy,
             performance sorted by average absolute impact), both descending
        """
        if sectors is None:
            sectors = CORRELATION_SECTORS
        sectors = [s.value if isinstance(s, MarketSector) else s for s in sectors]

        for sector in sectors:
            if sector not in CORRELATION_SECTORS:
                raise InvalidArgument(
                    f"Invalid sector {sector!r} (expected one of: {', '.join(CORRELATION_SECTORS)})"
                )

        correlations = []
        performance = []

        for sector in sectors:
            relevant = [e for e in events if e.affects(sector)]

            if not relevant:
                logger.debug(f"No events affect {sector}, skipping")
                continue

            correlations.append(self._correlate_sector(sector, relevant))
            performance.append(self._sector_performance(sector, relevant))

        # sorted() is stable, so ties keep sector order
        correlations = sorted(correlations, key=lambda c: c.directional_accuracy, reverse=True)
        performance = sorted(performance, key=lambda p: p.avg_abs_impact, reverse=True)

        logger.info(f"Analyzed {len(correlations)} sectors across {len(events)} events")
        return correlations, performance

    def _correlate_sector(self, sector: str, relevant: List[PoliticalEvent]) -> SectorCorrelation:
        """Alignment averages and directional accuracy for one sector."""
        left_impacts = [e.actual_impact or 0.0 for e in relevant if e.alignment is PoliticalAlignment.LEFT]
        right_impacts = [e.actual_impact or 0.0 for e in relevant if e.alignment is PoliticalAlignment.RIGHT]

        correct = sum(
            1 for e in relevant
            if _sign(e.actual_impact or 0.0) == self.EXPECTED_SIGN[e.expected_impact]
        )
        accuracy = correct / len(relevant) * 100

        # Mock statistical confidence, grows with sample size
        confidence = min(self.MAX_CONFIDENCE, self.BASE_CONFIDENCE + self.CONFIDENCE_PER_EVENT * len(relevant))

        return SectorCorrelation(
            sector=sector,
            left_wing_avg_impact=_mean(left_impacts) * 100,
            right_wing_avg_impact=_mean(right_impacts) * 100,
            directional_accuracy=accuracy,
            sample_size=len(relevant),
            confidence_level=float(confidence),
        )

    def _sector_performance(self, sector: str, relevant: List[PoliticalEvent]) -> SectorPerformance:
        """Average absolute impact and population volatility for one sector."""
        impacts = np.array([e.actual_impact or 0.0 for e in relevant])

        return SectorPerformance(
            sector=sector,
            avg_abs_impact=_mean(np.abs(impacts)) * 100,
            positive_event_count=int((impacts > 0).sum()),
            negative_event_count=int((impacts < 0).sum()),
            # np.std divides by n (population standard deviation)
            volatility=float(np.std(impacts)) * 100,
        )

    def summarize(
        self,
        correlations: Sequence[SectorCorrelation],
        performance: Sequence[SectorPerformance]
    ) -> Dict[str, Any]:
        """Summarize analysis results across sectors."""
        if not correlations:
            return {
                'sectors_analyzed': 0,
                'avg_directional_accuracy': 0.0,
                'total_sample_size': 0,
                'most_volatile_sector': None,
                'least_volatile_sector': None,
            }

        by_volatility = sorted(performance, key=lambda p: p.volatility)

        return {
            'sectors_analyzed': len(correlations),
            'avg_directional_accuracy': _mean([c.directional_accuracy for c in correlations]),
            'total_sample_size': sum(c.sample_size for c in correlations),
            'most_volatile_sector': by_volatility[-1].sector,
            'least_volatile_sector': by_volatility[0].sector,
        }

    @staticmethod
    def to_dataframe(results: Sequence[Any]) -> pd.DataFrame:
        """Convert correlation or performance results to a DataFrame."""
        return pd.DataFrame([r.to_dict() for r in results])


def analyze(
    events: Sequence[PoliticalEvent],
    sectors: Optional[Sequence[str]] = None
) -> Tuple[List[SectorCorrelation], List[SectorPerformance]]:
    """Run correlation analysis with a default analyzer."""
    return CorrelationAnalyzer().analyze(events, sectors)
