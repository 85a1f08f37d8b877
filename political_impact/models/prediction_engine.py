"""
Prediction Engine

Ties the event catalog to the analytic transforms: sector outlooks for
upcoming events, sector risk scores, historical correlations and the
event timeline. Every call recomputes from its inputs; nothing is cached.
"""

from datetime import datetime
from typing import Dict, List, Optional, Any, Sequence, Tuple
from dataclasses import dataclass, field

from loguru import logger

from ..data.political_events import (
    EventCatalog,
    PoliticalEvent,
    ExpectedImpact,
    NAMED_SECTORS,
    get_upcoming_political_events,
)
from ..analysis.risk_scorer import RiskScorer, RiskScore
from ..analysis.correlation_analyzer import CorrelationAnalyzer, SectorCorrelation, SectorPerformance
from ..analysis.timeline import TimelinePoint, timeline_for_timeframe, ALL_ALIGNMENTS
from .impact_predictor import ImpactPredictor, ImpactPrediction


@dataclass
class SectorOutlook:
    """Aggregated prediction for one sector over upcoming events."""
    sector: str
    prediction: ExpectedImpact
    confidence: float
    reasoning: str
    events: List[PoliticalEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sector': self.sector,
            'prediction': self.prediction.value,
            'confidence': round(self.confidence, 2),
            'reasoning': self.reasoning,
            'events': [e.id for e in self.events],
        }


def log_event_analysis(event: PoliticalEvent, market_impact: Dict[str, Any]) -> None:
    """Log a per-event analysis record at DEBUG level."""
    logger.bind(analysis_type='political-event-analysis').debug(
        f"Political event analysis: id={event.id} alignment={event.alignment.value} "
        f"severity={event.severity.value} predicted={market_impact}"
    )


class PredictionEngine:
    """
    Core engine behind every view of the analyzer.

    Key features:
    1. Sector outlooks from alignment-driven impact predictions
    2. Saturating political risk scores per sector
    3. Historical alignment correlations and sector performance
    4. Windowed event timeline with cumulative impact
    """

    NO_EVENTS_CONFIDENCE = 0.5
    MIXED_SIGNAL_CONFIDENCE = 0.6
    MAX_CONFIDENCE = 0.9
    OUTLOOK_EVENTS = 2

    def __init__(
        self,
        catalog: Optional[EventCatalog] = None,
        upcoming_events: Optional[Sequence[PoliticalEvent]] = None,
        predictor: Optional[ImpactPredictor] = None
    ):
        """Initialize the prediction engine.

        Args:
            catalog: Historical events. Defaults to the built-in catalog.
            upcoming_events: Unrealized events to predict for
            predictor: Impact predictor shared by outlooks and risk scores
        """
        self.catalog = catalog if catalog is not None else EventCatalog()
        self.upcoming_events = (
            list(upcoming_events) if upcoming_events is not None
            else get_upcoming_political_events()
        )
        self.predictor = predictor or ImpactPredictor()
        self.risk_scorer = RiskScorer(self.predictor)
        self.correlation_analyzer = CorrelationAnalyzer()

    def predict_sector_outlooks(
        self,
        events: Optional[Sequence[PoliticalEvent]] = None
    ) -> List[SectorOutlook]:
        """Generate an outlook for each named sector.

        The majority direction among the sector's event predictions wins and
        takes the mean confidence of those predictions. A tie is reported as
        mixed signals.

        Args:
            events: Events to consider. Defaults to the upcoming events.

        Returns:
            One SectorOutlook per named sector
        """
        if events is None:
            events = self.upcoming_events

        logger.info("Running sector outlook analysis...")

        outlooks = []
        for sector in NAMED_SECTORS:
            relevant = [e for e in events if e.affects(sector)]

            if not relevant:
                outlooks.append(SectorOutlook(
                    sector=sector.value,
                    prediction=ExpectedImpact.NEUTRAL,
                    confidence=self.NO_EVENTS_CONFIDENCE,
                    reasoning='No significant political events expected to impact this sector',
                ))
                continue

            impacts: List[ImpactPrediction] = []
            for event in relevant:
                impact = self.predictor.predict(event, sector)
                log_event_analysis(event, {sector.value: impact.to_dict()})
                impacts.append(impact)

            positive = [i for i in impacts if i.direction is ExpectedImpact.POSITIVE]
            negative = [i for i in impacts if i.direction is ExpectedImpact.NEGATIVE]

            if len(positive) > len(negative):
                prediction = ExpectedImpact.POSITIVE
                confidence = sum(i.confidence for i in positive) / len(positive)
                reasoning = (
                    f"{len(positive)} bullish events expected, "
                    f"primarily driven by {relevant[0].title}"
                )
            elif len(negative) > len(positive):
                prediction = ExpectedImpact.NEGATIVE
                confidence = sum(i.confidence for i in negative) / len(negative)
                lead = next(
                    (e for e in relevant if e.expected_impact is ExpectedImpact.NEGATIVE),
                    relevant[0]
                )
                reasoning = (
                    f"{len(negative)} bearish events expected, "
                    f"with highest impact from {lead.title}"
                )
            else:
                prediction = ExpectedImpact.NEUTRAL
                confidence = self.MIXED_SIGNAL_CONFIDENCE
                reasoning = 'Mixed signals from upcoming political events creating market uncertainty'

            outlooks.append(SectorOutlook(
                sector=sector.value,
                prediction=prediction,
                confidence=min(confidence, self.MAX_CONFIDENCE),
                reasoning=reasoning,
                events=relevant[:self.OUTLOOK_EVENTS],
            ))

        return outlooks

    def get_sector_risk_scores(
        self,
        events: Optional[Sequence[PoliticalEvent]] = None
    ) -> List[RiskScore]:
        """Score political risk for every named sector."""
        if events is None:
            events = self.upcoming_events
        return self.risk_scorer.score_all(events)

    def analyze_correlations(
        self,
        sectors: Optional[Sequence[str]] = None
    ) -> Tuple[List[SectorCorrelation], List[SectorPerformance]]:
        """Run correlation analysis over the historical catalog."""
        return self.correlation_analyzer.analyze(self.catalog.events, sectors)

    def get_timeline(
        self,
        timeframe: str,
        alignment_filter: str = ALL_ALIGNMENTS,
        now: Optional[datetime] = None
    ) -> List[TimelinePoint]:
        """Build the historical timeline for a timeframe token."""
        return timeline_for_timeframe(self.catalog.events, timeframe, alignment_filter, now)
