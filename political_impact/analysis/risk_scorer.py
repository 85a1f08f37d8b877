"""
Risk Scorer Module

Aggregates impact predictions across upcoming political events into a
bounded political risk score per sector.
"""

from typing import Dict, List, Optional, Any, Sequence
from dataclasses import dataclass, field

from loguru import logger

from ..data.political_events import PoliticalEvent, EventSeverity, NAMED_SECTORS
from ..models.impact_predictor import ImpactPredictor, resolve_sector


@dataclass
class RiskScore:
    """Political risk for one sector."""
    sector: str
    score: float
    factors: List[str] = field(default_factory=list)

    @property
    def risk_level(self) -> str:
        if self.score >= 0.75:
            return 'high'
        if self.score >= 0.4:
            return 'medium'
        return 'low'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sector': self.sector,
            'score': round(self.score, 3),
            'risk_level': self.risk_level,
            'factors': list(self.factors),
        }


class RiskScorer:
    """Scores sector exposure to a set of political events."""

    # Base risk contributed by an event of each severity
    SEVERITY_RISK = {
        EventSeverity.CRITICAL: 0.8,
        EventSeverity.HIGH: 0.6,
        EventSeverity.MEDIUM: 0.4,
        EventSeverity.LOW: 0.2,
    }

    MAX_SCORE = 1.0
    MAX_FACTORS = 3

    def __init__(self, predictor: Optional[ImpactPredictor] = None):
        self.predictor = predictor or ImpactPredictor()

    def score(self, sector: Any, events: Sequence[PoliticalEvent]) -> RiskScore:
        """Calculate the political risk score for a sector.

        Each event touching the sector adds severity risk weighted by the
        predictor's confidence. The sum saturates at 1.0.

        Args:
            sector: One of the six named sectors
            events: Events to score, in catalog order

        Returns:
            RiskScore with the capped score and up to three contributing
            events, in iteration order
        """
        sector = resolve_sector(sector)

        risk_score = 0.0
        factors = []

        for event in events:
            if not event.affects(sector):
                continue

            impact = self.predictor.predict(event, sector)
            event_risk = self.SEVERITY_RISK[event.severity]

            risk_score += event_risk * impact.confidence
            factors.append(f"{event.title} ({event.alignment.value})")

        return RiskScore(
            sector=sector.value,
            score=min(risk_score, self.MAX_SCORE),
            factors=factors[:self.MAX_FACTORS],
        )

    def score_all(self, events: Sequence[PoliticalEvent]) -> List[RiskScore]:
        """Score every named sector against the same events."""
        scores = [self.score(sector, events) for sector in NAMED_SECTORS]
        logger.info(f"Scored political risk for {len(scores)} sectors over {len(events)} events")
        return scores
