"""
Impact Predictor

Maps a political event onto an expected direction and confidence for a
single market sector, using fixed alignment-to-sector lookup tables.
"""

from typing import Dict, Any
from dataclasses import dataclass

from loguru import logger

from ..data.political_events import (
    PoliticalEvent,
    PoliticalAlignment,
    EventSeverity,
    ExpectedImpact,
    MarketSector,
    NAMED_SECTORS,
    coerce_enum,
)
from ..exceptions import InvalidArgument


@dataclass(frozen=True)
class ImpactPrediction:
    """Predicted direction of a sector move and how sure we are of it."""
    direction: ExpectedImpact
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'direction': self.direction.value,
            'confidence': round(self.confidence, 2),
        }


def resolve_sector(sector: Any) -> MarketSector:
    """Validate a sector argument. The ALL wildcard is not a valid query."""
    resolved = coerce_enum(MarketSector, sector, 'sector')
    if resolved is MarketSector.ALL:
        raise InvalidArgument("Sector 'all' is a wildcard, pass a concrete sector")
    return resolved


class ImpactPredictor:
    """Predicts sector direction from an event's political alignment."""

    # Alignment Impact Table: {alignment: {sector: direction}}
    ALIGNMENT_IMPACTS = {
        PoliticalAlignment.LEFT: {
            MarketSector.HEALTHCARE: ExpectedImpact.NEGATIVE,      # More regulation
            MarketSector.ENERGY: ExpectedImpact.NEGATIVE,          # Environmental restrictions on oil/gas
            MarketSector.DEFENSE: ExpectedImpact.NEGATIVE,         # Reduced military spending
            MarketSector.FINANCIAL: ExpectedImpact.NEGATIVE,       # More regulation
            MarketSector.TECH: ExpectedImpact.NEGATIVE,            # Antitrust actions
            MarketSector.INFRASTRUCTURE: ExpectedImpact.POSITIVE,  # Public spending
        },
        PoliticalAlignment.RIGHT: {
            MarketSector.HEALTHCARE: ExpectedImpact.POSITIVE,      # Less regulation
            MarketSector.ENERGY: ExpectedImpact.POSITIVE,          # Pro oil/gas policies
            MarketSector.DEFENSE: ExpectedImpact.POSITIVE,         # Increased military spending
            MarketSector.FINANCIAL: ExpectedImpact.POSITIVE,       # Deregulation
            MarketSector.TECH: ExpectedImpact.POSITIVE,            # Less antitrust
            MarketSector.INFRASTRUCTURE: ExpectedImpact.NEUTRAL,   # Mixed public-private approach
        },
    }

    BASE_CONFIDENCE = 0.5
    ALIGNED_CONFIDENCE = 0.7
    SEVERITY_ADJUSTMENT = 0.2
    MAX_CONFIDENCE = 0.9
    MIN_CONFIDENCE = 0.3

    def predict(self, event: PoliticalEvent, sector: Any) -> ImpactPrediction:
        """Predict how an event moves one sector.

        Args:
            event: The political event
            sector: One of the six named sectors (string or MarketSector)

        Returns:
            ImpactPrediction with direction and confidence in [0.3, 0.9]

        Raises:
            InvalidArgument: if sector or the event's alignment is out of range
        """
        sector = resolve_sector(sector)
        alignment = coerce_enum(PoliticalAlignment, event.alignment, 'alignment')
        severity = coerce_enum(EventSeverity, event.severity, 'severity')

        direction = ExpectedImpact.NEUTRAL
        confidence = self.BASE_CONFIDENCE

        table = self.ALIGNMENT_IMPACTS.get(alignment, {})
        if sector in table:
            direction = table[sector]
            confidence = self.ALIGNED_CONFIDENCE

        # Adjust confidence based on event severity
        if severity is EventSeverity.CRITICAL:
            confidence = min(confidence + self.SEVERITY_ADJUSTMENT, self.MAX_CONFIDENCE)
        elif severity is EventSeverity.LOW:
            confidence = max(confidence - self.SEVERITY_ADJUSTMENT, self.MIN_CONFIDENCE)

        return ImpactPrediction(direction=direction, confidence=round(confidence, 2))

    def predict_all_sectors(self, event: PoliticalEvent) -> Dict[str, ImpactPrediction]:
        """Predict an event's impact on every sector it touches."""
        predictions = {}
        for sector in NAMED_SECTORS:
            if event.affects(sector):
                predictions[sector.value] = self.predict(event, sector)

        logger.debug(f"Predicted {len(predictions)} sector impacts for {event.id}")
        return predictions


_default_predictor = ImpactPredictor()


def predict_market_impact(event: PoliticalEvent, sector: Any) -> ImpactPrediction:
    """Predict an event's sector impact with the default predictor."""
    return _default_predictor.predict(event, sector)
