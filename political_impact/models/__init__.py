"""Impact prediction models."""
from .impact_predictor import ImpactPredictor, predict_market_impact

__all__ = ['ImpactPredictor', 'predict_market_impact']
