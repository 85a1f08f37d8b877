"""Risk, correlation and timeline analysis modules."""
from .risk_scorer import RiskScorer
from .correlation_analyzer import CorrelationAnalyzer

__all__ = ['RiskScorer', 'CorrelationAnalyzer']
