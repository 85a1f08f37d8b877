#!/usr/bin/env python3
"""
Basic Usage Example

Demonstrates how to use the Political Market Impact Analyzer to predict
sector moves for upcoming events and review how past events played out.
"""

import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from political_impact.models.prediction_engine import PredictionEngine
from political_impact.models.impact_predictor import predict_market_impact
from political_impact.data.political_events import EventCatalog, classify_event_alignment
from political_impact.data.market_data_fetcher import MarketDataFetcher, DataSource


def main():
    """Run basic usage example."""
    print("=" * 60)
    print("POLITICAL MARKET IMPACT ANALYZER - Basic Example")
    print("=" * 60)

    # 1. Load the historical catalog
    print("\n1. Loading event catalog...")
    catalog = EventCatalog()
    print(f"   {len(catalog)} historical events")
    for event in catalog.get_events_by_alignment('left')[:3]:
        print(f"   • {event.date} {event.title} (tags say: {classify_event_alignment(event).value})")

    # 2. Predict a single event's impact
    print("\n2. Single event prediction...")
    event = catalog.get_event('2024-healthcare-proposal')
    prediction = predict_market_impact(event, 'healthcare')
    print(f"   {event.title} → healthcare {prediction.direction.value} "
          f"({prediction.confidence*100:.0f}% confidence)")

    # 3. Sector outlooks and risk for upcoming events
    print("\n3. Upcoming event outlooks...")
    engine = PredictionEngine(catalog=catalog)
    for outlook in engine.predict_sector_outlooks():
        print(f"   • {outlook.sector:15} {outlook.prediction.value:9} {outlook.confidence:.2f}")

    for risk in engine.get_sector_risk_scores()[:3]:
        print(f"   • {risk.sector:15} risk {risk.score:.2f}: {', '.join(risk.factors)}")

    # 4. Historical correlations
    print("\n4. Historical correlations...")
    correlations, performance = engine.analyze_correlations()
    print(engine.correlation_analyzer.to_dataframe(correlations).to_string(index=False))

    # 5. Timeline over the whole catalog
    print("\n5. Timeline (4 years back from mid-2024)...")
    for point in engine.get_timeline('ALL', now=datetime(2024, 6, 1))[-5:]:
        print(f"   {point.date}  {point.actual_impact:+.2f}%  cumulative {point.cumulative_impact:+.2f}%")

    # 6. Synthetic sector prices
    print("\n6. Sector snapshot (synthetic data)...")
    fetcher = MarketDataFetcher(source=DataSource.SYNTHETIC)
    for sector, snapshot in fetcher.get_sector_performance(['healthcare', 'energy']).items():
        print(f"   • {sector:12} {snapshot.avg_change:+.2f}% ({snapshot.sentiment})")

    print("\n" + "=" * 60)
    print("Example complete! Run 'python main.py --help' for the CLI.")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
