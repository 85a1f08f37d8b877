#!/usr/bin/env python3
"""
Political Market Impact Analyzer

Main entry point for the application. Provides CLI interface
for sector predictions, risk scores, correlations and the event timeline.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from loguru import logger
from political_impact.utils.logger import setup_logger
from political_impact.utils.config_loader import ConfigLoader
from political_impact.models.prediction_engine import PredictionEngine
from political_impact.data.market_data_fetcher import MarketDataFetcher, DataSource, POLITICAL_STOCKS


def _signed(value: float, digits: int = 2) -> str:
    return f"{value:+.{digits}f}"


def run_predictions(engine: PredictionEngine):
    """Show sector outlooks for upcoming political events."""
    outlooks = engine.predict_sector_outlooks()

    print("\n" + "="*80)
    print("POLITICAL MARKET IMPACT PREDICTIONS")
    print("Based on upcoming political events and alignment impact tables")
    print("="*80)

    for outlook in outlooks:
        direction_symbol = {"positive": "↑", "negative": "↓"}.get(outlook.prediction.value, "→")
        print(f"\n{outlook.sector.upper():16} {direction_symbol} {outlook.prediction.value:9} "
              f"confidence {outlook.confidence*100:.0f}%")
        print(f"    {outlook.reasoning}")
        for event in outlook.events:
            print(f"    • {event.title} ({event.date.isoformat()})")

    print("\n" + "="*80)
    print("DISCLAIMER: Heuristic predictions. Not financial advice.")
    print("="*80 + "\n")


def run_risk(engine: PredictionEngine):
    """Show political risk scores per sector."""
    scores = engine.get_sector_risk_scores()

    print("\n" + "-"*80)
    print("POLITICAL RISK BY SECTOR")
    print("-"*80)

    for risk in sorted(scores, key=lambda r: r.score, reverse=True):
        print(f"\n{risk.sector.upper():16} {risk.score:.2f} ({risk.risk_level.upper()})")
        for factor in risk.factors:
            print(f"    • {factor}")
    print()


def run_correlations(engine: PredictionEngine, view: str = "correlation"):
    """Show historical sector correlations or performance."""
    correlations, performance = engine.analyze_correlations()
    summary = engine.correlation_analyzer.summarize(correlations, performance)

    print("\n" + "-"*80)
    print("STATISTICAL CORRELATION ANALYSIS")
    print("-"*80)

    if view == "correlation":
        for item in correlations:
            print(f"\n{item.sector.upper():16} {item.directional_accuracy:.1f}% accuracy | {item.sample_size} events")
            print(f"    Left-wing avg:  {_signed(item.left_wing_avg_impact)}%")
            print(f"    Right-wing avg: {_signed(item.right_wing_avg_impact)}%")
            print(f"    Statistical confidence: {item.confidence_level:.0f}%")
    else:
        for item in performance:
            print(f"\n{item.sector.upper():16} {item.avg_abs_impact:.2f}% avg | volatility {item.volatility:.2f}%")
            print(f"    Positive events: {item.positive_event_count}  Negative events: {item.negative_event_count}")

    print(f"\n    Sectors analyzed: {summary['sectors_analyzed']} | "
          f"Avg accuracy: {summary['avg_directional_accuracy']:.1f}% | "
          f"Most volatile: {summary['most_volatile_sector']}\n")


def run_timeline(engine: PredictionEngine, timeframe=None, alignment=None, defaults=None, now=None):
    """Show the historical event timeline.

    Missing timeframe or alignment fall back to the `analysis` settings.
    """
    defaults = defaults or {}
    timeframe = timeframe or defaults.get('default_timeframe', '1M')
    alignment = alignment or defaults.get('default_alignment', 'all')

    points = engine.get_timeline(timeframe, alignment, now=now)

    print("\n" + "-"*80)
    print(f"HISTORICAL POLITICAL EVENTS ({timeframe}, {alignment}) - {len(points)} events")
    print("-"*80)

    if not points:
        print("\nNo political events in the selected window.\n")
        return

    for point in points:
        print(f"{point.date.isoformat()}  {point.title[:44]:44} {point.alignment:8} "
              f"{_signed(point.actual_impact):>7}%  cum {_signed(point.cumulative_impact):>7}%")
    print()


def run_quotes(config: ConfigLoader, live: bool, sectors=None):
    """Show current sector price snapshots."""
    fetcher = MarketDataFetcher.from_config(config)
    if live:
        fetcher.source = DataSource.LIVE

    snapshots = fetcher.get_sector_performance(sectors)

    print("\n" + "-"*80)
    print(f"SECTOR SNAPSHOT ({fetcher.source.value})")
    print("-"*80)

    for sector, snapshot in snapshots.items():
        print(f"\n{sector.upper():16} {_signed(snapshot.avg_change)}% ({snapshot.sentiment})")
        for stock in snapshot.stocks:
            print(f"    {stock.symbol:6} ${stock.price:>9.2f}  {_signed(stock.change_percent)}%")

    if fetcher.source is DataSource.LIVE:
        for service, status in fetcher.get_api_status().items():
            print(f"\n    {service}: {status['used']}/{status['limit']} calls used")
    print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Political Market Impact Analyzer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py predict                      Sector outlooks for upcoming events
  python main.py risk                         Political risk score per sector
  python main.py correlations --view performance
  python main.py timeline -t 1Y -a left       Left-wing events in the last year
  python main.py quotes --live                Live sector prices (needs API key)
        """
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--config', help='Path to settings.yaml')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    subparsers.add_parser('predict', help='Sector outlooks for upcoming events')
    subparsers.add_parser('risk', help='Political risk scores by sector')

    corr_parser = subparsers.add_parser('correlations', help='Historical correlation analysis')
    corr_parser.add_argument('--view', choices=['correlation', 'performance'], default='correlation')

    timeline_parser = subparsers.add_parser('timeline', help='Historical event timeline')
    timeline_parser.add_argument('-t', '--timeframe', default=None, help='1M, 3M, 1Y, ALL')
    timeline_parser.add_argument('-a', '--alignment', default=None,
                                 choices=['all', 'left', 'right', 'center', 'neutral'])

    quotes_parser = subparsers.add_parser('quotes', help='Sector price snapshot')
    quotes_parser.add_argument('--live', action='store_true', help='Use live quote services')
    quotes_parser.add_argument('--sectors', nargs='+',
                               choices=[s for s in POLITICAL_STOCKS if s != 'indices'])

    args = parser.parse_args()
    config = ConfigLoader(args.config)

    # Setup logging
    log_params = config.logging_params
    log_level = "DEBUG" if args.verbose else log_params.get('level', 'INFO')
    setup_logger(log_level=log_level, log_file=log_params.get('file'))

    engine = PredictionEngine()

    if args.command == 'risk':
        run_risk(engine)
    elif args.command == 'correlations':
        run_correlations(engine, view=args.view)
    elif args.command == 'timeline':
        run_timeline(engine, args.timeframe, args.alignment, defaults=config.analysis_params)
    elif args.command == 'quotes':
        run_quotes(config, live=args.live, sectors=args.sectors)
    else:
        # Default: show predictions
        logger.debug("No command given, showing sector predictions")
        run_predictions(engine)


if __name__ == "__main__":
    main()
