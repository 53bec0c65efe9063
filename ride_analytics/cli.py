"""Command-line interface for the ride analytics engine.

This module provides a simple CLI for generating statistical reports,
chart images and JSON exports from a ledger CSV export.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from ride_analytics import loader, report, visualize
from ride_analytics.config import DEFAULT_NUM_BINS, DEFAULT_TOP_N


class CustomFormatter(logging.Formatter):
    """Custom logging formatter that removes timestamps from INFO messages.

    INFO messages are the CLI's normal progress output; WARNING, ERROR and
    DEBUG keep their timestamp and level.
    """

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()
        return f"{self.formatTime(record, self.datefmt)} - {record.levelname} - {record.getMessage()}"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: If True, show all levels with timestamps. If False, show INFO
                 without timestamps and WARNING/ERROR with timestamps.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(CustomFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
        logger = logging.getLogger()
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)


def parse_month(value: str) -> Tuple[int, int]:
    """Parse a YYYY-MM period.

    Raises:
        ValueError: If the value is not a valid year and month
    """
    year_str, sep, month_str = value.partition('-')
    if not sep:
        raise ValueError(f"Invalid month (expected YYYY-MM): {value}")

    year, month = int(year_str), int(month_str)
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month (expected YYYY-MM): {value}")
    return year, month


def _analyze(args: argparse.Namespace) -> report.RideReport:
    period = parse_month(args.month) if args.month else None
    rows = loader.load_ledger_csv(Path(args.csv))
    return report.analyze_rides(
        rows,
        period=period,
        top_n=getattr(args, 'top', DEFAULT_TOP_N),
        num_bins=getattr(args, 'bins', DEFAULT_NUM_BINS),
    )


def run_stats(args: argparse.Namespace) -> int:
    """Generate a statistical report from a ledger CSV.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    csv_path = Path(args.csv)

    if not csv_path.exists():
        print(f"Error: File not found: {csv_path}")
        return 1

    output_path = Path(args.output) if args.output else None

    try:
        ride_report = _analyze(args)
        text = report.generate_report(ride_report, output_path)

        if not output_path:
            print(text)

        return 0
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            raise
        return 1


def run_visualize(args: argparse.Namespace) -> int:
    """Generate chart images from a ledger CSV.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    csv_path = Path(args.csv)

    if not csv_path.exists():
        print(f"Error: File not found: {csv_path}")
        return 1

    output_dir = Path(args.output_dir) if args.output_dir else csv_path.parent

    try:
        ride_report = _analyze(args)
        visualize.plot_report(ride_report, output_dir, base_name=csv_path.stem)
        return 0
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            raise
        return 1


def run_export(args: argparse.Namespace) -> int:
    """Export analysis results from a ledger CSV as JSON.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    csv_path = Path(args.csv)

    if not csv_path.exists():
        print(f"Error: File not found: {csv_path}")
        return 1

    try:
        ride_report = _analyze(args)
        payload = json.dumps(report.to_dict(ride_report), indent=2, ensure_ascii=False)

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(payload, encoding='utf-8')
            logging.info(f"✓ Export saved to {output_path}")
        else:
            print(payload)

        return 0
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            raise
        return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        'csv',
        help='Path to ledger CSV export'
    )
    parser.add_argument(
        '--month',
        help='Only analyze rides scheduled in this month (YYYY-MM)'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Enable verbose logging'
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Args:
        argv: Optional command-line arguments (for testing)

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        description="Ride analytics for delivery ledger exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the statistical report for December 2025
  python -m ride_analytics stats rides.csv --month 2025-12

  # Save charts next to the CSV
  python -m ride_analytics visualize rides.csv

  # Export all results as JSON
  python -m ride_analytics export rides.csv -o results/rides.json
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # Stats command
    stats_parser = subparsers.add_parser(
        'stats',
        help='Generate statistical report from CSV'
    )
    _add_common_arguments(stats_parser)
    stats_parser.add_argument(
        '--output',
        '-o',
        help='Output report path (default: print to stdout)'
    )
    stats_parser.add_argument(
        '--top',
        type=int,
        default=DEFAULT_TOP_N,
        help=f'Number of leaderboard entries to show (default: {DEFAULT_TOP_N})'
    )
    stats_parser.add_argument(
        '--bins',
        type=int,
        default=DEFAULT_NUM_BINS,
        help=f'Number of histogram bins (default: {DEFAULT_NUM_BINS})'
    )

    # Visualize command
    viz_parser = subparsers.add_parser(
        'visualize',
        help='Generate charts from CSV'
    )
    _add_common_arguments(viz_parser)
    viz_parser.add_argument(
        '--output-dir',
        '-o',
        help='Output directory for plots (default: same as CSV)'
    )
    viz_parser.add_argument(
        '--bins',
        type=int,
        default=DEFAULT_NUM_BINS,
        help=f'Number of histogram bins (default: {DEFAULT_NUM_BINS})'
    )

    # Export command
    export_parser = subparsers.add_parser(
        'export',
        help='Export analysis results as JSON'
    )
    _add_common_arguments(export_parser)
    export_parser.add_argument(
        '--output',
        '-o',
        help='Output JSON path (default: print to stdout)'
    )
    export_parser.add_argument(
        '--top',
        type=int,
        default=DEFAULT_TOP_N,
        help=f'Number of leaderboard entries to keep (default: {DEFAULT_TOP_N})'
    )
    export_parser.add_argument(
        '--bins',
        type=int,
        default=DEFAULT_NUM_BINS,
        help=f'Number of histogram bins (default: {DEFAULT_NUM_BINS})'
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    if args.command == 'stats':
        return run_stats(args)
    elif args.command == 'visualize':
        return run_visualize(args)
    elif args.command == 'export':
        return run_export(args)
    else:
        print(f"Unknown command: {args.command}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
