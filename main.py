"""
Main entry point for the admin cascade application.

This script provides the command-line interface for converting an
administrative boundary workbook into a cascading selection sheet.
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

import psutil

from admin_cascade.cascade_engine import CascadeEngine, CascadeResult
from admin_cascade.config import CascadeConfig
from admin_cascade.exceptions import (
    CascadeError,
    InputNotFoundError,
    NoMatchingSheetError,
    OutputAlreadyExistsError
)
from admin_cascade.logging_config import setup_logging


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Admin Cascade - build a cascading selection sheet from an "
                    "administrative boundary workbook"
    )

    parser.add_argument(
        "input",
        help="Path to the boundary workbook (.xlsx) or single-level CSV"
    )

    parser.add_argument(
        "output",
        help="Path of the cascading selection sheet to write (.xlsx or .csv)"
    )

    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the output file if it already exists"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Trace every stage, with timings and memory usage"
    )

    parser.add_argument(
        "--log-file",
        help="Also write log messages to this file"
    )

    parser.add_argument(
        "--sheet-name",
        default="choices",
        help="Name of the output sheet (default: choices)"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the row scanning progress bar in verbose mode"
    )

    return parser.parse_args(argv)


class PerformanceMonitor:
    """Monitor and log elapsed time and memory usage of a run."""

    def __init__(self, logger=None):
        """Initialize performance monitor."""
        self.logger = logger
        self.process = psutil.Process()
        self.start_time = time.time()
        self.memory_snapshots = []

    def log_memory_usage(self, checkpoint_name: str):
        """Log current memory usage."""
        memory_mb = self.process.memory_info().rss / 1024 / 1024
        self.memory_snapshots.append(memory_mb)

        if self.logger:
            self.logger.info(f"Memory usage at {checkpoint_name}: {memory_mb:.1f} MB")

    def get_peak_memory(self) -> float:
        """Get peak memory usage in MB."""
        return max(self.memory_snapshots, default=0.0)

    def get_performance_summary(self) -> dict:
        """Get performance summary."""
        return {
            'total_execution_time': time.time() - self.start_time,
            'peak_memory_mb': self.get_peak_memory()
        }


def print_processing_summary(result: CascadeResult):
    """Print a summary of the run to console."""
    stats = result.stats
    print("\n" + "=" * 60)
    print("CASCADE CONVERSION COMPLETED")
    print("=" * 60)
    print(f"  Source sheet: {stats.sheet_name} (deepest level {stats.deepest_level})")
    print(f"  Rows scanned: {stats.rows_scanned:,}")
    for level, count in sorted(stats.records_per_level.items()):
        print(f"  Level {level}: {count:,} record(s)")
    print(f"  Duplicate codes skipped: {stats.duplicates_skipped:,}")
    print(f"  Orphan records: {stats.orphan_records:,}")
    print(f"  Processing time: {stats.processing_time:.2f} seconds")


def main(argv: Optional[List[str]] = None):
    """Main application entry point."""
    args = parse_arguments(argv)

    try:
        config = CascadeConfig(
            input_file=args.input,
            output_file=args.output,
            overwrite=args.overwrite,
            verbose=args.verbose,
            output_sheet_name=args.sheet_name,
            show_progress=not args.no_progress,
            log_file=args.log_file
        )

        logger = setup_logging(config)
        perf_monitor = PerformanceMonitor(logger.logger) if config.verbose else None
        if perf_monitor:
            perf_monitor.log_memory_usage("start")

        logger.debug(f"Configuration: {config.to_dict()}")

        engine = CascadeEngine(config, logger)
        result = engine.run()

        if config.verbose:
            print_processing_summary(result)

        if perf_monitor:
            perf_monitor.log_memory_usage("end")
            perf_summary = perf_monitor.get_performance_summary()
            print(f"\nPerformance Summary:")
            print(f"  Total execution time: {perf_summary['total_execution_time']:.2f} seconds")
            print(f"  Peak memory usage: {perf_summary['peak_memory_mb']:.1f} MB")

        if not result.complete:
            levels = ', '.join(str(level) for level in result.empty_levels)
            print(f"Warning: admin level(s) {levels} produced no records; "
                  f"the output is incomplete.", file=sys.stderr)

        print(f"Cascading selection sheet written to {Path(config.output_file)}")
        return 0

    except OutputAlreadyExistsError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 2

    except InputNotFoundError as e:
        print(f"\nFile Error: {e}", file=sys.stderr)
        print("Please check that the input file exists and is accessible.", file=sys.stderr)
        return 4

    except NoMatchingSheetError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 3

    except CascadeError as e:
        print(f"\nError: {e}", file=sys.stderr)
        if e.error_code:
            print(f"Error code: {e.error_code}", file=sys.stderr)
        return 3

    except KeyboardInterrupt:
        print("\nProcess interrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"\nUnexpected error: {e}", file=sys.stderr)
        print("Please rerun with --verbose or check the log file for details.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
