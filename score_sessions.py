import argparse
import logging
import sys

from tabulate import tabulate

from kartlab.errors import MalformedRecordError
from kartlab.pipelines.comparison import compare_groups
from kartlab.pipelines.frustration import run_pipeline
from kartlab.persistence.score_table import OUTPUT_COLUMNS
from kartlab.utils.config_loader import load_config

logger = logging.getLogger("FrustrationScorer")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Score kart telemetry sessions by frustration and write one row per session."
    )
    parser.add_argument("input", help="Telemetry log (one row per frame)")
    parser.add_argument("output", help="Score table to write (one row per session)")
    parser.add_argument("--config", default=None, help="YAML config (default: config/default.yaml)")
    parser.add_argument(
        "--sort-by",
        nargs="+",
        choices=OUTPUT_COLUMNS,
        default=None,
        help="Sort output rows by these columns instead of first appearance",
    )
    parser.add_argument(
        "--skip-malformed",
        action="store_true",
        help="Skip and count malformed rows instead of aborting",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print mean frustration per track and difficulty",
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    level = "DEBUG" if args.verbose else config.get("logging.level", "INFO")
    logging.basicConfig(level=level, format="%(message)s")

    try:
        result = run_pipeline(
            args.input,
            args.output,
            config=config,
            sort_by=args.sort_by,
            on_malformed="skip" if args.skip_malformed else None,
            progress=args.progress,
        )
    except MalformedRecordError as e:
        logger.error(f"Malformed telemetry in {args.input}: {e}")
        return 1
    except FileNotFoundError as e:
        logger.error(f"Telemetry log not found: {e}")
        return 1

    print(tabulate(result.summary_rows(), headers=["", "count"], tablefmt="simple"))

    if result.anomalies:
        print("\nData-quality anomalies:")
        for anomaly in result.anomalies:
            print(f"  - {anomaly}")

    if args.summary and result.scores:
        print()
        print(
            tabulate(
                compare_groups(result.scores),
                headers="keys",
                tablefmt="simple",
                floatfmt=".2f",
                showindex=False,
            )
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
