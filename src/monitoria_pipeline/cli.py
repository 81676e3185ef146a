"""CLI for the monitoria allocation pipeline."""

import argparse
from pathlib import Path

import yaml

from .core import run_pipeline
from .utils import setup_logging, get_logger


def _load_config(config_path: str | Path | None) -> dict:
    path = Path(config_path or "configs/default.yaml")
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find analysts with long consecutive-workday streaks and split monitoria quotas among them.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "report",
        metavar="PATH",
        help="Monthly attendance export (.csv or .xlsx)",
    )
    parser.add_argument(
        "-c", "--config",
        default="configs/default.yaml",
        help="Path to YAML config file",
    )
    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="Report file to write (.xlsx or .csv); defaults to paths.output_dir/paths.report_name",
    )
    parser.add_argument(
        "--policy",
        choices=["exclusion", "inclusion"],
        help="Attendance status policy (overrides streak.status_policy)",
    )
    parser.add_argument(
        "--business-week",
        action="store_true",
        help="Treat Friday -> Monday as consecutive when measuring streaks",
    )
    parser.add_argument(
        "--drop-zero",
        action="store_true",
        help="Leave analysts who would receive 0 monitorias out of the report",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Set log level to DEBUG",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = _load_config(args.config)
    for section in ("streak", "allocation", "logging"):
        config[section] = config.get(section) or {}
    if args.policy:
        config["streak"]["status_policy"] = args.policy
    if args.business_week:
        config["streak"]["gap_rule"] = "business_week"
    if args.drop_zero:
        config["allocation"]["keep_zero"] = False
    if args.verbose:
        config["logging"]["level"] = "DEBUG"

    setup_logging(config["logging"])
    log = get_logger(__name__)

    try:
        result, report_path = run_pipeline(config, report_path=args.report, output_path=args.output)
        log.info(
            "Done. %d eligible analyst(s), %d monitorias assigned. Report: %s",
            len(result.streaks),
            result.total_assigned,
            report_path,
        )
    except Exception as e:
        log.exception("Pipeline failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
