from __future__ import annotations

import argparse
import logging
from collections import Counter

from signalbar.classifier import LevelClassifier
from signalbar.config import ClassifierConfig, load_config
from signalbar.contracts.types import LteMeasurement, SignalLevel, SignalReport
from signalbar.core.journal import ReportWriter, iter_measurements

logger = logging.getLogger(__name__)


def build_classifier(config_path: str | None = None) -> LevelClassifier:
    config = load_config(config_path) if config_path else ClassifierConfig()
    return LevelClassifier(config)


def replay_measurements(
    classifier: LevelClassifier,
    path: str,
    writer: ReportWriter | None = None,
    default_ntn: bool = False,
) -> Counter[SignalLevel]:
    counts: Counter[SignalLevel] = Counter()
    for measurement, is_ntn in iter_measurements(path, default_ntn):
        report = classifier.classify(measurement, is_ntn=is_ntn)
        counts[report.level] += 1
        if writer is not None:
            writer.append(report)
    return counts


def format_report(report: SignalReport) -> str:
    parts = [f"level={int(report.level)} ({report.level.name})", f"network={report.network_class.value}"]
    for reading in report.readings:
        value = reading.reported()
        shown = value if isinstance(value, int) else value.value
        parts.append(f"{reading.kind.value}={shown}:{int(report.level_of(reading.kind))}")
    return " ".join(parts)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Classify LTE measurements into signal bar levels")
    parser.add_argument("--config", help="Carrier config YAML")
    parser.add_argument("--replay", help="JSON-lines file of measurement updates")
    parser.add_argument("--out", help="Append classified reports to this JSON-lines file")
    parser.add_argument("--rsrp", type=int)
    parser.add_argument("--rsrq", type=int)
    parser.add_argument("--rssnr", type=int)
    parser.add_argument(
        "--ntn",
        action="store_true",
        help="Serving cell is non-terrestrial; default for replay records without is_ntn",
    )
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.replay and args.rsrp is None and args.rsrq is None and args.rssnr is None:
        parser.error("--replay or at least one of --rsrp/--rsrq/--rssnr is required")

    classifier = build_classifier(args.config)
    writer = ReportWriter(args.out) if args.out else None

    if args.replay:
        counts = replay_measurements(classifier, args.replay, writer, default_ntn=args.ntn)
        total = sum(counts.values())
        logger.info("Replayed %d measurement updates from %s", total, args.replay)
        summary = ", ".join(f"{level.name}={counts.get(level, 0)}" for level in SignalLevel)
        print(f"Replay complete. Updates: {total}. Levels: {summary}")
        return 0

    measurement = LteMeasurement(rsrp=args.rsrp, rsrq=args.rsrq, rssnr=args.rssnr)
    report = classifier.classify(measurement, is_ntn=args.ntn)
    if writer is not None:
        writer.append(report)
    print(format_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
