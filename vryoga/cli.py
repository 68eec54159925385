"""Offline session report: load a dataset from disk and print the report."""
import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from vryoga.config import get_config, set_config_path
from vryoga.data_loader import DataLoadError, load_dataset
from vryoga.report import render_report
from vryoga.session_analyzer import FrameOrderError, SessionAnalyzer


def main(argv: Optional[List[str]] = None) -> int:
	p = argparse.ArgumentParser("vryoga-report")
	p.add_argument("--config", default=None, help="Path to config.json")
	p.add_argument("--data-dir", default=None, help="Directory with the three dataset JSON files")
	p.add_argument("--json", action="store_true", help="Print aggregated statistics as JSON instead of text")
	p.add_argument("--debug", action="store_true", help="Enable debug logging.")
	args = p.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.debug else logging.WARNING,
		format='%(levelname)s:%(name)s:%(message)s',
	)

	if args.config:
		set_config_path(args.config)
	cfg = get_config()
	if args.data_dir:
		cfg = replace(cfg, data=replace(cfg.data, dir=args.data_dir))

	try:
		ds = load_dataset(cfg.data, strict=True)
	except DataLoadError as e:
		print(f"error: {e}", file=sys.stderr)
		return 1

	analyzer = SessionAnalyzer(
		neutral_label=cfg.analysis.neutral_label,
		single_frame_seconds=cfg.analysis.single_frame_seconds,
		height_tolerance=cfg.analysis.height_tolerance_m,
		logger=logging.getLogger("vryoga.session").debug,
	)
	try:
		report = analyzer.analyze(ds.frames, ds.ideal_poses, ds.pose_metadata)
	except FrameOrderError as e:
		print(f"error: {e}", file=sys.stderr)
		return 1

	if args.json:
		print(json.dumps(report.to_payload(), indent=2))
	else:
		print(render_report(report, max_benefits=cfg.analysis.max_benefits))
	return 0


if __name__ == "__main__":
	sys.exit(main())
