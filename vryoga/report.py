"""Plain-text rendering of a SessionReport. Formatting only; all numbers come from the analyzer."""

from __future__ import annotations

from typing import List

from vryoga.pose.deviation import humanize_joint, round_half_up
from vryoga.session_analyzer import SessionReport

NO_FRAMES_TEXT = "No frames available for analysis."
DEFAULT_BENEFIT = "General well-being and mindfulness."
CLOSING_LINE = "Remember to listen to your body and consult a professional if needed."


def _pair_words(pair: str) -> str:
	# "left_knee-right_hip" -> "left knee and right hip"
	j1, _, j2 = pair.partition("-")
	return f"{humanize_joint(j1)} and {humanize_joint(j2)}"


def _heading(title: str, rule: str = "-") -> List[str]:
	return [f"{title}:", rule * (len(title) + 1)]


def format_duration(seconds: float) -> str:
	total = max(0, round_half_up(seconds))
	minutes, secs = divmod(total, 60)
	return f"{minutes} minutes {secs} seconds"


def render_report(report: SessionReport, max_benefits: int = 5) -> str:
	if report.is_empty:
		return NO_FRAMES_TEXT

	lines: List[str] = ["Yoga Session Report", "=" * 21, ""]
	lines.append(f"Total Session Duration: {format_duration(report.total_duration_s)}")
	lines.append(f"Estimated Calories Burned: {report.total_calories:.1f} kcal")
	lines.append("")

	lines.extend(_heading("Session Flow"))
	for idx, interval in enumerate(report.pose_sequence, start=1):
		lines.append(f"{idx}. {interval.pose} ({round_half_up(interval.duration)} seconds)")
	lines.append("")

	lines.extend(_heading("Pose Analysis"))
	if report.pose_stats:
		for name, stats in report.pose_stats.items():
			lines.append(f"* {name}:")
			lines.append(f"  - Duration: {round_half_up(stats.duration)} seconds")
			lines.append(f"  - Frames Captured: {stats.count}")
			lines.append(f"  - Frames Analyzed: {stats.count_analyzed}")
			if stats.count_missing > 0:
				lines.append(f"  - Frames with Missing Joint Data: {stats.count_missing}")
			if stats.average_accuracy is not None:
				lines.append(f"  - Average Accuracy: {stats.average_accuracy}%")
				common = stats.most_common_deviation
				if common:
					lines.append(f"  - Common Adjustment Needed: Distance between {_pair_words(common)}")
			else:
				lines.append("  - Accuracy: N/A (No frames with joint data available)")
			lines.append("")

		if report.overall_accuracy is not None:
			lines.append(f"Overall Average Pose Accuracy (Analyzed Poses): {report.overall_accuracy}%")
			lines.append("")

		if report.top_deviations:
			lines.extend(_heading("Key Areas for Improvement Across Session"))
			for pair, _count in report.top_deviations:
				lines.append(f"- Focus on the distance between {_pair_words(pair)}")
			lines.append("")
	else:
		lines.append("No poses were analyzed for accuracy.")
		lines.append("")

	lines.extend(_heading("Potential Benefits from Poses Practiced"))
	if report.benefits:
		for benefit in report.benefits[:max_benefits]:
			lines.append(f"- {benefit}")
	else:
		lines.append(f"- {DEFAULT_BENEFIT}")

	lines.append("")
	lines.append(CLOSING_LINE)
	return "\n".join(lines)
