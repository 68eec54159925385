from __future__ import annotations

import collections.abc
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from vryoga.pose.deviation import round_half_up, score_pose
from vryoga.pose.segmentation import PoseInterval, segment
from vryoga.pose.types import Frame, IdealPoseLibrary, PoseMetadata

MAX_SESSION_DEVIATIONS = 3


class FrameOrderError(ValueError):
	"""Frames were not sorted by timestamp before analysis."""


@dataclass
class PoseStatistics:
	"""
	Running totals for one pose label across the session.

	`count` always equals `count_analyzed + count_missing`: a frame is either
	scored against the reference pose or lacks usable geometry to compare.
	"""

	pose: str
	start_time: float
	end_time: float
	count: int = 0
	count_analyzed: int = 0
	count_missing: int = 0
	total_accuracy: float = 0.0
	duration: float = 0.0
	deviations: Dict[str, int] = field(default_factory=dict)

	@property
	def average_accuracy(self) -> Optional[int]:
		if self.count_analyzed <= 0:
			return None
		return round_half_up(self.total_accuracy / self.count_analyzed)

	def ranked_deviations(self) -> List[Tuple[str, int]]:
		return sorted(self.deviations.items(), key=lambda kv: kv[1], reverse=True)

	@property
	def most_common_deviation(self) -> Optional[str]:
		ranked = self.ranked_deviations()
		return ranked[0][0] if ranked else None

	def to_payload(self) -> Dict[str, Any]:
		return {
			"pose": self.pose,
			"frames_captured": self.count,
			"frames_analyzed": self.count_analyzed,
			"frames_missing_joints": self.count_missing,
			"duration_s": self.duration,
			"average_accuracy": self.average_accuracy,
			"most_common_deviation": self.most_common_deviation,
			"deviations": dict(self.deviations),
			"start_time": self.start_time,
			"end_time": self.end_time,
		}


@dataclass
class SessionReport:
	frame_count: int = 0
	total_duration_s: float = 0.0
	total_calories: float = 0.0
	pose_sequence: List[PoseInterval] = field(default_factory=list)
	# Insertion order is first-encounter order of each pose label.
	pose_stats: Dict[str, PoseStatistics] = field(default_factory=dict)
	overall_accuracy: Optional[int] = None
	top_deviations: List[Tuple[str, int]] = field(default_factory=list)
	benefits: List[str] = field(default_factory=list)

	@property
	def is_empty(self) -> bool:
		return self.frame_count == 0

	def to_payload(self) -> Dict[str, Any]:
		return {
			"frame_count": self.frame_count,
			"total_duration_s": self.total_duration_s,
			"total_calories": self.total_calories,
			"pose_sequence": [iv.to_payload() for iv in self.pose_sequence],
			"poses": [st.to_payload() for st in self.pose_stats.values()],
			"overall_accuracy": self.overall_accuracy,
			"top_deviations": [{"pair": pair, "count": count} for pair, count in self.top_deviations],
			"benefits": list(self.benefits),
		}


def _check_frames(frames: Any) -> None:
	if isinstance(frames, (str, bytes)) or not isinstance(frames, collections.abc.Sequence):
		raise TypeError(f"frames must be a sequence of Frame records, got {type(frames).__name__}")
	prev: Optional[Frame] = None
	for i, frame in enumerate(frames):
		if not isinstance(frame, Frame):
			raise TypeError(f"frames[{i}] is {type(frame).__name__}, expected Frame")
		if prev is not None and frame.t < prev.t:
			raise FrameOrderError(
				f"frames must be sorted by timestamp: frames[{i}] ({frame.timestamp!r}) "
				f"is earlier than frames[{i - 1}] ({prev.timestamp!r})"
			)
		prev = frame


class SessionAnalyzer:
	"""
	Ordered pass over a sorted session.

	Pose intervals come from `segment()` over the frame labels. Per frame: add its
	duration (gap to the previous frame), update the pose's statistics, accumulate calories and
	benefits, and score the frame against its ideal pose when it has geometry.
	Neutral frames (the neutral label, or no game_state) only contribute duration
	and calories at the neutral rate.
	"""

	def __init__(
		self,
		neutral_label: str = "Relaxed",
		single_frame_seconds: float = 5.0,
		height_tolerance: float = 0.1,
		logger: Optional[Callable[[str], None]] = None,
	) -> None:
		self.neutral_label = neutral_label
		self.single_frame_seconds = float(single_frame_seconds)
		self.height_tolerance = float(height_tolerance)
		self.logger: Callable[[str], None] = logger or (lambda _msg: None)

	def _pose_label(self, game_state: Optional[str]) -> Optional[str]:
		if not game_state or game_state == self.neutral_label:
			return None
		return game_state

	def analyze(
		self,
		frames: Sequence[Frame],
		ideal_poses: IdealPoseLibrary,
		pose_metadata: PoseMetadata,
	) -> SessionReport:
		_check_frames(frames)
		if not frames:
			self.logger("[Session] no frames to analyze")
			return SessionReport()

		total_duration = 0.0
		total_calories = 0.0
		benefits: Dict[str, None] = {}
		pose_stats: Dict[str, PoseStatistics] = {}
		labels = [self._pose_label(frame.game_state) for frame in frames]
		sequence: List[PoseInterval] = segment((frame.t, label) for frame, label in zip(frames, labels))
		neutral_info = pose_metadata.get(self.neutral_label)

		for i, frame in enumerate(frames):
			if i > 0:
				duration = frame.t - frames[i - 1].t
			elif len(frames) == 1:
				duration = self.single_frame_seconds
			else:
				duration = 0.0
			total_duration += duration

			label = labels[i]
			if label is None:
				if neutral_info is not None and duration > 0:
					total_calories += neutral_info.calories_per_minute / 60.0 * duration
				continue

			stats = pose_stats.get(label)
			if stats is None:
				stats = PoseStatistics(pose=label, start_time=frame.t, end_time=frame.t)
				pose_stats[label] = stats
			stats.count += 1
			stats.duration += duration
			stats.end_time = frame.t

			info = pose_metadata.get(label)
			if info is not None:
				for benefit in info.benefits:
					benefits.setdefault(benefit, None)
				total_calories += info.calories_per_minute / 60.0 * duration

			reference = ideal_poses.get(label)
			if frame.has_geometry and reference is not None:
				result = score_pose(frame, reference, height_tolerance=self.height_tolerance)
				stats.count_analyzed += 1
				stats.total_accuracy += result.accuracy
				for pair in result.top_deviations:
					stats.deviations[pair] = stats.deviations.get(pair, 0) + 1
			else:
				stats.count_missing += 1

		averages = [st.average_accuracy for st in pose_stats.values() if st.average_accuracy is not None]
		overall = round_half_up(sum(averages) / len(averages)) if averages else None

		combined: Dict[str, int] = {}
		for st in pose_stats.values():
			for pair, count in st.ranked_deviations():
				combined[pair] = combined.get(pair, 0) + count
		top = sorted(combined.items(), key=lambda kv: kv[1], reverse=True)[:MAX_SESSION_DEVIATIONS]

		self.logger(
			f"[Session] {len(frames)} frames, {len(sequence)} pose intervals, "
			f"{sum(st.count_analyzed for st in pose_stats.values())} frames scored, "
			f"duration={total_duration:.1f}s"
		)
		return SessionReport(
			frame_count=len(frames),
			total_duration_s=total_duration,
			total_calories=total_calories,
			pose_sequence=sequence,
			pose_stats=pose_stats,
			overall_accuracy=overall,
			top_deviations=top,
			benefits=list(benefits),
		)


def analyze_session(
	frames: Sequence[Frame],
	ideal_poses: IdealPoseLibrary,
	pose_metadata: PoseMetadata,
	*,
	neutral_label: str = "Relaxed",
	single_frame_seconds: float = 5.0,
	height_tolerance: float = 0.1,
	logger: Optional[Callable[[str], None]] = None,
) -> SessionReport:
	analyzer = SessionAnalyzer(
		neutral_label=neutral_label,
		single_frame_seconds=single_frame_seconds,
		height_tolerance=height_tolerance,
		logger=logger,
	)
	return analyzer.analyze(frames, ideal_poses, pose_metadata)
