"""
Pose interval segmentation.

A session is split into maximal runs of consecutive frames that share one
non-neutral game_state. The forward pass threads an explicit cursor value:

	NoOpenInterval --pose X--> OpenInterval(X)
	OpenInterval(X) --pose X--> OpenInterval(X)              (no change)
	OpenInterval(X) --pose Y--> OpenInterval(Y), emits X     (closed at this frame)
	OpenInterval(X) --neutral--> NoOpenInterval, emits X     (closed at this frame)
	NoOpenInterval --neutral--> NoOpenInterval
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union


@dataclass(frozen=True)
class PoseInterval:
	pose: str
	start: float
	end: float

	@property
	def duration(self) -> float:
		return self.end - self.start

	def to_payload(self) -> Dict[str, Any]:
		return {"pose": self.pose, "start": self.start, "end": self.end, "duration_s": self.duration}


@dataclass(frozen=True)
class NoOpenInterval:
	pass


@dataclass(frozen=True)
class OpenInterval:
	label: str
	start: float

	def close(self, end: float) -> PoseInterval:
		return PoseInterval(pose=self.label, start=self.start, end=end)


SegmentState = Union[NoOpenInterval, OpenInterval]

NO_OPEN_INTERVAL = NoOpenInterval()


def advance(state: SegmentState, label: Optional[str], t: float) -> Tuple[SegmentState, Optional[PoseInterval]]:
	"""
	Apply one frame to the cursor.

	`label` is the frame's pose label, or None for a neutral / pose-less frame
	(callers map the neutral label to None). Returns the next state and the
	interval closed by this frame, if any.
	"""
	if label is None:
		if isinstance(state, OpenInterval):
			return NO_OPEN_INTERVAL, state.close(t)
		return state, None
	if isinstance(state, OpenInterval):
		if state.label == label:
			return state, None
		return OpenInterval(label, t), state.close(t)
	return OpenInterval(label, t), None


def finish(state: SegmentState, last_t: float) -> Optional[PoseInterval]:
	"""Close an interval still open at the end of the stream."""
	if isinstance(state, OpenInterval):
		return state.close(last_t)
	return None


def segment(samples: Iterable[Tuple[float, Optional[str]]]) -> List[PoseInterval]:
	"""Segment (t, label) samples, label None meaning neutral, into pose intervals.

	Drives `advance` over the samples and closes the last open interval at the
	final timestamp. SessionAnalyzer builds its pose sequence with it.
	"""
	state: SegmentState = NO_OPEN_INTERVAL
	intervals: List[PoseInterval] = []
	last_t: Optional[float] = None
	for t, label in samples:
		state, closed = advance(state, label, t)
		if closed is not None:
			intervals.append(closed)
		last_t = t
	if last_t is not None:
		tail = finish(state, last_t)
		if tail is not None:
			intervals.append(tail)
	return intervals
