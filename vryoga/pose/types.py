from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple, Union

Timestamp = Union[str, float, int]
DistanceMatrix = Dict[str, Dict[str, float]]


def parse_timestamp(value: Timestamp) -> float:
	"""
	Convert a frame timestamp to epoch seconds.

	Accepts numeric epoch milliseconds (1714557600000) or an ISO-8601 string
	carrying a UTC offset ("2024-05-01T10:00:00Z", "2024-05-01T12:00:00.5+02:00").
	"""
	if isinstance(value, bool):
		raise TypeError("timestamp must be a number or an ISO-8601 string, not bool")
	if isinstance(value, (int, float)):
		return float(value) / 1000.0
	if not isinstance(value, str):
		raise TypeError(f"timestamp must be a number or an ISO-8601 string, got {type(value).__name__}")
	text = value.strip()
	if text.endswith(("Z", "z")):
		text = text[:-1] + "+00:00"
	dt = datetime.fromisoformat(text)
	if dt.tzinfo is None:
		raise ValueError(f"timestamp {value!r} has no UTC offset")
	return dt.timestamp()


@dataclass(frozen=True)
class Frame:
	"""
	One timestamped sample of joint-distance data and pose context.

	- `relative_distance_matrix` is nested joint -> joint -> distance, canonically
	  keyed by the lexicographically smaller joint first; lookups go through
	  `distance()` which also accepts the reversed order.
	- `t` is `timestamp` converted to epoch seconds and orders the session.
	"""

	timestamp: Timestamp
	available_joints: Tuple[str, ...] = ()
	relative_distance_matrix: Optional[DistanceMatrix] = None
	player_height: float = 0.0
	game_state: Optional[str] = None
	matrix_size: int = 0
	t: float = field(init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		object.__setattr__(self, "available_joints", tuple(self.available_joints))
		object.__setattr__(self, "t", parse_timestamp(self.timestamp))

	@property
	def has_geometry(self) -> bool:
		"""True when the frame carries a non-empty distance matrix."""
		return bool(self.relative_distance_matrix)

	def distance(self, j1: str, j2: str) -> Optional[float]:
		m = self.relative_distance_matrix
		if not m:
			return None
		val = (m.get(j1) or {}).get(j2)
		if val is None:
			val = (m.get(j2) or {}).get(j1)
		return None if val is None else float(val)

	@classmethod
	def from_dict(cls, record: Mapping[str, Any]) -> "Frame":
		"""Build a Frame from a snake_case record (already schema-validated)."""
		matrix = record.get("relative_distance_matrix")
		return cls(
			timestamp=record["timestamp"],
			available_joints=tuple(record.get("available_joints") or ()),
			relative_distance_matrix=(
				{str(a): {str(b): float(d) for b, d in row.items()} for a, row in matrix.items()}
				if matrix is not None
				else None
			),
			player_height=float(record.get("player_height") or 0.0),
			game_state=record.get("game_state"),
			matrix_size=int(record.get("matrix_size") or 0),
		)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"timestamp": self.timestamp,
			"relative_distance_matrix": self.relative_distance_matrix,
			"matrix_size": self.matrix_size,
			"available_joints": list(self.available_joints),
			"player_height": self.player_height,
			"game_state": self.game_state,
		}


@dataclass(frozen=True)
class PoseInfo:
	"""Descriptive attributes of a pose: health benefits and energy cost."""

	name: str
	benefits: Tuple[str, ...] = ()
	calories_per_minute: float = 0.0


# pose label -> reference frame for correct form
IdealPoseLibrary = Mapping[str, Frame]
# pose label -> benefits / calorie rate (includes the neutral label)
PoseMetadata = Mapping[str, PoseInfo]
