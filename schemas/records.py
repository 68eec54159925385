"""Pydantic models for the on-disk / over-the-wire dataset records (frames, pose metadata)."""
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from vryoga.pose.types import Frame, PoseInfo, parse_timestamp


class FrameRecord(BaseModel):
	"""One captured frame. Timestamps are epoch milliseconds or ISO-8601 with a UTC offset."""

	model_config = ConfigDict(extra="ignore")

	# int before float: frame:// URIs echo the timestamp exactly as loaded
	timestamp: Union[StrictInt, float, str] = Field(..., description="Epoch milliseconds or ISO-8601 datetime with offset")
	relative_distance_matrix: Optional[Dict[str, Dict[str, float]]] = Field(
		None, description="joint -> joint -> distance, lexicographically smaller joint first"
	)
	matrix_size: int = Field(0, ge=0)
	available_joints: List[str] = Field(..., description="Joints tracked in this frame")
	player_height: float = Field(..., ge=0, description="Player height in metres")
	game_state: Optional[str] = Field(None, description="Pose being attempted, the neutral label, or null")

	@field_validator("timestamp")
	@classmethod
	def _check_timestamp(cls, v: Union[int, float, str]) -> Union[int, float, str]:
		if isinstance(v, str):
			parse_timestamp(v)
		return v

	@field_validator("relative_distance_matrix")
	@classmethod
	def _check_distances(cls, v: Optional[Dict[str, Dict[str, float]]]) -> Optional[Dict[str, Dict[str, float]]]:
		if v is None:
			return v
		for j1, row in v.items():
			for j2, d in row.items():
				if d < 0:
					raise ValueError(f"negative distance between {j1} and {j2}")
		return v

	def to_frame(self) -> Frame:
		return Frame.from_dict(self.model_dump())


class PoseInfoRecord(BaseModel):
	model_config = ConfigDict(extra="ignore")

	name: str
	benefits: List[str] = Field(default_factory=list)
	calories_per_minute: float = Field(0.0, ge=0)

	def to_pose_info(self) -> PoseInfo:
		return PoseInfo(
			name=self.name,
			benefits=tuple(self.benefits),
			calories_per_minute=float(self.calories_per_minute),
		)


class MedicalInfoDocument(BaseModel):
	"""Top-level shape of yoga_medical_info.json."""

	model_config = ConfigDict(extra="ignore")

	poses: List[PoseInfoRecord] = Field(default_factory=list)
