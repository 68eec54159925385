"""Pydantic response models for API docs (routes may still return dicts)."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FrameResource(BaseModel):
	uri: str
	name: str
	description: str
	mimeType: str = "application/json"


class FrameListResponse(BaseModel):
	"""Response from GET /frames."""

	resources: List[FrameResource]
	nextCursor: Optional[str] = None


class PoseScoreResponse(BaseModel):
	"""Response from POST /pose/score."""

	pose: str
	accuracy: int = Field(..., ge=0, le=100)
	feedback: List[str]
	top_deviations: List[str]


class HealthResponse(BaseModel):
	detail: str
	version: str
	frames: int
	ideal_poses: int
	pose_metadata: int
	counters: Dict[str, Any] = Field(default_factory=dict)
