"""Pydantic request body models for the analysis endpoints."""
from typing import List, Optional

from pydantic import BaseModel, Field

from schemas.records import FrameRecord


class SessionFramesPayload(BaseModel):
	"""Request body for POST /session/report. Frames are sorted by the handler before analysis."""

	frames: List[FrameRecord] = Field(default_factory=list, description="Frames of one session, any order")


class PoseScorePayload(BaseModel):
	"""Request body for POST /pose/score. Scores one frame against an ideal pose."""

	frame: FrameRecord
	pose: Optional[str] = Field(None, description="Ideal pose to compare with; defaults to frame.game_state")
