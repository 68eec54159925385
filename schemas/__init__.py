"""Pydantic record, request and response models for validation and API docs."""
from schemas.records import FrameRecord, MedicalInfoDocument, PoseInfoRecord
from schemas.requests import PoseScorePayload, SessionFramesPayload

__all__ = [
	"FrameRecord",
	"MedicalInfoDocument",
	"PoseInfoRecord",
	"PoseScorePayload",
	"SessionFramesPayload",
]
