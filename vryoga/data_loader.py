"""
Dataset loading for the analyzer.

Reads the three JSON inputs, validates every record through the pydantic
schemas and hands back plain core types:
  - ideal_poses.json        {"<pose>": <frame record>, ...}
  - yoga_medical_info.json  {"poses": [{"name", "benefits", "calories_per_minute"}, ...]}
  - current_frames.json     [<frame record>, ...]  (sorted here by timestamp)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from pydantic import TypeAdapter, ValidationError

from schemas.records import FrameRecord, MedicalInfoDocument
from vryoga.config import DataConfig
from vryoga.pose.types import Frame, PoseInfo

log = logging.getLogger(__name__)

_FRAME_LIST = TypeAdapter(List[FrameRecord])
_FRAME_MAP = TypeAdapter(Dict[str, FrameRecord])


class DataLoadError(RuntimeError):
	"""A dataset file could not be read or did not match its schema."""


@dataclass
class Dataset:
	frames: List[Frame] = field(default_factory=list)
	ideal_poses: Dict[str, Frame] = field(default_factory=dict)
	pose_metadata: Dict[str, PoseInfo] = field(default_factory=dict)


def _read_json(path: Path) -> Any:
	try:
		return json.loads(Path(path).read_text(encoding="utf-8"))
	except OSError as e:
		raise DataLoadError(f"cannot read {path}: {e}") from e
	except json.JSONDecodeError as e:
		raise DataLoadError(f"{path} is not valid JSON: {e}") from e


def parse_frames(raw: Any) -> List[Frame]:
	"""Validate a list of frame records and return Frames sorted by timestamp."""
	if not isinstance(raw, list):
		raise DataLoadError(f"frames document must be a JSON array, got {type(raw).__name__}")
	try:
		records = _FRAME_LIST.validate_python(raw)
	except ValidationError as e:
		raise DataLoadError(f"invalid frame record: {e}") from e
	frames = [r.to_frame() for r in records]
	frames.sort(key=lambda f: f.t)
	return frames


def parse_ideal_poses(raw: Any) -> Dict[str, Frame]:
	if not isinstance(raw, dict):
		raise DataLoadError(f"ideal poses document must be a JSON object, got {type(raw).__name__}")
	try:
		records = _FRAME_MAP.validate_python(raw)
	except ValidationError as e:
		raise DataLoadError(f"invalid ideal pose record: {e}") from e
	return {name: r.to_frame() for name, r in records.items()}


def parse_pose_metadata(raw: Any) -> Dict[str, PoseInfo]:
	try:
		doc = MedicalInfoDocument.model_validate(raw)
	except ValidationError as e:
		raise DataLoadError(f"invalid pose metadata: {e}") from e
	# Later duplicates of a pose name are ignored.
	out: Dict[str, PoseInfo] = {}
	for rec in doc.poses:
		out.setdefault(rec.name, rec.to_pose_info())
	return out


def load_frames(path: Path) -> List[Frame]:
	return parse_frames(_read_json(path))


def load_ideal_poses(path: Path) -> Dict[str, Frame]:
	return parse_ideal_poses(_read_json(path))


def load_pose_metadata(path: Path) -> Dict[str, PoseInfo]:
	return parse_pose_metadata(_read_json(path))


def load_dataset(cfg: DataConfig, strict: bool = True) -> Dataset:
	"""
	Load all three inputs described by `cfg`.

	With strict=False a file that fails to load is logged and left empty, so the
	server can still start and report "no frames" instead of refusing to run.
	"""
	ds = Dataset()
	steps = (
		("ideal_poses", load_ideal_poses, cfg.path_for(cfg.ideal_poses_file)),
		("pose_metadata", load_pose_metadata, cfg.path_for(cfg.medical_info_file)),
		("frames", load_frames, cfg.path_for(cfg.frames_file)),
	)
	for attr, loader, path in steps:
		try:
			value = loader(path)
		except DataLoadError as e:
			if strict:
				raise
			log.error(f"[Data] {attr} not loaded: {e}")
			continue
		setattr(ds, attr, value)
		log.info(f"[Data] loaded {len(value)} {attr} from {path}")
	return ds
