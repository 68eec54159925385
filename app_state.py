"""
Explicit app state, the single source of truth for the loaded dataset.
Created in lifespan, attached to app.state.state; injected into routes via Depends(get_state).
"""
from typing import Any, Dict, List, Optional

from vryoga.config import AppConfig
from vryoga.data_loader import Dataset
from vryoga.pose.types import Frame, PoseInfo
from vryoga.session_analyzer import SessionAnalyzer


class AppState:
	"""
	Holds the configuration and the read-only dataset the routes analyze.
	Populated in server lifespan (or directly by tests).
	"""
	cfg: Optional[AppConfig] = None
	dataset: Dataset

	# Counters surfaced by /health
	dbg: Dict[str, Any]

	def __init__(self, cfg: Optional[AppConfig] = None, dataset: Optional[Dataset] = None) -> None:
		self.cfg = cfg or AppConfig()
		self.dataset = dataset or Dataset()
		self.dbg = {"reports_generated": 0, "frames_scored": 0}

	@property
	def frames(self) -> List[Frame]:
		return self.dataset.frames

	@property
	def ideal_poses(self) -> Dict[str, Frame]:
		return self.dataset.ideal_poses

	@property
	def pose_metadata(self) -> Dict[str, PoseInfo]:
		return self.dataset.pose_metadata

	def analyzer(self, logger: Any = None) -> SessionAnalyzer:
		a = self.cfg.analysis
		return SessionAnalyzer(
			neutral_label=a.neutral_label,
			single_frame_seconds=a.single_frame_seconds,
			height_tolerance=a.height_tolerance_m,
			logger=logger,
		)
