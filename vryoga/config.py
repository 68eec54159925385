from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DataConfig:
	# Directory holding the three dataset files. Relative paths resolve against the repo root.
	dir: str = "data"
	ideal_poses_file: str = "ideal_poses.json"
	medical_info_file: str = "yoga_medical_info.json"
	frames_file: str = "current_frames.json"

	def path_for(self, filename: str) -> Path:
		base = Path(self.dir).expanduser()
		if not base.is_absolute():
			base = _repo_root() / base
		return base / filename


@dataclass(frozen=True)
class AnalysisConfig:
	# game_state label meaning "not holding a pose"; excluded from per-pose stats.
	neutral_label: str = "Relaxed"
	# Duration credited to a session made of a single frame.
	single_frame_seconds: float = 5.0
	# Height difference (m) above which feedback mentions the mismatch.
	height_tolerance_m: float = 0.1
	max_benefits: int = 5


@dataclass(frozen=True)
class ServerConfig:
	host: str = "127.0.0.1"
	port: int = 8000
	# Number of frame resources per /frames page.
	page_size: int = 50


@dataclass(frozen=True)
class AppConfig:
	data: DataConfig = field(default_factory=DataConfig)
	analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
	server: ServerConfig = field(default_factory=ServerConfig)


_CONFIG_PATH: Optional[Path] = None
_CONFIG_CACHE: Optional[AppConfig] = None


def _repo_root() -> Path:
	# vryoga/config.py -> repo root is one level up.
	return Path(__file__).resolve().parents[1]


def get_default_config_path() -> Path:
	return _repo_root() / "config.json"


def set_config_path(path: str | Path) -> None:
	"""
	Override the config path (must be called before first get_config()).
	Used by server.py --config and the offline report script.
	"""
	global _CONFIG_PATH
	global _CONFIG_CACHE
	_CONFIG_PATH = Path(path).expanduser().resolve()
	_CONFIG_CACHE = None


def _deep_get(d: Dict[str, Any], keys: list[str], default: Any = None) -> Any:
	cur: Any = d
	for k in keys:
		if not isinstance(cur, dict):
			return default
		cur = cur.get(k)
	return cur if cur is not None else default


def _as_int(v: Any, default: int) -> int:
	try:
		return int(v)
	except (TypeError, ValueError):
		return int(default)


def _as_str(v: Any, default: str = "") -> str:
	return str(v) if v is not None else str(default)


def _as_float(v: Any, default: float) -> float:
	try:
		return float(v)
	except (TypeError, ValueError):
		return float(default)


def load_config(path: Optional[str | Path] = None) -> AppConfig:
	p = Path(path).expanduser().resolve() if path else (_CONFIG_PATH or get_default_config_path())
	if not p.exists():
		# Defaults-only config; app can still run.
		return AppConfig()
	try:
		raw = json.loads(p.read_text(encoding="utf-8"))
	except (OSError, ValueError) as e:
		# If config is malformed, fail safe to defaults (but keep app running).
		logging.warning(f"[Config] ignoring unreadable config {p}: {e}")
		return AppConfig()

	if not isinstance(raw, dict):
		return AppConfig()

	defaults = AppConfig()

	data_dir = _as_str(_deep_get(raw, ["data", "dir"], defaults.data.dir), defaults.data.dir).strip()
	ideal_file = _as_str(_deep_get(raw, ["data", "ideal_poses_file"], defaults.data.ideal_poses_file)).strip()
	medical_file = _as_str(_deep_get(raw, ["data", "medical_info_file"], defaults.data.medical_info_file)).strip()
	frames_file = _as_str(_deep_get(raw, ["data", "frames_file"], defaults.data.frames_file)).strip()

	neutral = _as_str(_deep_get(raw, ["analysis", "neutral_label"], "Relaxed"), "Relaxed").strip()
	single_s = _as_float(_deep_get(raw, ["analysis", "single_frame_seconds"], 5.0), 5.0)
	height_tol = _as_float(_deep_get(raw, ["analysis", "height_tolerance_m"], 0.1), 0.1)
	max_benefits = _as_int(_deep_get(raw, ["analysis", "max_benefits"], 5), 5)

	host = _as_str(_deep_get(raw, ["server", "host"], "127.0.0.1"), "127.0.0.1").strip()
	port = _as_int(_deep_get(raw, ["server", "port"], 8000), 8000)
	page_size = _as_int(_deep_get(raw, ["server", "page_size"], 50), 50)

	return AppConfig(
		data=DataConfig(
			dir=data_dir or defaults.data.dir,
			ideal_poses_file=ideal_file or defaults.data.ideal_poses_file,
			medical_info_file=medical_file or defaults.data.medical_info_file,
			frames_file=frames_file or defaults.data.frames_file,
		),
		analysis=AnalysisConfig(
			neutral_label=neutral or "Relaxed",
			single_frame_seconds=float(single_s) if float(single_s) >= 0.0 else 5.0,
			height_tolerance_m=float(height_tol) if float(height_tol) >= 0.0 else 0.1,
			max_benefits=int(max_benefits) if int(max_benefits) > 0 else 5,
		),
		server=ServerConfig(
			host=host or "127.0.0.1",
			port=int(port) if int(port) > 0 else 8000,
			page_size=int(page_size) if int(page_size) > 0 else 50,
		),
	)


def get_config() -> AppConfig:
	global _CONFIG_CACHE
	if _CONFIG_CACHE is None:
		_CONFIG_CACHE = load_config()
	return _CONFIG_CACHE
