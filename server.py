import argparse
import logging
import os
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app_state import AppState
from routers import frames, poses, reports
from schemas.responses import HealthResponse
from vryoga import __version__
from vryoga.config import AppConfig, get_config, set_config_path
from vryoga.data_loader import Dataset, load_dataset

log = logging.getLogger("vryoga.server")

CONFIG_PATH = os.getenv("VRYOGA_CONFIG")  # optional path to config.json
DATA_DIR = os.getenv("VRYOGA_DATA_DIR")  # overrides data.dir from config


def _effective_config(config_path: Optional[str] = None) -> AppConfig:
	path = config_path or CONFIG_PATH
	if path:
		set_config_path(path)
	cfg = get_config()
	if DATA_DIR:
		cfg = replace(cfg, data=replace(cfg.data, dir=DATA_DIR))
	return cfg


def build_state(cfg: Optional[AppConfig] = None) -> AppState:
	"""
	Load the dataset described by cfg into a fresh AppState.

	Load failures are logged and leave that part of the dataset empty; the server
	still starts and reports "No frames available for analysis.".
	"""
	cfg = cfg or _effective_config()
	try:
		dataset = load_dataset(cfg.data, strict=False)
	except Exception as e:
		log.exception(f"[Data] unexpected error while loading dataset: {e!r}")
		dataset = Dataset()
	state = AppState(cfg=cfg, dataset=dataset)
	if not state.frames:
		log.warning("[Data] no current frames were loaded; reports will be empty")
	return state


@asynccontextmanager
async def lifespan(app: FastAPI):
	# Tests (or an embedding caller) may attach a prepared state before startup.
	if getattr(app.state, "state", None) is None:
		app.state.state = build_state()
	st: AppState = app.state.state
	log.info(
		f"[Server] vr-yoga-analyzer {__version__} ready: {len(st.frames)} frames, "
		f"{len(st.ideal_poses)} ideal poses, {len(st.pose_metadata)} pose metadata entries"
	)
	yield


def create_app(state: Optional[AppState] = None) -> FastAPI:
	app = FastAPI(title="VR Yoga Analyzer", version=__version__, lifespan=lifespan)
	app.state.state = state
	app.add_middleware(
		CORSMiddleware,
		allow_origins=["*"],
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	app.include_router(frames.router)
	app.include_router(reports.router)
	app.include_router(poses.router)

	@app.get("/health", response_model=HealthResponse)
	def health():
		st: AppState = app.state.state
		return {
			"detail": "ok",
			"version": __version__,
			"frames": len(st.frames),
			"ideal_poses": len(st.ideal_poses),
			"pose_metadata": len(st.pose_metadata),
			"counters": dict(st.dbg),
		}

	return app


app = create_app()


def main() -> None:
	parser = argparse.ArgumentParser("vr-yoga-analyzer")
	parser.add_argument("--host", default=None, help="Bind address (default: server.host from config)")
	parser.add_argument("--port", type=int, default=None, help="Port (default: server.port from config)")
	parser.add_argument("--config", default=None, help="Path to config.json")
	parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
	args = parser.parse_args()

	if args.debug:
		logging.basicConfig(level=logging.DEBUG, format='%(levelname)s:%(name)s:%(message)s')
	else:
		logging.basicConfig(level=logging.INFO, format='%(levelname)s:%(name)s:%(message)s')

	cfg = _effective_config(args.config)

	import uvicorn

	uvicorn.run(
		create_app(build_state(cfg)),
		host=args.host or cfg.server.host,
		port=args.port or cfg.server.port,
		log_level="debug" if args.debug else "info",
	)


if __name__ == "__main__":
	main()
