"""Frame resources. Routes: /frames (paginated listing), /frames/read (one frame by frame:// URI)."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException

from app_state import AppState
from deps import get_state
from schemas.responses import FrameListResponse
from vryoga.pose.types import Frame

router = APIRouter(tags=["frames"])

URI_SCHEME = "frame://"


def frame_uri(frame: Frame) -> str:
	return f"{URI_SCHEME}{frame.timestamp}"


def frame_resource(frame: Frame) -> Dict[str, Any]:
	try:
		clock = datetime.fromtimestamp(frame.t).strftime("%H:%M:%S")
	except (OverflowError, OSError, ValueError):
		clock = str(frame.timestamp)
	return {
		"uri": frame_uri(frame),
		"name": f"Frame @ {clock}",
		"description": f"Yoga pose data captured at {frame.timestamp} ({frame.game_state or 'Unknown State'})",
		"mimeType": "application/json",
	}


def _parse_cursor(cursor: Optional[str]) -> int:
	if cursor is None or cursor == "":
		return 0
	try:
		start = int(cursor)
	except ValueError:
		raise HTTPException(status_code=400, detail=f"Invalid cursor: {cursor!r}")
	if start < 0:
		raise HTTPException(status_code=400, detail=f"Invalid cursor: {cursor!r}")
	return start


def find_frame(frames: List[Frame], uri: str) -> Optional[Frame]:
	"""Match the frame:// URI tail against raw timestamps (numerically when it is a number)."""
	tail = uri[len(URI_SCHEME):]
	try:
		numeric: Optional[float] = float(tail)
	except ValueError:
		numeric = None
	for f in frames:
		if isinstance(f.timestamp, str):
			if f.timestamp == tail:
				return f
		elif numeric is not None and float(f.timestamp) == numeric:
			return f
	return None


@router.get("/frames", response_model=FrameListResponse)
def list_frames(cursor: Optional[str] = None, state: AppState = Depends(get_state)):
	"""List loaded frames as frame:// resources, one page at a time."""
	start = _parse_cursor(cursor)
	page_size = state.cfg.server.page_size
	frames = state.frames
	page = [frame_resource(f) for f in frames[start:start + page_size]]
	next_cursor = str(start + page_size) if start + page_size < len(frames) else None
	return {"resources": page, "nextCursor": next_cursor}


@router.get("/frames/read")
def read_frame(uri: str, state: AppState = Depends(get_state)):
	"""Return one frame record addressed by its frame:// URI."""
	if not uri.startswith(URI_SCHEME):
		raise HTTPException(status_code=400, detail=f"Unsupported resource URI scheme: {uri}")
	frame = find_frame(state.frames, uri)
	if frame is None:
		raise HTTPException(status_code=404, detail=f"Resource not found: {uri}")
	return frame.to_dict()
