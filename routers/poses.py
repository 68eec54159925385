"""Pose routes. Routes: /poses (ideal pose catalog), /pose/score (score one frame)."""
from fastapi import APIRouter, Depends, HTTPException

from app_state import AppState
from deps import get_state
from schemas.requests import PoseScorePayload
from schemas.responses import PoseScoreResponse
from vryoga.pose.deviation import score_pose

router = APIRouter(tags=["poses"])


@router.get("/poses")
def list_poses(state: AppState = Depends(get_state)):
	"""Known ideal poses with their benefits and calorie rate (when metadata exists)."""
	out = []
	for name in state.ideal_poses:
		info = state.pose_metadata.get(name)
		out.append({
			"name": name,
			"benefits": list(info.benefits) if info else [],
			"calories_per_minute": info.calories_per_minute if info else None,
		})
	return {"poses": out, "neutral_label": state.cfg.analysis.neutral_label}


@router.post("/pose/score", response_model=PoseScoreResponse)
def score_frame(payload: PoseScorePayload, state: AppState = Depends(get_state)):
	"""Score one frame against the ideal pose named in the payload or by its game_state."""
	pose = (payload.pose or payload.frame.game_state or "").strip()
	if not pose:
		raise HTTPException(status_code=400, detail="Missing 'pose' and frame has no game_state")
	reference = state.ideal_poses.get(pose)
	if reference is None:
		raise HTTPException(status_code=404, detail=f"No ideal pose for {pose!r}")
	result = score_pose(payload.frame.to_frame(), reference, height_tolerance=state.cfg.analysis.height_tolerance_m)
	state.dbg["frames_scored"] += 1
	return {"pose": pose, **result.to_payload()}
