"""Session report routes. Routes: /session/report (text), /session/summary (JSON), for the loaded or a posted session."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from app_state import AppState
from deps import get_analyzer, get_state
from schemas.requests import SessionFramesPayload
from vryoga.pose.types import Frame
from vryoga.report import render_report
from vryoga.session_analyzer import SessionAnalyzer, SessionReport

router = APIRouter(tags=["reports"])
log = logging.getLogger(__name__)


def _run(state: AppState, analyzer: SessionAnalyzer, frames: List[Frame]) -> SessionReport:
	try:
		report = analyzer.analyze(frames, state.ideal_poses, state.pose_metadata)
	except (TypeError, ValueError) as e:
		log.error(f"[Report] analysis failed: {e}")
		raise HTTPException(status_code=500, detail=f"Failed to generate session report: {e}")
	state.dbg["reports_generated"] += 1
	state.dbg["frames_scored"] += sum(st.count_analyzed for st in report.pose_stats.values())
	return report


def _posted_frames(payload: SessionFramesPayload) -> List[Frame]:
	frames = [r.to_frame() for r in payload.frames]
	frames.sort(key=lambda f: f.t)
	return frames


@router.get("/session/report", response_class=PlainTextResponse)
def session_report(state: AppState = Depends(get_state), analyzer: SessionAnalyzer = Depends(get_analyzer)):
	"""Comprehensive text report for the loaded session."""
	report = _run(state, analyzer, state.frames)
	return render_report(report, max_benefits=state.cfg.analysis.max_benefits)


@router.post("/session/report", response_class=PlainTextResponse)
def session_report_for_frames(
	payload: SessionFramesPayload,
	state: AppState = Depends(get_state),
	analyzer: SessionAnalyzer = Depends(get_analyzer),
):
	"""Text report for caller-supplied frames, scored against the loaded ideal poses."""
	report = _run(state, analyzer, _posted_frames(payload))
	return render_report(report, max_benefits=state.cfg.analysis.max_benefits)


@router.get("/session/summary")
def session_summary(state: AppState = Depends(get_state), analyzer: SessionAnalyzer = Depends(get_analyzer)):
	"""Aggregated statistics for the loaded session as JSON."""
	return _run(state, analyzer, state.frames).to_payload()


@router.post("/session/summary")
def session_summary_for_frames(
	payload: SessionFramesPayload,
	state: AppState = Depends(get_state),
	analyzer: SessionAnalyzer = Depends(get_analyzer),
):
	return _run(state, analyzer, _posted_frames(payload)).to_payload()
