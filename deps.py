"""
FastAPI dependencies. Use Depends(get_state) in route handlers to receive AppState,
Depends(get_analyzer) for a SessionAnalyzer configured from it.
"""
import logging

from fastapi import Depends, Request

from app_state import AppState
from vryoga.session_analyzer import SessionAnalyzer

_session_log = logging.getLogger("vryoga.session")


def get_state(request: Request) -> AppState:
	"""Return the AppState attached to the app in lifespan (or by the test harness)."""
	return request.app.state.state


def get_analyzer(state: AppState = Depends(get_state)) -> SessionAnalyzer:
	return state.analyzer(logger=_session_log.debug)
