from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from vryoga.pose.types import Frame, PoseInfo

JOINTS = ("left_ankle", "left_knee", "right_knee", "right_wrist")


def make_frame(t, state=None, matrix=None, joints=None, height=1.7):
	# numeric t is in seconds; frames store epoch milliseconds
	if isinstance(t, (int, float)):
		t = t * 1000
	if joints is None:
		joints = JOINTS if matrix else ()
	return Frame(
		timestamp=t,
		available_joints=tuple(joints),
		relative_distance_matrix=matrix,
		player_height=height,
		game_state=state,
	)


def tree_matrix(scale: float = 1.0) -> dict:
	return {
		"left_ankle": {"left_knee": 0.5 * scale, "right_knee": 0.4 * scale, "right_wrist": 1.5 * scale},
		"left_knee": {"right_knee": 0.4 * scale, "right_wrist": 1.0 * scale},
		"right_knee": {"right_wrist": 1.0 * scale},
	}


@pytest.fixture()
def ideal_poses() -> dict:
	return {
		"Tree": make_frame(0, "Tree", tree_matrix()),
		"Warrior": make_frame(0, "Warrior", tree_matrix()),
	}


@pytest.fixture()
def pose_metadata() -> dict:
	return {
		"Tree": PoseInfo("Tree", ("Improves balance", "Strengthens legs"), 3.0),
		"Warrior": PoseInfo("Warrior", ("Strengthens legs", "Opens hips"), 6.0),
		"Relaxed": PoseInfo("Relaxed", ("Reduces stress",), 1.2),
	}
