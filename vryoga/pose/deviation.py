"""
Per-frame pose deviation scoring.

Compares the pairwise joint distances of an observed frame with those of the
reference frame for the same pose. Every unordered joint pair present in both
frames is compared once; the relative difference of the two distances is the
pair's deviation percentage, and accuracy is 100 minus the mean deviation.

Sparse data never raises: missing matrices, frames without joints and pairs that
cannot be compared all produce a zero-accuracy result with an explanatory line.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Dict, List, Tuple

from vryoga.pose.types import Frame

MAX_TOP_DEVIATIONS = 3
MAX_FEEDBACK_LINES = 3

NOT_ENOUGH_DATA = "Not enough data to analyze pose."
NO_COMPARABLE_PAIRS = "Could not compare any joint pairs."


@dataclass(frozen=True)
class PoseScore:
	accuracy: int
	feedback: List[str] = field(default_factory=list)
	top_deviations: List[str] = field(default_factory=list)

	def to_payload(self) -> Dict[str, Any]:
		return {
			"accuracy": int(self.accuracy),
			"feedback": list(self.feedback),
			"top_deviations": list(self.top_deviations),
		}


def round_half_up(value: float) -> int:
	return int(math.floor(value + 0.5))


def format_pair(j1: str, j2: str) -> str:
	return f"{j1}-{j2}"


def humanize_joint(name: str) -> str:
	return name.replace("_", " ")


def _unique(joints) -> List[str]:
	seen: Dict[str, None] = {}
	for j in joints:
		seen.setdefault(j, None)
	return list(seen)


def _band_feedback(accuracy: float) -> str:
	if accuracy < 70:
		return "Focus on the overall form and alignment."
	if accuracy < 90:
		return "Good alignment! Minor adjustments needed."
	return "Excellent form! Maintain this stability."


def pair_deviations(observed: Frame, reference: Frame) -> List[Tuple[Tuple[str, str], float]]:
	"""
	Deviation percentage for each comparable joint pair, in enumeration order.

	Pairs are canonical (lexicographically ordered). A pair is skipped when either
	distance is missing or the reference distance is zero.
	"""
	reference_joints = set(reference.available_joints)
	joints = sorted(j for j in _unique(observed.available_joints) if j in reference_joints)
	out: List[Tuple[Tuple[str, str], float]] = []
	for j1, j2 in combinations(joints, 2):
		observed_d = observed.distance(j1, j2)
		reference_d = reference.distance(j1, j2)
		if observed_d is None or reference_d is None or reference_d == 0:
			continue
		out.append(((j1, j2), abs(observed_d - reference_d) / reference_d * 100.0))
	return out


def score_pose(observed: Frame, reference: Frame, height_tolerance: float = 0.1) -> PoseScore:
	"""
	Score an observed frame against the reference frame of the pose being attempted.

	Returns accuracy in [0, 100], up to three feedback lines, and up to three
	`joint1-joint2` labels for the pairs that deviate most.
	"""
	if (
		observed.relative_distance_matrix is None
		or reference.relative_distance_matrix is None
		or not observed.available_joints
	):
		return PoseScore(accuracy=0, feedback=[NOT_ENOUGH_DATA], top_deviations=[])

	deviations = pair_deviations(observed, reference)
	if not deviations:
		return PoseScore(accuracy=0, feedback=[NO_COMPARABLE_PAIRS], top_deviations=[])

	average = sum(d for _, d in deviations) / len(deviations)
	accuracy = max(0.0, min(100.0, 100.0 - average))

	# Exact matches are not deviations; sorted() is stable so ties keep pair order.
	ranked = sorted((item for item in deviations if item[1] > 0), key=lambda item: item[1], reverse=True)
	top = [pair for pair, _ in ranked[:MAX_TOP_DEVIATIONS]]

	feedback = [_band_feedback(accuracy)]
	for j1, j2 in top:
		feedback.append(f"Check the distance between your {humanize_joint(j1)} and {humanize_joint(j2)}.")
	if abs(observed.player_height - reference.player_height) > height_tolerance:
		feedback.append(
			f"Note: Your height ({observed.player_height:.2f}m) differs from the ideal model "
			f"({reference.player_height:.2f}m), which may slightly affect comparison."
		)

	return PoseScore(
		accuracy=round_half_up(accuracy),
		feedback=feedback[:MAX_FEEDBACK_LINES],
		top_deviations=[format_pair(j1, j2) for j1, j2 in top],
	)
