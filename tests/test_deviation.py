import pytest

from conftest import make_frame, tree_matrix
from vryoga.pose.deviation import (
	NO_COMPARABLE_PAIRS,
	NOT_ENOUGH_DATA,
	pair_deviations,
	round_half_up,
	score_pose,
)


def test_single_pair_twenty_percent_deviation_scores_eighty():
	reference = make_frame(0, "Tree", {"A": {"B": 1.0}}, joints=("A", "B"))
	observed = make_frame(1, "Tree", {"A": {"B": 1.2}}, joints=("A", "B"))

	(pair, deviation), = pair_deviations(observed, reference)
	assert pair == ("A", "B")
	assert deviation == pytest.approx(20.0)

	result = score_pose(observed, reference)
	assert result.accuracy == 80
	assert result.top_deviations == ["A-B"]
	assert result.feedback == [
		"Good alignment! Minor adjustments needed.",
		"Check the distance between your A and B.",
	]


def test_frame_against_itself_is_perfect_without_deviations():
	frame = make_frame(0, "Tree", tree_matrix())
	result = score_pose(frame, frame)
	assert result.accuracy == 100
	assert result.top_deviations == []
	assert result.feedback == ["Excellent form! Maintain this stability."]


def test_reversed_pair_keys_score_identically():
	reference = make_frame(0, "Tree", {"A": {"B": 1.0, "C": 2.0}}, joints=("A", "B", "C"))
	canonical = make_frame(1, "Tree", {"A": {"B": 1.3, "C": 1.8}}, joints=("A", "B", "C"))
	reversed_keys = make_frame(1, "Tree", {"B": {"A": 1.3}, "C": {"A": 1.8}}, joints=("C", "B", "A"))
	reversed_reference = make_frame(0, "Tree", {"B": {"A": 1.0}, "C": {"A": 2.0}}, joints=("A", "B", "C"))

	expected = score_pose(canonical, reference)
	assert score_pose(reversed_keys, reference) == expected
	assert score_pose(canonical, reversed_reference) == expected
	assert expected.top_deviations == ["A-B", "A-C"]


def test_missing_matrix_or_joints_is_not_enough_data():
	reference = make_frame(0, "Tree", tree_matrix())
	no_matrix = make_frame(1, "Tree", None, joints=("left_knee",))
	no_joints = make_frame(1, "Tree", tree_matrix(), joints=())

	for observed in (no_matrix, no_joints):
		result = score_pose(observed, reference)
		assert result.accuracy == 0
		assert result.feedback == [NOT_ENOUGH_DATA]
		assert result.top_deviations == []

	result = score_pose(make_frame(1, "Tree", tree_matrix()), make_frame(0, "Tree", None, joints=("left_knee",)))
	assert result.feedback == [NOT_ENOUGH_DATA]


def test_zero_or_absent_reference_distances_are_not_comparable():
	reference = make_frame(0, "Tree", {"A": {"B": 0.0}}, joints=("A", "B", "C"))
	observed = make_frame(1, "Tree", {"A": {"B": 0.5, "C": 1.0}}, joints=("A", "B", "C"))

	result = score_pose(observed, reference)
	assert result.accuracy == 0
	assert result.feedback == [NO_COMPARABLE_PAIRS]
	assert result.top_deviations == []


def test_joints_missing_from_reference_are_ignored():
	reference = make_frame(0, "Tree", {"A": {"B": 1.0, "C": 1.0}}, joints=("A", "B"))
	observed = make_frame(1, "Tree", {"A": {"B": 1.0, "C": 9.0}}, joints=("A", "B", "C"))
	result = score_pose(observed, reference)
	assert result.accuracy == 100
	assert result.top_deviations == []


def test_duplicate_joint_names_do_not_double_count():
	reference = make_frame(0, "Tree", {"A": {"B": 1.0}}, joints=("A", "B"))
	observed = make_frame(1, "Tree", {"A": {"B": 1.2}}, joints=("A", "B", "A", "B"))
	assert len(pair_deviations(observed, reference)) == 1
	assert score_pose(observed, reference).top_deviations == ["A-B"]


def test_accuracy_is_clamped_at_zero():
	reference = make_frame(0, "Tree", {"A": {"B": 1.0}}, joints=("A", "B"))
	observed = make_frame(1, "Tree", {"A": {"B": 3.5}}, joints=("A", "B"))
	result = score_pose(observed, reference)
	assert result.accuracy == 0
	assert result.feedback[0] == "Focus on the overall form and alignment."


def test_top_three_deviations_are_ranked_and_feedback_capped():
	joints = ("A", "B", "C", "D")
	ones = {"A": {"B": 1.0, "C": 1.0, "D": 1.0}, "B": {"C": 1.0, "D": 1.0}, "C": {"D": 1.0}}
	observed_m = {"A": {"B": 1.1, "C": 1.5, "D": 1.3}, "B": {"C": 1.2, "D": 1.0}, "C": {"D": 1.05}}
	reference = make_frame(0, "Tree", ones, joints=joints)
	observed = make_frame(1, "Tree", observed_m, joints=joints)

	result = score_pose(observed, reference)
	# mean deviation (10 + 50 + 30 + 20 + 0 + 5) / 6
	assert result.accuracy == 81
	assert result.top_deviations == ["A-C", "A-D", "B-C"]
	assert len(result.feedback) == 3
	assert result.feedback[1] == "Check the distance between your A and C."
	assert result.feedback[2] == "Check the distance between your A and D."


def test_feedback_uses_readable_joint_names_and_height_note():
	reference = make_frame(0, "Tree", {"left_knee": {"right_hip": 1.0}}, joints=("left_knee", "right_hip"), height=1.70)
	observed = make_frame(1, "Tree", {"left_knee": {"right_hip": 1.05}}, joints=("left_knee", "right_hip"), height=1.40)

	result = score_pose(observed, reference)
	assert result.accuracy == 95
	assert result.top_deviations == ["left_knee-right_hip"]
	assert result.feedback == [
		"Excellent form! Maintain this stability.",
		"Check the distance between your left knee and right hip.",
		"Note: Your height (1.40m) differs from the ideal model (1.70m), which may slightly affect comparison.",
	]


def test_small_height_difference_adds_no_note():
	frame = make_frame(0, "Tree", tree_matrix(), height=1.70)
	other = make_frame(1, "Tree", tree_matrix(), height=1.75)
	assert score_pose(other, frame).feedback == ["Excellent form! Maintain this stability."]


def test_round_half_up():
	assert round_half_up(80.5) == 81
	assert round_half_up(79.49) == 79
	assert round_half_up(0.5) == 1
