from vryoga.pose.segmentation import (
	NO_OPEN_INTERVAL,
	NoOpenInterval,
	OpenInterval,
	PoseInterval,
	advance,
	finish,
	segment,
)


def test_pose_frame_opens_interval_from_idle():
	state, closed = advance(NO_OPEN_INTERVAL, "Tree", 3.0)
	assert state == OpenInterval("Tree", 3.0)
	assert closed is None


def test_same_label_keeps_interval_open():
	open_tree = OpenInterval("Tree", 0.0)
	state, closed = advance(open_tree, "Tree", 5.0)
	assert state is open_tree
	assert closed is None


def test_different_label_closes_and_reopens():
	state, closed = advance(OpenInterval("Tree", 0.0), "Warrior", 7.0)
	assert state == OpenInterval("Warrior", 7.0)
	assert closed == PoseInterval("Tree", 0.0, 7.0)


def test_neutral_frame_closes_interval():
	state, closed = advance(OpenInterval("Tree", 0.0), None, 8.0)
	assert isinstance(state, NoOpenInterval)
	assert closed == PoseInterval("Tree", 0.0, 8.0)


def test_neutral_frame_while_idle_is_a_no_op():
	state, closed = advance(NO_OPEN_INTERVAL, None, 1.0)
	assert state == NO_OPEN_INTERVAL
	assert closed is None


def test_finish_closes_open_interval_at_last_timestamp():
	assert finish(OpenInterval("Warrior", 10.0), 12.0) == PoseInterval("Warrior", 10.0, 12.0)
	assert finish(NO_OPEN_INTERVAL, 12.0) is None


def test_segment_tree_relaxed_warrior():
	intervals = segment([(0.0, "Tree"), (5.0, "Tree"), (8.0, None), (10.0, "Warrior")])
	assert intervals == [
		PoseInterval("Tree", 0.0, 8.0),
		PoseInterval("Warrior", 10.0, 10.0),
	]
	assert [iv.duration for iv in intervals] == [8.0, 0.0]


def test_segment_returning_pose_is_a_new_interval():
	intervals = segment([(0.0, "Tree"), (4.0, "Warrior"), (6.0, "Tree"), (9.0, "Tree")])
	assert [(iv.pose, iv.start, iv.end) for iv in intervals] == [
		("Tree", 0.0, 4.0),
		("Warrior", 4.0, 6.0),
		("Tree", 6.0, 9.0),
	]


def test_segment_empty_and_all_neutral():
	assert segment([]) == []
	assert segment([(0.0, None), (1.0, None)]) == []
