from conftest import make_frame, tree_matrix
from vryoga.pose.types import PoseInfo
from vryoga.report import NO_FRAMES_TEXT, format_duration, render_report
from vryoga.session_analyzer import SessionReport, analyze_session


def test_empty_report_text():
	assert render_report(SessionReport()) == NO_FRAMES_TEXT == "No frames available for analysis."


def test_format_duration():
	assert format_duration(90) == "1 minutes 30 seconds"
	assert format_duration(29.6) == "0 minutes 30 seconds"
	assert format_duration(3600) == "60 minutes 0 seconds"


def test_full_report_sections_in_order(ideal_poses, pose_metadata):
	tree_dev = tree_matrix()
	tree_dev["left_ankle"] = dict(tree_dev["left_ankle"], left_knee=0.6)
	frames = [
		make_frame(0, "Tree", tree_matrix()),
		make_frame(5, "Tree", tree_dev),
		make_frame(8, "Relaxed"),
		make_frame(10, "Lotus"),
		make_frame(70, "Lotus"),
	]
	text = render_report(analyze_session(frames, ideal_poses, pose_metadata))
	lines = text.splitlines()

	assert lines[0] == "Yoga Session Report"
	assert "Total Session Duration: 1 minutes 10 seconds" in lines
	assert any(line.startswith("Estimated Calories Burned: ") and line.endswith(" kcal") for line in lines)
	assert "1. Tree (8 seconds)" in lines
	assert "2. Lotus (60 seconds)" in lines
	assert "* Tree:" in lines
	assert "  - Frames Captured: 2" in lines
	assert "  - Common Adjustment Needed: Distance between left ankle and left knee" in lines
	assert "  - Frames with Missing Joint Data: 2" in lines
	assert "  - Accuracy: N/A (No frames with joint data available)" in lines
	assert "- Focus on the distance between left ankle and left knee" in lines
	assert lines[-1] == "Remember to listen to your body and consult a professional if needed."

	order = [
		"Total Session Duration",
		"Estimated Calories Burned",
		"Session Flow:",
		"Pose Analysis:",
		"* Tree:",
		"* Lotus:",
		"Overall Average Pose Accuracy (Analyzed Poses):",
		"Key Areas for Improvement Across Session:",
		"Potential Benefits from Poses Practiced:",
	]
	positions = [text.index(marker) for marker in order]
	assert positions == sorted(positions)


def test_benefits_capped_and_default_line(ideal_poses):
	many = {
		"Tree": PoseInfo("Tree", tuple(f"benefit {i}" for i in range(8)), 2.0),
	}
	text = render_report(analyze_session([make_frame(0, "Tree")], ideal_poses, many))
	assert "- benefit 4" in text
	assert "- benefit 5" not in text

	text = render_report(analyze_session([make_frame(0, "Lotus")], ideal_poses, {}))
	assert "- General well-being and mindfulness." in text


def test_neutral_only_session_has_no_pose_analysis(ideal_poses, pose_metadata):
	text = render_report(analyze_session([make_frame(0, None), make_frame(3, "Relaxed")], ideal_poses, pose_metadata))
	assert "No poses were analyzed for accuracy." in text
	assert "Overall Average Pose Accuracy" not in text
