"""
Pose comparison utilities.

This package defines the frame / pose metadata types, the per-frame deviation
scorer and the pose interval segmentation used by the session analyzer.
"""
