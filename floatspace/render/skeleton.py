from __future__ import annotations

from floatspace.api.frame_data import PoseSnapshot

from .canvas import Canvas

BONE_COLOR = (0, 255, 0)
JOINT_OUTER_COLOR = (255, 0, 0)
JOINT_INNER_COLOR = (255, 255, 0)


def draw_skeleton(surface: Canvas, snapshot: PoseSnapshot, confidence_threshold: float = 0.3) -> None:
    """Draw bones and joints of every pose, mirrored to match the canvas."""
    w, _ = surface.size
    for pose in snapshot.poses:
        kps = pose.keypoints
        if not kps:
            continue

        for a, b in pose.skeleton:
            if not (0 <= a < len(kps) and 0 <= b < len(kps)):
                continue
            ka, kb = kps[a], kps[b]
            if ka.confidence > confidence_threshold and kb.confidence > confidence_threshold:
                surface.line(w - ka.x, ka.y, w - kb.x, kb.y, BONE_COLOR, 180, 2)

        for kp in kps:
            if kp.confidence > confidence_threshold:
                x = w - kp.x
                surface.circle(x, kp.y, 12, JOINT_OUTER_COLOR, 150)
                surface.circle(x, kp.y, 6, JOINT_INNER_COLOR, 200)
