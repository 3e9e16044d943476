from __future__ import annotations
import logging
import threading
from typing import Any, Iterable, Mapping, Optional, Union

from floatspace.api.frame_data import EMPTY_SNAPSHOT, Keypoint, Pose, PoseSnapshot

log = logging.getLogger(__name__)


def _parse_keypoint(raw: Any) -> Optional[Keypoint]:
    if isinstance(raw, Keypoint):
        return raw
    try:
        if isinstance(raw, Mapping):
            conf = raw.get("confidence", raw.get("score"))
            return Keypoint(float(raw["x"]), float(raw["y"]), float(conf))
        return Keypoint(float(raw.x), float(raw.y), float(raw.confidence))
    except (KeyError, AttributeError, TypeError, ValueError):
        return None


def _parse_pose(raw: Any) -> Pose:
    if isinstance(raw, Pose):
        return raw
    keypoints = raw.get("keypoints") if isinstance(raw, Mapping) else getattr(raw, "keypoints", None)
    skeleton = raw.get("skeleton") if isinstance(raw, Mapping) else getattr(raw, "skeleton", None)
    if not isinstance(keypoints, Iterable) or isinstance(keypoints, (str, bytes)):
        return Pose()
    parsed = []
    for kp in keypoints:
        k = _parse_keypoint(kp)
        if k is not None:
            parsed.append(k)
    if not isinstance(skeleton, Iterable) or isinstance(skeleton, (str, bytes)):
        skeleton = ()
    pairs = []
    for pair in skeleton:
        try:
            a, b = pair
            pairs.append((int(a), int(b)))
        except (TypeError, ValueError):
            continue
    return Pose(tuple(parsed), tuple(pairs))


def parse_poses(raw: Union[PoseSnapshot, Iterable[Any], None]) -> PoseSnapshot:
    """
    Normalise detector output into a PoseSnapshot.

    Accepts a list of mappings ``{"keypoints": [{"x", "y", "confidence"}],
    "skeleton": [(i, j), ...]}`` or objects with the same attributes. Poses
    without a keypoint list yield no keypoints; incomplete keypoints are dropped.
    """
    if raw is None:
        return EMPTY_SNAPSHOT
    if isinstance(raw, PoseSnapshot):
        return raw
    if not isinstance(raw, Iterable) or isinstance(raw, (str, bytes, Mapping)):
        return EMPTY_SNAPSHOT
    return PoseSnapshot(tuple(_parse_pose(p) for p in raw if p is not None))


class PoseBridge:
    """
    Latest-value mailbox between the pose detector and the frame loop.

    Each publish replaces the previous snapshot; there is no history and no
    interpolation. Readers never block on the producer.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot: PoseSnapshot = EMPTY_SNAPSHOT
        self._updates = 0

    def on_pose_update(self, results) -> None:
        snapshot = parse_poses(results)
        with self._lock:
            self._snapshot = snapshot
            self._updates += 1

    def latest(self) -> PoseSnapshot:
        with self._lock:
            return self._snapshot

    @property
    def updates(self) -> int:
        with self._lock:
            return self._updates

    def reset(self) -> None:
        with self._lock:
            self._snapshot = EMPTY_SNAPSHOT
