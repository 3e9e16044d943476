from __future__ import annotations
import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

import cv2
import numpy as np

from floatspace.video.camera import Camera

from .bridge import PoseBridge

log = logging.getLogger(__name__)

# frame_rgb, canvas size -> list of {"keypoints": [...], "skeleton": [...]}
Estimator = Callable[[np.ndarray, Tuple[int, int]], List[Dict[str, Any]]]


class MediaPipePoseEstimator:
    """Single-person MediaPipe pose model; landmarks scaled to canvas pixels."""

    def __init__(self, model_complexity: int = 0, min_confidence: float = 0.5):
        import mediapipe as mp

        self._mp_pose = mp.solutions.pose
        self._model = self._mp_pose.Pose(
            model_complexity=model_complexity,
            min_detection_confidence=min_confidence,
            min_tracking_confidence=min_confidence,
        )
        self._skeleton = sorted(tuple(c) for c in self._mp_pose.POSE_CONNECTIONS)

    def __call__(self, frame_rgb: np.ndarray, canvas_size: Tuple[int, int]) -> List[Dict[str, Any]]:
        results = self._model.process(frame_rgb)
        if results.pose_landmarks is None:
            return []
        w, h = canvas_size
        keypoints = [
            {"x": lm.x * w, "y": lm.y * h, "confidence": lm.visibility}
            for lm in results.pose_landmarks.landmark
        ]
        return [{"keypoints": keypoints, "skeleton": self._skeleton}]

    def close(self) -> None:
        self._model.close()


class PoseDetector:
    """
    Background producer for the pose stream.

    Reads webcam frames on its own thread, runs the estimator and publishes
    each result into the bridge. The newest camera frame is kept for the
    sketch backdrop. Without a camera or a pose model the detector stays
    disabled and the sketch keeps running on an empty snapshot.
    """

    def __init__(
        self,
        bridge: PoseBridge,
        camera: Camera,
        canvas_size: Tuple[int, int],
        estimator: Optional[Estimator] = None,
    ):
        self.bridge = bridge
        self.camera = camera
        self.canvas_size = canvas_size
        self.estimator = estimator
        self._frame: Optional[np.ndarray] = None
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def set_canvas_size(self, size: Tuple[int, int]) -> None:
        with self._lock:
            self.canvas_size = size

    def latest_frame(self) -> Optional[np.ndarray]:
        with self._lock:
            return self._frame

    def _load_estimator(self) -> bool:
        if self.estimator is not None:
            return True
        try:
            self.estimator = MediaPipePoseEstimator()
        except (ImportError, AttributeError) as exc:
            log.warning("pose model unavailable, body repulsion disabled: %s", exc)
            return False
        log.info("pose model loaded and ready")
        return True

    def step(self) -> bool:
        """Process one camera frame. Returns False when no frame was read."""
        ok, frame_bgr = self.camera.read()
        if not ok or frame_bgr is None:
            return False
        with self._lock:
            self._frame = frame_bgr
            size = self.canvas_size
        if self.estimator is not None:
            frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
            self.bridge.on_pose_update(self.estimator(frame_rgb, size))
        return True

    def _run(self) -> None:
        misses = 0
        failures = 0
        while not self._stop.is_set():
            try:
                got_frame = self.step()
            except Exception:
                failures += 1
                if failures == 1:
                    log.exception("pose detection failed, retrying")
                else:
                    log.debug("pose detection failed (%d in a row)", failures)
                self._stop.wait(0.05)
                continue
            failures = 0
            if got_frame:
                misses = 0
                continue
            misses += 1
            if misses == 30:
                log.warning("camera is not delivering frames")
            self._stop.wait(0.05)

    def start(self, with_pose: bool = True) -> bool:
        if not self.camera.is_open and not self.camera.open():
            return False
        if with_pose:
            self._load_estimator()
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="pose-detector", daemon=True)
        self._thread.start()
        return True

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
        close = getattr(self.estimator, "close", None)
        if close is not None:
            close()
        self.camera.close()
