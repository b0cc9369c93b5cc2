"""
Face and hand landmark detection using MediaPipe.
"""
import asyncio
import time
import cv2
import mediapipe as mp
import numpy as np
from typing import List, Optional, Tuple

from .config import Cfg
from .types import Frame, HandObservation, Point


def _to_points(landmarks, width: int, height: int) -> List[Point]:
    """Convert normalised MediaPipe landmarks to pixel points."""
    return [Point(lm.x * width, lm.y * height) for lm in landmarks]


class MediaPipeLandmarkProvider:
    """Landmark provider backed by a camera, MediaPipe Face Mesh and MediaPipe Hands."""

    def __init__(self, cfg: Cfg):
        """
        Open the camera and load both models.

        Args:
            cfg: Engine configuration (camera and mediapipe sections are used)

        Raises:
            RuntimeError: If the camera cannot be opened
        """
        self.cfg = cfg

        self.mp_face_mesh = mp.solutions.face_mesh
        self.face_mesh = self.mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=1,
            refine_landmarks=cfg.mediapipe.refine_face_landmarks,
            min_detection_confidence=cfg.mediapipe.min_detection_confidence,
            min_tracking_confidence=cfg.mediapipe.min_tracking_confidence
        )

        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=cfg.mediapipe.max_num_hands,
            model_complexity=cfg.mediapipe.hand_model_complexity,
            min_detection_confidence=cfg.mediapipe.min_detection_confidence,
            min_tracking_confidence=cfg.mediapipe.min_tracking_confidence
        )

        self.cap = cv2.VideoCapture(cfg.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, cfg.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, cfg.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, cfg.camera.fps)

        if not self.cap.isOpened():
            self.close()
            raise RuntimeError(f"Failed to open camera {cfg.camera.index}")

    async def get_next_frame(self) -> Frame:
        """Capture and analyse one frame off the event loop."""
        return await asyncio.to_thread(self._read_frame)

    def _read_frame(self) -> Frame:
        ret, frame_bgr = self.cap.read()
        if not ret:
            raise RuntimeError("Failed to read frame from camera")
        timestamp_ms = time.monotonic() * 1000.0

        if self.cfg.camera.mirror:
            frame_bgr = cv2.flip(frame_bgr, 1)

        face, hands, (width, height) = self.process(frame_bgr)
        return Frame(timestamp_ms=timestamp_ms, face=face, hands=tuple(hands),
                     width=width or 640, height=height)

    def process(self, frame_bgr: np.ndarray) -> Tuple[Optional[List[Point]], List[HandObservation], Tuple[int, int]]:
        """
        Run both models on a BGR frame.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            (face points or None, observed hands, (width, height))
        """
        height, width = frame_bgr.shape[:2]

        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        face = None
        face_results = self.face_mesh.process(frame_rgb)
        if face_results.multi_face_landmarks:
            face = _to_points(face_results.multi_face_landmarks[0].landmark, width, height)

        hands = []
        hand_results = self.hands.process(frame_rgb)
        if hand_results.multi_hand_landmarks:
            handedness = hand_results.multi_handedness or []
            for i, hand_landmarks in enumerate(hand_results.multi_hand_landmarks):
                label = None
                if i < len(handedness):
                    label = handedness[i].classification[0].label.lower()
                hands.append(HandObservation(
                    keypoints=_to_points(hand_landmarks.landmark, width, height),
                    handedness=label
                ))

        return face, hands, (width, height)

    def close(self) -> None:
        """Release the camera and both models."""
        if hasattr(self, 'cap') and self.cap.isOpened():
            self.cap.release()
        self.face_mesh.close()
        self.hands.close()
