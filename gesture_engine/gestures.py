"""
Gesture recognition classes that convert landmark frames into gesture events.
"""
import logging
from typing import List, Optional, Sequence

from .config import Cfg
from .geometry import (
    LEFT_EYE_INDICES, RIGHT_EYE_INDICES, WRIST, INDEX_FINGER_TIP,
    ear, eye_points, is_hand_open, is_hand_closed, horizontal_offset_fraction,
)
from .session import DetectorSessionState
from .types import Frame, GestureCode, GestureEvent, HandObservation, Point

logger = logging.getLogger(__name__)

HAND_KEYPOINT_COUNT = 21
_FACE_POINTS_NEEDED = max(LEFT_EYE_INDICES + RIGHT_EYE_INDICES) + 1


class EyeBlinkHoldGesture:
    """
    Offers NEXT_SONG while both eyes have been closed for the hold time.

    Features:
    - Both eyes must read below the EAR threshold on the same tick
    - Hold timer restarts whenever the face is lost or an eye opens
    - Keeps offering the candidate every tick past the hold; the
      debounce gate spaces out the repeats
    """

    def __init__(self, cfg: Cfg):
        """Initialize eye blink gesture processor."""
        self.cfg = cfg

    def update(self, face: Optional[Sequence[Point]], state: DetectorSessionState,
               t_now: float) -> Optional[GestureCode]:
        """
        Process the face of the current frame.

        Args:
            face: Face mesh points (None if no face detected)
            state: Session state owned by the engine
            t_now: Frame timestamp in milliseconds

        Returns:
            NEXT_SONG if the hold is satisfied, None otherwise
        """
        if face is None or len(face) < _FACE_POINTS_NEEDED:
            state.eyes_closed_since = None
            return None

        threshold = self.cfg.gestures.eye_blink.ear_threshold
        left_ear = ear(eye_points(face, LEFT_EYE_INDICES))
        right_ear = ear(eye_points(face, RIGHT_EYE_INDICES))
        eyes_closed = left_ear < threshold and right_ear < threshold

        if not eyes_closed:
            state.eyes_closed_since = None
            return None

        if state.eyes_closed_since is None:
            state.eyes_closed_since = t_now
            return None

        if t_now - state.eyes_closed_since >= self.cfg.gestures.eye_blink.hold_ms:
            return GestureCode.NEXT_SONG
        return None


class TwoHandShapeGesture:
    """
    Detects both hands open (NEXT_SONG) or both hands closed (PREVIOUS_SONG).

    Features:
    - Only active when exactly two hands are in frame
    - Shape must be held for the stability window before firing
    - Family cooldown between fires
    """

    def __init__(self, cfg: Cfg):
        """Initialize two-hand gesture processor."""
        self.cfg = cfg

    def update(self, hands: Sequence[HandObservation], state: DetectorSessionState,
               t_now: float) -> Optional[GestureCode]:
        """
        Process the hands of the current frame.

        Args:
            hands: Hands observed this tick
            state: Session state owned by the engine
            t_now: Frame timestamp in milliseconds

        Returns:
            Gesture code if the shape is stable and out of cooldown, None otherwise
        """
        if len(hands) != 2 or any(len(h.keypoints) < HAND_KEYPOINT_COUNT for h in hands):
            state.hand_shape_stable_since = None
            return None

        first, second = hands
        gesture: Optional[GestureCode] = None
        if is_hand_open(first) and is_hand_open(second):
            gesture = GestureCode.NEXT_SONG
        elif is_hand_closed(first) and is_hand_closed(second):
            gesture = GestureCode.PREVIOUS_SONG

        if gesture is None:
            state.hand_shape_stable_since = None
            return None

        if state.hand_shape_stable_since is None:
            state.hand_shape_stable_since = t_now
            return None

        if t_now - state.hand_shape_stable_since < self.cfg.gestures.two_hand.stable_ms:
            return None

        last_fire = state.last_hand_family_fire_at
        if last_fire is not None and t_now - last_fire < self.cfg.gestures.two_hand.cooldown_ms:
            return None

        state.last_hand_family_fire_at = t_now
        return gesture


class PointingGesture:
    """
    Detects a hand pointing left or right, edge-triggered per direction.

    A new direction is accepted immediately; repeating the last direction
    is limited to once per cooldown.
    """

    def __init__(self, cfg: Cfg):
        """Initialize pointing gesture processor."""
        self.cfg = cfg

    def update(self, hands: Sequence[HandObservation], frame_width: float,
               state: DetectorSessionState, t_now: float) -> List[GestureCode]:
        """
        Evaluate every hand independently.

        Args:
            hands: Hands observed this tick
            frame_width: Frame width in pixels
            state: Session state owned by the engine
            t_now: Frame timestamp in milliseconds

        Returns:
            Accepted candidates in hand order (possibly empty)
        """
        candidates = []
        for hand in hands:
            gesture = self._direction(hand, frame_width)
            if gesture is None:
                continue

            last_fire = state.last_point_fire_at.get(gesture)
            if (gesture != state.last_pointed_code
                    or last_fire is None
                    or t_now - last_fire >= self.cfg.gestures.pointing.cooldown_ms):
                state.last_pointed_code = gesture
                state.last_point_fire_at[gesture] = t_now
                candidates.append(gesture)

        return candidates

    def _direction(self, hand: HandObservation, frame_width: float) -> Optional[GestureCode]:
        kp = hand.keypoints
        offset = horizontal_offset_fraction(kp[INDEX_FINGER_TIP], kp[WRIST], frame_width)
        if abs(offset) < self.cfg.gestures.pointing.offset_threshold:
            return None
        return GestureCode.NEXT_SECTION if offset > 0 else GestureCode.PREVIOUS_SECTION


class DebounceGate:
    """Turns the candidates of one tick into at most one event."""

    def __init__(self, cfg: Cfg):
        self.cfg = cfg

    def offer(self, candidates: Sequence[GestureCode], state: DetectorSessionState,
              t_now: float) -> Optional[GestureEvent]:
        """
        Accept the first candidate if the global spacing allows it.

        Candidates that are not accepted are dropped, never queued.
        """
        if not candidates:
            return None

        gesture = candidates[0]
        last = state.last_global_emission_at
        if last is not None and t_now - last < self.cfg.gestures.debounce.global_min_interval_ms:
            logger.debug(f"Dropped {gesture.value} at {t_now:.0f}ms ({t_now - last:.0f}ms since last emission)")
            return None

        state.last_global_emission_at = t_now
        return GestureEvent(code=gesture, fired_at_ms=t_now)


class GestureProcessor:
    """
    Main gesture processor that runs every detector on a frame in priority order.
    """

    def __init__(self, cfg: Cfg):
        """Initialize gesture processor with configuration."""
        self.cfg = cfg
        self.eye_blink_gesture = EyeBlinkHoldGesture(cfg)
        self.two_hand_gesture = TwoHandShapeGesture(cfg)
        self.pointing_gesture = PointingGesture(cfg)
        self.debounce_gate = DebounceGate(cfg)

    def process_frame(self, frame: Frame, state: DetectorSessionState) -> Optional[GestureEvent]:
        """
        Process a frame and return the emitted gesture, if any.

        Args:
            frame: Landmark frame for this tick
            state: Session state owned by the engine

        Returns:
            GestureEvent if a candidate passed the debounce gate, None otherwise
        """
        t_now = frame.timestamp_ms
        hands = [h for h in frame.hands if len(h.keypoints) >= HAND_KEYPOINT_COUNT]

        # Every detector runs each tick so its timers stay current
        candidates: List[GestureCode] = []
        eye_cmd = self.eye_blink_gesture.update(frame.face, state, t_now)
        if eye_cmd is not None:
            candidates.append(eye_cmd)
        hand_cmd = self.two_hand_gesture.update(frame.hands, state, t_now)
        if hand_cmd is not None:
            candidates.append(hand_cmd)
        candidates.extend(self.pointing_gesture.update(hands, frame.width or 640, state, t_now))

        return self.debounce_gate.offer(candidates, state, t_now)
