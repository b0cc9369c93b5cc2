"""
Synthetic landmark frames for driving the detectors in tests.
"""
import asyncio
from typing import Callable, List, Optional, Sequence, Union

from gesture_engine.geometry import (
    LEFT_EYE_INDICES, RIGHT_EYE_INDICES, FINGER_TIP_BASE_PAIRS, WRIST, INDEX_FINGER_TIP,
)
from gesture_engine.types import Frame, HandObservation, Point

FRAME_W, FRAME_H = 640, 480
FACE_MESH_POINTS = 478


def eye_outline(ear_value: float, cx: float, cy: float) -> List[Point]:
    """Six eye points p1..p6 with a 10px span whose EAR is exactly ear_value."""
    h = ear_value * 5.0
    return [
        Point(cx, cy),
        Point(cx + 3, cy - h),
        Point(cx + 7, cy - h),
        Point(cx + 10, cy),
        Point(cx + 7, cy + h),
        Point(cx + 3, cy + h),
    ]


def face(left_ear: float, right_ear: Optional[float] = None) -> List[Point]:
    """A face mesh whose eyes have the given aspect ratios."""
    if right_ear is None:
        right_ear = left_ear
    points = [Point(320.0, 240.0)] * FACE_MESH_POINTS
    for idx, p in zip(LEFT_EYE_INDICES, eye_outline(left_ear, 260.0, 200.0)):
        points[idx] = p
    for idx, p in zip(RIGHT_EYE_INDICES, eye_outline(right_ear, 360.0, 200.0)):
        points[idx] = p
    return points


def hand(fingers_open: Sequence[bool] = (False,) * 5, offset: float = 0.0,
         handedness: Optional[str] = "right") -> HandObservation:
    """
    A 21-point hand.

    Args:
        fingers_open: Open state for thumb, index, middle, ring, pinky
        offset: Index fingertip x offset from the wrist as a fraction of frame width
    """
    wrist_x = 320.0
    points = [Point(wrist_x, 300.0)] * 21
    for (tip, base), is_open in zip(FINGER_TIP_BASE_PAIRS, fingers_open):
        points[base] = Point(wrist_x, 300.0)
        points[tip] = Point(wrist_x, 200.0 if is_open else 400.0)
    tip = points[INDEX_FINGER_TIP]
    points[INDEX_FINGER_TIP] = Point(wrist_x + offset * FRAME_W, tip.y)
    points[WRIST] = Point(wrist_x, 300.0)
    return HandObservation(keypoints=points, handedness=handedness)


def open_hand() -> HandObservation:
    return hand((True,) * 5)


def closed_hand() -> HandObservation:
    return hand((False,) * 5)


def frame(t_ms: float, face_points=None, hands=()) -> Frame:
    return Frame(timestamp_ms=t_ms, face=face_points, hands=tuple(hands),
                 width=FRAME_W, height=FRAME_H)


def timeline(start_ms: int, end_ms: int, step_ms: int = 100) -> range:
    """Tick timestamps from start to end inclusive."""
    return range(start_ms, end_ms + 1, step_ms)


class ScriptedProvider:
    """Landmark provider that replays frames and exceptions, then stops the engine."""

    def __init__(self, items: Sequence[Union[Frame, Exception]] = (),
                 on_exhausted: Optional[Callable[[], None]] = None):
        self.items = list(items)
        self.on_exhausted = on_exhausted
        self.calls = 0

    async def get_next_frame(self) -> Frame:
        self.calls += 1
        await asyncio.sleep(0)
        if not self.items:
            if self.on_exhausted is not None:
                self.on_exhausted()
            raise RuntimeError("script exhausted")
        item = self.items.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class GatedProvider:
    """Landmark provider whose frames resolve only when the test says so."""

    def __init__(self):
        self.pending: Optional[asyncio.Future] = None
        self.calls = 0

    async def get_next_frame(self) -> Frame:
        self.calls += 1
        self.pending = asyncio.get_running_loop().create_future()
        return await self.pending
