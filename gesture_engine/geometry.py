"""
Landmark geometry: eye aspect ratio, finger state and pointing offset.
"""
import math
import numpy as np
from typing import List, Sequence, Tuple

from .types import Point, HandObservation


# Face mesh eye outlines, ordered p1..p6 (outer corner, two upper lid points,
# inner corner, two lower lid points)
LEFT_EYE_INDICES = (33, 160, 158, 133, 153, 144)
RIGHT_EYE_INDICES = (362, 385, 387, 263, 373, 380)

# Hand keypoint indices
WRIST = 0
INDEX_FINGER_TIP = 8

# (tip, base) pairs for thumb, index, middle, ring, pinky
FINGER_TIP_BASE_PAIRS: Tuple[Tuple[int, int], ...] = (
    (4, 2),
    (8, 6),
    (12, 10),
    (16, 14),
    (20, 18),
)


def _xy(p: Point) -> np.ndarray:
    return np.array([p.x, p.y], dtype=np.float64)


def dist(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.linalg.norm(_xy(a) - _xy(b)))


def eye_points(face: Sequence[Point], indices: Sequence[int]) -> List[Point]:
    """Pick the six outline points of one eye from a face mesh."""
    return [face[i] for i in indices]


def ear(eye: Sequence[Point]) -> float:
    """
    Eye aspect ratio of a six-point eye outline.

    Args:
        eye: Points p1..p6 of one eye

    Returns:
        (|p2-p6| + |p3-p5|) / (2 * |p1-p4|), or infinity when the eye has
        no horizontal span (reads as open for any threshold)
    """
    p1, p2, p3, p4, p5, p6 = eye
    horizontal = dist(p1, p4)
    if horizontal == 0:
        return math.inf
    return (dist(p2, p6) + dist(p3, p5)) / (2.0 * horizontal)


def is_finger_open(tip: Point, base: Point) -> bool:
    """Tip strictly above its base; equal height counts as closed."""
    return tip.y < base.y


def _fingers_open(hand: HandObservation) -> List[bool]:
    kp = hand.keypoints
    return [is_finger_open(kp[tip], kp[base]) for tip, base in FINGER_TIP_BASE_PAIRS]


def is_hand_open(hand: HandObservation) -> bool:
    """All five fingers open."""
    return all(_fingers_open(hand))


def is_hand_closed(hand: HandObservation) -> bool:
    """All five fingers closed. Mixed hands are neither open nor closed."""
    return not any(_fingers_open(hand))


def horizontal_offset_fraction(tip: Point, wrist: Point, frame_width: float) -> float:
    """Signed horizontal tip-to-wrist offset as a fraction of the frame width."""
    return (tip.x - wrist.x) / frame_width
