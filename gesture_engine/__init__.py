"""
Gesture Classification Engine

Turns a stream of face-mesh and hand landmark frames into debounced control
gestures (next/previous song, next/previous section) for hands-free control.
"""

__version__ = "0.1.0"

from .types import (
    Point, HandObservation, Frame, GestureCode, GestureEvent,
    LandmarkProviderProto, ActionConsumerProto,
)
from .config import load_config, default_config, Cfg
from .session import DetectorSessionState
from .geometry import ear, is_finger_open, is_hand_open, is_hand_closed, horizontal_offset_fraction
from .gestures import (
    EyeBlinkHoldGesture, TwoHandShapeGesture, PointingGesture, DebounceGate, GestureProcessor,
)
from .engine import GestureEngine
from .controller_mock import MockController

__all__ = [
    "Point",
    "HandObservation",
    "Frame",
    "GestureCode",
    "GestureEvent",
    "LandmarkProviderProto",
    "ActionConsumerProto",
    "load_config",
    "default_config",
    "Cfg",
    "DetectorSessionState",
    "ear",
    "is_finger_open",
    "is_hand_open",
    "is_hand_closed",
    "horizontal_offset_fraction",
    "EyeBlinkHoldGesture",
    "TwoHandShapeGesture",
    "PointingGesture",
    "DebounceGate",
    "GestureProcessor",
    "GestureEngine",
    "MockController",
]
