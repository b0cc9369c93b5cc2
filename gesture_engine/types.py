"""
Type definitions for the gesture classification engine.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Protocol, Sequence, Tuple, runtime_checkable


@dataclass(frozen=True)
class Point:
    """A 2-D landmark in pixel coordinates (y grows downward)."""
    x: float
    y: float


# Face mesh points, ordered as the face-mesh model publishes them
FaceLandmarks = Sequence[Point]


@dataclass
class HandObservation:
    """21 hand keypoints in the MediaPipe Hands topology."""
    keypoints: Sequence[Point]
    handedness: Optional[Literal["left", "right"]] = None


@dataclass
class Frame:
    """One sampled observation from the landmark provider."""
    timestamp_ms: float
    face: Optional[FaceLandmarks] = None
    hands: Tuple[HandObservation, ...] = field(default_factory=tuple)
    width: int = 640
    height: int = 480


class GestureCode(str, Enum):
    """Canonical output vocabulary of the engine."""
    NEXT_SONG = "next-song"
    PREVIOUS_SONG = "previous-song"
    NEXT_SECTION = "next-section"
    PREVIOUS_SECTION = "previous-section"


@dataclass(frozen=True)
class GestureEvent:
    """A gesture accepted by the debounce gate."""
    code: GestureCode
    fired_at_ms: float


@runtime_checkable
class LandmarkProviderProto(Protocol):
    """Source of landmark frames, polled once per tick."""

    async def get_next_frame(self) -> Frame:
        """Return the next frame, raising on failure."""
        ...


@runtime_checkable
class ActionConsumerProto(Protocol):
    """Receives emitted gestures synchronously from within a tick."""

    def on_gesture(self, event: GestureEvent) -> None:
        """Handle an emitted gesture. Must not re-enter the engine."""
        ...
