"""
Per-session detector bookkeeping.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from .types import GestureCode


@dataclass
class DetectorSessionState:
    """
    Timers and last-fired records that persist across ticks.

    Created fresh on every enable and dropped on disable. Every ``*_since``
    field holds the timestamp of the tick its condition first became true and
    is cleared on the first tick the condition no longer holds.
    """
    eyes_closed_since: Optional[float] = None

    hand_shape_stable_since: Optional[float] = None
    last_hand_family_fire_at: Optional[float] = None

    last_point_fire_at: Dict[GestureCode, float] = field(default_factory=dict)
    last_pointed_code: Optional[GestureCode] = None

    last_global_emission_at: Optional[float] = None
