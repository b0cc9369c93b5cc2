"""
Mock action consumer for exercising gesture events.
"""
from collections import Counter
from typing import List

from .types import GestureCode, GestureEvent


class MockController:
    """Mock controller that prints gestures instead of acting on them."""

    def __init__(self):
        """Initialize the mock controller."""
        self.events: List[GestureEvent] = []
        self.counts: Counter = Counter()

    def on_gesture(self, event: GestureEvent) -> None:
        """Record and print the gesture instead of executing it."""
        self.events.append(event)
        self.counts[event.code] += 1
        print(f"[MockController] {event.code.value} at {event.fired_at_ms:.0f}ms "
              f"(call #{self.counts[event.code]})")

    def count(self, code: GestureCode) -> int:
        return self.counts[code]

    def reset_counters(self) -> None:
        """Reset recorded gestures for testing."""
        self.events.clear()
        self.counts.clear()
