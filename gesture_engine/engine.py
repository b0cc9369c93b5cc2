"""
Gesture engine: session lifecycle and the cooperative tick loop.
"""
import asyncio
import logging
from typing import Optional

from .config import Cfg, default_config
from .gestures import GestureProcessor
from .session import DetectorSessionState
from .types import ActionConsumerProto, Frame, LandmarkProviderProto

logger = logging.getLogger(__name__)


class GestureEngine:
    """
    Polls a landmark provider once per tick and forwards emitted gestures.

    One tick runs at a time: the next frame is only requested after the
    previous one has been fully evaluated, so the session state has a single
    writer. Disabling drops the session; a frame that resolves afterwards is
    discarded without touching any state.
    """

    def __init__(self, provider: LandmarkProviderProto, consumer: ActionConsumerProto,
                 cfg: Optional[Cfg] = None):
        """Initialize the engine in the disabled state."""
        self.cfg = cfg or default_config()
        self.provider = provider
        self.consumer = consumer
        self.processor = GestureProcessor(self.cfg)

        self._session: Optional[DetectorSessionState] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def is_enabled(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[DetectorSessionState]:
        """Current session state, or None while disabled."""
        return self._session

    def enable(self) -> None:
        """Start a fresh session. Requires a running event loop."""
        if self.is_enabled:
            return
        loop = asyncio.get_running_loop()
        self._generation += 1
        self._session = DetectorSessionState()
        previous = self._task
        self._task = loop.create_task(self._run(self._generation, previous))
        logger.info(f"Gesture detection enabled (session {self._generation})")

    def disable(self) -> None:
        """Stop ticking and discard the session."""
        if not self.is_enabled:
            return
        self._session = None
        self._generation += 1
        logger.info("Gesture detection disabled")

    async def wait_closed(self) -> None:
        """Wait for the tick loop of the last session to exit."""
        if self._task is not None:
            await self._task

    def _is_current(self, generation: int) -> bool:
        return self._session is not None and generation == self._generation

    async def _run(self, generation: int, previous: Optional[asyncio.Task] = None) -> None:
        interval_s = self.cfg.engine.tick_interval_ms / 1000.0

        # A loop from an earlier session may still be waiting on its last frame
        if previous is not None and not previous.done():
            await asyncio.wait([previous])

        while self._is_current(generation):
            try:
                frame = await self.provider.get_next_frame()
            except Exception as e:
                if not self._is_current(generation):
                    break
                logger.error(f"Landmark provider failed: {e}")
                await asyncio.sleep(interval_s)
                continue

            if not self._is_current(generation):
                logger.debug("Discarding frame resolved after disable")
                break

            try:
                self._tick(frame)
            except Exception as e:
                logger.error(f"Gesture evaluation failed at {frame.timestamp_ms:.0f}ms: {e}")
            await asyncio.sleep(interval_s)

    def _tick(self, frame: Frame) -> None:
        event = self.processor.process_frame(frame, self._session)
        if event is None:
            return

        logger.info(f"Gesture {event.code.value} at {event.fired_at_ms:.0f}ms")
        try:
            self.consumer.on_gesture(event)
        except Exception as e:
            logger.error(f"Action consumer failed on {event.code.value}: {e}")
