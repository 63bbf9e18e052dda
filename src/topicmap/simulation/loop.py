"""Frame-driven scheduling of simulation ticks on the asyncio event loop."""

import asyncio
import logging
from enum import Enum
from typing import Callable

from topicmap.config import settings
from topicmap.simulation.physics import ForceSimulation

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    """Whether ticks are being scheduled."""

    IDLE = "idle"
    RUNNING = "running"


class SimulationLoop:
    """
    Runs one simulation tick per frame: run, then reschedule.

    Exactly one timer handle is owned at a time, so stop() always cancels
    the pending tick. Ticks, pointer handlers and stop() all run on the
    same event loop and never interleave.
    """

    def __init__(
        self,
        simulation: ForceSimulation,
        frame_interval: float | None = None,
        on_tick: Callable[[ForceSimulation], None] | None = None,
    ) -> None:
        interval = settings.frame_interval if frame_interval is None else frame_interval
        if interval <= 0:
            raise ValueError(f"frame_interval must be positive, got {interval}")

        self.simulation = simulation
        self.frame_interval = interval
        self.on_tick = on_tick
        self.state = LoopState.IDLE
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handle: asyncio.TimerHandle | None = None

    @property
    def is_running(self) -> bool:
        return self.state == LoopState.RUNNING

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Idle -> Running. Starting a running loop is a no-op.

        Args:
            loop: Event loop to schedule on (defaults to the running loop)
        """
        if self.is_running:
            return

        self._loop = loop or asyncio.get_running_loop()
        self.state = LoopState.RUNNING
        self._schedule()
        logger.debug(f"Simulation loop started ({len(self.simulation.nodes)} nodes)")

    def stop(self) -> None:
        """Running -> Idle, cancelling the pending tick. Safe to call repeatedly."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

        if self.is_running:
            self.state = LoopState.IDLE
            logger.debug(f"Simulation loop stopped after {self.simulation.tick_count} ticks")

    def _schedule(self) -> None:
        assert self._loop is not None
        self._handle = self._loop.call_later(self.frame_interval, self._run)

    def _run(self) -> None:
        """One frame. A failing tick is logged once and ends the loop."""
        self._handle = None
        if not self.is_running:
            return

        try:
            self.simulation.tick()
            if self.on_tick is not None:
                self.on_tick(self.simulation)
        except Exception:
            logger.exception("Simulation tick failed, stopping loop")
            self.state = LoopState.IDLE
            return

        self._schedule()
