from __future__ import annotations
import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional
from control.cues import CueEvent, CueScheduler
from control.scheduler import PacingScheduler
from defrag.stepper import DefragStepper, Move
from disk.blocks import BlockGrid
from disk.generator import generate
from disk.randomness import RandomSource
from viz.segments import Segment, compress

log = logging.getLogger(__name__)

IDLE = 'idle'
RUNNING = 'running'
DONE = 'done'

@dataclass
class Frame:
    step: int
    grid: BlockGrid
    segments: List[Segment]
    move: Optional[Move] = None

class DefragRunner:
    """One defrag session: owns the grid, the stepper, pacing and cue planning.

    Use it as a context manager so the spindle is always stopped:

        with DefragRunner(rng=random.Random(7)) as run:
            run.start()
            run.run()
    """
    def __init__(self, rng: Optional[RandomSource] = None,
                 grid_factory: Optional[Callable[[RandomSource], BlockGrid]] = None,
                 pacing: Optional[PacingScheduler] = None,
                 cues: Optional[CueScheduler] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 on_frame: Optional[Callable[[Frame], None]] = None,
                 on_cue: Optional[Callable[[CueEvent], None]] = None):
        self.rng = rng if rng is not None else random.Random()
        # separate streams: pacing and cue draws never shift the engine's moves
        self._engine_rng = random.Random(self.rng.random())
        pacing_rng = random.Random(self.rng.random())
        cue_rng = random.Random(self.rng.random())
        self.grid_factory = grid_factory or generate
        self.pacing = pacing if pacing is not None else PacingScheduler(rng=pacing_rng)
        self.cues = cues if cues is not None else CueScheduler(rng=cue_rng)
        self.sleep = sleep
        self.on_frame = on_frame
        self.on_cue = on_cue
        self.state = IDLE
        self.initial_grid: Optional[BlockGrid] = None
        self.current: Optional[Frame] = None
        self._stepper: Optional[DefragStepper] = None
        self._spinning = False

    def __enter__(self) -> DefragRunner:
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    def _emit(self, events: List[CueEvent]):
        if self.on_cue:
            for ev in events:
                self.on_cue(ev)

    def _publish(self, frame: Frame) -> Frame:
        self.current = frame
        if self.on_frame:
            self.on_frame(frame)
        return frame

    def start(self) -> Frame:
        """Generate a fresh grid and begin a run; restarts if already running."""
        self.stop()
        grid = self.grid_factory(self._engine_rng)
        self.initial_grid = list(grid)
        self._stepper = DefragStepper(grid, self._engine_rng)
        self.state = RUNNING
        self._spinning = True
        log.info("defrag started: %d blocks", len(grid))
        frame = self._publish(Frame(0, list(grid), compress(grid)))
        self._emit([self.cues.spindle_start()])
        return frame

    def tick(self) -> Optional[Frame]:
        """Pull one relocation; ``None`` once the disk is consolidated."""
        if self.state != RUNNING or self._stepper is None:
            raise RuntimeError(f"tick() needs a running session (state={self.state})")
        stepper = self._stepper
        snapshot = next(stepper, None)
        if snapshot is None:
            log.info("defrag complete after %d moves", stepper.steps)
            self._emit(self.cues.complete())
            self.stop()
            self.state = DONE
            return None
        move = stepper.last_move
        log.debug("step %d: block %d -> %d (seek %d)", stepper.steps, move.source, move.target, move.distance)
        frame = self._publish(Frame(stepper.steps, snapshot, compress(snapshot), move))
        self._emit(self.cues.burst())
        return frame

    def run(self, max_steps: Optional[int] = None) -> int:
        """Drive the session until done, ``max_steps`` or ``stop()``."""
        if self.state != RUNNING:
            self.start()
        steps = 0
        while self.state == RUNNING:
            if max_steps is not None and steps >= max_steps:
                log.info("stopping at step limit %d", max_steps)
                self.stop()
                break
            self.sleep(self.pacing.next_delay())
            if self.tick() is not None:
                steps += 1
        return steps

    def stop(self):
        if self._spinning:
            self._spinning = False
            self._emit([self.cues.spindle_stop()])
        self._stepper = None
        if self.state == RUNNING:
            self.state = IDLE
