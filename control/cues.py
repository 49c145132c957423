from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional
from disk.randomness import RandomSource, uniform_int

SPINDLE_START = 'spindle_start'
SPINDLE_STOP = 'spindle_stop'
HEAD_CLICK = 'head_click'
SEEK_GRIND = 'seek_grind'
READ_CHATTER = 'read_chatter'
CHIME = 'chime'

CHIME_NOTES = (523.25, 659.25, 783.99)   # C5 E5 G5
CHIME_SPACING_MS = 150.0

@dataclass(frozen=True)
class CueEvent:
    kind: str
    at_ms: float                 # offset from when the cue batch was requested
    frequency: Optional[float] = None

class CueScheduler:
    """Plans drive sound cues; playback is left to whoever receives them.

    A burst is a quick run of clicks, seeks and chatter, one per defrag step.
    """
    def __init__(self, rng: Optional[RandomSource] = None,
                 burst_events: tuple=(6, 14), spacing_ms: tuple=(8.0, 25.0)):
        self.rng = rng if rng is not None else random.Random()
        self.burst_events = burst_events
        self.spacing_ms = spacing_ms

    def spindle_start(self) -> CueEvent:
        return CueEvent(SPINDLE_START, 0.0)

    def spindle_stop(self) -> CueEvent:
        return CueEvent(SPINDLE_STOP, 0.0)

    def burst(self) -> List[CueEvent]:
        rng = self.rng
        base, spread = self.spacing_ms
        events: List[CueEvent] = []
        for i in range(uniform_int(rng, *self.burst_events)):
            at = i * (base + rng.random()*spread)
            r = rng.random()
            if r < 0.35:
                events.append(CueEvent(HEAD_CLICK, at))
            elif r < 0.6:
                events.append(CueEvent(SEEK_GRIND, at))
            elif r < 0.85:
                events.append(CueEvent(READ_CHATTER, at))
            else:
                # head bounce
                events.append(CueEvent(HEAD_CLICK, at))
                events.append(CueEvent(HEAD_CLICK, at + 3 + rng.random()*8))
        events.sort(key=lambda e: e.at_ms)
        return events

    def complete(self) -> List[CueEvent]:
        return [CueEvent(CHIME, i*CHIME_SPACING_MS, f) for i, f in enumerate(CHIME_NOTES)]
