"""
stepper.py — Replay & Pacing
============================
Buffers the steps pulled from a run (search Steps or maze CarveSteps) so a
front end can scrub back and forth over them, and paces auto-play.  The
engine never sleeps: the Stepper only compares timestamps when tick() is
called.

Scrubbing is clamped, so seek(-3) shows the first step and seek(10**9)
drains the run and shows the last one.  frame() replays the buffered deltas
up to the shown step, which is what a renderer needs after moving backwards.

    stepper = Stepper(on_step=render)
    stepper.start(controller.start_search("astar", grid, start, end))
    stepper.play()
    while not stepper.is_finished:
        stepper.tick()

Modes:
    IDLE      nothing attached
    PAUSED    attached, waiting for the caller
    PLAYING   tick() advances once per `delay`
    FINISHED  the run is drained and its last step is shown

Speed is a 1-100 slider: delay_for_speed(speed) = max(5, 500 - 5·speed) ms.
Drive a Stepper from one thread.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, FrozenSet, Iterator, List, Optional, Tuple

from algorithms.step import StepKind
from grid import Coordinate


class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


MIN_DELAY_MS = 5

# slider positions
SPEED_PRESETS = {
    "slow":   10,
    "medium": 50,
    "fast":   80,
    "turbo":  100,
}


def delay_for_speed(speed: int) -> int:
    """Slider value (1-100) to milliseconds between steps."""
    return max(MIN_DELAY_MS, 500 - 5 * speed)


@dataclass(frozen=True)
class Frame:
    """Board overlay after replaying every buffered step up to `index`."""
    index:   int
    walls:   FrozenSet[Coordinate]  = frozenset()
    visited: Tuple[Coordinate, ...] = ()
    path:    Tuple[Coordinate, ...] = ()


class Stepper:
    """
    Attributes:
        mode     : Current StepperState.
        steps    : Every step pulled so far.
        position : Index into `steps` being shown, -1 before anything is.
        delay    : Seconds between auto-advances.
        on_step  : Optional callback(step), fired whenever the shown step changes.
    """

    def __init__(self, on_step: Optional[Callable[[Any], None]] = None, speed: int = SPEED_PRESETS["medium"]):
        self.on_step = on_step
        self.delay   = delay_for_speed(speed) / 1000
        self._source: Optional[Iterator[Any]] = None
        self._base_walls: FrozenSet[Coordinate] = frozenset()
        self._clear(StepperState.IDLE)

    def _clear(self, mode: StepperState) -> None:
        self.steps:    List[Any] = []
        self.position: int       = -1
        self.mode                = mode
        self._advanced_at        = 0.0

    # -- attaching --
    def start(self, run: Iterator[Any]) -> None:
        """Attach a run (anything iterable; a Run's grid seeds frame() walls)."""
        self._release()
        grid = getattr(run, "grid", None)
        self._base_walls = frozenset(grid.walls()) if grid is not None else frozenset()
        self._source = iter(run)
        self._clear(StepperState.PAUSED)
        if self.seek(0) < 0:
            self.mode = StepperState.FINISHED

    def reset(self) -> None:
        """Detach.  A run that has not finished is closed, which frees its controller."""
        self._release()
        self._base_walls = frozenset()
        self._clear(StepperState.IDLE)

    # -- scrubbing --
    def seek(self, index: int) -> int:
        """Show step `index`, clamped to the available range.  Returns the index shown."""
        index = max(index, 0)
        while index >= len(self.steps) and self._pull():
            pass
        if not self.steps:
            return -1
        index = min(index, len(self.steps) - 1)
        if index != self.position:
            self.position = index
            if self.on_step is not None:
                self.on_step(self.steps[index])
        if self._source is None and index == len(self.steps) - 1:
            self.mode = StepperState.FINISHED
        elif self.mode is StepperState.FINISHED:
            self.mode = StepperState.PAUSED
        return index

    def next_step(self) -> bool:
        before = self.position
        return self.seek(before + 1) != before

    def prev_step(self) -> bool:
        before = self.position
        return self.seek(before - 1) != before

    def rewind(self) -> None:
        self.seek(0)

    def jump_to_end(self) -> None:
        while self._pull():
            pass
        self.seek(len(self.steps) - 1)

    @property
    def current_step(self) -> Optional[Any]:
        return self.steps[self.position] if self.position >= 0 else None

    # -- playback --
    def play(self) -> None:
        if self.mode is StepperState.PAUSED:
            self.mode = StepperState.PLAYING
            self._advanced_at = time.monotonic()

    def pause(self) -> None:
        if self.mode is StepperState.PLAYING:
            self.mode = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def tick(self, now: Optional[float] = None) -> bool:
        """Advance one step if playing and `delay` has elapsed.  True when a step was taken."""
        if not self.is_playing:
            return False
        now = time.monotonic() if now is None else now
        if now - self._advanced_at < self.delay:
            return False
        self._advanced_at = now
        moved = self.next_step()
        if not moved:
            self.mode = StepperState.FINISHED
        return moved

    def set_speed(self, speed: int) -> None:
        self.delay = delay_for_speed(speed) / 1000

    def set_preset(self, name: str) -> None:
        self.set_speed(SPEED_PRESETS.get(name, SPEED_PRESETS["medium"]))

    @property
    def is_playing(self) -> bool:
        return self.mode is StepperState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.mode is StepperState.FINISHED

    # -- rendering --
    def frame(self, index: Optional[int] = None) -> Frame:
        """
        Replay the buffered steps 0..index (default: the shown step) on top
        of the walls the run started from.
        """
        if index is None:
            index = self.position
        walls = set(self._base_walls)
        visited: List[Coordinate] = []
        path: Tuple[Coordinate, ...] = ()
        for step in self.steps[:index + 1]:
            if hasattr(step, "carved"):
                walls.difference_update(step.carved)
                walls.update(step.walled)
            elif step.kind is StepKind.VISIT:
                visited.append(step.current)
            elif step.kind is StepKind.PATH:
                path = tuple(step.path)
        return Frame(index=index, walls=frozenset(walls), visited=tuple(visited), path=path)

    # -- internal --
    def _pull(self) -> bool:
        if self._source is None:
            return False
        try:
            step = next(self._source)
        except StopIteration:
            self._source = None
            return False
        self.steps.append(step)
        if getattr(step, "is_final", False):
            self._source = None
        return True

    def _release(self) -> None:
        close = getattr(self._source, "close", None)
        if close is not None:
            close()
        self._source = None
