"""
engine/
-------
Run orchestration, configuration, metrics and playback.

    from engine import RunController, EngineConfig, Stepper, Recorder, compare
"""

from engine.config     import EngineConfig, DEFAULT_CONFIG
from engine.recorder   import Recorder, RunMetrics, ComparisonResult, compare
from engine.stepper    import Stepper, StepperState, Frame, SPEED_PRESETS, delay_for_speed
from engine.controller import (
    RunController, Run, SearchRun, MazeRun, SearchOutcome, MazeOutcome,
)

__all__ = [
    "EngineConfig",
    "DEFAULT_CONFIG",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "Stepper",
    "StepperState",
    "Frame",
    "SPEED_PRESETS",
    "delay_for_speed",
    "RunController",
    "Run",
    "SearchRun",
    "MazeRun",
    "SearchOutcome",
    "MazeOutcome",
]
