"""FrameContext - explicit per-tick state for pipeline steps.

A FrameContext is created at the start of every step and passed through
all pipeline steps, so data flows between steps explicitly instead of via
ad-hoc engine attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from royale.systems.base import SystemResult


@dataclass
class FrameContext:
    """Explicit per-tick state passed through pipeline steps.

    Attributes:
        dt: Clamped step length in seconds
        frozen: True if the match had already ended when the step began
        radius_changed: Whether the base radius schedule moved this tick
        results: SystemResult of every step that ran a system, by step name
    """

    dt: float = 0.0
    frozen: bool = False
    radius_changed: bool = False
    results: Dict[str, SystemResult] = field(default_factory=dict)
