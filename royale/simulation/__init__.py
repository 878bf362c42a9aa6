"""Simulation package - match orchestration.

- engine.py: The slim MatchEngine orchestrator
- pipeline.py: Ordered tick steps
- frame_context.py: Per-tick state threaded through the steps
- system_registry.py: System registration and management

Usage:
    from royale.simulation import MatchEngine

    engine = MatchEngine(roster, seed=42)
    outcome = engine.run_to_completion()
"""

from royale.simulation.engine import MatchEngine
from royale.simulation.frame_context import FrameContext
from royale.simulation.pipeline import EnginePipeline, PipelineStep, default_pipeline
from royale.simulation.system_registry import SystemRegistry

__all__ = [
    "MatchEngine",
    "FrameContext",
    "EnginePipeline",
    "PipelineStep",
    "default_pipeline",
    "SystemRegistry",
]
