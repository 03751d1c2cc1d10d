from __future__ import annotations

from microvillas.subdivision_engine.scenarios import ScenarioGenerator, calculate_all_scenarios

__all__ = ["ScenarioGenerator", "calculate_all_scenarios"]
