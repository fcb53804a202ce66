"""Knowledge grid, open mysteries and the elimination loop."""

from sleuth.deduction.grid import KnowledgeGrid
from sleuth.deduction.inference import (
    deduce_locations_by_elimination,
    deduce_solution_by_elimination,
    run_deduction_loop,
)
from sleuth.deduction.mysteries import Mystery, MysteryTracker

__all__ = [
    "deduce_locations_by_elimination",
    "deduce_solution_by_elimination",
    "KnowledgeGrid",
    "Mystery",
    "MysteryTracker",
    "run_deduction_loop",
]
