"""
Core analysis machinery: the complexity calculator, result records and
the engine that drives a run.
"""

from complexityscanner.core.complexity import (
    CognitiveComplexityCalculator,
    ComplexityFactor,
    ComplexityResult,
)
from complexityscanner.core.results import AnalysisReport, AnalysisResult
from complexityscanner.core.engine import AnalysisEngine, create_engine

__all__ = [
    "AnalysisEngine",
    "AnalysisReport",
    "AnalysisResult",
    "CognitiveComplexityCalculator",
    "ComplexityFactor",
    "ComplexityResult",
    "create_engine",
]
