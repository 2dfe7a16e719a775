"""
Multi-Language Cognitive Complexity Scanner

Parses C, C++ and Python sources with tree-sitter and reports the
cognitive complexity of every function, with the factors behind
each score.
"""

__version__ = "1.0.0"
__author__ = "Complexity Scanner Team"

from complexityscanner.core.engine import AnalysisEngine
from complexityscanner.core.results import AnalysisReport, AnalysisResult
from complexityscanner.core.complexity import ComplexityFactor
from complexityscanner.config import AnalysisConfig

__all__ = [
    "AnalysisEngine",
    "AnalysisReport",
    "AnalysisResult",
    "ComplexityFactor",
    "AnalysisConfig",
]
