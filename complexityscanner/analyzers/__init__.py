"""
Language-specific function extractors.

Extractors find function boundaries in a parsed tree and hand each
function body to the complexity calculator.
"""

from complexityscanner.analyzers.base import BaseFunctionExtractor, FunctionUnit
from complexityscanner.analyzers.cpp_analyzer import CppFunctionExtractor
from complexityscanner.analyzers.python_analyzer import PythonFunctionExtractor

__all__ = [
    "BaseFunctionExtractor",
    "FunctionUnit",
    "CppFunctionExtractor",
    "PythonFunctionExtractor",
]
