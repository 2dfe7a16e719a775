"""
Result data structures for the complexity scanner.

This module defines the records produced by an analysis run: one
AnalysisResult per reported function and an AnalysisReport that
summarizes a whole run.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from complexityscanner.core.complexity import ComplexityFactor


@dataclass
class AnalysisResult:
    """
    Complexity of a single function.

    This is the core record returned by the engine and consumed by
    the formatters.
    """
    file_path: str
    language: str
    function_name: str
    start_line: int
    end_line: int
    complexity: int
    factors: List[ComplexityFactor] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.file_path}:{self.start_line} {self.function_name} ({self.complexity})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a dictionary."""
        return {
            "file": self.file_path,
            "function": self.function_name,
            "language": self.language,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "complexity": self.complexity,
            "factors": [factor.to_dict() for factor in self.factors],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        """Create a result from a dictionary produced by to_dict()."""
        return cls(
            file_path=data["file"],
            language=data["language"],
            function_name=data["function"],
            start_line=int(data["start_line"]),
            end_line=int(data["end_line"]),
            complexity=int(data["complexity"]),
            factors=[ComplexityFactor.from_dict(f) for f in data.get("factors", [])],
        )


@dataclass
class AnalysisReport:
    """
    Results of a complete analysis run.
    """
    results: List[AnalysisResult] = field(default_factory=list)
    files_analyzed: int = 0
    analysis_time_seconds: float = 0.0
    languages_detected: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def total_complexity(self) -> int:
        return sum(r.complexity for r in self.results)

    @property
    def max_complexity(self) -> int:
        return max((r.complexity for r in self.results), default=0)

    @property
    def function_count(self) -> int:
        return len(self.results)

    def exceeding(self, limit: int) -> List[AnalysisResult]:
        """Results whose complexity is strictly above ``limit``."""
        return [r for r in self.results if r.complexity > limit]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_complexity": self.total_complexity,
            "summary": {
                "files_analyzed": self.files_analyzed,
                "functions": self.function_count,
                "max_complexity": self.max_complexity,
                "analysis_time_seconds": self.analysis_time_seconds,
                "languages_detected": self.languages_detected,
            },
            "results": [r.to_dict() for r in self.results],
            "errors": self.errors,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisReport":
        summary = data.get("summary", {})
        return cls(
            results=[AnalysisResult.from_dict(r) for r in data.get("results", [])],
            files_analyzed=summary.get("files_analyzed", 0),
            analysis_time_seconds=summary.get("analysis_time_seconds", 0.0),
            languages_detected=list(summary.get("languages_detected", [])),
            errors=list(data.get("errors", [])),
        )
