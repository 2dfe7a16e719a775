"""
Main analysis engine for the complexity scanner.

This module orchestrates an analysis run, coordinating between the
parser registry, function extractors and the complexity calculator.
"""

import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Set

from complexityscanner.core.results import AnalysisReport, AnalysisResult
from complexityscanner.parsers import GrammarLoadError, ParseFailure, ParserRegistry
from complexityscanner.utils import (
    is_git_repo,
    list_files,
    list_git_files,
    matches_pattern,
    normalize_path,
    read_file_content,
)

logger = logging.getLogger(__name__)


class AnalysisEngine:
    """
    Main engine that drives complexity analysis.

    For each file the engine:
    1. Resolves the language (explicit override or file extension)
    2. Parses the content with the language's grammar
    3. Extracts function units
    4. Scores each function and keeps those at or above the threshold

    Directory and repository runs are one independent task per file.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, registry: Optional[ParserRegistry] = None):
        self.config = config or {}
        self.registry = registry or ParserRegistry.with_defaults()
        self.errors: List[str] = []

        # Configuration options
        self.threshold = int(self.config.get("threshold") or 0)
        if self.threshold < 0:
            raise ValueError(f"Complexity threshold must be non-negative, got {self.threshold}")
        self.language: Optional[str] = self.config.get("language") or None
        self.ignore_patterns: List[str] = list(self.config.get("ignore_patterns") or [])
        self.recursive = bool(self.config.get("recursive", False))
        self.max_workers = int(self.config.get("max_workers") or 4)
        self.max_file_size = int(self.config.get("max_file_size") or 10 * 1024 * 1024)

        if self.language and self.language not in self.registry:
            logger.warning("Language override '%s' is not supported; files will be skipped", self.language)

    def detect_language(self, file_path: str) -> Optional[str]:
        """Detect the language of a file, honouring an explicit override."""
        if self.language:
            return self.language
        language = self.registry.resolve_by_extension(file_path)
        if language is None:
            logger.debug("No parser registered for file: %s", file_path)
        return language

    def should_ignore(self, file_path: str) -> bool:
        """Check if a file matches any ignore pattern."""
        return any(matches_pattern(file_path, pattern) for pattern in self.ignore_patterns)

    def should_analyze_file(self, file_path: str) -> bool:
        """Check if a file should be analyzed."""
        if self.should_ignore(file_path):
            return False

        if self.registry.resolve_by_extension(file_path) is None:
            return False

        try:
            if os.path.getsize(file_path) > self.max_file_size:
                logger.info("Skipping %s: larger than %d bytes", file_path, self.max_file_size)
                return False
        except OSError:
            return False

        return True

    def discover_files(self, target_path: str) -> List[str]:
        """Find the files to analyze under a file, directory or git repository."""
        if os.path.isfile(target_path):
            return [target_path]

        if not os.path.isdir(target_path):
            raise FileNotFoundError(f"Invalid input path: {target_path}")

        if is_git_repo(target_path):
            logger.info("Analyzing git repository: %s", target_path)
            candidates = list_git_files(target_path)
        else:
            logger.info("Analyzing directory: %s (recursive: %s)", target_path, self.recursive)
            candidates = list_files(target_path, self.recursive)

        return [normalize_path(f) for f in candidates if self.should_analyze_file(f)]

    def analyze(self, content: str, file_path: str, language: str) -> List[AnalysisResult]:
        """
        Analyze source code that is already in memory.

        Args:
            content: The source text.
            file_path: Path used for reporting only.
            language: Language name or alias.

        Returns:
            One result per function whose complexity meets the threshold.
            Unsupported languages and parse failures yield an empty list.
        """
        toolchain = self.registry.create(language)
        if toolchain is None:
            logger.error("Unsupported language: %s", language)
            return []

        try:
            root = toolchain.grammar.parse(content)
        except ParseFailure as e:
            logger.error("Failed to parse %s: %s", file_path, e)
            self.errors.append(f"Error parsing {file_path}: {e}")
            return []

        functions = toolchain.extractor.extract(root)
        logger.debug("Found %d functions to analyze in %s", len(functions), file_path)

        results: List[AnalysisResult] = []
        for func in functions:
            if not func.qualified_name:
                continue

            complexity = toolchain.calculator.calculate(func.body, toolchain.grammar)
            if complexity.total_complexity < self.threshold:
                continue

            results.append(AnalysisResult(
                file_path=file_path,
                language=toolchain.language,
                function_name=func.qualified_name,
                start_line=func.start_line,
                end_line=func.end_line,
                complexity=complexity.total_complexity,
                factors=complexity.factors,
            ))

        return results

    def analyze_file(self, file_path: str) -> List[AnalysisResult]:
        """Read, parse and score a single file."""
        language = self.detect_language(file_path)
        if not language:
            logger.warning("Could not detect language for file: %s", file_path)
            return []

        try:
            content = read_file_content(file_path)
        except OSError as e:
            logger.error("Failed to read %s: %s", file_path, e)
            self.errors.append(f"Error reading {file_path}: {e}")
            return []

        logger.info("Analyzing file: %s (%s)", file_path, language)
        return self.analyze(content, file_path, language)

    def analyze_path(self, target_path: str) -> AnalysisReport:
        """
        Analyze a file, directory or git repository.

        Args:
            target_path: Path to analyze.

        Returns:
            AnalysisReport with results sorted by file and line.
        """
        start_time = time.time()
        files = self.discover_files(target_path)
        all_results: List[AnalysisResult] = []
        languages_detected: Set[str] = set()
        files_analyzed = 0

        if len(files) > 1 and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {executor.submit(self.analyze_file, f): f for f in files}

                for future in as_completed(futures):
                    file_path = futures[future]
                    try:
                        all_results.extend(future.result())
                        files_analyzed += 1
                    except GrammarLoadError:
                        raise
                    except Exception as e:
                        logger.error("Failed to analyze %s: %s", file_path, e)
                        self.errors.append(f"Error analyzing {file_path}: {e}")
        else:
            for file_path in files:
                try:
                    all_results.extend(self.analyze_file(file_path))
                    files_analyzed += 1
                except GrammarLoadError:
                    raise
                except Exception as e:
                    logger.error("Failed to analyze %s: %s", file_path, e)
                    self.errors.append(f"Error analyzing {file_path}: {e}")

        for file_path in files:
            language = self.detect_language(file_path)
            if language:
                languages_detected.add(self.registry.resolve_language(language) or language)

        all_results.sort(key=lambda r: (r.file_path, r.start_line))

        return AnalysisReport(
            results=all_results,
            files_analyzed=files_analyzed,
            analysis_time_seconds=round(time.time() - start_time, 3),
            languages_detected=sorted(languages_detected),
            errors=list(self.errors),
        )


def create_engine(config_path: Optional[str] = None, **kwargs) -> AnalysisEngine:
    """
    Create an analysis engine with configuration.

    Args:
        config_path: Optional path to a configuration file.
        **kwargs: Additional configuration options.

    Returns:
        Configured AnalysisEngine instance.
    """
    config: Dict[str, Any] = {}

    if config_path:
        from complexityscanner.config import load_analysis_config
        config = load_analysis_config(config_path).to_engine_config()

    config.update(kwargs)

    return AnalysisEngine(config)
