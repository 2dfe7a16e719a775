"""
Tests for the analysis engine, configuration and output formatters.
"""

import pytest
import io
import json
import os
import shutil
import subprocess
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import yaml

from complexityscanner.config import (
    AnalysisConfig,
    create_default_config,
    find_config,
    load_analysis_config,
    load_config,
)
from complexityscanner.core.complexity import ComplexityFactor
from complexityscanner.core.engine import AnalysisEngine, create_engine
from complexityscanner.core.results import AnalysisReport, AnalysisResult
from complexityscanner.formatters import (
    JSONFormatter,
    TableFormatter,
    TextFormatter,
    get_formatter,
)
from complexityscanner.utils import list_files, matches_pattern


NESTED_PY = (
    "def nested(xs):\n"
    "    for x in xs:\n"
    "        if x > 0:\n"
    "            if x > 10:\n"
    "                pass\n"
    "\n"
    "def simple(a):\n"
    "    if a:\n"
    "        return 1\n"
    "    return 0\n"
    "\n"
    "def flat():\n"
    "    return 42\n"
)

LOOP_CPP = (
    "int total(int n) {\n"
    "    int sum = 0;\n"
    "    for (int i = 0; i < n; i++) {\n"
    "        if (i % 2 == 0 && i > 2) {\n"
    "            sum += i;\n"
    "        }\n"
    "    }\n"
    "    return sum;\n"
    "}\n"
)


@pytest.fixture
def project(tmp_path):
    (tmp_path / "nested.py").write_text(NESTED_PY)
    (tmp_path / "loop.cpp").write_text(LOOP_CPP)
    (tmp_path / "notes.txt").write_text("if this were code it would be complex\n")
    sub = tmp_path / "pkg"
    sub.mkdir()
    (sub / "deep.py").write_text("def deep(a, b):\n    return a and b\n")
    return tmp_path


class TestAnalysisEngine:
    """Tests for the analysis engine."""

    def test_engine_creation(self):
        engine = AnalysisEngine()
        assert engine.threshold == 0
        assert engine.errors == []

    def test_engine_with_config(self):
        engine = AnalysisEngine({"threshold": 3, "max_workers": 2, "recursive": True})
        assert engine.threshold == 3
        assert engine.max_workers == 2
        assert engine.recursive is True

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValueError):
            AnalysisEngine({"threshold": -1})

    def test_language_detection(self):
        engine = AnalysisEngine()

        assert engine.detect_language("app.py") == "python"
        assert engine.detect_language("main.cc") == "cpp"
        assert engine.detect_language("util.c") == "c"
        assert engine.detect_language("README.md") is None

    def test_language_override(self):
        engine = AnalysisEngine({"language": "cpp"})
        assert engine.detect_language("script.py") == "cpp"

    def test_analyze_content(self):
        engine = AnalysisEngine()
        results = engine.analyze(NESTED_PY, "nested.py", "python")

        by_name = {r.function_name: r for r in results}
        assert by_name["nested"].complexity == 6
        assert by_name["simple"].complexity == 1
        assert by_name["flat"].complexity == 0
        assert by_name["nested"].start_line == 1
        assert by_name["nested"].end_line == 5
        assert by_name["nested"].language == "python"
        assert by_name["nested"].file_path == "nested.py"

    def test_analyze_language_alias(self):
        engine = AnalysisEngine()
        results = engine.analyze(LOOP_CPP, "loop.cpp", "c++")

        assert len(results) == 1
        assert results[0].language == "cpp"
        # for +1, if +1 +1 nesting, && +1
        assert results[0].complexity == 4

    def test_threshold_filter(self):
        counts = []
        for threshold in (0, 1, 2, 6, 7):
            engine = AnalysisEngine({"threshold": threshold})
            results = engine.analyze(NESTED_PY, "nested.py", "python")
            assert all(r.complexity >= threshold for r in results)
            counts.append(len(results))

        assert counts == [3, 2, 1, 1, 0]
        assert counts == sorted(counts, reverse=True)

    def test_unsupported_language(self):
        engine = AnalysisEngine()
        assert engine.analyze("fn main() {}", "main.rs", "rust") == []

    def test_empty_content(self):
        engine = AnalysisEngine()
        assert engine.analyze("", "empty.py", "python") == []

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("def looks_like_python():\n    pass\n")

        engine = AnalysisEngine()
        assert engine.analyze_file(str(path)) == []
        assert engine.errors == []

    def test_missing_file_recorded(self, tmp_path):
        engine = AnalysisEngine()
        results = engine.analyze_file(str(tmp_path / "missing.py"))

        assert results == []
        assert len(engine.errors) == 1

    def test_analyze_single_file(self, project):
        engine = AnalysisEngine()
        report = engine.analyze_path(str(project / "loop.cpp"))

        assert report.files_analyzed == 1
        assert report.languages_detected == ["cpp"]
        assert [r.function_name for r in report.results] == ["total"]

    def test_analyze_directory(self, project):
        engine = AnalysisEngine()
        report = engine.analyze_path(str(project))

        assert report.files_analyzed == 2
        assert sorted(report.languages_detected) == ["cpp", "python"]
        assert {r.function_name for r in report.results} == {"total", "nested", "simple", "flat"}
        assert report.total_complexity == 4 + 6 + 1 + 0

    def test_analyze_directory_recursive(self, project):
        engine = AnalysisEngine({"recursive": True})
        report = engine.analyze_path(str(project))

        assert report.files_analyzed == 3
        assert "deep" in {r.function_name for r in report.results}

    def test_results_sorted_by_file_and_line(self, project):
        engine = AnalysisEngine({"recursive": True})
        report = engine.analyze_path(str(project))

        keys = [(r.file_path, r.start_line) for r in report.results]
        assert keys == sorted(keys)

    def test_parallel_matches_sequential(self, project):
        parallel = AnalysisEngine({"recursive": True, "max_workers": 4}).analyze_path(str(project))
        sequential = AnalysisEngine({"recursive": True, "max_workers": 1}).analyze_path(str(project))

        assert [r.to_dict() for r in parallel.results] == [r.to_dict() for r in sequential.results]

    def test_ignore_patterns(self, project):
        engine = AnalysisEngine({"recursive": True, "ignore_patterns": [".*/pkg/.*", r".*\.cpp"]})
        report = engine.analyze_path(str(project))

        assert report.files_analyzed == 1
        assert {r.function_name for r in report.results} == {"nested", "simple", "flat"}

    def test_invalid_regex_pattern_matches_substring(self, project):
        engine = AnalysisEngine({"recursive": True, "ignore_patterns": ["nested.py("]})
        assert engine.should_ignore(str(project / "nested.py(")) is True
        assert engine.should_ignore(str(project / "nested.py")) is False

    def test_max_file_size(self, project):
        engine = AnalysisEngine({"max_file_size": 10})
        report = engine.analyze_path(str(project))
        assert report.files_analyzed == 0

    def test_invalid_path(self, tmp_path):
        engine = AnalysisEngine()
        with pytest.raises(FileNotFoundError):
            engine.analyze_path(str(tmp_path / "does-not-exist"))

    @pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
    def test_git_repository(self, project):
        subprocess.run(["git", "init", "-q"], cwd=project, check=True)
        subprocess.run(["git", "add", "nested.py", "pkg/deep.py"], cwd=project, check=True)

        engine = AnalysisEngine()
        report = engine.analyze_path(str(project))

        names = {r.function_name for r in report.results}
        assert "deep" in names
        assert "total" not in names

    def test_bundled_examples(self):
        examples_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "examples")
        report = AnalysisEngine().analyze_path(examples_dir)

        scores = {r.function_name: r.complexity for r in report.results}
        assert scores == {
            "countVowels": 7,
            "main": 0,
            "restock": 7,
            "classify": 3,
            "load": 3,
            "load.parse": 0,
        }

    def test_empty_config_values_use_defaults(self):
        engine = AnalysisEngine({"threshold": None, "max_workers": None, "max_file_size": None})

        assert engine.threshold == 0
        assert engine.max_workers == 4
        assert engine.max_file_size == 10 * 1024 * 1024

    def test_empty_threshold_in_config_file(self, tmp_path):
        config_path = tmp_path / ".complexityscanner.yaml"
        config_path.write_text("analysis:\n  threshold:\n")

        engine = create_engine(str(config_path))
        assert engine.threshold == 0

    def test_create_engine_with_config_file(self, tmp_path):
        config_path = tmp_path / ".complexityscanner.yaml"
        config_path.write_text("analysis:\n  threshold: 5\n  recursive: true\n")

        engine = create_engine(str(config_path), max_workers=1)

        assert engine.threshold == 5
        assert engine.recursive is True
        assert engine.max_workers == 1


class TestUtils:
    """Tests for file helpers."""

    def test_matches_pattern_full_match(self):
        assert matches_pattern("src/main.cpp", r".*\.cpp")
        assert not matches_pattern("src/main.cpp", r"main")

    def test_matches_pattern_bad_regex(self):
        assert matches_pattern("src/[generated/file.py", "[generated")
        assert not matches_pattern("src/file.py", "[generated")

    def test_list_files(self, project):
        top = list_files(str(project))
        everything = list_files(str(project), recursive=True)

        assert len(top) == 3
        assert len(everything) == 4
        assert top == sorted(top)


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        config = AnalysisConfig()

        assert config.threshold == 0
        assert config.language is None
        assert config.output.format == "text"
        assert config.to_engine_config()["max_workers"] == 4

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "scanner.yaml"
        path.write_text(
            "analysis:\n"
            "  threshold: 4\n"
            "  language: python\n"
            "  ignore:\n"
            "    - '.*_test\\.py'\n"
            "output:\n"
            "  format: json\n"
            "  color: false\n"
        )

        config = load_analysis_config(str(path))

        assert config.threshold == 4
        assert config.language == "python"
        assert config.ignore_patterns == [r".*_test\.py"]
        assert config.output.format == "json"
        assert config.output.color is False

    def test_load_json(self, tmp_path):
        path = tmp_path / "scanner.json"
        path.write_text(json.dumps({"threshold": 2, "max_workers": 8}))

        config = load_analysis_config(str(path))
        assert config.threshold == 2
        assert config.max_workers == 8

    def test_unknown_keys_ignored(self):
        config = AnalysisConfig.from_dict({"threshold": 1, "colour_scheme": "dark"})
        assert config.threshold == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_find_config_walks_up(self, tmp_path):
        config_path = tmp_path / ".complexityscanner.yml"
        config_path.write_text("threshold: 1\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config(str(nested)) == str(config_path.resolve())

    def test_default_config_is_loadable(self, tmp_path):
        content = create_default_config()
        data = yaml.safe_load(content)

        assert data["analysis"]["threshold"] == 0
        assert data["output"]["format"] == "text"

        path = tmp_path / ".complexityscanner.yaml"
        path.write_text(content)
        config = load_analysis_config(str(path))
        assert config.recursive is True


def make_results():
    return [
        AnalysisResult(
            file_path="src/a.py",
            language="python",
            function_name="alpha",
            start_line=1,
            end_line=6,
            complexity=3,
            factors=[
                ComplexityFactor("if_statement", 1, 2),
                ComplexityFactor("Nested if_statement", 1, 3),
                ComplexityFactor("Boolean operator: and", 1, 3),
            ],
        ),
        AnalysisResult(
            file_path="src/b.cpp",
            language="cpp",
            function_name="Shape::area",
            start_line=10,
            end_line=12,
            complexity=0,
        ),
    ]


class TestFormatters:
    """Tests for output formatters."""

    def test_get_formatter(self):
        assert isinstance(get_formatter("text"), TextFormatter)
        assert isinstance(get_formatter("JSON"), JSONFormatter)
        assert isinstance(get_formatter("table"), TableFormatter)
        with pytest.raises(ValueError):
            get_formatter("sarif")

    def test_text_output(self):
        output = TextFormatter(use_color=False).format_results(make_results())

        assert "File: src/a.py" in output
        assert "Function: alpha" in output
        assert "Language: python" in output
        assert "Lines: 1-6" in output
        assert "Complexity: 3" in output
        assert "  - Boolean operator: and (line 3, +1)" in output
        assert output.rstrip().endswith("Total complexity: 3")

    def test_text_output_without_factors(self):
        formatter = TextFormatter(use_color=False, show_factors=False)
        output = formatter.format_results(make_results())
        assert "Complexity Factors" not in output

    def test_text_report_lists_errors(self):
        report = AnalysisReport(results=make_results(), errors=["Error reading x.py: denied"])
        output = TextFormatter(use_color=False).format_report(report)
        assert "Error reading x.py: denied" in output

    def test_json_results(self):
        data = json.loads(JSONFormatter().format_results(make_results()))

        assert data["total_complexity"] == 3
        assert data["results"][0] == {
            "file": "src/a.py",
            "function": "alpha",
            "language": "python",
            "start_line": 1,
            "end_line": 6,
            "complexity": 3,
            "factors": [
                {"description": "if_statement", "increment": 1, "line_number": 2},
                {"description": "Nested if_statement", "increment": 1, "line_number": 3},
                {"description": "Boolean operator: and", "increment": 1, "line_number": 3},
            ],
        }

    def test_json_parse_back(self):
        formatter = JSONFormatter()
        results = make_results()

        assert formatter.parse_results(formatter.format_results(results)) == results

    def test_json_report(self):
        report = AnalysisReport(results=make_results(), files_analyzed=2, languages_detected=["cpp", "python"])
        data = json.loads(JSONFormatter().format_report(report))

        assert data["total_complexity"] == 3
        assert data["summary"]["functions"] == 2
        assert data["summary"]["max_complexity"] == 3
        assert AnalysisReport.from_dict(data).results == report.results

    def test_table_output(self):
        output = TableFormatter(use_color=False).format_results(make_results())

        assert "alpha" in output
        assert "Shape::area" in output
        assert "Total complexity: 3" in output

    def test_table_keeps_brackets_in_names(self):
        results = [
            AnalysisResult(
                file_path="app/[id]/page.py",
                language="python",
                function_name="render[bold]",
                start_line=1,
                end_line=2,
                complexity=1,
            ),
        ]
        output = TableFormatter(use_color=False).format_results(results)

        assert "[id]" in output
        assert "render[bold]" in output

    def test_table_no_ansi_when_not_a_terminal(self, monkeypatch):
        monkeypatch.setattr(sys, "stdout", io.StringIO())
        formatter = TableFormatter()
        output = formatter.format_results(make_results())

        assert formatter.use_color is False
        assert "\x1b[" not in output


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
