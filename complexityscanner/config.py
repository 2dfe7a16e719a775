"""
Configuration system for the complexity scanner.

Supports YAML and JSON configuration files for customizing
analysis behavior and output.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml


# Default configuration file names to search for
CONFIG_FILE_NAMES = [
    ".complexityscanner.yaml",
    ".complexityscanner.yml",
    ".complexityscanner.json",
]


@dataclass
class OutputConfig:
    """Configuration for output formatting."""
    format: str = "text"  # text, json, table
    output_file: Optional[str] = None
    verbose: bool = False
    color: bool = True
    show_factors: bool = True


@dataclass
class AnalysisConfig:
    """
    Main configuration for the complexity scanner.

    Example YAML config:

    ```yaml
    analysis:
      target: ./src
      threshold: 5
      language: null
      recursive: true
      ignore_patterns:
        - ".*/third_party/.*"
        - ".*_test\\.py"
      max_file_size: 10485760
      max_workers: 4

    output:
      format: text
      verbose: false
      color: true
      show_factors: true
    ```
    """
    target: str = "."
    threshold: int = 0
    language: Optional[str] = None
    ignore_patterns: List[str] = field(default_factory=list)
    recursive: bool = False
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    max_workers: int = 4

    output: OutputConfig = field(default_factory=OutputConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to a dictionary."""
        return asdict(self)

    def to_engine_config(self) -> Dict[str, Any]:
        """Convert to engine configuration format."""
        return {
            "threshold": self.threshold,
            "language": self.language,
            "ignore_patterns": list(self.ignore_patterns),
            "recursive": self.recursive,
            "max_file_size": self.max_file_size,
            "max_workers": self.max_workers,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisConfig":
        """Create config from a dictionary."""
        data = dict(data)

        if "output" in data and isinstance(data["output"], dict):
            output_fields = {f for f in OutputConfig.__dataclass_fields__}
            data["output"] = OutputConfig(
                **{k: v for k, v in data["output"].items() if k in output_fields}
            )

        # Map some common alternative names
        if "ignore" in data:
            data["ignore_patterns"] = data.pop("ignore")
        if "exclude" in data:
            data["ignore_patterns"] = data.pop("exclude")

        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_data = {k: v for k, v in data.items() if k in known_fields}

        return cls(**filtered_data)


def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration from a file.

    Supports YAML and JSON formats.
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    content = path.read_text(encoding="utf-8")

    if path.suffix == ".json":
        data = json.loads(content)
    else:
        data = yaml.safe_load(content)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


def find_config(start_path: str = ".") -> Optional[str]:
    """
    Find a configuration file by searching up the directory tree.

    Returns the path to the first config file found, or None.
    """
    current = Path(start_path).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in CONFIG_FILE_NAMES:
            config_path = current / name
            if config_path.exists():
                return str(config_path)
        if current == current.parent:
            return None
        current = current.parent


def load_analysis_config(path: Optional[str] = None, start_dir: str = ".") -> AnalysisConfig:
    """
    Load an AnalysisConfig from a file or create a default one.

    If path is None, searches for a config file starting from start_dir.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return AnalysisConfig()

    data = load_config(path)

    # Handle nested 'analysis' section
    if "analysis" in data:
        analysis_data = data.pop("analysis") or {}
        data.update(analysis_data)

    return AnalysisConfig.from_dict(data)


def create_default_config() -> str:
    """
    Create a default configuration file content.
    """
    config = {
        "analysis": {
            "target": ".",
            "threshold": 0,
            "language": None,
            "recursive": True,
            "ignore_patterns": [
                r".*/\.git/.*",
                r".*/build/.*",
                r".*/third_party/.*",
            ],
            "max_file_size": 10485760,
            "max_workers": 4,
        },
        "output": {
            "format": "text",
            "verbose": False,
            "color": True,
            "show_factors": True,
        },
    }

    return yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
