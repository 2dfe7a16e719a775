"""
Utility functions for the complexity scanner.
"""

import os
import re
import subprocess
from typing import List


def read_file_content(file_path: str) -> str:
    """Read a source file as UTF-8 text."""
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def normalize_path(path: str) -> str:
    """Normalize a file path."""
    return os.path.normpath(path)


def list_files(dir_path: str, recursive: bool = False) -> List[str]:
    """List regular files in a directory, optionally descending into subdirectories."""
    files = []

    if recursive:
        for root, dirs, names in os.walk(dir_path):
            dirs.sort()
            for name in sorted(names):
                path = os.path.join(root, name)
                if os.path.isfile(path):
                    files.append(path)
    else:
        for name in sorted(os.listdir(dir_path)):
            path = os.path.join(dir_path, name)
            if os.path.isfile(path):
                files.append(path)

    return files


def matches_pattern(text: str, pattern: str) -> bool:
    """
    Check whether ``text`` matches an ignore pattern.

    Patterns are regular expressions that must match the whole text. A
    pattern that is not a valid regular expression is treated as a plain
    substring.
    """
    try:
        return re.fullmatch(pattern, text) is not None
    except re.error:
        return pattern in text


def is_git_repo(path: str) -> bool:
    """Check whether a directory is the root of a git work tree."""
    return os.path.isdir(os.path.join(path, ".git"))


def list_git_files(repo_path: str) -> List[str]:
    """
    List files tracked by git in a repository.

    Raises:
        ValueError: If the path is not a git repository.
        subprocess.CalledProcessError: If ``git ls-files`` fails.
    """
    if not is_git_repo(repo_path):
        raise ValueError(f"Not a git repository: {repo_path}")

    output = subprocess.run(
        ["git", "ls-files"],
        cwd=repo_path,
        capture_output=True,
        text=True,
        check=True,
    ).stdout

    return [
        os.path.join(repo_path, line)
        for line in output.splitlines()
        if line.strip()
    ]
