"""
Setup script for the Complexity Scanner package.
"""

from setuptools import setup, find_packages
import os

# Read the README
readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
if os.path.exists(readme_path):
    with open(readme_path, 'r', encoding='utf-8') as f:
        long_description = f.read()
else:
    long_description = "Multi-language cognitive complexity analyzer built on tree-sitter."

setup(
    name="complexityscanner",
    version="1.0.0",
    author="Complexity Scanner Team",
    author_email="complexity@example.com",
    description="Cognitive complexity analysis for C, C++ and Python functions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/complexityscanner/complexityscanner",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-c>=0.23",
        "tree-sitter-cpp>=0.23",
        "tree-sitter-python>=0.23",
        "pyyaml>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "mypy>=1.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "complexityscanner=complexityscanner.cli:main",
            "cxscan=complexityscanner.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
    ],
    keywords="cognitive-complexity, static-analysis, tree-sitter, code-quality",
)
