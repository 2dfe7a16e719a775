"""
Language grammars and the parser registry.

Each supported language contributes a grammar adapter (tree-sitter
parsing and node classification) and a function extractor. The
registry maps language names and file extensions to those pieces.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type

from complexityscanner.parsers.base import (
    BaseGrammar,
    GrammarLoadError,
    NodeKind,
    ParseFailure,
    SyntaxNode,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LanguageSupport:
    """Everything needed to analyze one language."""
    name: str
    extensions: Tuple[str, ...]
    grammar_factory: Callable[[], BaseGrammar]
    extractor_factory: Callable[[], Any]
    calculator_factory: Callable[[], Any]


@dataclass
class LanguageToolchain:
    """Fresh, per-file instances created from a LanguageSupport entry."""
    language: str
    grammar: BaseGrammar
    extractor: Any
    calculator: Any


# Built-in languages, filled in by @register_language
_builtin_languages: Dict[str, LanguageSupport] = {}

# Alternative spellings accepted for --language
LANGUAGE_ALIASES: Dict[str, str] = {
    "py": "python",
    "python3": "python",
    "c++": "cpp",
    "cxx": "cpp",
    "cc": "cpp",
    "hpp": "cpp",
}


def _default_calculator_factory():
    from complexityscanner.core.complexity import CognitiveComplexityCalculator
    return CognitiveComplexityCalculator()


def register_language(
    language: str,
    extensions: Iterable[str],
    extractor: Callable[[], Any],
    calculator: Optional[Callable[[], Any]] = None,
):
    """Decorator to register a grammar class as a built-in language."""
    def decorator(cls: Type[BaseGrammar]) -> Type[BaseGrammar]:
        _builtin_languages[language] = LanguageSupport(
            name=language,
            extensions=tuple(extensions),
            grammar_factory=cls,
            extractor_factory=extractor,
            calculator_factory=calculator or _default_calculator_factory,
        )
        return cls
    return decorator


class ParserRegistry:
    """
    Lookup table from language names and file extensions to toolchains.

    Build one at startup (usually with ``with_defaults()``) and hand it to
    the engine. After startup the table is only read, so it can be shared
    between worker threads.
    """

    def __init__(self):
        self._languages: Dict[str, LanguageSupport] = {}
        self._extensions: Dict[str, str] = {}

    @classmethod
    def with_defaults(cls) -> "ParserRegistry":
        """Create a registry holding every built-in language."""
        registry = cls()
        for support in _builtin_languages.values():
            registry.register(
                support.name,
                support.extensions,
                support.grammar_factory,
                support.extractor_factory,
                support.calculator_factory,
            )
        return registry

    def register(
        self,
        language: str,
        extensions: Iterable[str],
        grammar_factory: Callable[[], BaseGrammar],
        extractor_factory: Callable[[], Any],
        calculator_factory: Optional[Callable[[], Any]] = None,
    ) -> None:
        """
        Register a language. Registering an existing name replaces it.

        Extensions are stored without a leading dot.
        """
        previous = self._languages.get(language)
        if previous is not None:
            for ext in previous.extensions:
                if self._extensions.get(ext) == language:
                    del self._extensions[ext]

        normalized = tuple(ext[1:] if ext.startswith(".") else ext for ext in extensions)
        self._languages[language] = LanguageSupport(
            name=language,
            extensions=normalized,
            grammar_factory=grammar_factory,
            extractor_factory=extractor_factory,
            calculator_factory=calculator_factory or _default_calculator_factory,
        )
        for ext in normalized:
            self._extensions[ext] = language

        logger.debug("Registered language %s for extensions %s", language, ", ".join(normalized))

    def resolve_by_extension(self, path: str) -> Optional[str]:
        """Return the language registered for a file's extension, if any."""
        ext = os.path.splitext(path)[1]
        if ext.startswith("."):
            ext = ext[1:]
        if not ext:
            return None
        return self._extensions.get(ext)

    def resolve_language(self, name: str) -> Optional[str]:
        """Return the canonical registered name for a language or alias."""
        if name in self._languages:
            return name
        lowered = name.lower()
        lowered = LANGUAGE_ALIASES.get(lowered, lowered)
        if lowered in self._languages:
            return lowered
        return None

    def create(self, language: str) -> Optional[LanguageToolchain]:
        """
        Create a grammar, extractor and calculator for a language.

        Returns None for unsupported languages. Raises GrammarLoadError if
        the grammar package is missing.
        """
        name = self.resolve_language(language)
        if name is None:
            return None

        support = self._languages[name]
        return LanguageToolchain(
            language=name,
            grammar=support.grammar_factory(),
            extractor=support.extractor_factory(),
            calculator=support.calculator_factory(),
        )

    def languages(self) -> List[str]:
        return sorted(self._languages)

    def extensions(self, language: Optional[str] = None) -> List[str]:
        """List registered extensions, optionally for one language."""
        if language is None:
            return sorted(self._extensions)
        return sorted(ext for ext, lang in self._extensions.items() if lang == language)

    def __contains__(self, language: str) -> bool:
        return self.resolve_language(language) is not None


def list_supported_languages() -> list:
    """List all built-in languages."""
    return list(_builtin_languages.keys())


# Import grammars to register them
from complexityscanner.parsers.cpp_parser import CppGrammar, CGrammar
from complexityscanner.parsers.python_parser import PythonGrammar

__all__ = [
    "BaseGrammar",
    "CGrammar",
    "CppGrammar",
    "GrammarLoadError",
    "LanguageSupport",
    "LanguageToolchain",
    "NodeKind",
    "ParseFailure",
    "ParserRegistry",
    "PythonGrammar",
    "SyntaxNode",
    "list_supported_languages",
    "register_language",
]
