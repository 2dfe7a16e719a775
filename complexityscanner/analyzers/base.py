"""
Base function extractor for language-specific analyzers.

Extractors walk a parsed tree and produce one FunctionUnit per
function or method definition. They never compute complexity; the
units they return are handed to the complexity calculator.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

if TYPE_CHECKING:
    from complexityscanner.parsers.base import SyntaxNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionUnit:
    """
    One extracted function, the unit of complexity scoring.

    The body is a reference into the parsed tree and is only valid for
    the duration of the analysis call that produced it.
    """
    qualified_name: str
    body: Optional["SyntaxNode"]
    start_line: int
    end_line: int
    parameters: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


class BaseFunctionExtractor(ABC):
    """
    Base class for language-specific function extractors.
    """

    @property
    @abstractmethod
    def language(self) -> str:
        """Return the language this extractor handles."""
        pass

    def extract(self, root: Optional["SyntaxNode"]) -> List[FunctionUnit]:
        """
        Extract all function units from a tree.

        Args:
            root: The root node of a parsed file.

        Returns:
            Function units in source order.
        """
        if root is None:
            return []

        functions = list(self.iter_functions(root))
        logger.debug("Extracted %d %s functions", len(functions), self.language)
        return functions

    @abstractmethod
    def iter_functions(self, root: "SyntaxNode") -> Iterator[FunctionUnit]:
        """Yield function units in pre-order."""
        pass

    @staticmethod
    def walk(root: "SyntaxNode", prune=None) -> Iterator["SyntaxNode"]:
        """
        Pre-order walk over a tree.

        If ``prune`` is given and returns True for a node, that node is
        yielded but its children are not visited.
        """
        stack = [root]
        while stack:
            current = stack.pop()
            yield current
            if prune is not None and prune(current):
                continue
            stack.extend(reversed(current.children))

    @staticmethod
    def make_unit(
        name: str,
        node: "SyntaxNode",
        parameters: List[str],
    ) -> FunctionUnit:
        """Build a FunctionUnit from a definition node."""
        return FunctionUnit(
            qualified_name=name,
            body=node.field("body"),
            start_line=node.start_line,
            end_line=node.end_line,
            parameters=tuple(parameters),
        )
