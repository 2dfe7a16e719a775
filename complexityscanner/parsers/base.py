"""
Base grammar adapter and syntax node view for tree-sitter parsers.
"""

import importlib
import logging
from abc import ABC, abstractmethod
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional

from tree_sitter import Language, Parser

logger = logging.getLogger(__name__)


class ParseFailure(Exception):
    """Raised when the parsing engine cannot produce any tree."""


class GrammarLoadError(RuntimeError):
    """Raised when a tree-sitter grammar cannot be loaded."""


class NodeKind(Enum):
    """Language-independent categories of syntax nodes."""
    CONDITIONAL = "conditional"
    LOOP = "loop"
    CATCH = "catch"
    CASE = "case"
    SWITCH = "switch"
    ELSE = "else"
    ELIF = "elif"
    LOGICAL_OPERATOR = "logical_operator"
    FUNCTION = "function"
    OTHER = "other"


# Kinds that are charged a structural increment
CONTROL_KINDS: FrozenSet[NodeKind] = frozenset({
    NodeKind.CONDITIONAL,
    NodeKind.LOOP,
    NodeKind.CATCH,
    NodeKind.CASE,
    NodeKind.ELSE,
    NodeKind.ELIF,
})

# Kinds that increase the nesting level of their children
NESTING_KINDS: FrozenSet[NodeKind] = frozenset({
    NodeKind.CONDITIONAL,
    NodeKind.LOOP,
    NodeKind.CATCH,
})


class Point(NamedTuple):
    row: int
    column: int


class SyntaxNode:
    """
    Read-only view over a tree-sitter node.

    Wraps the node together with the source bytes it was parsed from so
    that text can be sliced without going back to the file. A missing
    node is always represented by ``None``, never by an empty view.
    """

    __slots__ = ("_node", "_source")

    def __init__(self, node: Any, source: bytes):
        self._node = node
        self._source = source

    def __repr__(self) -> str:
        return f"SyntaxNode(type={self.type!r}, line={self.start_line})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyntaxNode):
            return NotImplemented
        return self._node == other._node

    def __hash__(self) -> int:
        return hash((self._node.start_byte, self._node.end_byte, self._node.type))

    def _wrap(self, node: Any) -> Optional["SyntaxNode"]:
        if node is None:
            return None
        return SyntaxNode(node, self._source)

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def is_named(self) -> bool:
        return self._node.is_named

    @property
    def start_point(self) -> Point:
        row, column = self._node.start_point
        return Point(row, column)

    @property
    def end_point(self) -> Point:
        row, column = self._node.end_point
        return Point(row, column)

    @property
    def start_line(self) -> int:
        """1-indexed first line of the node."""
        return self._node.start_point[0] + 1

    @property
    def end_line(self) -> int:
        """1-indexed last line of the node."""
        return self._node.end_point[0] + 1

    @property
    def start_byte(self) -> int:
        return self._node.start_byte

    @property
    def end_byte(self) -> int:
        return self._node.end_byte

    @property
    def children(self) -> List["SyntaxNode"]:
        return [SyntaxNode(child, self._source) for child in self._node.children]

    @property
    def named_children(self) -> List["SyntaxNode"]:
        return [SyntaxNode(child, self._source) for child in self._node.named_children]

    @property
    def parent(self) -> Optional["SyntaxNode"]:
        return self._wrap(self._node.parent)

    def field(self, name: str) -> Optional["SyntaxNode"]:
        """Return the child stored under a named field, or None."""
        return self._wrap(self._node.child_by_field_name(name))

    @property
    def text(self) -> str:
        """Source text covered by this node."""
        start, end = self._node.start_byte, self._node.end_byte
        if start > end or end > len(self._source):
            return ""
        return self._source[start:end].decode("utf-8", errors="replace")

    def ancestors(self):
        """Yield the parent chain, nearest first."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent


@lru_cache(maxsize=None)
def load_language(module_name: str) -> Language:
    """
    Load a tree-sitter Language from a per-language grammar package.

    The packages (``tree_sitter_python``, ``tree_sitter_cpp``, ...) expose a
    ``language()`` function returning the grammar capsule. Loaded languages
    are cached and shared; parsers are not.
    """
    try:
        module = importlib.import_module(module_name)
        return Language(module.language())
    except ImportError as e:
        raise GrammarLoadError(
            f"Grammar package '{module_name}' is not installed. "
            f"Install it with: pip install {module_name.replace('_', '-')}"
        ) from e
    except Exception as e:
        raise GrammarLoadError(f"Could not load grammar from {module_name}: {e}") from e


class BaseGrammar(ABC):
    """
    Base class for language grammar adapters.

    A grammar turns source text into a SyntaxNode tree and classifies
    node types into NodeKind values. Subclasses provide the grammar
    package name and a type table; the table is fixed when the class is
    defined, so classification is a dictionary lookup.
    """

    #: Name of the importable tree-sitter grammar package
    grammar_module: str = ""

    #: Mapping of node type to NodeKind
    node_kinds: Dict[str, NodeKind] = {}

    #: Operator tokens that make a binary node a logical operator
    logical_operators: FrozenSet[str] = frozenset()

    #: Node types whose operator decides between LOGICAL_OPERATOR and OTHER
    binary_node_types: FrozenSet[str] = frozenset()

    def __init__(self):
        self._language = load_language(self.grammar_module)
        self._parser = Parser(self._language)

    @property
    @abstractmethod
    def language(self) -> str:
        """Return the language this grammar handles."""
        pass

    def parse(self, source: str) -> SyntaxNode:
        """
        Parse source code into a syntax tree.

        Args:
            source: The source code to parse.

        Returns:
            The root SyntaxNode.

        Raises:
            ParseFailure: If the engine produced no tree at all.
        """
        source_bytes = source.encode("utf-8")
        try:
            tree = self._parser.parse(source_bytes)
        except Exception as e:
            raise ParseFailure(f"{self.language} parser failed: {e}") from e

        if tree is None or tree.root_node is None:
            raise ParseFailure(f"{self.language} parser returned no tree")

        logger.debug("Parsed %d bytes of %s, root node %s",
                     len(source_bytes), self.language, tree.root_node.type)
        return SyntaxNode(tree.root_node, source_bytes)

    def classify(self, node: SyntaxNode) -> NodeKind:
        """Classify a node into a NodeKind."""
        node_type = node.type
        if node_type in self.binary_node_types:
            operator = node.field("operator")
            if operator is not None and operator.type in self.logical_operators:
                return NodeKind.LOGICAL_OPERATOR
            return NodeKind.OTHER
        return self.node_kinds.get(node_type, NodeKind.OTHER)

    def is_function(self, node: SyntaxNode) -> bool:
        return self.classify(node) is NodeKind.FUNCTION

    def operator_text(self, node: SyntaxNode) -> str:
        """Return the operator token of a binary node."""
        operator = node.field("operator")
        return operator.type if operator is not None else ""
