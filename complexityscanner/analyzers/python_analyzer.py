"""
Python function extractor.
"""

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional

from complexityscanner.analyzers.base import BaseFunctionExtractor, FunctionUnit

if TYPE_CHECKING:
    from complexityscanner.parsers.base import SyntaxNode

logger = logging.getLogger(__name__)

SPLAT_PATTERNS = {"list_splat_pattern", "dictionary_splat_pattern"}


class PythonFunctionExtractor(BaseFunctionExtractor):
    """
    Extracts function definitions from Python trees.

    Decorated definitions are unwrapped to the function they decorate.
    The walk continues inside function bodies, so a function defined in
    another function is emitted as its own unit, named after its
    enclosing functions (``outer.inner``). Classes do not contribute to
    the qualified name.
    """

    @property
    def language(self) -> str:
        return "python"

    def iter_functions(self, root: "SyntaxNode") -> Iterator[FunctionUnit]:
        for node in self.walk(root):
            if node.type == "decorated_definition":
                definition = node.field("definition")
                if definition is None:
                    logger.debug("decorated_definition at line %d has no definition", node.start_line)
                    continue
                if definition.type != "function_definition":
                    continue
                yield self._build_unit(definition)

            elif node.type == "function_definition":
                parent = node.parent
                # Already emitted through its decorated_definition
                if parent is not None and parent.type == "decorated_definition":
                    continue
                yield self._build_unit(node)

    def _build_unit(self, node: "SyntaxNode") -> FunctionUnit:
        name = self.qualified_name(node)
        parameters = self.collect_parameters(node.field("parameters"))
        logger.debug("Found Python function %r (lines %d-%d)", name, node.start_line, node.end_line)
        return self.make_unit(name, node, parameters)

    def qualified_name(self, node: "SyntaxNode") -> str:
        """Name of a function, prefixed by every enclosing function."""
        name_node = node.field("name")
        if name_node is None:
            return ""

        name = name_node.text
        for ancestor in node.ancestors():
            if ancestor.type != "function_definition":
                continue
            parent_name = ancestor.field("name")
            if parent_name is not None:
                name = f"{parent_name.text}.{name}"
        return name

    def collect_parameters(self, parameters: Optional["SyntaxNode"]) -> List[str]:
        """Collect parameter names from a ``parameters`` node."""
        if parameters is None:
            return []

        names = []
        for param in parameters.named_children:
            name = self._parameter_name(param)
            if name:
                names.append(name)
        return names

    def _parameter_name(self, param: "SyntaxNode") -> str:
        if param.type == "identifier":
            return param.text

        if param.type in ("default_parameter", "typed_default_parameter"):
            name_node = param.field("name")
            return name_node.text if name_node is not None else ""

        if param.type == "typed_parameter" or param.type in SPLAT_PATTERNS:
            for child in param.named_children:
                if child.type == "identifier":
                    return child.text
                if child.type in SPLAT_PATTERNS:
                    return self._parameter_name(child)
        return ""
