"""
C and C++ function extractor.
"""

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional

from complexityscanner.analyzers.base import BaseFunctionExtractor, FunctionUnit

if TYPE_CHECKING:
    from complexityscanner.parsers.base import SyntaxNode

logger = logging.getLogger(__name__)

# Declarator nodes that carry the function's name
NAME_NODE_TYPES = {
    "identifier",
    "field_identifier",
    "qualified_identifier",
    "destructor_name",
    "operator_name",
    "operator_cast",
    "template_function",
}

# Named children of a declarator that never lead to the name
NON_DECLARATOR_TYPES = {
    "type_qualifier",
    "attribute_specifier",
    "attribute_declaration",
    "ms_based_modifier",
    "ms_pointer_modifier",
    "ms_call_modifier",
}

PARAMETER_NODE_TYPES = {
    "parameter_declaration",
    "optional_parameter_declaration",
    "variadic_parameter_declaration",
}


class CppFunctionExtractor(BaseFunctionExtractor):
    """
    Extracts ``function_definition`` nodes from C and C++ trees.

    Member functions keep whatever qualification their declarator spells
    out, so an out-of-line ``int Shape::area()`` is named ``Shape::area``
    and an inline method is named ``area``. Nested definitions are not
    searched for: the walk stops at each function it finds.
    """

    @property
    def language(self) -> str:
        return "cpp"

    def iter_functions(self, root: "SyntaxNode") -> Iterator[FunctionUnit]:
        for node in self.walk(root, prune=self._is_function):
            if not self._is_function(node):
                continue

            declarator = node.field("declarator")
            if declarator is None:
                logger.warning("function_definition at line %d has no declarator", node.start_line)
                name = ""
                parameters: List[str] = []
            else:
                name = self.declarator_name(declarator)
                parameters = self.collect_parameters(declarator)

            logger.debug("Found C++ function %r (lines %d-%d)", name, node.start_line, node.end_line)
            yield self.make_unit(name, node, parameters)

    @staticmethod
    def _is_function(node: "SyntaxNode") -> bool:
        return node.type == "function_definition"

    def declarator_name(self, declarator: Optional["SyntaxNode"]) -> str:
        """
        Follow a declarator chain down to the declared name.

        Pointer, reference and function declarators wrap the name; the
        ``declarator`` field is followed where the grammar provides one,
        otherwise the first declarator-like child.
        """
        node = declarator
        while node is not None:
            if node.type in NAME_NODE_TYPES:
                return node.text
            node = self._inner_declarator(node)
        return ""

    def _inner_declarator(self, node: "SyntaxNode") -> Optional["SyntaxNode"]:
        inner = node.field("declarator")
        if inner is not None:
            return inner
        for child in node.named_children:
            if child.type not in NON_DECLARATOR_TYPES:
                return child
        return None

    def find_function_declarator(self, declarator: Optional["SyntaxNode"]) -> Optional["SyntaxNode"]:
        """
        Return the function declarator closest to the declared name.

        A function returning a function pointer has an outer declarator
        whose parameters belong to the returned type, so the innermost
        one is kept.
        """
        found = None
        node = declarator
        while node is not None:
            if node.type == "function_declarator":
                found = node
            if node.type in NAME_NODE_TYPES:
                break
            node = self._inner_declarator(node)
        return found

    def collect_parameters(self, declarator: "SyntaxNode") -> List[str]:
        """Collect parameter names from a function's declarator."""
        function_declarator = self.find_function_declarator(declarator)
        if function_declarator is None:
            return []

        parameter_list = function_declarator.field("parameters")
        if parameter_list is None:
            return []

        parameters = []
        for child in parameter_list.named_children:
            if child.type not in PARAMETER_NODE_TYPES:
                continue
            name = self.declarator_name(child.field("declarator"))
            if name:
                parameters.append(name)
        return parameters
