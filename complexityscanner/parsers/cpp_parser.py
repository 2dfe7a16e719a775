"""
C and C++ grammar adapters using tree-sitter.
"""

from complexityscanner.analyzers.cpp_analyzer import CppFunctionExtractor
from complexityscanner.parsers.base import BaseGrammar, NodeKind
from complexityscanner.parsers import register_language


@register_language(
    "cpp",
    extensions=("cpp", "cxx", "cc", "hpp", "hxx", "hh", "h"),
    extractor=CppFunctionExtractor,
)
class CppGrammar(BaseGrammar):
    """
    Grammar for C++ source code.
    """

    grammar_module = "tree_sitter_cpp"

    node_kinds = {
        "if_statement": NodeKind.CONDITIONAL,
        "for_statement": NodeKind.LOOP,
        "for_range_loop": NodeKind.LOOP,
        "while_statement": NodeKind.LOOP,
        "do_statement": NodeKind.LOOP,
        "catch_clause": NodeKind.CATCH,
        "case_statement": NodeKind.CASE,
        "switch_statement": NodeKind.SWITCH,
        "else_clause": NodeKind.ELSE,
        "function_definition": NodeKind.FUNCTION,
    }

    binary_node_types = frozenset({"binary_expression"})
    logical_operators = frozenset({"&&", "||", "and", "or"})

    @property
    def language(self) -> str:
        return "cpp"


@register_language("c", extensions=("c",), extractor=CppFunctionExtractor)
class CGrammar(CppGrammar):
    """
    Grammar for C source code. Shares the C++ node table; the C grammar
    simply never produces the C++-only node types.
    """

    grammar_module = "tree_sitter_c"

    @property
    def language(self) -> str:
        return "c"
