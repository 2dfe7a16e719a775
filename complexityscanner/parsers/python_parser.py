"""
Python grammar adapter using tree-sitter.
"""

from complexityscanner.analyzers.python_analyzer import PythonFunctionExtractor
from complexityscanner.parsers.base import BaseGrammar, NodeKind
from complexityscanner.parsers import register_language


@register_language("python", extensions=("py", "pyw", "pyi"), extractor=PythonFunctionExtractor)
class PythonGrammar(BaseGrammar):
    """
    Grammar for Python source code.
    """

    grammar_module = "tree_sitter_python"

    node_kinds = {
        "if_statement": NodeKind.CONDITIONAL,
        "for_statement": NodeKind.LOOP,
        "while_statement": NodeKind.LOOP,
        "except_clause": NodeKind.CATCH,
        "except_group_clause": NodeKind.CATCH,
        "case_clause": NodeKind.CASE,
        "match_statement": NodeKind.SWITCH,
        "elif_clause": NodeKind.ELIF,
        "else_clause": NodeKind.ELSE,
        "function_definition": NodeKind.FUNCTION,
    }

    binary_node_types = frozenset({"boolean_operator"})
    logical_operators = frozenset({"and", "or"})

    @property
    def language(self) -> str:
        return "python"
