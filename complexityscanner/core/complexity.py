"""
Cognitive complexity calculation.

The calculator walks one function body and charges increments for
control flow:

- structural: +1 for each control structure (if, loops, catch, case,
  else/elif clauses)
- nesting: +depth for an if, loop or catch nested inside others
- hybrid: +1 for an ``if`` chained from an else/elif, in place of the
  structural and nesting charges
- fundamental: +1 for each logical and/or expression

Every increment is recorded as a ComplexityFactor, so a score can
always be explained line by line.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from complexityscanner.parsers.base import (
    CONTROL_KINDS,
    NESTING_KINDS,
    BaseGrammar,
    NodeKind,
    SyntaxNode,
)

logger = logging.getLogger(__name__)

CHAIN_PARENT_KINDS = (NodeKind.ELSE, NodeKind.ELIF)


@dataclass(frozen=True)
class ComplexityFactor:
    """A single scoring event."""
    description: str
    increment: int
    line_number: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "increment": self.increment,
            "line_number": self.line_number,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComplexityFactor":
        return cls(
            description=data["description"],
            increment=int(data["increment"]),
            line_number=int(data["line_number"]),
        )


@dataclass
class ComplexityResult:
    """Score of one function and the factors that produced it."""
    total_complexity: int = 0
    factors: List[ComplexityFactor] = field(default_factory=list)

    def add(self, description: str, increment: int, line_number: int) -> None:
        """Record an increment. The total always tracks the factor sum."""
        self.factors.append(ComplexityFactor(description, increment, line_number))
        self.total_complexity += increment


class CognitiveComplexityCalculator:
    """
    Computes cognitive complexity over a syntax subtree.

    The traversal is an explicit pre-order worklist. Each entry carries
    the nesting level its node sits at, so no counter has to be restored
    when a subtree is abandoned. The calculator keeps no state between
    calls and is safe to reuse.
    """

    def calculate(self, node: Optional[SyntaxNode], grammar: BaseGrammar) -> ComplexityResult:
        """
        Calculate the complexity of a function.

        Args:
            node: A function body, or a function definition whose body
                should be analyzed. None yields an empty result.
            grammar: The grammar that classifies the tree's node types.

        Returns:
            The total score with its ordered factors.
        """
        result = ComplexityResult()
        if node is None:
            return result

        try:
            if grammar.is_function(node):
                node = node.field("body")
        except Exception as e:
            logger.error("Could not inspect root node for complexity: %s", e)
            return result

        if node is None:
            logger.debug("Function has no body")
            return result

        stack: List[Tuple[SyntaxNode, int]] = [(node, 0)]
        while stack:
            current, level = stack.pop()
            try:
                kind = grammar.classify(current)

                if kind is NodeKind.FUNCTION:
                    self._enter_function(current, level, grammar, stack)
                    continue

                self._score(current, kind, level, grammar, result)

                child_level = level + 1 if kind in NESTING_KINDS else level
                children = current.children
            except Exception as e:
                logger.debug("Skipping node %r during complexity walk: %s", current, e)
                continue

            stack.extend((child, child_level) for child in reversed(children))

        return result

    def _enter_function(self, node: SyntaxNode, level: int, grammar: BaseGrammar, stack: list) -> None:
        # A function inside another function is scored as its own unit
        for ancestor in node.ancestors():
            if grammar.is_function(ancestor):
                logger.debug("Not descending into nested function at line %d", node.start_line)
                return

        body = node.field("body")
        if body is not None:
            stack.append((body, level))

    def _score(
        self,
        node: SyntaxNode,
        kind: NodeKind,
        level: int,
        grammar: BaseGrammar,
        result: ComplexityResult,
    ) -> None:
        line_number = node.start_line

        if kind is NodeKind.CONDITIONAL and self._is_chained(node, grammar):
            self.increment_for_hybrid(result, "else-if chain", line_number)
            return

        if kind in CONTROL_KINDS:
            self.increment_for_structural(result, node.type, line_number)
            if kind in NESTING_KINDS and level > 0:
                self.increment_for_nesting(result, level, f"Nested {node.type}", line_number)

        elif kind is NodeKind.LOGICAL_OPERATOR:
            operator = grammar.operator_text(node)
            self.increment_for_fundamental(result, f"Boolean operator: {operator}", line_number)

    @staticmethod
    def _is_chained(node: SyntaxNode, grammar: BaseGrammar) -> bool:
        parent = node.parent
        return parent is not None and grammar.classify(parent) in CHAIN_PARENT_KINDS

    def increment_for_structural(self, result: ComplexityResult, reason: str, line_number: int) -> None:
        result.add(reason, 1, line_number)
        logger.debug("Added structural complexity: +1 for %s at line %d", reason, line_number)

    def increment_for_nesting(self, result: ComplexityResult, level: int, reason: str, line_number: int) -> None:
        result.add(reason, level, line_number)
        logger.debug("Added nesting complexity: +%d for %s at line %d", level, reason, line_number)

    def increment_for_fundamental(self, result: ComplexityResult, reason: str, line_number: int) -> None:
        result.add(reason, 1, line_number)
        logger.debug("Added fundamental complexity: +1 for %s at line %d", reason, line_number)

    def increment_for_hybrid(self, result: ComplexityResult, reason: str, line_number: int) -> None:
        result.add(reason, 1, line_number)
        logger.debug("Added hybrid complexity: +1 for %s at line %d", reason, line_number)
