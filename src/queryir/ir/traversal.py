"""
Generic IR traversal built on ExpressionIR.children().

DefaultTraversalVisitor recurses through accept() so subclasses can hook
individual variants; iter_preorder/iter_postorder walk with an explicit
stack and are not bounded by the interpreter's recursion limit.
"""

import logging
from typing import Iterator, List, Optional, Tuple, TypeVar

from .nodes import (
    IRVisitor, ExpressionIR,
    LiteralIR, IdentifierIR, FunctionCallIR, LambdaIR, BindExpressionIR,
)

logger = logging.getLogger(__name__)

C = TypeVar('C')


class DefaultTraversalVisitor(IRVisitor[None, C]):
    """
    Visits every node of a tree, children in children() order.

    Override a visit method to act on one variant; call the super method
    to keep descending.
    """

    def process(self, node: ExpressionIR, context: Optional[C] = None) -> None:
        node.accept(self, context)

    def visit_children(self, node: ExpressionIR, context: Optional[C]) -> None:
        for child in node.children():
            child.accept(self, context)

    def visit_literal(self, node: LiteralIR, context: Optional[C]) -> None:
        self.visit_children(node, context)

    def visit_identifier(self, node: IdentifierIR, context: Optional[C]) -> None:
        self.visit_children(node, context)

    def visit_function_call(self, node: FunctionCallIR, context: Optional[C]) -> None:
        self.visit_children(node, context)

    def visit_lambda(self, node: LambdaIR, context: Optional[C]) -> None:
        self.visit_children(node, context)

    def visit_bind_expression(self, node: BindExpressionIR, context: Optional[C]) -> None:
        # bound values are visited before the function
        self.visit_children(node, context)


def iter_preorder(root: ExpressionIR) -> Iterator[ExpressionIR]:
    """Yield root, then each subtree in children() order."""
    stack: List[ExpressionIR] = [root]
    count = 0
    while stack:
        node = stack.pop()
        count += 1
        yield node
        stack.extend(reversed(node.children()))
    logger.debug(f"Pre-order walk visited {count} nodes")


def iter_postorder(root: ExpressionIR) -> Iterator[ExpressionIR]:
    """Yield each subtree in children() order, then root."""
    stack: List[Tuple[ExpressionIR, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(node.children()):
            stack.append((child, False))


def count_nodes(root: ExpressionIR) -> int:
    """Number of nodes in the tree; shared sub-expressions count once per position."""
    return sum(1 for _ in iter_preorder(root))
