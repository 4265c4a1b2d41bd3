"""
Expression IR: nodes, visitors, traversal and S-expression serialization.
"""

from .nodes import (
    IRNode, ExpressionIR, IRVisitor,
    LiteralIR, IdentifierIR, FunctionCallIR, LambdaIR, BindExpressionIR,
)
from .traversal import DefaultTraversalVisitor, iter_preorder, iter_postorder, count_nodes
from .serialization import IRSerializer, IRDeserializer, serialize_ir, deserialize_ir
