"""
queryir: expression IR of a query compiler, including the bind node used to
make lambda captures explicit.
"""

from .ir import (
    IRNode, ExpressionIR, IRVisitor,
    LiteralIR, IdentifierIR, FunctionCallIR, LambdaIR, BindExpressionIR,
    DefaultTraversalVisitor, iter_preorder, iter_postorder, count_nodes,
    IRSerializer, IRDeserializer, serialize_ir, deserialize_ir,
)
from .shared import QueryIRError, IRConstructionError, IRDeserializationError

__version__ = "0.1.0"
