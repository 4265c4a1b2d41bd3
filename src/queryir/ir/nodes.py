"""
IR Nodes

Expression tree of the query compiler. Every node is an immutable value:
fields are assigned once in the constructor, sequences are copied into
tuples, and equality/hashing are structural over the fields.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, Optional, Tuple, TypeVar, Union

from ..shared.errors import IRConstructionError, require_non_null
from ..utils import config

R = TypeVar('R')
C = TypeVar('C')

LiteralValue = Union[None, bool, int, float, str]
_LITERAL_TYPES = (type(None), bool, int, float, str)


class IRNode:
    """
    Base class for all IR nodes.

    Design: Regular class with __slots__ (not dataclass). Subclasses list
    their fields in __slots__; equality, hashing and immutability are all
    driven from those slots, in MRO order.
    """
    __slots__ = ()

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__}.{name} is read-only")

    def _fields(self) -> Tuple[Any, ...]:
        """Field values in declaration order (base classes first)."""
        values = []
        for cls in reversed(type(self).__mro__):
            slots = cls.__dict__.get('__slots__', ())
            if isinstance(slots, str):
                slots = (slots,)
            for slot in slots:
                values.append(getattr(self, slot))
        return tuple(values)

    def __eq__(self, other):
        if self is other:
            return True
        if type(other) is not type(self):
            return False
        return self._fields() == other._fields()

    def __hash__(self):
        return hash((type(self).__name__, self._fields()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"


class ExpressionIR(IRNode, ABC):
    """
    Expression in IR.

    Design Pattern: Visitor pattern handles dispatch - no kind field needed.
    Passes that need per-variant behaviour implement IRVisitor; passes that
    only need to walk the tree use children().
    """
    __slots__ = ()

    @abstractmethod
    def children(self) -> Tuple['ExpressionIR', ...]:
        """Direct sub-expressions, in a fixed order."""

    @abstractmethod
    def accept(self, visitor: 'IRVisitor[R, C]', context: Optional[C] = None) -> R:
        """Dispatch to the visit method for this node's variant."""

    @abstractmethod
    def __str__(self) -> str:
        ...


def _copy_expressions(items: Iterable[ExpressionIR], what: str) -> Tuple[ExpressionIR, ...]:
    """Copy a caller-owned sequence into a tuple, rejecting missing elements."""
    copied = tuple(require_non_null(items, f"{what} is null"))
    for i, item in enumerate(copied):
        require_non_null(item, f"{what}[{i}] is null")
    return copied


def _require_name(name: Any, what: str) -> str:
    """Check that name is a non-empty str."""
    require_non_null(name, f"{what} is null")
    if not isinstance(name, str):
        raise IRConstructionError(f"{what} must be a string, got {type(name).__name__}")
    if not name:
        raise IRConstructionError(f"{what} is empty")
    return name


def _join(items: Iterable[Any]) -> str:
    return config.ARGUMENT_SEPARATOR.join(str(item) for item in items)


class LiteralIR(ExpressionIR):
    """Literal expression (null, boolean, number or string)"""
    __slots__ = ('value',)

    def __init__(self, value: LiteralValue):
        if not isinstance(value, _LITERAL_TYPES):
            raise IRConstructionError(
                f"unsupported literal value type: {type(value).__name__}"
            )
        if isinstance(value, float) and math.isnan(value):
            raise IRConstructionError("NaN is not a valid literal value")
        self.value = value

    def _fields(self) -> Tuple[Any, ...]:
        # 1, 1.0 and True compare equal in Python but are different literals
        return (type(self.value).__name__, self.value)

    def children(self) -> Tuple[ExpressionIR, ...]:
        return ()

    def accept(self, visitor: 'IRVisitor[R, C]', context: Optional[C] = None) -> R:
        return visitor.visit_literal(self, context)

    def __str__(self) -> str:
        value = self.value
        if value is None:
            return config.NULL_LITERAL
        if isinstance(value, bool):
            return config.BOOLEAN_TRUE_LITERAL if value else config.BOOLEAN_FALSE_LITERAL
        if isinstance(value, str):
            quote = config.STRING_QUOTE_CHAR
            return quote + value.replace(quote, quote * 2) + quote
        return str(value)


class IdentifierIR(ExpressionIR):
    """Reference to a variable by name."""
    __slots__ = ('name',)

    def __init__(self, name: str):
        self.name = _require_name(name, "name")

    def children(self) -> Tuple[ExpressionIR, ...]:
        return ()

    def accept(self, visitor: 'IRVisitor[R, C]', context: Optional[C] = None) -> R:
        return visitor.visit_identifier(self, context)

    def __str__(self) -> str:
        return self.name


class FunctionCallIR(ExpressionIR):
    """Call of a named function. Children are the arguments, in order."""
    __slots__ = ('function_name', 'arguments')

    def __init__(self, function_name: str, arguments: Iterable[ExpressionIR]):
        function_name = _require_name(function_name, "function_name")
        arguments = _copy_expressions(arguments, "arguments")
        self.function_name = function_name
        self.arguments = arguments

    def children(self) -> Tuple[ExpressionIR, ...]:
        return self.arguments

    def accept(self, visitor: 'IRVisitor[R, C]', context: Optional[C] = None) -> R:
        return visitor.visit_function_call(self, context)

    def __str__(self) -> str:
        return f"{self.function_name}({_join(self.arguments)})"


class LambdaIR(ExpressionIR):
    """Lambda expression. Parameters are names; the only child is the body."""
    __slots__ = ('parameters', 'body')

    def __init__(self, parameters: Iterable[str], body: ExpressionIR):
        require_non_null(parameters, "parameters is null")
        if isinstance(parameters, str):
            raise IRConstructionError("parameters must be a sequence of names, not a string")
        parameters = tuple(parameters)
        for i, parameter in enumerate(parameters):
            _require_name(parameter, f"parameters[{i}]")
        require_non_null(body, "body is null")
        self.parameters = parameters
        self.body = body

    def children(self) -> Tuple[ExpressionIR, ...]:
        return (self.body,)

    def accept(self, visitor: 'IRVisitor[R, C]', context: Optional[C] = None) -> R:
        return visitor.visit_lambda(self, context)

    def __str__(self) -> str:
        return f"({_join(self.parameters)}){config.LAMBDA_ARROW}{self.body}"


class BindExpressionIR(ExpressionIR):
    """
    Bind(values, function): partial application.

    Calling the result passes `values` as the leading arguments of
    `function`; the remaining arguments are passed through unchanged. This
    is how captured variables of a lambda are made explicit after
    desugaring.

    The node has no type of its own and its type cannot be written as a
    single signature. With `k = len(values)` it is derived from the
    function's type by dropping the first k parameters:

        X1, (X1, X2) -> Y            => (X2) -> Y
        X1, X2, (X1, X2, X3) -> Y    => (X3) -> Y

    `function` must be function-typed, but it need not be a lambda (it can
    be another bind). Neither that nor `k` against the parameter count is
    checked here; both belong to the type checker.

    An empty `values` is a valid, identity-like bind.
    """
    __slots__ = ('values', 'function')

    def __init__(self, values: Iterable[ExpressionIR], function: ExpressionIR):
        values = _copy_expressions(values, "values")
        require_non_null(function, "function is null")
        self.values = values
        self.function = function

    def children(self) -> Tuple[ExpressionIR, ...]:
        # values first, then function
        return self.values + (self.function,)

    def accept(self, visitor: 'IRVisitor[R, C]', context: Optional[C] = None) -> R:
        return visitor.visit_bind_expression(self, context)

    def __str__(self) -> str:
        # function is printed first; an empty values renders as "Bind(f, )"
        return f"{config.BIND_PREFIX}({self.function}{config.ARGUMENT_SEPARATOR}{_join(self.values)})"


class IRVisitor(ABC, Generic[R, C]):
    """
    Visitor for IR nodes (no isinstance needed).

    One method per expression variant; node.accept(visitor, context) picks
    the right one.
    """

    @abstractmethod
    def visit_literal(self, node: LiteralIR, context: Optional[C]) -> R:
        """Visit literal expression"""
        raise NotImplementedError

    @abstractmethod
    def visit_identifier(self, node: IdentifierIR, context: Optional[C]) -> R:
        """Visit identifier expression"""
        raise NotImplementedError

    @abstractmethod
    def visit_function_call(self, node: FunctionCallIR, context: Optional[C]) -> R:
        """Visit function call"""
        raise NotImplementedError

    @abstractmethod
    def visit_lambda(self, node: LambdaIR, context: Optional[C]) -> R:
        """Visit lambda expression"""
        raise NotImplementedError

    @abstractmethod
    def visit_bind_expression(self, node: BindExpressionIR, context: Optional[C]) -> R:
        """Visit bind expression"""
        raise NotImplementedError
