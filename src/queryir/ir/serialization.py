"""
IR Serialization to S-Expressions
====================================

Converts IR to a canonical S-expression format and back. Every node is a
tagged list; the bind node is a record with exactly two named fields:

    (bind :values ((literal 1) (literal 2)) :function (variable "f"))

Other forms:

    (literal 1)  (literal "text")  (literal true)  (literal null)
    (variable "x")
    (function-call "name" (<arg> ...))
    (lambda ("x" "y") <body>)

Uses structured sexpr (nested lists + sexpdata.Symbol), then pretty-prints
for readable output. Deserialization goes through the node constructors, so
it enforces the same invariants as building the tree in code.
"""

import logging
from typing import Any, Dict, List, Tuple

import sexpdata

from ..shared.errors import IRDeserializationError, IRConstructionError
from ..utils import config
from .nodes import (
    ExpressionIR, LiteralIR, IdentifierIR, FunctionCallIR, LambdaIR, BindExpressionIR,
)

logger = logging.getLogger(__name__)


def _pretty_dumps(sexpr: Any, indent: int = 0, indent_str: str = config.SEXPR_INDENT,
                  max_line: int = config.SEXPR_MAX_LINE) -> str:
    """
    Pretty-print structured sexpr. Keeps short forms on one line; breaks only when needed.
    """
    # Check Symbol before str (sexpdata.Symbol subclasses str)
    if isinstance(sexpr, sexpdata.Symbol):
        return sexpr.value()
    if isinstance(sexpr, str):
        escaped = sexpr.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(sexpr, (int, float)):
        return repr(sexpr)
    if isinstance(sexpr, list):
        if not sexpr:
            return "()"
        parts = [_pretty_dumps(e, indent + 1, indent_str, max_line) for e in sexpr]
        one_line = "(" + " ".join(parts) + ")"
        if len(one_line) <= max_line and "\n" not in one_line:
            return one_line
        prefix = indent_str * indent
        next_prefix = indent_str * (indent + 1)
        # First element on same line as ( to avoid orphan (; no space after (
        rest = "\n".join(next_prefix + p for p in parts[1:])
        inner = parts[0] + ("\n" + rest if rest else "")
        return f"({inner}\n{prefix})"
    raise TypeError(f"cannot print {type(sexpr).__name__} as an S-expression")


def serialize_ir(node: ExpressionIR, pretty: bool = True) -> str:
    """
    Serialize IR node to S-expression string.

    Args:
        node: IR node to serialize
        pretty: Use pretty-printed format (default True). Set False for compact single-line.

    Returns:
        S-expression string
    """
    sexpr = IRSerializer().serialize_to_sexpr(node)
    text = _pretty_dumps(sexpr) if pretty else sexpdata.dumps(sexpr)
    logger.debug(f"Serialized {type(node).__name__} to {len(text)} characters")
    return text


class IRSerializer:
    """
    IR to structured S-expression serializer.

    Dispatches on the node's class name to _serialize_<ClassName>.
    Use sexpdata.Symbol for keywords to avoid quotes.
    """

    def _sym(self, s: str) -> sexpdata.Symbol:
        """Convert string to symbol (no quotes in output)."""
        return sexpdata.Symbol(s)

    def serialize_to_sexpr(self, node: ExpressionIR) -> list:
        """Serialize any IR node to structured sexpr (list/Symbol/str)."""
        method = getattr(self, f"_serialize_{type(node).__name__}", None)
        if method is None:
            raise TypeError(f"cannot serialize {type(node).__name__}")
        return method(node)

    def _serialize_all(self, nodes: Tuple[ExpressionIR, ...]) -> list:
        return [self.serialize_to_sexpr(n) for n in nodes]

    def _serialize_LiteralIR(self, node: LiteralIR) -> list:
        """Serialize literal: (literal value)"""
        value = node.value
        if value is None:
            atom: Any = self._sym(config.NULL_LITERAL)
        elif isinstance(value, bool):
            atom = self._sym(config.BOOLEAN_TRUE_LITERAL if value else config.BOOLEAN_FALSE_LITERAL)
        else:
            atom = value
        return [self._sym(config.LITERAL_TAG), atom]

    def _serialize_IdentifierIR(self, node: IdentifierIR) -> list:
        """Serialize identifier: (variable "name")"""
        return [self._sym(config.VARIABLE_TAG), node.name]

    def _serialize_FunctionCallIR(self, node: FunctionCallIR) -> list:
        """Serialize call: (function-call "name" (args...))"""
        return [self._sym(config.FUNCTION_CALL_TAG), node.function_name,
                self._serialize_all(node.arguments)]

    def _serialize_LambdaIR(self, node: LambdaIR) -> list:
        """Serialize lambda: (lambda ("x" ...) body)"""
        return [self._sym(config.LAMBDA_TAG), list(node.parameters),
                self.serialize_to_sexpr(node.body)]

    def _serialize_BindExpressionIR(self, node: BindExpressionIR) -> list:
        """Serialize bind: (bind :values (values...) :function function)"""
        return [
            self._sym(config.BIND_TAG),
            self._sym(config.VALUES_KEYWORD), self._serialize_all(node.values),
            self._sym(config.FUNCTION_KEYWORD), self.serialize_to_sexpr(node.function),
        ]


def _is_symbol(x: Any) -> bool:
    return isinstance(x, sexpdata.Symbol)


def _is_name(x: Any) -> bool:
    """True for a quoted string (sexpdata gives plain str for those)."""
    return isinstance(x, str) and not _is_symbol(x)


def _sym_val(x: Any) -> str:
    if _is_symbol(x):
        return x.value()
    return str(x)


def _plist(tail: list, keys: Tuple[str, ...]) -> Dict[str, Any]:
    """Parse `:key value` pairs; every key in `keys` is required, no others allowed."""
    if len(tail) % 2:
        raise IRDeserializationError("odd number of items in keyword list", tail)
    out: Dict[str, Any] = {}
    for i in range(0, len(tail), 2):
        key = tail[i]
        if not _is_symbol(key) or not _sym_val(key).startswith(":"):
            raise IRDeserializationError("expected keyword", key)
        name = _sym_val(key)
        if name not in keys:
            raise IRDeserializationError(f"unknown keyword {name}", tail)
        if name in out:
            raise IRDeserializationError(f"duplicate keyword {name}", tail)
        out[name] = tail[i + 1]
    for name in keys:
        if name not in out:
            raise IRDeserializationError(f"missing field {name}", tail)
    return out


class IRDeserializer:
    """
    Structured S-expression to IR. Dispatches on the record tag to
    _deserialize_<tag> (dashes become underscores).
    """

    def deserialize(self, sexpr: Any) -> ExpressionIR:
        if not isinstance(sexpr, list) or not sexpr or not _is_symbol(sexpr[0]):
            raise IRDeserializationError("expected a tagged expression", sexpr)
        tag = _sym_val(sexpr[0])
        method = getattr(self, f"_deserialize_{tag.replace('-', '_')}", None)
        if method is None:
            raise IRDeserializationError(f"unknown expression tag '{tag}'", sexpr)
        try:
            return method(sexpr[1:], sexpr)
        except IRConstructionError as e:
            raise IRDeserializationError(f"invalid {tag}: {e.message}", sexpr) from e

    def _deserialize_list(self, sexpr: Any, what: str) -> List[ExpressionIR]:
        if not isinstance(sexpr, list):
            raise IRDeserializationError(f"expected a list of {what}", sexpr)
        return [self.deserialize(item) for item in sexpr]

    def _expect_arity(self, tail: list, n: int, full: list) -> None:
        if len(tail) != n:
            raise IRDeserializationError(f"expected {n} item(s) after tag, got {len(tail)}", full)

    def _deserialize_literal(self, tail: list, full: list) -> LiteralIR:
        self._expect_arity(tail, 1, full)
        atom = tail[0]
        if _is_symbol(atom):
            value = _sym_val(atom)
            if value == config.NULL_LITERAL:
                return LiteralIR(None)
            if value == config.BOOLEAN_TRUE_LITERAL:
                return LiteralIR(True)
            if value == config.BOOLEAN_FALSE_LITERAL:
                return LiteralIR(False)
            raise IRDeserializationError(f"unknown literal symbol '{value}'", full)
        if isinstance(atom, bool) or not isinstance(atom, (int, float, str)):
            raise IRDeserializationError("unsupported literal value", full)
        return LiteralIR(atom)

    def _deserialize_variable(self, tail: list, full: list) -> IdentifierIR:
        self._expect_arity(tail, 1, full)
        if not _is_name(tail[0]):
            raise IRDeserializationError("variable name must be a string", full)
        return IdentifierIR(tail[0])

    def _deserialize_function_call(self, tail: list, full: list) -> FunctionCallIR:
        self._expect_arity(tail, 2, full)
        if not _is_name(tail[0]):
            raise IRDeserializationError("function name must be a string", full)
        return FunctionCallIR(tail[0], self._deserialize_list(tail[1], "arguments"))

    def _deserialize_lambda(self, tail: list, full: list) -> LambdaIR:
        self._expect_arity(tail, 2, full)
        params = tail[0]
        if not isinstance(params, list) or not all(_is_name(p) for p in params):
            raise IRDeserializationError("lambda parameters must be a list of strings", full)
        return LambdaIR(params, self.deserialize(tail[1]))

    def _deserialize_bind(self, tail: list, full: list) -> BindExpressionIR:
        opts = _plist(tail, (config.VALUES_KEYWORD, config.FUNCTION_KEYWORD))
        values = self._deserialize_list(opts[config.VALUES_KEYWORD], "values")
        function = self.deserialize(opts[config.FUNCTION_KEYWORD])
        return BindExpressionIR(values, function)


def deserialize_ir(text: str) -> ExpressionIR:
    """
    Parse S-expression text produced by serialize_ir back into IR.

    Raises IRDeserializationError for anything that is not exactly one
    well-formed expression.
    """
    if not text or not text.strip():
        raise IRDeserializationError("empty input")
    try:
        # nil/t would otherwise be read as () and True
        sexpr = sexpdata.loads(text, nil=None, true=None, false=None)
    except Exception as e:
        raise IRDeserializationError(f"malformed S-expression: {e}") from e
    node = IRDeserializer().deserialize(sexpr)
    logger.debug(f"Deserialized {type(node).__name__} from {len(text)} characters")
    return node
