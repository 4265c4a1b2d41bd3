"""
Configuration constants to replace magic values throughout queryir
"""

# Rendering constants (str() of IR nodes)
NULL_LITERAL = "null"
BOOLEAN_TRUE_LITERAL = "true"
BOOLEAN_FALSE_LITERAL = "false"
STRING_QUOTE_CHAR = "'"
ARGUMENT_SEPARATOR = ", "
LAMBDA_ARROW = " -> "
BIND_PREFIX = "Bind"

# S-expression record tags
BIND_TAG = "bind"
LITERAL_TAG = "literal"
VARIABLE_TAG = "variable"
FUNCTION_CALL_TAG = "function-call"
LAMBDA_TAG = "lambda"

# S-expression keywords
VALUES_KEYWORD = ":values"
FUNCTION_KEYWORD = ":function"

# Pretty-printer constants
SEXPR_MAX_LINE = 100  # Keep forms on one line up to this width
SEXPR_INDENT = "  "

# Command line constants
PROGRAM_NAME = "queryir"
DEFAULT_FILE_ENCODING = "utf-8"
