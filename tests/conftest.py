"""
Pytest configuration and shared fixtures for all queryir tests.

Puts src/ on sys.path so the suite runs from a plain checkout, and provides
small IR trees reused across test modules.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from queryir.ir.nodes import (
    LiteralIR, IdentifierIR, FunctionCallIR, LambdaIR, BindExpressionIR,
)


@pytest.fixture
def one():
    return LiteralIR(1)


@pytest.fixture
def two():
    return LiteralIR(2)


@pytest.fixture
def f_ref():
    return IdentifierIR("f")


@pytest.fixture
def sample_bind(one, two, f_ref):
    """Bind(f, 1, 2): the canonical two-value bind over a variable."""
    return BindExpressionIR([one, two], f_ref)


@pytest.fixture
def captured_lambda():
    """
    Bind of a captured variable into a lambda, as produced by desugaring
    `x -> x + y` where y is captured:

        Bind((y, x) -> add(x, y), y)
    """
    body = FunctionCallIR("add", [IdentifierIR("x"), IdentifierIR("y")])
    return BindExpressionIR([IdentifierIR("y")], LambdaIR(["y", "x"], body))
