"""
Seeded random acyclic trees: equality, hashing, children and round trip must
hold for arbitrary shapes, and deep structures must not recurse forever.
"""

import random

import pytest

from queryir.ir.nodes import (
    LiteralIR, IdentifierIR, FunctionCallIR, LambdaIR, BindExpressionIR,
)
from queryir.ir.serialization import serialize_ir, deserialize_ir
from queryir.ir.traversal import iter_preorder

NAMES = ["a", "b", "f", "g", "x", "y"]
SEEDS = list(range(25))


def random_literal(rng):
    choice = rng.randrange(5)
    if choice == 0:
        return LiteralIR(rng.randint(-100, 100))
    if choice == 1:
        return LiteralIR(rng.choice([True, False]))
    if choice == 2:
        return LiteralIR(None)
    if choice == 3:
        return LiteralIR(rng.choice(NAMES) * rng.randint(1, 3))
    return LiteralIR(rng.randint(-50, 50) / 4)


def random_tree(rng, depth):
    """Build a fresh tree; calling twice with equal rng state gives equal trees."""
    if depth <= 0:
        return random_literal(rng) if rng.random() < 0.5 else IdentifierIR(rng.choice(NAMES))
    kind = rng.randrange(4)
    if kind == 0:
        args = [random_tree(rng, depth - 1) for _ in range(rng.randint(0, 3))]
        return FunctionCallIR(rng.choice(NAMES), args)
    if kind == 1:
        params = rng.sample(NAMES, rng.randint(0, 3))
        return LambdaIR(params, random_tree(rng, depth - 1))
    if kind == 2:
        values = [random_tree(rng, depth - 1) for _ in range(rng.randint(0, 3))]
        return BindExpressionIR(values, random_tree(rng, depth - 1))
    return random_tree(rng, 0)


def tree_pair(seed, depth=5):
    return random_tree(random.Random(seed), depth), random_tree(random.Random(seed), depth)


class TestRandomTrees:

    @pytest.mark.parametrize("seed", SEEDS)
    def test_equal_construction_is_equal(self, seed):
        a, b = tree_pair(seed)
        assert a == b
        assert hash(a) == hash(b)
        assert str(a) == str(b)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_round_trip(self, seed):
        tree, _ = tree_pair(seed)
        assert deserialize_ir(serialize_ir(tree)) == tree
        assert deserialize_ir(serialize_ir(tree, pretty=False)) == tree

    @pytest.mark.parametrize("seed", SEEDS)
    def test_bind_children_invariant(self, seed):
        tree, _ = tree_pair(seed)
        for node in iter_preorder(tree):
            if isinstance(node, BindExpressionIR):
                children = node.children()
                assert len(children) == len(node.values) + 1
                assert children[:-1] == node.values
                assert children[-1] == node.function

    @pytest.mark.parametrize("seed", SEEDS)
    def test_reordered_values_differ(self, seed):
        rng = random.Random(seed)
        first = LiteralIR(rng.randint(0, 10))
        second = LiteralIR(rng.randint(11, 20))
        function = random_tree(rng, 3)
        assert BindExpressionIR([first, second], function) != BindExpressionIR([second, first], function)

    def test_distinct_seeds_mostly_distinct(self):
        trees = {random_tree(random.Random(seed), 5) for seed in SEEDS}
        assert len(trees) > len(SEEDS) // 2

    def test_deep_bind_chain_terminates(self):
        def chain(n):
            node = IdentifierIR("f")
            for i in range(n):
                node = BindExpressionIR([LiteralIR(i)], node)
            return node

        a, b = chain(200), chain(200)
        assert a == b
        assert hash(a) == hash(b)
        assert a != chain(199)
