# Copyright 2022-2025 MetaOPT Team. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

# pylint: disable=missing-function-docstring,invalid-name

import copy
import re

import pytest

import treefun
from helpers import TREES, assert_same_topology, parametrize


def test_single_node():
    tree = treefun.Tree(42)
    assert len(tree) == 1
    assert tree.n_nodes == 1
    assert tree.node_values() == (42,)
    assert tree.parent(0) is None
    assert tree.children(0) == []
    assert tree.is_leaf(0)
    assert tree.depth(0) == 0
    assert repr(tree) == 'Tree(42)'
    assert treefun.Tree().node_values() == (None,)


def test_build():
    tree = treefun.Tree.build(0, [1, treefun.Tree.build(2, [3, 4]), 5])
    assert tree.node_values() == (0, 1, 2, 3, 4, 5)
    assert [tree.parent(i) for i in range(6)] == [None, 0, 0, 2, 2, 0]
    assert tree.children(0) == [1, 2, 5]
    assert tree.children(2) == [3, 4]
    assert tree.is_leaf(1)
    assert not tree.is_leaf(2)
    assert tree.depth(4) == 2
    assert repr(tree) == 'Tree(0, [1, Tree(2, [3, 4]), 5])'


def test_build_copies_subtrees():
    subtree = treefun.Tree.build(2, [3])
    tree = treefun.Tree.build(1, [subtree])
    subtree.set(0, 'changed')
    subtree.add_node(0, 4)
    assert tree.node_values() == (1, 2, 3)
    assert len(subtree) == 3


def test_add_node_get_set():
    tree = treefun.Tree('root')
    a = tree.add_node(0, 'a')
    b = tree.add_node(0, 'b')
    c = tree.add_node(a, 'c')
    assert (a, b, c) == (1, 2, 3)
    assert tree.children(a) == [c]
    assert tree.get(c) == 'c'
    tree.set(c, 'C')
    assert tree.get(c) == 'C'
    assert tree.node_values() == ('root', 'a', 'b', 'C')

    with pytest.raises(IndexError, match=re.escape('node index out of range: 4')):
        tree.add_node(4)
    with pytest.raises(IndexError, match=re.escape('node index out of range: -1')):
        tree.get(-1)
    with pytest.raises(IndexError):
        tree.set(10, None)


def test_from_parents():
    tree = treefun.Tree.from_parents('abcd', [None, 0, 1, 0])
    assert tree == treefun.Tree.build('a', [treefun.Tree.build('b', ['c']), 'd'])

    with pytest.raises(ValueError, match=re.escape('Expected as many parents as values')):
        treefun.Tree.from_parents([1, 2], [None])
    with pytest.raises(ValueError, match=re.escape('A tree must have a root node.')):
        treefun.Tree.from_parents([], [])
    with pytest.raises(ValueError, match=re.escape('Expected the root to have no parent, got 0.')):
        treefun.Tree.from_parents([1, 2], [0, 0])
    with pytest.raises(
        ValueError,
        match=re.escape('Expected the parent of node 2 to be an index in [0, 2), got 2.'),
    ):
        treefun.Tree.from_parents([1, 2, 3], [None, 0, 2])
    with pytest.raises(ValueError, match=re.escape('got None.')):
        treefun.Tree.from_parents([1, 2], [None, None])


@parametrize(tree=TREES, fill=[None, 0, 'x', (1, 2)])
def test_synchronized(tree, fill):
    filled = treefun.Tree.synchronized(tree, fill)
    assert_same_topology(filled, tree)
    assert filled.node_values() == (fill,) * len(tree)
    assert filled is not tree


def test_synchronized_not_a_tree():
    with pytest.raises(TypeError, match=re.escape('Expected a tree, got 1.')):
        treefun.Tree.synchronized(1)


@parametrize(tree=TREES)
def test_with_node_values(tree):
    values = [f'v{i}' for i in range(len(tree))]
    before = tree.node_values()
    result = tree.with_node_values(values)
    assert_same_topology(result, tree)
    assert result.node_values() == tuple(values)
    assert tree.node_values() == before

    with pytest.raises(ValueError, match=re.escape(f'Expected {len(tree)} node values')):
        tree.with_node_values([*values, 'extra'])


def test_issync():
    small = treefun.Tree.build(1, [2, 3])
    chain = treefun.Tree.build(1, [treefun.Tree.build(2, [3])])
    assert treefun.issync(small, treefun.Tree.build('a', ['b', 'c']))
    assert treefun.issync(small, small)
    assert not treefun.issync(small, chain)
    assert not treefun.issync(small, treefun.Tree.build(1, [2, 3, 4]))
    assert not treefun.issync(small, (1, 2, 3))
    assert not treefun.issync((1, 2, 3), small)
    assert small.issync(treefun.Tree.synchronized(small))
    assert not small.issync(None)


@parametrize(tree=TREES)
def test_issync_is_independent_of_contents(tree):
    assert treefun.issync(tree, treefun.Tree.synchronized(tree, 'anything'))
    assert treefun.issync(treefun.Tree.synchronized(tree), tree)


def test_is_tree():
    assert treefun.is_tree(treefun.Tree())
    assert not treefun.is_tree(None)
    assert not treefun.is_tree([1, [2, 3]])


def test_equality_and_hash():
    assert treefun.Tree.build(1, [2, 3]) == treefun.Tree.build(1, [2, 3])
    assert treefun.Tree.build(1, [2, 3]) != treefun.Tree.build(1, [2, 4])
    assert treefun.Tree.build(1, [2, 3]) != treefun.Tree.build(1, [treefun.Tree.build(2, [3])])
    assert treefun.Tree(1) != 1
    with pytest.raises(TypeError, match='unhashable'):
        hash(treefun.Tree())


def test_copy():
    tree = treefun.Tree.build(1, [[2], 3])
    for copied in (tree.copy(), copy.copy(tree)):
        assert copied == tree
        assert copied is not tree
        copied.set(0, 'changed')
        copied.add_node(0, 4)
        assert tree.node_values() == (1, [2], 3)


def test_repr_subclass():
    class MyTree(treefun.Tree):
        __slots__ = ()

    assert repr(MyTree(1)) == 'MyTree(1)'
    assert repr(MyTree.build(1, ['a'])) == "MyTree(1, ['a'])"
    assert type(MyTree.build(1, [2]).with_node_values([3, 4])) is MyTree


def test_repr_nested_subclass():
    class MyTree(treefun.Tree):
        __slots__ = ()

    tree = MyTree.build(1, [treefun.Tree.build(2, [3]), 4])
    assert repr(tree) == 'MyTree(1, [MyTree(2, [3]), 4])'


def test_repr_deep_chain():
    depth = 3000
    tree = treefun.Tree.from_parents(list(range(depth)), [None, *range(depth - 1)])
    out = treefun.treefun(lambda x: x + 1, tree)
    assert len(out) == depth

    expected = repr(depth)
    for value in reversed(range(1, depth)):
        expected = f'Tree({value}, [{expected}])'
    assert repr(out) == expected
