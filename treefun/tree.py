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
"""A minimal ordered tree container."""

from __future__ import annotations

import itertools
import operator
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence
from typing_extensions import Self  # Python 3.11+


if TYPE_CHECKING:
    from treefun.typing import NodeValues


__all__ = ['Tree', 'is_tree', 'issync']


class Tree:
    """An ordered, rooted tree holding one arbitrary value per node.

    Nodes are stored flat: node ``i`` holds ``values[i]`` and its parent index ``parents[i]``. The
    root is node ``0`` and has no parent. Indices are assigned in insertion order, and that order is
    the canonical order in which :meth:`node_values` returns the node values. Two trees with the
    same parent indices are *synchronized* (see :func:`issync`), whatever their contents.

    >>> tree = Tree.build(1, [2, Tree.build(3, [4])])
    >>> tree
    Tree(1, [2, Tree(3, [4])])
    >>> tree.node_values()
    (1, 2, 3, 4)
    >>> tree.children(0)
    [1, 2]

    Arithmetic operators apply elementwise, with non-tree operands broadcast to every node:

    >>> tree * 10 + 1
    Tree(11, [21, Tree(31, [41])])
    >>> 1 - tree
    Tree(0, [-1, Tree(-2, [-3])])

    Note that ``==`` compares whole trees (topology and contents), it is not elementwise.
    """

    __slots__ = ('_values', '_parents')

    _values: list[Any]
    _parents: list[int | None]

    def __init__(self, content: Any = None) -> None:
        """Create a single-node tree whose root holds ``content``."""
        self._values = [content]
        self._parents = [None]

    @classmethod
    def _from_flat(cls, values: Iterable[Any], parents: Iterable[int | None]) -> Self:
        tree = cls.__new__(cls)
        tree._values = list(values)
        tree._parents = list(parents)
        return tree

    @classmethod
    def build(cls, root: Any, children: Iterable[Any] = ()) -> Self:
        """Build a tree from a root value and its children.

        Each child is either a :class:`Tree`, which is copied in as a subtree, or any other value,
        which becomes a leaf.

        >>> Tree.build('a', ['b', Tree.build('c', ['d', 'e'])]).node_values()
        ('a', 'b', 'c', 'd', 'e')
        """
        tree = cls(root)
        for child in children:
            if isinstance(child, Tree):
                tree._graft(0, child)
            else:
                tree.add_node(0, child)
        return tree

    @classmethod
    def from_parents(cls, values: Sequence[Any], parents: Sequence[int | None]) -> Self:
        """Build a tree from its flat representation.

        Args:
            values (sequence): The node values, root first.
            parents (sequence): The parent index of each node. The root's parent is :data:`None`
                and every other node's parent must precede it.

        Returns:
            A new tree.
        """
        if len(values) != len(parents):
            raise ValueError(
                f'Expected as many parents as values, got {len(parents)} and {len(values)}.',
            )
        if not values:
            raise ValueError('A tree must have a root node.')
        if parents[0] is not None:
            raise ValueError(f'Expected the root to have no parent, got {parents[0]!r}.')
        for index, parent in enumerate(parents[1:], start=1):
            if not isinstance(parent, int) or not 0 <= parent < index:
                raise ValueError(
                    f'Expected the parent of node {index} to be an index in [0, {index}), '
                    f'got {parent!r}.',
                )
        return cls._from_flat(values, parents)

    @classmethod
    def synchronized(cls, tree: Tree, fill: Any = None) -> Self:
        """Return a tree with the topology of ``tree`` and every node set to ``fill``.

        With the default ``fill`` this is a cleared copy of ``tree``.

        >>> Tree.synchronized(Tree.build(1, [2, 3]), 0)
        Tree(0, [0, 0])
        """
        if not isinstance(tree, Tree):
            raise TypeError(f'Expected a tree, got {tree!r}.')
        return cls._from_flat(itertools.repeat(fill, len(tree._values)), tree._parents)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._values):
            raise IndexError(f'node index out of range: {index}')

    def _graft(self, parent: int, subtree: Tree) -> None:
        offset = len(self._values)
        self._values.extend(subtree._values)
        self._parents.append(parent)
        self._parents.extend(p + offset for p in subtree._parents[1:])  # type: ignore[operator]

    def add_node(self, parent: int, content: Any = None) -> int:
        """Append a new child of node ``parent`` and return the index of the new node."""
        self._check_index(parent)
        self._values.append(content)
        self._parents.append(parent)
        return len(self._values) - 1

    def get(self, index: int) -> Any:
        """Return the value held by node ``index``."""
        self._check_index(index)
        return self._values[index]

    def set(self, index: int, content: Any) -> None:
        """Replace the value held by node ``index``."""
        self._check_index(index)
        self._values[index] = content

    def parent(self, index: int) -> int | None:
        """Return the parent index of node ``index``, :data:`None` for the root."""
        self._check_index(index)
        return self._parents[index]

    def children(self, index: int) -> list[int]:
        """Return the indices of the children of node ``index``, in order."""
        self._check_index(index)
        return [i for i, parent in enumerate(self._parents) if parent == index]

    def is_leaf(self, index: int) -> bool:
        """Return whether node ``index`` has no children."""
        self._check_index(index)
        return index not in self._parents

    def depth(self, index: int) -> int:
        """Return the number of edges between node ``index`` and the root."""
        self._check_index(index)
        depth = 0
        parent = self._parents[index]
        while parent is not None:
            depth += 1
            parent = self._parents[parent]
        return depth

    @property
    def n_nodes(self) -> int:
        """The number of nodes in the tree."""
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def node_values(self) -> NodeValues:
        """Return the node values in canonical order."""
        return tuple(self._values)

    def with_node_values(self, values: Iterable[Any]) -> Self:
        """Return a new tree with the topology of this tree holding ``values``.

        >>> Tree.build(1, [2, 3]).with_node_values('xyz')
        Tree('x', ['y', 'z'])
        """
        values = list(values)
        if len(values) != len(self._values):
            raise ValueError(
                f'Expected {len(self._values)} node values, got {len(values)}.',
            )
        tree = type(self).synchronized(self)
        tree._values = values
        return tree

    def issync(self, other: Any) -> bool:
        """Return whether ``other`` is a tree with the same topology as this tree."""
        return isinstance(other, Tree) and self._parents == other._parents

    def copy(self) -> Self:
        """Return a shallow copy of the tree."""
        return type(self)._from_flat(self._values, self._parents)

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return self._parents == other._parents and self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        children: list[list[int]] = [[] for _ in self._parents]
        for index, parent in enumerate(self._parents):
            if parent is not None:
                children[parent].append(index)

        name = self.__class__.__name__
        if not children[0]:
            return f'{name}({self._values[0]!r})'

        # Parents precede their children, so every child is formatted before its parent.
        texts: list[str] = [''] * len(self._values)
        for index in reversed(range(len(self._values))):
            value = self._values[index]
            if children[index]:
                subtrees = ', '.join(texts[child] for child in children[index])
                texts[index] = f'{name}({value!r}, [{subtrees}])'
            else:
                texts[index] = repr(value)
        return texts[0]

    # Elementwise arithmetic, dispatched through the two-argument entry point

    def __add__(self, other: Any) -> Tree:
        return _apply_binary(operator.add, self, other)

    def __radd__(self, other: Any) -> Tree:
        return _apply_binary(operator.add, other, self)

    def __sub__(self, other: Any) -> Tree:
        return _apply_binary(operator.sub, self, other)

    def __rsub__(self, other: Any) -> Tree:
        return _apply_binary(operator.sub, other, self)

    def __mul__(self, other: Any) -> Tree:
        return _apply_binary(operator.mul, self, other)

    def __rmul__(self, other: Any) -> Tree:
        return _apply_binary(operator.mul, other, self)

    def __truediv__(self, other: Any) -> Tree:
        return _apply_binary(operator.truediv, self, other)

    def __rtruediv__(self, other: Any) -> Tree:
        return _apply_binary(operator.truediv, other, self)

    def __floordiv__(self, other: Any) -> Tree:
        return _apply_binary(operator.floordiv, self, other)

    def __rfloordiv__(self, other: Any) -> Tree:
        return _apply_binary(operator.floordiv, other, self)

    def __mod__(self, other: Any) -> Tree:
        return _apply_binary(operator.mod, self, other)

    def __rmod__(self, other: Any) -> Tree:
        return _apply_binary(operator.mod, other, self)

    def __pow__(self, other: Any) -> Tree:
        return _apply_binary(operator.pow, self, other)

    def __rpow__(self, other: Any) -> Tree:
        return _apply_binary(operator.pow, other, self)

    def __neg__(self) -> Tree:
        return _apply_unary(operator.neg, self)

    def __pos__(self) -> Tree:
        return _apply_unary(operator.pos, self)

    def __abs__(self) -> Tree:
        return _apply_unary(operator.abs, self)


def _apply_binary(func: Callable[[Any, Any], Any], left: Any, right: Any) -> Tree:
    from treefun.ops import treefun2  # pylint: disable=import-outside-toplevel

    return treefun2(func, left, right)


def _apply_unary(func: Callable[[Any], Any], tree: Tree) -> Tree:
    from treefun.ops import treefun  # pylint: disable=import-outside-toplevel

    return treefun(func, tree)


def is_tree(obj: Any) -> bool:
    """Return whether ``obj`` is a :class:`Tree`."""
    return isinstance(obj, Tree)


def issync(tree: Any, other: Any) -> bool:
    """Return whether two trees have the same topology, regardless of their contents.

    >>> issync(Tree.build(1, [2, 3]), Tree.build('a', ['b', 'c']))
    True
    >>> issync(Tree.build(1, [2, 3]), Tree.build(1, [Tree.build(2, [3])]))
    False
    >>> issync(Tree(1), 1)
    False
    """
    return isinstance(tree, Tree) and tree.issync(other)
