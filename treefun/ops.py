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
"""Elementwise function application over synchronized trees."""

from __future__ import annotations

import functools
import itertools
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Iterable

from treefun.errors import StructuralMismatchError, TooManyArgumentsError, TooManyOutputsError
from treefun.functions import TreeFunction, as_tree_function
from treefun.tree import Tree, is_tree, issync
from treefun.utils import safe_zip, unzip


if TYPE_CHECKING:
    from concurrent.futures import Executor

    from treefun.typing import FunctionLike, NodeFunction, NodeValues, Values


__all__ = [
    'treefun',
    'treefun2',
    'reconcile',
    'evaluate',
    'validate',
    'permute_if_needed',
]


logger = logging.getLogger(__name__)


def validate(
    func: FunctionLike | TreeFunction,
    num_inputs: int,
    num_outputs: int = 0,
) -> TreeFunction:
    """Check that ``func`` can be called with ``num_inputs`` inputs for ``num_outputs`` outputs.

    Args:
        func (callable or str): The node function, a :class:`TreeFunction`, or the name of a
            function (see :func:`resolve_function`).
        num_inputs (int): The number of positional inputs each call will receive.
        num_outputs (int, optional): The number of requested outputs. (default: :const:`0`)

    Returns:
        The :class:`TreeFunction` describing ``func``.

    Raises:
        UnresolvedFunctionError: If ``func`` is a name that cannot be resolved.
        NotCallableError: If ``func`` is not callable.
        TooManyArgumentsError: If ``func`` accepts a fixed number of inputs below ``num_inputs``.
        TooManyOutputsError: If ``func`` declares fewer outputs than ``num_outputs``.
    """
    function = as_tree_function(func)
    max_inputs = function.max_inputs
    if max_inputs is not None and num_inputs > max_inputs:
        raise TooManyArgumentsError(num_inputs, max_inputs)
    max_outputs = function.max_outputs
    if max_outputs is not None and num_outputs > max_outputs:
        raise TooManyOutputsError(num_outputs, max_outputs)
    if num_outputs < 0:
        raise ValueError(f'Expected a non-negative number of outputs, got {num_outputs}.')
    return function


def _reconcile_one(tree: Tree, value: Any, position: int) -> NodeValues:
    if not is_tree(value):
        return Tree.synchronized(tree, value).node_values()
    if not issync(tree, value):
        logger.debug('Argument %d is not synchronized with the reference tree.', position)
        raise StructuralMismatchError(position)
    return value.node_values()


def reconcile(tree: Tree, rests: Iterable[Any]) -> list[NodeValues]:
    """Align extra arguments with the nodes of a reference tree.

    Non-tree arguments are broadcast: they are repeated once per node of ``tree``, whatever their
    type. Tree arguments must be synchronized with ``tree`` and contribute their node values.

    >>> tree = Tree.build(1, [2, 3])
    >>> reconcile(tree, [Tree.build(10, [20, 30]), 'x'])
    [(10, 20, 30), ('x', 'x', 'x')]

    Raises:
        StructuralMismatchError: If a tree argument is not synchronized with ``tree``. Its
            ``position`` is the 1-based index of the argument in ``rests``.
    """
    return [_reconcile_one(tree, value, position) for position, value in enumerate(rests, start=1)]


def _split_outputs(output: Any, num_outputs: int, position: int) -> Sequence[Any]:
    if not isinstance(output, Sequence):
        raise TooManyOutputsError(num_outputs, position=position, received_type=type(output))
    if len(output) < num_outputs:
        raise TooManyOutputsError(num_outputs, position=position, returned=len(output))
    return output


def _call(func: NodeFunction, args: tuple[Any, ...]) -> Any:
    return func(*args)


def evaluate(
    func: FunctionLike | TreeFunction,
    node_values: Values,
    aligned: Sequence[Values] = (),
    num_outputs: int = 1,
    *,
    executor: Executor | None = None,
) -> list[list[Any]]:
    """Call ``func`` once per node position and group the outputs by output slot.

    At position ``p`` the function receives ``node_values[p]`` followed by ``seq[p]`` for every
    ``seq`` in ``aligned``. When more than one output is requested, or when ``func`` is a
    :class:`TreeFunction` declaring several outputs, each return value is a sequence whose first
    ``num_outputs`` items are the outputs. It must hold at least as many items as the function
    declares. A ``num_outputs`` below one is treated as one.

    >>> evaluate(divmod, [7, 8, 9], [(2, 3, 4)], num_outputs=2)
    [[3, 2, 2], [1, 2, 1]]

    Args:
        func (callable or str): The node function.
        node_values (sequence): The node values of the reference tree.
        aligned (sequence of sequence, optional): The aligned value sequences of the other
            arguments, each as long as ``node_values``.
        num_outputs (int, optional): The number of outputs to collect. (default: :const:`1`)
        executor (Executor, optional): If given, the calls are dispatched with ``executor.map``.
            Outputs keep their positions and the exception of the first failing position is raised.

    Returns:
        A list of ``max(num_outputs, 1)`` lists, the ``k``-th holding the ``k``-th output of every
        call in node order.
    """
    function = as_tree_function(func)
    num_outputs = max(num_outputs, 1)
    num_expected = max(num_outputs, function.max_outputs or 1)
    args = safe_zip(node_values, *aligned)

    if executor is None:
        outputs: Iterable[Any] = itertools.starmap(function.func, args)
    else:
        outputs = executor.map(functools.partial(_call, function.func), args)

    if not function.unpacks(num_outputs):
        return [list(outputs)]
    return list(
        unzip(
            (
                _split_outputs(output, num_expected, position)
                for position, output in enumerate(outputs)
            ),
            num_outputs,
        ),
    )


def treefun(
    func: FunctionLike | TreeFunction,
    tree: Tree,
    /,
    *rests: Any,
    num_outputs: int = 0,
    executor: Executor | None = None,
) -> Tree | tuple[Tree, ...]:
    """Apply a function to the contents of each node of a tree.

    See also :func:`treefun2`.

    >>> tree = Tree.build(1, [2, 3])
    >>> treefun(lambda x: x * 2, tree)
    Tree(2, [4, 6])

    Extra arguments provide further inputs to ``func``, in the order they are given. Trees must be
    synchronized with ``tree``; any other value is used for every node:

    >>> treefun(lambda x, y: x + y, tree, Tree.build(10, [20, 30]))
    Tree(11, [22, 33])
    >>> treefun(lambda x, y: x + y, tree, 5)
    Tree(6, [7, 8])

    Request several outputs to get one tree per output:

    >>> treefun(divmod, Tree.build(7, [8, 9]), 2, num_outputs=2)
    (Tree(3, [4, 4]), Tree(1, [0, 1]))

    Args:
        func (callable or str): A function that takes ``1 + len(rests)`` positional arguments, a
            :class:`TreeFunction`, or the name of such a function.
        tree (Tree): The reference tree. The results have its topology.
        rests (tuple): Trees synchronized with ``tree``, or any other values to broadcast.
        num_outputs (int, optional): The number of result trees to return. With :const:`0` a single
            tree is returned instead of a tuple. (default: :const:`0`)
        executor (Executor, optional): An executor to dispatch the per-node calls with.
            (default: :data:`None`, i.e., sequential calls in node order)

    Returns:
        A new tree with the topology of ``tree`` whose node ``p`` holds ``func(x, *xs)``, ``x``
        being node ``p`` of ``tree`` and ``xs`` the corresponding values from ``rests``. If
        ``num_outputs`` is positive, a tuple of ``num_outputs`` such trees, one per output.

    Raises:
        UnresolvedFunctionError: If ``func`` is a name that cannot be resolved.
        NotCallableError: If ``func`` is not callable.
        TooManyArgumentsError: If ``func`` accepts fewer than ``1 + len(rests)`` inputs.
        TooManyOutputsError: If ``func`` provides fewer than ``num_outputs`` outputs.
        StructuralMismatchError: If a tree in ``rests`` is not synchronized with ``tree``.
    """
    function = validate(func, 1 + len(rests), num_outputs)
    if not is_tree(tree):
        raise TypeError(f'Expected a tree as the first argument, got {tree!r}.')
    aligned = reconcile(tree, rests)

    logger.debug(
        'Applying %s to %d node(s) with %d input(s) and %d output(s) (%s).',
        function.name,
        tree.n_nodes,
        1 + len(aligned),
        max(num_outputs, 1),
        'sequential' if executor is None else type(executor).__name__,
    )
    flat_results = evaluate(
        function,
        tree.node_values(),
        aligned,
        num_outputs,
        executor=executor,
    )
    results = tuple(tree.with_node_values(values) for values in flat_results)
    if num_outputs == 0:
        return results[0]
    return results


def permute_if_needed(first: Any, second: Any) -> tuple[Any, Any, bool]:
    """Order two operands so that the first one is a tree.

    >>> permute_if_needed(1, Tree(2))
    (Tree(2), 1, True)
    >>> permute_if_needed(Tree(1), Tree(2))
    (Tree(1), Tree(2), False)

    Returns:
        A triple ``(reference, other, permuted)``.
    """
    if is_tree(first):
        return first, second, False
    if is_tree(second):
        return second, first, True
    raise TypeError(
        f'Expected at least one tree, got {type(first).__name__} and {type(second).__name__}.',
    )


def _swap_arguments(func: NodeFunction) -> NodeFunction:
    def swapped(x: Any, y: Any) -> Any:
        return func(y, x)

    return swapped


def treefun2(
    func: FunctionLike | TreeFunction,
    tree: Any,
    other: Any,
    /,
    *,
    num_outputs: int = 0,
    executor: Executor | None = None,
) -> Tree | tuple[Tree, ...]:
    """Apply a two-argument function elementwise, where either argument may be the tree.

    See also :func:`treefun`.

    The operands are reordered so that a tree is the reference, but ``func`` always receives them
    in the order given here:

    >>> treefun2(lambda x, y: x - y, 10, Tree.build(1, [2, 3]))
    Tree(9, [8, 7])

    Raises:
        TypeError: If neither ``tree`` nor ``other`` is a tree.
    """
    function = validate(func, 2, num_outputs)
    tree, other, permuted = permute_if_needed(tree, other)
    if permuted:
        function = TreeFunction(
            _swap_arguments(function.func),
            num_inputs=2,
            num_outputs=function.num_outputs,
        )
    return treefun(function, tree, other, num_outputs=num_outputs, executor=executor)
