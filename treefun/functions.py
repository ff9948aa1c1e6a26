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
"""Node function descriptors."""

from __future__ import annotations

import builtins
import dataclasses
import functools
import importlib
import inspect
import math
import operator
import sys
from typing import Any, Callable, overload

from treefun.errors import NotCallableError, UnresolvedFunctionError
from treefun.typing import Arity, FunctionLike, NodeFunction


__all__ = [
    'VARIABLE_ARITY',
    'TreeFunction',
    'tree_function',
    'as_tree_function',
    'input_arity',
    'output_arity',
    'resolve_function',
]


VARIABLE_ARITY: int = -1  # literal constant
"""Literal constant for a function that returns any number of outputs."""

SLOTS = {'slots': True} if sys.version_info >= (3, 10) else {}  # Python 3.10+

_POSITIONAL_KINDS = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)

# Namespaces searched, in order, for unqualified function names.
_NAMESPACES = (builtins, operator, math)


@dataclasses.dataclass(init=True, repr=True, eq=True, frozen=True, **SLOTS)
class TreeFunction:
    """A callable together with its declared input and output arity.

    Input arity (``num_inputs``) follows these conventions:

    - a non-negative integer is the fixed number of positional inputs the function accepts;
    - a negative integer ``-(n + 1)`` marks a variadic function with ``n`` required inputs;
    - :data:`None` means the arity could not be determined.

    When ``num_inputs`` is not given it is inspected from the signature of ``func``.

    Output arity (``num_outputs``) is either a positive integer, in which case each call returns a
    sequence of that many values, or :data:`VARIABLE_ARITY` (the default) for a function whose
    single return value is used as-is unless several outputs are requested.

    >>> TreeFunction(divmod)
    TreeFunction(func=<built-in function divmod>, num_inputs=2, num_outputs=-1)
    >>> TreeFunction(lambda *xs: sum(xs)).num_inputs
    -1
    """

    func: NodeFunction
    num_inputs: Arity = None
    num_outputs: int = VARIABLE_ARITY

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise NotCallableError(type(self.func))
        if self.num_outputs == 0 or self.num_outputs < VARIABLE_ARITY:
            raise ValueError(
                f'Expected a positive number of outputs or VARIABLE_ARITY, got {self.num_outputs}.',
            )
        if self.num_inputs is None:
            object.__setattr__(self, 'num_inputs', input_arity(self.func))

    def __call__(self, *args: Any) -> Any:
        return self.func(*args)

    @property
    def name(self) -> str:
        """A human readable name of the wrapped callable."""
        return getattr(self.func, '__qualname__', None) or repr(self.func)

    @property
    def max_inputs(self) -> int | None:
        """The maximum number of inputs, or :data:`None` if unbounded or unknown."""
        if self.num_inputs is None or self.num_inputs < 0:
            return None
        return self.num_inputs

    @property
    def max_outputs(self) -> int | None:
        """The maximum number of outputs, or :data:`None` if unbounded."""
        if self.num_outputs == VARIABLE_ARITY:
            return None
        return self.num_outputs

    def unpacks(self, num_outputs: int) -> bool:
        """Return whether each return value must be split to provide ``num_outputs`` outputs."""
        return num_outputs > 1 or (self.max_outputs or 1) > 1


def input_arity(func: Callable[..., Any]) -> Arity:
    """Return the number of positional inputs accepted by ``func``.

    See :class:`TreeFunction` for the meaning of the result.

    >>> input_arity(lambda x, y=1: x)
    2
    >>> input_arity(lambda x, *rest: x)
    -2
    >>> input_arity(lambda *xs: xs)
    -1
    """
    if isinstance(func, TreeFunction):
        return func.num_inputs
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):  # builtins without introspection support
        return None

    num_inputs = num_required = 0
    for param in signature.parameters.values():
        if param.kind in _POSITIONAL_KINDS:
            num_inputs += 1
            if param.default is param.empty:
                num_required += 1
        elif param.kind is inspect.Parameter.VAR_POSITIONAL:
            return -(num_required + 1)
    return num_inputs


def output_arity(func: Callable[..., Any]) -> int:
    """Return the declared number of outputs of ``func``, :data:`VARIABLE_ARITY` if undeclared."""
    if isinstance(func, TreeFunction):
        return func.num_outputs
    return VARIABLE_ARITY


def resolve_function(name: str) -> NodeFunction:
    """Look up a function by name.

    Unqualified names are searched in :mod:`builtins`, :mod:`operator` and :mod:`math`, in that
    order. Dotted names are imported, e.g. ``'os.path.join'`` or ``'decimal.Decimal.sqrt'``.

    >>> resolve_function('abs')
    <built-in function abs>
    >>> resolve_function('operator.add')
    <built-in function add>

    Raises:
        UnresolvedFunctionError: If ``name`` does not refer to an existing object.
    """
    if '.' not in name:
        for namespace in _NAMESPACES:
            if name and hasattr(namespace, name):
                return getattr(namespace, name)
        raise UnresolvedFunctionError(name)

    parts = name.split('.')
    for split in range(len(parts) - 1, 0, -1):
        try:
            obj = importlib.import_module('.'.join(parts[:split]))
        except (ImportError, ValueError, TypeError):
            continue
        try:
            return functools.reduce(getattr, parts[split:], obj)
        except AttributeError:
            break
    raise UnresolvedFunctionError(name)


def as_tree_function(func: FunctionLike | TreeFunction) -> TreeFunction:
    """Convert a callable, a function name or a :class:`TreeFunction` to a :class:`TreeFunction`.

    Raises:
        UnresolvedFunctionError: If ``func`` is a name that cannot be resolved.
        NotCallableError: If ``func`` (or the object it names) is not callable.
    """
    if isinstance(func, TreeFunction):
        return func
    if isinstance(func, str):
        func = resolve_function(func)
    if not callable(func):
        raise NotCallableError(type(func))
    return TreeFunction(func)


@overload
def tree_function(
    func: NodeFunction,
    /,
    *,
    num_inputs: Arity = None,
    num_outputs: int = VARIABLE_ARITY,
) -> TreeFunction: ...


@overload
def tree_function(
    func: None = None,
    /,
    *,
    num_inputs: Arity = None,
    num_outputs: int = VARIABLE_ARITY,
) -> Callable[[NodeFunction], TreeFunction]: ...


def tree_function(
    func: NodeFunction | None = None,
    /,
    *,
    num_inputs: Arity = None,
    num_outputs: int = VARIABLE_ARITY,
) -> TreeFunction | Callable[[NodeFunction], TreeFunction]:
    """Declare the arity of a node function, usable as a decorator.

    >>> @tree_function(num_outputs=2)
    ... def split(x):
    ...     return x // 10, x % 10
    >>> split.num_inputs, split.num_outputs
    (1, 2)
    """
    if func is None:
        return functools.partial(tree_function, num_inputs=num_inputs, num_outputs=num_outputs)
    return TreeFunction(func, num_inputs=num_inputs, num_outputs=num_outputs)
