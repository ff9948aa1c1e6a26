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
"""Exceptions raised by treefun.

Every exception also derives from the builtin exception a Python caller would expect for the same
failure, so ``except TypeError`` and ``except ValueError`` clauses keep working.
"""

from __future__ import annotations

from treefun.utils import ordinal


__all__ = [
    'TreeFunError',
    'NotCallableError',
    'UnresolvedFunctionError',
    'TooManyArgumentsError',
    'TooManyOutputsError',
    'StructuralMismatchError',
]


class TreeFunError(Exception):
    """Base class for all errors raised by treefun."""


class NotCallableError(TreeFunError, TypeError):
    """The function argument is not callable."""

    def __init__(self, received_type: type) -> None:
        self.received_type = received_type
        super().__init__(
            f'Expected a callable as the function argument, got {received_type.__qualname__}.',
        )


class UnresolvedFunctionError(TreeFunError, LookupError):
    """A function name does not refer to an existing definition."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'Undefined function {name!r}.')


class TooManyArgumentsError(TreeFunError, TypeError):
    """More inputs were supplied than the function accepts."""

    def __init__(self, num_inputs: int, arity: int) -> None:
        self.num_inputs = num_inputs
        self.arity = arity
        super().__init__(
            f'Too many input arguments; expected at most {arity}, got {num_inputs}.',
        )


class TooManyOutputsError(TreeFunError, ValueError):
    """More outputs were requested than the function provides.

    Raised before evaluation with the declared ``arity`` of the function, or during evaluation with
    the node ``position`` whose return value could not be split. In the latter case ``returned``
    is the number of values the function returned, or :data:`None` when the return value was not a
    sequence (see ``received_type``).
    """

    def __init__(
        self,
        num_outputs: int,
        arity: int | None = None,
        *,
        position: int | None = None,
        returned: int | None = None,
        received_type: type | None = None,
    ) -> None:
        self.num_outputs = num_outputs
        self.arity = arity
        self.position = position
        self.returned = returned
        self.received_type = received_type
        if position is None:
            message = f'Too many output arguments; expected at most {arity}, got {num_outputs}.'
        elif returned is None:
            message = (
                f'Too many output arguments at node {position}; '
                f'expected a sequence of {num_outputs} outputs, '
                f'got {getattr(received_type, "__qualname__", received_type)}.'
            )
        else:
            message = (
                f'Too many output arguments at node {position}; '
                f'expected {num_outputs}, the function returned {returned}.'
            )
        super().__init__(message)


class StructuralMismatchError(TreeFunError, ValueError):
    """A tree argument is not synchronized with the reference tree.

    ``position`` is the 1-based index of the offending argument among the arguments that follow the
    reference tree.
    """

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(
            'All tree arguments must be synchronized with the first tree. '
            f'The {ordinal(position)} argument after it was not.',
        )
