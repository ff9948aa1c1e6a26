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
"""Typing utilities for treefun."""

# mypy: no-warn-unused-ignores

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Tuple, TypeVar, Union
from typing_extensions import TypeAlias  # Python 3.10+


__all__ = [
    'T',
    'Arity',
    'NodeValues',
    'Values',
    'NodeFunction',
    'FunctionLike',
]


T = TypeVar('T')

Arity: TypeAlias = Optional[int]
"""Declared arity: non-negative when fixed, negative when variable, :data:`None` when unknown."""

NodeValues: TypeAlias = Tuple[Any, ...]
"""Flat node values of a tree, in canonical node order."""

NodeFunction: TypeAlias = Callable[..., Any]
"""A function applied once per node position."""

FunctionLike: TypeAlias = Union[NodeFunction, str]
"""Anything accepted where a node function is expected: a callable or a function name."""

Values: TypeAlias = Sequence[Any]
"""A flat sequence of node values."""
