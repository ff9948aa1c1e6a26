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
"""treefun: elementwise function application over synchronized trees."""

from treefun import typing
from treefun.errors import (
    NotCallableError,
    StructuralMismatchError,
    TooManyArgumentsError,
    TooManyOutputsError,
    TreeFunError,
    UnresolvedFunctionError,
)
from treefun.functions import (
    VARIABLE_ARITY,
    TreeFunction,
    as_tree_function,
    input_arity,
    output_arity,
    resolve_function,
    tree_function,
)
from treefun.ops import evaluate, permute_if_needed, reconcile, treefun, treefun2, validate
from treefun.tree import Tree, is_tree, issync
from treefun.version import __version__


__all__ = [
    # Tree operations
    'treefun',
    'treefun2',
    'reconcile',
    'evaluate',
    'validate',
    'permute_if_needed',
    # Trees
    'Tree',
    'is_tree',
    'issync',
    # Functions
    'VARIABLE_ARITY',
    'TreeFunction',
    'tree_function',
    'as_tree_function',
    'input_arity',
    'output_arity',
    'resolve_function',
    # Errors
    'TreeFunError',
    'NotCallableError',
    'UnresolvedFunctionError',
    'TooManyArgumentsError',
    'TooManyOutputsError',
    'StructuralMismatchError',
]

VARIABLE_ARITY: int = VARIABLE_ARITY  # literal constant
"""Literal constant for a function that returns any number of outputs."""
