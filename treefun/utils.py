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
"""Utility functions for treefun."""

from __future__ import annotations

from typing import Iterable, Sequence

from treefun.typing import T


__all__ = ['safe_zip', 'unzip', 'ordinal']


def safe_zip(*args: Sequence[T]) -> list[tuple[T, ...]]:
    """Strict zip that requires all arguments to be the same length."""
    n = len(args[0])
    for arg in args[1:]:
        if len(arg) != n:
            raise ValueError(f'length mismatch: {list(map(len, args))}')
    return list(zip(*args))


def unzip(rows: Iterable[Sequence[T]], n: int) -> tuple[list[T], ...]:
    """Regroup an iterable of rows into ``n`` columns.

    Every row must provide at least ``n`` items; trailing items are dropped.

    >>> unzip([(1, 'a'), (2, 'b'), (3, 'c')], 2)
    ([1, 2, 3], ['a', 'b', 'c'])
    >>> unzip([], 3)
    ([], [], [])
    """
    # Note: zip(*rows) is not used because it yields nothing for empty input and cannot tell
    # the expected number of columns.
    columns: tuple[list[T], ...] = tuple([] for _ in range(n))
    for row in rows:
        if len(row) < n:
            raise ValueError(f'expected at least {n} items, got {len(row)}')
        for column, item in zip(columns, row):
            column.append(item)
    return columns


def ordinal(n: int) -> str:
    """Return the English ordinal of a positive integer, e.g. ``'2nd'``."""
    if 10 <= n % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th')
    return f'{n}{suffix}'
