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

# pylint: disable=missing-class-docstring,missing-function-docstring,invalid-name

import itertools
from pathlib import Path

import pytest

from treefun import Tree


TEST_ROOT = Path(__file__).absolute().parent


def parametrize(**argvalues):
    arguments = list(argvalues)
    argvalues = list(itertools.product(*tuple(map(argvalues.get, arguments))))

    ids = tuple(
        '-'.join(f'{arg}({value!r})' for arg, value in zip(arguments, values))
        for values in argvalues
    )

    return pytest.mark.parametrize(arguments, argvalues, ids=ids)


def assert_same_topology(actual, expected):
    assert isinstance(actual, Tree)
    assert actual.issync(expected)
    assert [actual.parent(i) for i in range(len(actual))] == [
        expected.parent(i) for i in range(len(expected))
    ]


class Counter:
    def __init__(self, start=0):
        self.count = start

    def increment(self, n=1):
        self.count += n
        return self.count

    def __int__(self):
        return self.count

    def __eq__(self, other):
        return isinstance(other, Counter) and self.count == other.count

    def __hash__(self):
        return hash(self.count)

    def __repr__(self):
        return f'Counter({self.count})'


def counting(func, counter):
    def wrapped(*args):
        counter.increment()
        return func(*args)

    return wrapped


# {root: 1, children: [2, 3]}
SMALL_TREE = Tree.build(1, [2, 3])

TREES = (
    Tree(),
    Tree(0),
    Tree.build(1, [2, 3]),
    Tree.build(1, [Tree.build(2, [3])]),
    Tree.build(0, [Tree.build(1, [3, 4]), Tree.build(2, [5, Tree.build(6, [7])])]),
    Tree.build('a', ['b', None, Tree.build('c', [('d', 'e'), {'f': 'g'}])]),
    Tree.from_parents(list(range(8)), [None, 0, 1, 0, 1, 3, 3, 0]),
    Tree.from_parents([1.5, -2.0, 3.25, 0.0], [None, 0, 0, 0]),
)

SCALARS = (
    0,
    -3,
    2.5,
    'foo',
    None,
    (1, 2),
    [3, 4],
    {'a': 1},
    object(),
)
