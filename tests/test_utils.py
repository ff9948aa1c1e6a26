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

import pytest

from treefun.utils import ordinal, safe_zip, unzip


def test_safe_zip():
    assert safe_zip([]) == []
    assert safe_zip([1]) == [(1,)]
    assert safe_zip([1, 2]) == [(1,), (2,)]
    assert safe_zip([1, 2], [3, 4]) == [(1, 3), (2, 4)]
    assert safe_zip([1, 2], [3, 4], [5, 6]) == [(1, 3, 5), (2, 4, 6)]
    with pytest.raises(ValueError, match='length mismatch'):
        safe_zip([1, 2], [3, 4, 5])
    with pytest.raises(ValueError, match='length mismatch'):
        safe_zip([1, 2], [3, 4], [5, 6, 7])


def test_unzip():
    assert unzip([], 1) == ([],)
    assert unzip([], 3) == ([], [], [])
    assert unzip([(1, 2)], 2) == ([1], [2])
    assert unzip([(1, 2), (3, 4)], 2) == ([1, 3], [2, 4])
    assert unzip([(1, 2, 3), (4, 5, 6)], 2) == ([1, 4], [2, 5])
    assert unzip(iter([(1, 'a'), (2, 'b')]), 2) == ([1, 2], ['a', 'b'])
    with pytest.raises(ValueError, match='expected at least 3 items, got 2'):
        unzip([(1, 2, 3), (4, 5)], 3)


def test_ordinal():
    assert [ordinal(n) for n in range(1, 6)] == ['1st', '2nd', '3rd', '4th', '5th']
    assert ordinal(11) == '11th'
    assert ordinal(12) == '12th'
    assert ordinal(13) == '13th'
    assert ordinal(21) == '21st'
    assert ordinal(102) == '102nd'
    assert ordinal(111) == '111th'
