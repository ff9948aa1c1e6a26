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
"""Version information for :mod:`treefun`."""

# pylint: disable=invalid-name

__version__ = '0.1.0'
__license__ = 'Apache-2.0'
__author__ = 'treefun Contributors'
__release__ = False

if not __release__:
    import subprocess
    from pathlib import Path

    def _describe(root: Path) -> str:
        # `v0.1.0-3-gabcdef1` -> `0.1.1.dev3+gabcdef1`
        described = subprocess.check_output(  # noqa: S603
            ['git', f'--git-dir={root / ".git"}', 'describe', '--tags', '--abbrev=7'],  # noqa: S607
            cwd=root,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding='utf-8',
            timeout=120.0,
        ).strip()
        tag, _, rest = described.lstrip('v').partition('-')
        if not rest:
            return tag
        distance, _, commit = rest.partition('-')
        head, _, patch = tag.rpartition('.')
        return f'{head}.{int(patch) + 1}.dev{distance}+{commit}'

    try:
        __version__ = _describe(Path(__file__).absolute().parent.parent)
    except (OSError, ValueError, subprocess.SubprocessError):
        pass

    del Path, subprocess, _describe
