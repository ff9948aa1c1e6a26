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
"""The setup script for the :mod:`treefun` package."""

# pylint: disable=missing-function-docstring

from __future__ import annotations

import contextlib
import os
import re
import sys
from importlib.util import module_from_spec, spec_from_file_location
from pathlib import Path
from typing import TYPE_CHECKING

from setuptools import find_packages, setup


if TYPE_CHECKING:
    from collections.abc import Generator
    from types import ModuleType


HERE = Path(__file__).absolute().parent


@contextlib.contextmanager
def vcs_version(name: str, path: os.PathLike[str] | str) -> Generator[ModuleType]:
    """Pin the VCS-derived version into ``path`` for the duration of the build."""
    path = Path(path).absolute()
    assert path.is_file()
    module_spec = spec_from_file_location(name=name, location=path)
    assert module_spec is not None
    assert module_spec.loader is not None
    module = sys.modules.get(name)
    if module is None:
        module = module_from_spec(module_spec)
        sys.modules[name] = module
    module_spec.loader.exec_module(module)

    if module.__release__:
        yield module
        return

    content = None
    try:
        try:
            content = path.read_text(encoding='utf-8')
            path.write_text(
                data=re.sub(
                    r"""__version__\s*=\s*('[^']+'|"[^"]+")""",
                    f'__version__ = {module.__version__!r}',
                    string=content,
                    count=1,
                ),
                encoding='utf-8',
            )
        except OSError:
            content = None

        yield module
    finally:
        if content is not None:
            with path.open(mode='wt', encoding='utf-8', newline='') as file:
                file.write(content)


if __name__ == '__main__':
    with vcs_version(name='treefun.version', path=HERE / 'treefun' / 'version.py') as version:
        setup(
            name='treefun',
            version=version.__version__,
            description='Elementwise function application over synchronized trees.',
            license=version.__license__,
            author=version.__author__,
            packages=find_packages(include=['treefun', 'treefun.*']),
            python_requires='>= 3.9',
            install_requires=['typing-extensions >= 4.6.0'],
            extras_require={
                'test': ['pytest', 'pytest-cov', 'pytest-xdist'],
                'lint': ['mypy', 'pylint', 'ruff'],
            },
            classifiers=[
                'Development Status :: 3 - Alpha',
                'License :: OSI Approved :: Apache Software License',
                'Programming Language :: Python :: 3',
                'Operating System :: OS Independent',
                'Intended Audience :: Developers',
                'Topic :: Software Development :: Libraries :: Python Modules',
            ],
        )
